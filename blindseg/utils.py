import os
import time
import numbers
from typing import Iterator, List, Sequence, TypeVar

from blindseg import logger

T = TypeVar('T')

def make_parent_dir(filename: str) -> None:
  os.makedirs(os.path.dirname(filename) or ".", exist_ok=True)

def format_time(seconds: numbers.Number) -> str:
  return "{}-{}".format(int(seconds) // 86400, time.strftime("%H:%M:%S", time.gmtime(seconds)))

def chunked(items: Sequence[T], size: numbers.Integral) -> Iterator[List[T]]:
  """
  Split a sequence into consecutive lists of at most ``size`` items.

  Args:
    items: sequence to split
    size: maximum chunk length, must be positive
  Returns:
    iterator over chunks; the last chunk may be shorter
  """
  if size < 1:
    raise ValueError(f"chunk size must be positive, got {size}")
  for start in range(0, len(items), size):
    yield list(items[start:start+size])

class Timer(object):
  """
  Context manager measuring wall-clock time of a block.

  Attributes:
    elapsed: seconds spent inside the block, available after exiting
  """
  def __init__(self) -> None:
    self.start = None
    self.elapsed = 0.0
  def __enter__(self):
    self.start = time.time()
    return self
  def __exit__(self, et, ev, traceback):
    self.elapsed = time.time() - self.start

class ReportOnException(object):
  """
  Context manager that prints debug information when an exception occurs.

  Args:
    args: a dictionary containing debug info. Callable items are called, other items are passed to logger.error()
  """
  def __init__(self, args: dict) -> None:
    self.args = args
  def __enter__(self):
    return self
  def __exit__(self, et, ev, traceback):
    if et is not None: # exception occurred
      logger.error("------ Error Report ------")
      for key, val in self.args.items():
        logger.error(f"*** {key} ***")
        if callable(val):
          val()
        else:
          logger.error(str(val))
