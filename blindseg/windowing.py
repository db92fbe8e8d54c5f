from collections import deque
import numbers
from typing import Callable, Deque, Iterator

def scan_windows(line: str, width: numbers.Integral, accepts: Callable[[str], bool]) -> Iterator[Deque[str]]:
  """
  Scan a line and yield the window each time it fills up to ``width`` accepted characters.

  A rejected character clears the window, so no yielded window ever spans one. The same deque is yielded every time;
  the consumer must pop at least one character from its front before requesting the next window.

  Args:
    line: characters to scan
    width: window capacity
    accepts: acceptance predicate
  Returns:
    iterator over the (shared, mutable) window
  """
  window = deque()
  for c in line:
    if accepts(c):
      window.append(c)
      if len(window) == width:
        yield window
        assert len(window) < width, "window must be advanced before scanning on"
    else:
      window.clear()

def iter_groups(line: str, n: numbers.Integral, accepts: Callable[[str], bool]) -> Iterator[str]:
  """
  Yield every length-``n`` run of accepted characters in a line, sliding by one position.
  """
  for window in scan_windows(line, n, accepts):
    yield "".join(window)
    window.popleft()
