import os
import numbers
from typing import Iterable, Optional, Tuple

from blindseg import utils

def result_file_name(n: numbers.Integral) -> str:
  return f"{n}字统计结果.txt"

def result_path(corpus_path: str, n: numbers.Integral, out_dir: Optional[str] = None) -> str:
  """
  Location of the result file: beside the corpus, or inside ``out_dir`` if given.
  """
  if out_dir is None:
    out_dir = os.path.dirname(corpus_path)
  return os.path.join(out_dir, result_file_name(n))

def write_results(corpus_path: str,
                  n: numbers.Integral,
                  ranked: Iterable[Tuple[str, numbers.Integral]],
                  out_dir: Optional[str] = None) -> str:
  """
  Write ranked entries as ``text<TAB>count`` lines.

  Args:
    corpus_path: corpus the entries were counted in
    n: group width, used in the file name
    ranked: (text, count) pairs in output order
    out_dir: directory to write to instead of the corpus directory
  Returns:
    path of the written file
  """
  path = result_path(corpus_path, n, out_dir)
  utils.make_parent_dir(path)
  with open(path, "w", encoding="utf-8", newline="\n") as out_stream:
    out_stream.write("".join(f"{text}\t{count}\n" for text, count in ranked))
  return path
