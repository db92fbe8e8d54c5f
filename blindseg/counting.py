"""
The two counting passes.

Pass 1 (:func:`count_groups`) counts every length-n run of accepted characters. Pass 2 (:func:`induce_words`) slides
a window of width 2n-1 over the corpus and, for each full window, picks the most frequent of its n leading length-n
substrings according to the filtered pass-1 counts.

Both passes split the corpus lines into chunks and process them on a thread pool; every worker tallies its chunk
locally and merges the result into the shared :class:`FreqTable`.
"""

from collections import Counter
from concurrent.futures import ThreadPoolExecutor
from itertools import islice
import numbers
from typing import Callable, Deque, Iterable, List, Mapping, Optional, Sequence, Union

from blindseg import logger
from blindseg.chars import CharAcceptor
from blindseg.filters import ThresholdFilter
from blindseg.freq_table import FreqTable
from blindseg.settings import settings
from blindseg import utils
from blindseg.windowing import iter_groups, scan_windows

def read_corpus(path: str) -> List[str]:
  """
  Read all lines of a UTF-8 text file.

  Decoding is strict: a file that is not valid UTF-8 raises ``UnicodeDecodeError``, a missing or unreadable file
  raises ``OSError``.

  Args:
    path: corpus file
  Returns:
    lines without their line terminators
  """
  with open(path, encoding="utf-8", errors="strict") as f:
    return [line.rstrip("\r\n") for line in f]

def check_group_width(n: numbers.Integral) -> None:
  if not isinstance(n, numbers.Integral) or isinstance(n, bool) or n < 1:
    raise ValueError(f"group width n must be a positive integer, got {n!r}")

def as_acceptor(extra_chars: Union[CharAcceptor, Iterable[str], None]) -> CharAcceptor:
  if isinstance(extra_chars, CharAcceptor):
    return extra_chars
  return CharAcceptor(extra_chars=extra_chars or "")

def as_filter(threshold: Union[ThresholdFilter, numbers.Integral]) -> ThresholdFilter:
  if isinstance(threshold, ThresholdFilter):
    return threshold
  return ThresholdFilter(threshold=threshold)

def select_word(window: Deque[str], n: numbers.Integral, lookup: Mapping[str, int]) -> Optional[str]:
  """
  Pick the most frequent of the n leading length-n candidates of a window.

  Candidates are taken in order of increasing offset, popping the window's front character after each, so the
  window is left holding its last ``len(window) - n`` characters. A candidate replaces the current best only if its
  frequency is strictly greater, so ties go to the leftmost candidate. Candidates missing from ``lookup`` have
  frequency 0 and never win.

  Args:
    window: full window of width 2n-1, advanced in place
    n: candidate length
    lookup: filtered group counts
  Returns:
    the winning candidate, or ``None`` if no candidate has nonzero frequency
  """
  best_word, best_freq = None, 0
  for _ in range(n):
    word = "".join(islice(window, n))
    window.popleft()
    freq = lookup.get(word, 0)
    if freq > best_freq:
      best_word, best_freq = word, freq
  return best_word

def count_groups_in_lines(lines: Iterable[str], n: numbers.Integral, accepts: Callable[[str], bool]) -> Counter:
  counts = Counter()
  for line in lines:
    counts.update(iter_groups(line, n, accepts))
  return counts

def induce_words_in_lines(lines: Iterable[str], n: numbers.Integral, accepts: Callable[[str], bool],
                          lookup: Mapping[str, int]) -> Counter:
  counts = Counter()
  width = 2 * n - 1
  for line in lines:
    for window in scan_windows(line, width, accepts):
      word = select_word(window, n, lookup)
      if word is not None:
        counts[word] += 1
  return counts

def run_on_pool(lines: Sequence[str],
                tally_chunk: Callable[[Sequence[str]], Mapping[str, int]],
                table: FreqTable,
                num_workers: Optional[numbers.Integral] = None) -> FreqTable:
  """
  Tally all lines on a thread pool into a shared table.

  Lines are handed out in chunks of ``settings.LINES_PER_CHUNK``; chunks are processed in no particular order. Each
  worker merges its chunk's counts into ``table`` itself. Returns only after every chunk has been merged; the first
  worker exception, if any, is re-raised.

  Args:
    lines: corpus lines
    tally_chunk: computes the counts of one chunk
    table: shared table to merge into
    num_workers: pool size, defaults to ``settings.NUM_WORKERS``
  Returns:
    ``table``
  """
  if num_workers is None: num_workers = settings.NUM_WORKERS
  if num_workers < 1:
    raise ValueError(f"number of workers must be positive, got {num_workers}")

  def work(chunk: Sequence[str]) -> int:
    counts = tally_chunk(chunk)
    table.update(counts)
    return len(chunk)

  processed = 0
  with ThreadPoolExecutor(max_workers=num_workers) as executor:
    for done in executor.map(work, utils.chunked(lines, settings.LINES_PER_CHUNK)):
      processed += done
  logger.debug(f"processed {processed} lines on {num_workers} workers")
  return table

def count_groups(path: str,
                 n: numbers.Integral,
                 extra_chars: Union[CharAcceptor, Iterable[str], None] = None,
                 num_workers: Optional[numbers.Integral] = None) -> FreqTable:
  """
  Count all length-n groups of accepted characters in a corpus.

  Args:
    path: UTF-8 corpus file
    n: group width, at least 1
    extra_chars: a :class:`CharAcceptor`, or extra characters to accept besides ideographs
    num_workers: pool size, defaults to ``settings.NUM_WORKERS``
  Returns:
    a new table with the exact number of occurrences of every group
  """
  check_group_width(n)
  acceptor = as_acceptor(extra_chars)
  lines = read_corpus(path)
  logger.info(f"> Counting {n}-character groups in {len(lines)} lines of {path}")
  with utils.Timer() as timer:
    groups = run_on_pool(lines,
                         lambda chunk: count_groups_in_lines(chunk, n, acceptor),
                         FreqTable(),
                         num_workers=num_workers)
  logger.info(f"> Counted {len(groups)} distinct groups in {utils.format_time(timer.elapsed)}")
  return groups

def induce_words(path: str,
                 n: numbers.Integral,
                 extra_chars: Union[CharAcceptor, Iterable[str], None],
                 threshold: Union[ThresholdFilter, numbers.Integral],
                 groups: FreqTable,
                 num_workers: Optional[numbers.Integral] = None) -> FreqTable:
  """
  Induce words from a corpus given its group counts.

  ``groups`` is filtered in place by ``threshold`` before the scan starts (a no-op if it has been filtered already)
  and is only read afterwards. The returned word table is not filtered.

  Args:
    path: UTF-8 corpus file, the same one the groups were counted in
    n: group width used for ``groups``
    extra_chars: a :class:`CharAcceptor`, or extra characters to accept besides ideographs
    threshold: a :class:`ThresholdFilter`, or a count cutoff for the default strict policy
    groups: result of :func:`count_groups`
    num_workers: pool size, defaults to ``settings.NUM_WORKERS``
  Returns:
    a new table counting how often each candidate won a window
  """
  check_group_width(n)
  acceptor = as_acceptor(extra_chars)
  as_filter(threshold).filter(groups)
  lookup = groups.to_dict()
  lines = read_corpus(path)
  logger.info(f"> Inducing words with window width {2 * n - 1} against {len(lookup)} groups")
  with utils.Timer() as timer:
    words = run_on_pool(lines,
                        lambda chunk: induce_words_in_lines(chunk, n, acceptor, lookup),
                        FreqTable(),
                        num_workers=num_workers)
  logger.info(f"> Induced {len(words)} distinct words in {utils.format_time(timer.elapsed)}")
  return words
