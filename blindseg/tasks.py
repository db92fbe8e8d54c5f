import numbers
from typing import List, Optional, Tuple

from blindseg import logger, yaml_logger
from blindseg.chars import CharAcceptor
from blindseg.counting import check_group_width, count_groups, induce_words
from blindseg.filters import ThresholdFilter
from blindseg.output import write_results
from blindseg.persistence import serializable_init, Serializable
from blindseg.ranking import rank, summarize
from blindseg.settings import settings

class RunResult(object):
  """
  Outcome of a finished task.

  Args:
    out_path: path of the written result file
    ranked: the written (text, count) pairs
  """
  def __init__(self, out_path: str, ranked: List[Tuple[str, int]]) -> None:
    self.out_path = out_path
    self.ranked = ranked

  def __len__(self):
    return len(self.ranked)

class CountingTask(object):
  """
  A task that reads a corpus and writes a ranked frequency table.

  Arguments shared by all tasks:
    corpus: path to a UTF-8 text file
    n: group width, at least 1
    acceptor: decides which characters take part in groups; accepts only ideographs if not given
    threshold_filter: applied to every table of the task; defaults to keeping counts above ``settings.DEFAULT_THRESHOLD``
    out_dir: directory for the result file; defaults to the corpus directory
    num_workers: number of worker threads; defaults to ``settings.NUM_WORKERS``
    log_file: location to write the log of this task to when run from a run file
  """
  def _init_common(self, corpus: str, n: numbers.Integral, acceptor: Optional[CharAcceptor],
                   threshold_filter: Optional[ThresholdFilter], out_dir: Optional[str],
                   num_workers: Optional[numbers.Integral], log_file: str) -> None:
    check_group_width(n)
    if num_workers is not None and num_workers < 1:
      raise ValueError(f"number of workers must be positive, got {num_workers}")
    self.corpus = corpus
    self.n = n
    self.acceptor = self.add_serializable_component("acceptor", acceptor, lambda: CharAcceptor())
    self.threshold_filter = self.add_serializable_component(
      "threshold_filter", threshold_filter, lambda: ThresholdFilter(threshold=settings.DEFAULT_THRESHOLD))
    self.out_dir = out_dir
    self.num_workers = num_workers
    self.log_file = log_file

  def run(self) -> RunResult:
    raise NotImplementedError("must be implemented by subclasses")

  def _finish(self, table, kind: str) -> RunResult:
    self.threshold_filter.filter(table)
    ranked = rank(table)
    out_path = write_results(self.corpus, self.n, ranked, out_dir=self.out_dir)
    logger.info(f"> Wrote {len(ranked)} {kind} to {out_path}")
    yaml_logger.info({"kind": kind, "corpus": self.corpus, "n": self.n, "out_path": out_path,
                      **summarize(ranked)})
    return RunResult(out_path, ranked)

class GroupCountTask(CountingTask, Serializable):
  """
  Single pass: count groups, filter, rank and write them.
  """
  yaml_tag = "!GroupCountTask"

  @serializable_init
  def __init__(self,
               corpus: str,
               n: numbers.Integral = settings.DEFAULT_N,
               acceptor: Optional[CharAcceptor] = None,
               threshold_filter: Optional[ThresholdFilter] = None,
               out_dir: Optional[str] = None,
               num_workers: Optional[numbers.Integral] = None,
               log_file: str = settings.DEFAULT_LOG_PATH) -> None:
    self._init_common(corpus, n, acceptor, threshold_filter, out_dir, num_workers, log_file)

  def run(self) -> RunResult:
    groups = count_groups(self.corpus, self.n, self.acceptor, num_workers=self.num_workers)
    return self._finish(groups, "groups")

class WordInductionTask(CountingTask, Serializable):
  """
  Two passes: count groups, filter them, induce words from the filtered groups, then filter, rank and write the words.

  The second pass starts only after the group table is complete and filtered.
  """
  yaml_tag = "!WordInductionTask"

  @serializable_init
  def __init__(self,
               corpus: str,
               n: numbers.Integral = settings.DEFAULT_N,
               acceptor: Optional[CharAcceptor] = None,
               threshold_filter: Optional[ThresholdFilter] = None,
               out_dir: Optional[str] = None,
               num_workers: Optional[numbers.Integral] = None,
               log_file: str = settings.DEFAULT_LOG_PATH) -> None:
    self._init_common(corpus, n, acceptor, threshold_filter, out_dir, num_workers, log_file)

  def run(self) -> RunResult:
    groups = count_groups(self.corpus, self.n, self.acceptor, num_workers=self.num_workers)
    words = induce_words(self.corpus, self.n, self.acceptor, self.threshold_filter, groups,
                         num_workers=self.num_workers)
    return self._finish(words, "words")
