import numbers

from blindseg import logger
from blindseg.freq_table import FreqTable
from blindseg.persistence import serializable_init, Serializable

class ThresholdFilter(Serializable):
  """
  Removes rare entries from a frequency table.

  The same filter instance is applied to the group table after counting and to the word table after induction, so a
  run always uses one comparison policy.

  Args:
    threshold: count cutoff, non-negative
    inclusive: if ``False`` (default), keep entries with ``count > threshold``; if ``True``, keep entries with
               ``count >= threshold``
  """
  yaml_tag = "!ThresholdFilter"

  @serializable_init
  def __init__(self, threshold: numbers.Integral = 1, inclusive: bool = False) -> None:
    if threshold < 0:
      raise ValueError(f"threshold must not be negative, got {threshold}")
    self.threshold = threshold
    self.inclusive = inclusive

  def keep(self, count: numbers.Integral) -> bool:
    if self.inclusive:
      return count >= self.threshold
    return count > self.threshold

  def filter(self, table: FreqTable) -> FreqTable:
    """
    Filter a table in place.

    Args:
      table: table to filter; counts of kept entries are left untouched
    Returns:
      the same table
    """
    before = len(table)
    removed = table.retain(self.keep)
    logger.info(f"> Filtered {removed} of {before} entries "
                f"(keeping count {'>=' if self.inclusive else '>'} {self.threshold})")
    return table
