from typing import Dict, List, Tuple

import numpy as np

from blindseg.freq_table import FreqTable

def rank(table: FreqTable) -> List[Tuple[str, int]]:
  """
  Sort the entries of a table by descending count.

  The sort is stable with respect to the table's iteration order, which itself carries no meaning; entries with
  equal counts may therefore come out in any order across runs.

  Args:
    table: table to rank
  Returns:
    list of (text, count) pairs
  """
  entries = table.items()
  if not entries:
    return []
  counts = np.fromiter((count for _, count in entries), dtype=np.int64, count=len(entries))
  order = np.argsort(-counts, kind="stable")
  return [entries[i] for i in order]

def summarize(ranked: List[Tuple[str, int]]) -> Dict[str, float]:
  """
  Summary statistics of a ranked table, as logged to the yaml log.
  """
  if not ranked:
    return {"entries": 0, "total": 0}
  counts = np.array([count for _, count in ranked], dtype=np.int64)
  return {"entries": len(ranked),
          "total": int(counts.sum()),
          "max": int(counts.max()),
          "mean": float(counts.mean()),
          "median": float(np.median(counts))}
