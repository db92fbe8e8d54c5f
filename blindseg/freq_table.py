import threading
import numbers
from typing import Callable, Dict, Iterator, List, Mapping, Optional, Tuple

from blindseg.settings import settings

class FreqTable(object):
  """
  A mapping from group text to occurrence count that can be updated from many threads at once.

  Keys are distributed over a fixed number of shards by hash; each shard is a dict guarded by its own lock, so
  updates to keys in different shards never contend. Every update of a key is performed while holding its shard's
  lock, hence no increment is lost regardless of how worker threads interleave.

  Args:
    num_shards: number of independently locked shards, defaults to ``settings.NUM_SHARDS``
  """

  def __init__(self, num_shards: Optional[numbers.Integral] = None) -> None:
    if num_shards is None: num_shards = settings.NUM_SHARDS
    if num_shards < 1:
      raise ValueError(f"number of shards must be positive, got {num_shards}")
    self.num_shards = num_shards
    self._shards = [{} for _ in range(num_shards)]
    self._locks = [threading.Lock() for _ in range(num_shards)]

  def _shard_index(self, key: str) -> int:
    return hash(key) % self.num_shards

  def increment(self, key: str, by: numbers.Integral = 1) -> int:
    """
    Add to the count of a key, inserting it with count zero first if absent.

    Returns:
      the count after incrementing
    """
    idx = self._shard_index(key)
    with self._locks[idx]:
      shard = self._shards[idx]
      shard[key] = shard.get(key, 0) + by
      return shard[key]

  def update(self, counts: Mapping[str, numbers.Integral]) -> None:
    """
    Add a batch of counts, acquiring each touched shard's lock once.

    Args:
      counts: mapping from key to the amount to add
    """
    by_shard = {}
    for key, count in counts.items():
      by_shard.setdefault(self._shard_index(key), []).append((key, count))
    for idx, pairs in by_shard.items():
      with self._locks[idx]:
        shard = self._shards[idx]
        for key, count in pairs:
          shard[key] = shard.get(key, 0) + count

  def get(self, key: str, default: numbers.Integral = 0) -> int:
    idx = self._shard_index(key)
    with self._locks[idx]:
      return self._shards[idx].get(key, default)

  def retain(self, keep: Callable[[int], bool]) -> int:
    """
    Remove, in place, every entry whose count does not satisfy ``keep``.

    Returns:
      number of removed entries
    """
    removed = 0
    for shard, lock in zip(self._shards, self._locks):
      with lock:
        doomed = [key for key, count in shard.items() if not keep(count)]
        for key in doomed:
          del shard[key]
        removed += len(doomed)
    return removed

  def items(self) -> List[Tuple[str, int]]:
    """
    Snapshot of all entries, in no particular order.
    """
    ret = []
    for shard, lock in zip(self._shards, self._locks):
      with lock:
        ret.extend(shard.items())
    return ret

  def to_dict(self) -> Dict[str, int]:
    return dict(self.items())

  def total(self) -> int:
    return sum(count for _, count in self.items())

  def __contains__(self, key: str) -> bool:
    idx = self._shard_index(key)
    with self._locks[idx]:
      return key in self._shards[idx]

  def __getitem__(self, key: str) -> int:
    idx = self._shard_index(key)
    with self._locks[idx]:
      return self._shards[idx][key]

  def __len__(self):
    return sum(len(shard) for shard in self._shards)

  def __iter__(self) -> Iterator[str]:
    return iter([key for key, _ in self.items()])

  def __repr__(self):
    return f"FreqTable(entries={len(self)}, shards={self.num_shards})"
