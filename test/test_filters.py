import unittest

from blindseg.filters import ThresholdFilter
from blindseg.freq_table import FreqTable

def make_table(counts):
  table = FreqTable()
  table.update(counts)
  return table

class TestThresholdFilter(unittest.TestCase):

  def setUp(self):
    self.counts = {"一": 1, "二": 2, "三": 3}

  def test_policies_agree_at_zero(self):
    strict = ThresholdFilter(threshold=0).filter(make_table(self.counts))
    inclusive = ThresholdFilter(threshold=0, inclusive=True).filter(make_table(self.counts))
    self.assertEqual(strict.to_dict(), self.counts)
    self.assertEqual(inclusive.to_dict(), self.counts)

  def test_policies_diverge_at_equal_count(self):
    strict = ThresholdFilter(threshold=2).filter(make_table(self.counts))
    inclusive = ThresholdFilter(threshold=2, inclusive=True).filter(make_table(self.counts))
    self.assertEqual(strict.to_dict(), {"三": 3})
    self.assertEqual(inclusive.to_dict(), {"二": 2, "三": 3})

  def test_filter_in_place(self):
    table = make_table(self.counts)
    self.assertIs(ThresholdFilter(threshold=1).filter(table), table)
    self.assertEqual(table.to_dict(), {"二": 2, "三": 3})

  def test_keep(self):
    self.assertFalse(ThresholdFilter(threshold=1).keep(1))
    self.assertTrue(ThresholdFilter(threshold=1, inclusive=True).keep(1))

  def test_negative_threshold(self):
    with self.assertRaises(ValueError):
      ThresholdFilter(threshold=-1)


if __name__ == '__main__':
  unittest.main()
