import unittest

from blindseg.windowing import iter_groups, scan_windows

def letters(c):
  return c.isascii() and c.isalpha()

class TestScanWindows(unittest.TestCase):

  def test_full_windows_only(self):
    windows = []
    for window in scan_windows("abcd", 3, letters):
      windows.append("".join(window))
      window.popleft()
    self.assertEqual(windows, ["abc", "bcd"])

  def test_rejected_char_clears_window(self):
    windows = []
    for window in scan_windows("ab-cd-e", 2, letters):
      windows.append("".join(window))
      window.popleft()
    self.assertEqual(windows, ["ab", "cd"])

  def test_consumer_decides_advance(self):
    windows = []
    for window in scan_windows("abcdefg", 3, letters):
      windows.append("".join(window))
      window.clear()
    self.assertEqual(windows, ["abc", "def"])

  def test_must_advance(self):
    windows = scan_windows("abc", 2, letters)
    next(windows)
    with self.assertRaises(AssertionError):
      next(windows)

class TestIterGroups(unittest.TestCase):

  def test_maximal_overlap(self):
    self.assertEqual(list(iter_groups("abcabcabc", 2, letters)),
                     ["ab", "bc", "ca", "ab", "bc", "ca", "ab", "bc"])

  def test_short_runs_yield_nothing(self):
    self.assertEqual(list(iter_groups("a-b-c", 2, letters)), [])

  def test_width_one(self):
    self.assertEqual(list(iter_groups("a-b", 1, letters)), ["a", "b"])

  def test_empty_line(self):
    self.assertEqual(list(iter_groups("", 2, letters)), [])


if __name__ == '__main__':
  unittest.main()
