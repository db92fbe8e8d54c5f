import os
import shutil
import tempfile
import unittest

from blindseg.blindseg_interactive import PromptSession, run_rounds

def scripted(lines):
  remaining = iter(lines)
  def read():
    try:
      return next(remaining)
    except StopIteration:
      raise EOFError()
  return read

class TestInteractive(unittest.TestCase):

  def setUp(self):
    self.tmp_dir = tempfile.mkdtemp()
    self.corpus = os.path.join(self.tmp_dir, "corpus.txt")
    with open(self.corpus, "w", encoding="utf-8") as f:
      f.write("abcabcabc\n")
    self.shown = []

  def tearDown(self):
    shutil.rmtree(self.tmp_dir, ignore_errors=True)

  def session(self, lines):
    return PromptSession(input_fct=scripted(lines), output_fct=self.shown.append)

  def read_result(self, n=2):
    with open(os.path.join(self.tmp_dir, f"{n}字统计结果.txt"), encoding="utf-8") as f:
      return f.read()

  def test_one_round(self):
    missing = os.path.join(self.tmp_dir, "missing.txt")
    rounds = run_rounds(self.session([missing, self.corpus, "2", "0", "abc"]))
    self.assertEqual(rounds, 1)
    self.assertIn("文件不存在，请重新输入！", self.shown)
    self.assertEqual(self.read_result(), "ab\t3\nbc\t1\n")

  def test_defaults(self):
    rounds = run_rounds(self.session([self.corpus, "zwei", "", "abc中"]))
    self.assertEqual(rounds, 1)
    self.assertIn("已使用默认值：2", self.shown)
    self.assertIn("已使用默认值：1", self.shown)
    self.assertEqual(self.read_result(), "ab\t3\n")

  def test_zero_width_falls_back(self):
    run_rounds(self.session([self.corpus, "0", "0", "abc"]))
    self.assertIn("已使用默认值：2", self.shown)
    self.assertEqual(self.read_result(), "ab\t3\nbc\t1\n")

  def test_count_only(self):
    run_rounds(self.session([self.corpus, "2", "2", "abc"]), count_only=True)
    self.assertEqual(sorted(self.read_result().splitlines()), ["ab\t3", "bc\t3"])

  def test_several_rounds(self):
    lines = [self.corpus, "2", "0", "abc", self.corpus, "3", "0", "abc"]
    self.assertEqual(run_rounds(self.session(lines)), 2)
    self.assertEqual(self.read_result(2), "ab\t3\nbc\t1\n")
    self.assertTrue(os.path.isfile(os.path.join(self.tmp_dir, "3字统计结果.txt")))

  def test_max_rounds(self):
    lines = [self.corpus, "2", "0", "abc", self.corpus, "3", "0", "abc"]
    self.assertEqual(run_rounds(self.session(lines), max_rounds=1), 1)
    self.assertFalse(os.path.exists(os.path.join(self.tmp_dir, "3字统计结果.txt")))


if __name__ == '__main__':
  unittest.main()
