import os
import shutil
import tempfile
import unittest

from blindseg.output import result_file_name, result_path, write_results

class TestWriteResults(unittest.TestCase):

  def setUp(self):
    self.tmp_dir = tempfile.mkdtemp()
    self.corpus = os.path.join(self.tmp_dir, "corpus.txt")

  def tearDown(self):
    shutil.rmtree(self.tmp_dir, ignore_errors=True)

  def test_file_name(self):
    self.assertEqual(result_file_name(2), "2字统计结果.txt")
    self.assertEqual(result_path(self.corpus, 3), os.path.join(self.tmp_dir, "3字统计结果.txt"))

  def test_exact_bytes(self):
    path = write_results(self.corpus, 2, [("词", 5), ("语", 5), ("言", 3)])
    self.assertEqual(path, os.path.join(self.tmp_dir, "2字统计结果.txt"))
    with open(path, "rb") as f:
      self.assertEqual(f.read(), "词\t5\n语\t5\n言\t3\n".encode("utf-8"))

  def test_empty(self):
    path = write_results(self.corpus, 2, [])
    with open(path, "rb") as f:
      self.assertEqual(f.read(), b"")

  def test_out_dir(self):
    out_dir = os.path.join(self.tmp_dir, "results", "nested")
    path = write_results(self.corpus, 4, [("自然语言", 2)], out_dir=out_dir)
    self.assertEqual(path, os.path.join(out_dir, "4字统计结果.txt"))
    with open(path, encoding="utf-8") as f:
      self.assertEqual(f.read(), "自然语言\t2\n")

  def test_write_failure(self):
    blocker = os.path.join(self.tmp_dir, "blocker")
    with open(blocker, "w") as f:
      f.write("not a directory")
    with self.assertRaises(OSError):
      write_results(self.corpus, 2, [("词", 1)], out_dir=blocker)


if __name__ == '__main__':
  unittest.main()
