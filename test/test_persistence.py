import os
import shutil
import tempfile
import unittest

import yaml

import blindseg
from blindseg import persistence
from blindseg.chars import CharAcceptor
from blindseg.filters import ThresholdFilter
from blindseg.tasks import GroupCountTask, WordInductionTask

RUN_YAML = """
zh_words: !WordInductionTask
  corpus: '{RUN_DIR}/corpus.txt'
  n: 3
  acceptor: !CharAcceptor
    extra_chars: 'ba中'
  threshold_filter: !ThresholdFilter
    threshold: 2
    inclusive: True
zh_groups: !GroupCountTask
  corpus: corpus.txt
"""

class TestLoading(unittest.TestCase):

  def setUp(self):
    self.tmp_dir = tempfile.mkdtemp()
    self.runs_file = os.path.join(self.tmp_dir, "runs.yaml")
    with open(self.runs_file, "w", encoding="utf-8") as f:
      f.write(RUN_YAML)

  def tearDown(self):
    shutil.rmtree(self.tmp_dir, ignore_errors=True)

  def test_run_names(self):
    self.assertEqual(persistence.RunLoader.run_names_from_file(self.runs_file), ["zh_groups", "zh_words"])

  def test_initialize(self):
    uninitialized = persistence.RunLoader.load_run_from_file(self.runs_file, "zh_words")
    task = persistence.initialize_if_needed(uninitialized)
    self.assertIsInstance(task, WordInductionTask)
    self.assertEqual(task.corpus, f"{self.tmp_dir}/corpus.txt")
    self.assertEqual(task.n, 3)
    self.assertIsInstance(task.acceptor, CharAcceptor)
    self.assertEqual(task.acceptor.extra_set, frozenset("ab"))
    self.assertIsInstance(task.threshold_filter, ThresholdFilter)
    self.assertEqual(task.threshold_filter.threshold, 2)
    self.assertTrue(task.threshold_filter.inclusive)
    self.assertTrue(task.log_file.endswith("zh_words.log"))

  def test_defaults(self):
    task = persistence.initialize_if_needed(persistence.RunLoader.load_run_from_file(self.runs_file, "zh_groups"))
    self.assertIsInstance(task, GroupCountTask)
    self.assertEqual(task.n, 2)
    self.assertEqual(task.acceptor.extra_set, frozenset())
    self.assertEqual(task.threshold_filter.threshold, 1)
    self.assertFalse(task.threshold_filter.inclusive)
    self.assertIsNone(task.out_dir)
    self.assertTrue(task.log_file.endswith("zh_groups.log"))

  def test_unknown_run(self):
    with self.assertRaises(ValueError):
      persistence.RunLoader.load_run_from_file(self.runs_file, "nonexistent")

  def test_missing_file(self):
    with self.assertRaises(RuntimeError):
      persistence.RunLoader.run_names_from_file(os.path.join(self.tmp_dir, "missing.yaml"))

  def test_already_initialized(self):
    task = GroupCountTask(corpus="corpus.txt")
    self.assertIs(persistence.initialize_if_needed(task), task)

class TestInvalidConfig(unittest.TestCase):

  def load(self, text):
    root = yaml.load(text, Loader=yaml.Loader)
    return persistence.RunLoader.preload_obj(root, run_name="run", run_dir=".")

  def test_unknown_argument(self):
    with self.assertRaises(ValueError):
      persistence.initialize_object(self.load("!GroupCountTask {corpus: c.txt, width: 3}"))

  def test_missing_argument(self):
    with self.assertRaises(persistence.ComponentInitError):
      persistence.initialize_object(self.load("!GroupCountTask {n: 3}"))

  def test_zero_width(self):
    with self.assertRaises(ValueError):
      persistence.initialize_object(self.load("!WordInductionTask {corpus: c.txt, n: 0}"))

  def test_negative_threshold(self):
    with self.assertRaises(ValueError):
      persistence.initialize_object(self.load("!ThresholdFilter {threshold: -1}"))

  def test_zero_workers(self):
    with self.assertRaises(ValueError):
      persistence.initialize_object(self.load("!GroupCountTask {corpus: c.txt, num_workers: 0}"))

class TestSaving(unittest.TestCase):

  def setUp(self):
    self.tmp_dir = tempfile.mkdtemp()

  def tearDown(self):
    shutil.rmtree(self.tmp_dir, ignore_errors=True)

  def test_save_and_reload(self):
    task = WordInductionTask(corpus="corpus.txt", n=3, acceptor=CharAcceptor(extra_chars="cab"),
                             threshold_filter=ThresholdFilter(threshold=4, inclusive=True), num_workers=2)
    fname = os.path.join(self.tmp_dir, "saved", "task.yaml")
    persistence.save_to_file(fname, task)
    with open(fname, encoding="utf-8") as f:
      loaded = yaml.load(f, Loader=yaml.Loader)
    reloaded = persistence.initialize_object(persistence.UninitializedYamlObject(loaded))
    self.assertIsInstance(reloaded, WordInductionTask)
    self.assertEqual(reloaded.n, 3)
    self.assertEqual(reloaded.num_workers, 2)
    self.assertEqual(reloaded.acceptor.extra_set, frozenset("abc"))
    self.assertEqual(reloaded.threshold_filter.threshold, 4)
    self.assertTrue(reloaded.threshold_filter.inclusive)

  def test_default_components_are_saved(self):
    dumped = yaml.dump(GroupCountTask(corpus="corpus.txt"))
    self.assertIn("!GroupCountTask", dumped)
    self.assertIn("!CharAcceptor", dumped)
    self.assertIn("!ThresholdFilter", dumped)

class TestRegistration(unittest.TestCase):

  def test_all_tags_registered(self):
    self.assertEqual(blindseg.seen_yaml_tags,
                     {"!CharAcceptor", "!ThresholdFilter", "!GroupCountTask", "!WordInductionTask"})


if __name__ == '__main__':
  unittest.main()
