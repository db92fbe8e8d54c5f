#!/usr/bin/env python3

"""
Interactive driver: asks for a corpus and settings, writes the result file, and starts over until input ends.
"""
import argparse
import os
import sys
import numbers
from typing import Callable, Optional, Sequence, Set, Tuple

from blindseg.settings import settings
from blindseg import logger
from blindseg.chars import CharAcceptor, strip_ideographs
from blindseg.filters import ThresholdFilter
from blindseg.tasks import GroupCountTask, WordInductionTask

class PromptSession(object):
  """
  Collects the settings of one round from the user.

  Args:
    input_fct: reads one line of user input; raises ``EOFError`` once input is exhausted
    output_fct: shows a line to the user
  """
  def __init__(self, input_fct: Callable[[], str] = input, output_fct: Callable[[str], None] = print) -> None:
    self.input_fct = input_fct
    self.output_fct = output_fct

  def ask(self, prompt: str) -> str:
    self.output_fct(prompt)
    return self.input_fct()

  def get_filepath(self, prompt: str) -> str:
    self.output_fct(prompt)
    while True:
      filepath = self.input_fct().strip()
      if os.path.exists(filepath):
        return filepath
      self.output_fct("文件不存在，请重新输入！")

  def get_int_with_default(self, prompt: str, allow_zero: bool, default: numbers.Integral) -> int:
    answer = self.ask(prompt).strip()
    try:
      value = int(answer)
    except ValueError:
      value = None
    if value is not None and (value > 0 or (allow_zero and value == 0)):
      return value
    self.output_fct(f"已使用默认值：{default}")
    return default

  def get_extra_chars(self, prompt: str) -> Set[str]:
    return strip_ideographs(self.ask(prompt))

  def collect(self) -> Tuple[str, int, int, Set[str]]:
    file_path = self.get_filepath("请输入文本文件路径：")
    n = self.get_int_with_default("请输入词长：", allow_zero=False, default=settings.DEFAULT_N)
    threshold = self.get_int_with_default("请输入过滤次数，不超过该数则忽略：", allow_zero=True,
                                          default=settings.DEFAULT_THRESHOLD)
    extra_chars = self.get_extra_chars("请输入要纳入的非汉字（输入为一行）：")
    return file_path, n, threshold, extra_chars

def run_rounds(session: PromptSession, count_only: bool = False, max_rounds: Optional[numbers.Integral] = None) -> int:
  """
  Run rounds until input is exhausted or ``max_rounds`` rounds are done.

  Returns:
    number of completed rounds
  """
  task_type = GroupCountTask if count_only else WordInductionTask
  rounds = 0
  while max_rounds is None or rounds < max_rounds:
    try:
      file_path, n, threshold, extra_chars = session.collect()
    except EOFError:
      break
    task = task_type(corpus=file_path,
                     n=n,
                     acceptor=CharAcceptor(extra_chars="".join(sorted(extra_chars))),
                     threshold_filter=ThresholdFilter(threshold=threshold))
    logger.info(f"使用阈值：{threshold}")
    result = task.run()
    session.output_fct(f"输出完成（{len(result)}条，{result.out_path}），再来一轮！\n")
    rounds += 1
  return rounds

def main(overwrite_args: Optional[Sequence[str]] = None) -> None:
  argparser = argparse.ArgumentParser()
  argparser.add_argument("--settings", type=str, default="standard", help="settings (standard, debug, or unittest)"
                                                                          "must be given in '=' syntax, e.g."
                                                                          " --settings=standard")
  argparser.add_argument("--count-only", action='store_true', help="only count groups, skip word induction")
  args = argparser.parse_args(overwrite_args)
  run_rounds(PromptSession(), count_only=args.count_only)


if __name__ == '__main__':
  sys.exit(main())
