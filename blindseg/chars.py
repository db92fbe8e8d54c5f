"""
Character acceptance.

A character takes part in windows if it is a CJK unified ideograph or one of a user-supplied set of extra characters.
Both the acceptance test and the stripping of ideographs from user input use the same exclusive bounds
``IDEOGRAPH_LOW < c < IDEOGRAPH_HIGH``, i.e. exactly the block U+4E00..U+9FFF.
"""

from typing import Iterable, Set, Union

from blindseg.persistence import serializable_init, Serializable

IDEOGRAPH_LOW = "䷿"
IDEOGRAPH_HIGH = "ꀀ"

def is_ideograph(c: str) -> bool:
  return IDEOGRAPH_LOW < c < IDEOGRAPH_HIGH

def strip_ideographs(raw: Iterable[str]) -> Set[str]:
  """
  Build an extra-character set from raw user input.

  Ideographs are dropped since they are accepted anyway; line breaks are dropped since they can never occur inside a
  corpus line.

  Args:
    raw: user input, typically a single line of text
  Returns:
    set of non-ideographic characters
  """
  return set(c for c in raw if not is_ideograph(c) and c not in "\r\n")

class CharAcceptor(Serializable):
  """
  Decides whether a character participates in windows.

  Args:
    extra_chars: additional characters to accept besides ideographs; ideographs contained here are ignored
  """
  yaml_tag = "!CharAcceptor"

  @serializable_init
  def __init__(self, extra_chars: Union[str, Iterable[str]] = "") -> None:
    self.extra_set = frozenset(strip_ideographs(extra_chars))
    self.save_processed_arg("extra_chars", "".join(sorted(self.extra_set)))

  def accepts(self, c: str) -> bool:
    return IDEOGRAPH_LOW < c < IDEOGRAPH_HIGH or c in self.extra_set

  __call__ = accepts

  def __repr__(self):
    return f"CharAcceptor(extra_chars={''.join(sorted(self.extra_set))!r})"
