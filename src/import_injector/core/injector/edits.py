"""
Offset-stable text edits.

Every edit is expressed against the *unmodified* input. ``apply_edits`` sorts
them and rebuilds the text in one ascending pass, so no edit can shift the
offsets another one was computed with.
"""

from dataclasses import dataclass
from typing import Iterable, List


@dataclass(frozen=True)
class Edit:
  """
  Replace ``code[start:end]`` with ``text``.

  ``start == end`` is a pure insertion. Insertions at the same offset are
  applied in the order they were created.
  """

  start: int
  end: int
  text: str

  @classmethod
  def insert(cls, offset: int, text: str) -> "Edit":
    return cls(offset, offset, text)


def apply_edits(code: str, edits: Iterable[Edit]) -> str:
  """
  Applies edits computed against ``code``.

  Args:
      code (str): The original text.
      edits (Iterable[Edit]): Edits with original offsets.

  Returns:
      str: The rewritten text. ``code`` itself when there are no edits.

  Raises:
      ValueError: If an edit is out of range or two edits overlap.
  """
  ordered: List[Edit] = sorted(edits, key=lambda e: (e.start, e.end))
  if not ordered:
    return code

  chunks: List[str] = []
  cursor = 0
  for edit in ordered:
    if not 0 <= edit.start <= edit.end <= len(code):
      raise ValueError(f"Edit [{edit.start}, {edit.end}) is outside the text (length {len(code)}).")
    if edit.start < cursor:
      raise ValueError(f"Edit [{edit.start}, {edit.end}) overlaps a previous edit ending at {cursor}.")
    chunks.append(code[cursor : edit.start])
    chunks.append(edit.text)
    cursor = edit.end

  chunks.append(code[cursor:])
  return "".join(chunks)
