"""
Import Placement Mixin.

Chooses where new import statements go and turns them into insertion edits.

- **Leading** placement puts every statement after the leading import block, or
  at the top of the file (below a ``#!`` line) when there is none.
- **At-first-use** placement puts each module's statements right above the line
  of its first usage, with a blank line before them. A usage that no import
  declaration precedes falls back to leading placement. When the usage line
  continues an open expression or is the brace-less body of an ``if`` / ``else``
  / loop, the statements go after the closest import declaration above the
  usage instead, so they never split a statement.
"""

from typing import Dict, List, Optional, Tuple

from import_injector.core.injector.edits import Edit
from import_injector.core.scanner import Occurrence, ScanResult, Token, TokenKind

# A line ending in one of these continues onto the next.
_CONTINUATION_CHARS = frozenset("=+-*/%,?:.&|<>!~^([{")
# A line after these may be a brace-less statement body.
_HEADER_KEYWORDS = ("if", "for", "while", "with")
_BODY_KEYWORDS = ("else", "do")


class PlacementMixin:
  """
  Mixin computing insertion edits for synthesized statements.
  """

  def _leading_edit(self, scan_result: ScanResult, statements: List[str]) -> Edit:
    """
    Inserts statements after the leading import block, one per line.

    Args:
        scan_result (ScanResult): Scanner output.
        statements (List[str]): Rendered statements.

    Returns:
        Edit: The insertion.
    """
    code = scan_result.code
    body = "".join(f"{stmt}\n" for stmt in statements)

    if scan_result.leading_end is None:
      return Edit.insert(scan_result.header_end, body)

    end = scan_result.leading_end
    # Comments opening on the last import's line belong to it, even multi-line ones.
    for tok in scan_result.tokens:
      if tok.start < end:
        continue
      if tok.kind != TokenKind.COMMENT or "\n" in code[end : tok.start]:
        break
      end = tok.end

    line_end = code.find("\n", end)
    rest = code[end : len(code) if line_end == -1 else line_end].strip()

    if rest:
      # Code shares the line with the last import.
      return Edit.insert(end, "\n" + body)
    if line_end == -1:
      return Edit.insert(len(code), "\n" + "\n".join(statements))
    return Edit.insert(line_end + 1, body)

  def _first_use_edit(self, scan_result: ScanResult, occurrence: Occurrence, statements: List[str]) -> Optional[Edit]:
    """
    Inserts statements above the line holding ``occurrence``.

    Args:
        scan_result (ScanResult): Scanner output.
        occurrence (Occurrence): First usage of the group.
        statements (List[str]): Rendered statements.

    Returns:
        Optional[Edit]: The insertion, or None to fall back to leading placement.
    """
    preceding = scan_result.declarations_before(occurrence.start)
    if not preceding:
      return None

    code = scan_result.code
    block = "\n".join(statements)
    line_start = code.rfind("\n", 0, occurrence.start) + 1

    if self._starts_statement(scan_result, line_start):
      above = "" if line_start == 0 or code.startswith("\n\n", line_start - 2) else "\n"
      return Edit.insert(line_start, f"{above}{block}\n")

    return Edit.insert(preceding[-1].end, f"\n\n{block}")

  @staticmethod
  def _starts_statement(scan_result: ScanResult, line_start: int) -> bool:
    """
    Checks that a line begins a new top-level statement.

    Args:
        scan_result (ScanResult): Scanner output.
        line_start (int): Offset of the line's first character.

    Returns:
        bool: False if the line is nested in brackets or continues the previous one.
    """
    if scan_result.token_spanning(line_start) is not None:
      return False
    first = scan_result.token_at(line_start)
    if first is None or first.depth != 0:
      return False

    prev = scan_result.significant_before(line_start)
    if prev is None:
      return True
    if prev.is_word(*_BODY_KEYWORDS):
      return False
    if prev.is_punct(")"):
      return not PlacementMixin._closes_header(scan_result, prev)
    if prev.kind == TokenKind.PUNCTUATOR and prev.text not in ("++", "--"):
      return prev.text[-1] not in _CONTINUATION_CHARS
    return True

  @staticmethod
  def _closes_header(scan_result: ScanResult, close: Token) -> bool:
    """
    Checks whether ``)`` ends an ``if`` / ``for`` / ``while`` / ``with`` header.

    Args:
        scan_result (ScanResult): Scanner output.
        close (Token): The ``)`` token.

    Returns:
        bool: True if a brace-less body may follow it.
    """
    tokens = [t for t in scan_result.tokens if t.kind != TokenKind.COMMENT and t.end <= close.end]
    depth = 0
    for idx in range(len(tokens) - 1, -1, -1):
      tok = tokens[idx]
      if tok.is_punct(")"):
        depth += 1
      elif tok.is_punct("("):
        depth -= 1
        if depth == 0:
          keyword = tokens[idx - 1] if idx > 0 else None
          if keyword is not None and keyword.is_word("await") and idx > 1:
            # for await (...)
            keyword = tokens[idx - 2]
          return keyword is not None and keyword.is_word(*_HEADER_KEYWORDS)
    return False

  def _placement_edits(
    self,
    scan_result: ScanResult,
    groups: List[Tuple[Occurrence, List[str]]],
    at_first_use: bool,
  ) -> List[Edit]:
    """
    Places every unmerged group.

    Args:
        scan_result (ScanResult): Scanner output.
        groups: ``(first occurrence, statements)`` per module, in registry order.
        at_first_use (bool): True for at-first-use placement.

    Returns:
        List[Edit]: Insertion edits.
    """
    leading: List[str] = []
    by_offset: Dict[int, Edit] = {}

    for occurrence, statements in groups:
      edit = self._first_use_edit(scan_result, occurrence, statements) if at_first_use else None
      if edit is None:
        leading.extend(statements)
      elif edit.start in by_offset:
        by_offset[edit.start] = self._join(by_offset[edit.start], statements)
      else:
        by_offset[edit.start] = edit

    edits = list(by_offset.values())
    if leading:
      edits.insert(0, self._leading_edit(scan_result, leading))
    return edits

  @staticmethod
  def _join(edit: Edit, statements: List[str]) -> Edit:
    # Two groups landing on the same line share one block.
    block = "\n".join(statements)
    if edit.text.endswith("\n"):
      return Edit.insert(edit.start, f"{edit.text}{block}\n")
    return Edit.insert(edit.start, f"{edit.text}\n{block}")
