"""
Lexical Scanner Package.

Provides ``scan``, which runs the mode-driven ``Lexer`` and the
``StatementScanner`` over a source text and bundles what the resolver and
injector need:

- real-code identifier ``Occurrence``s,
- existing ``ImportDeclaration``s,
- the end of the leading import block and the shebang header.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Set

from import_injector.core.scanner.lexer import Lexer
from import_injector.core.scanner.statements import (
  ImportDeclaration,
  Occurrence,
  Specifier,
  StatementScanner,
)
from import_injector.core.scanner.tokens import Token, TokenKind


@dataclass
class ScanResult:
  """
  Everything the scanner learned about one source text.

  Attributes:
      code: The scanned text.
      tokens: All lexer tokens, comments included.
      occurrences: Real-code identifiers in source order.
      declarations: Import declarations in source order.
      leading_end: End offset of the leading import block, None if there is none.
      header_end: Offset after a leading ``#!`` line (0 without one).
  """

  code: str
  tokens: List[Token] = field(default_factory=list)
  occurrences: List[Occurrence] = field(default_factory=list)
  declarations: List[ImportDeclaration] = field(default_factory=list)
  leading_end: Optional[int] = None
  header_end: int = 0

  @property
  def provided_names(self) -> Set[str]:
    """
    Collects every name bound by an existing import declaration.

    Returns:
        Set[str]: Locally bound identifiers.
    """
    return {name for decl in self.declarations for name in decl.provided_names}

  def declarations_before(self, offset: int) -> List[ImportDeclaration]:
    """
    Lists the import declarations ending at or before ``offset``.

    Args:
        offset (int): Source offset.

    Returns:
        List[ImportDeclaration]: Matching declarations in source order.
    """
    return [decl for decl in self.declarations if decl.end <= offset]

  def significant_before(self, offset: int) -> Optional[Token]:
    """
    Finds the last non-comment token ending at or before ``offset``.

    Args:
        offset (int): Source offset.

    Returns:
        Optional[Token]: The token, or None at the start of the file.
    """
    found = None
    for tok in self.tokens:
      if tok.end > offset:
        break
      if tok.kind != TokenKind.COMMENT:
        found = tok
    return found

  def token_spanning(self, offset: int) -> Optional[Token]:
    """
    Finds a token that strictly contains ``offset`` (a multi-line literal or comment).

    Args:
        offset (int): Source offset.

    Returns:
        Optional[Token]: The token, or None.
    """
    for tok in self.tokens:
      if tok.start >= offset:
        break
      if tok.end > offset:
        return tok
    return None

  def token_at(self, offset: int) -> Optional[Token]:
    """
    Finds the first token starting at or after ``offset``.

    Args:
        offset (int): Source offset.

    Returns:
        Optional[Token]: The token, or None past the last token.
    """
    for tok in self.tokens:
      if tok.start >= offset:
        return tok
    return None


def scan(code: str) -> ScanResult:
  """
  Scans source text for occurrences and import declarations.

  Args:
      code (str): ECMAScript-family source text.

  Returns:
      ScanResult: The scan output.
  """
  tokens = Lexer(code).tokenize()
  statements = StatementScanner(tokens).scan()

  header_end = 0
  if tokens and tokens[0].start == 0 and tokens[0].text.startswith("#!"):
    header_end = tokens[0].end
    if code.startswith("\n", header_end):
      header_end += 1

  return ScanResult(
    code=code,
    tokens=tokens,
    occurrences=statements.occurrences,
    declarations=statements.declarations,
    leading_end=statements.leading_end,
    header_end=header_end,
  )


__all__ = [
  "ImportDeclaration",
  "Lexer",
  "Occurrence",
  "ScanResult",
  "Specifier",
  "StatementScanner",
  "Token",
  "TokenKind",
  "scan",
]
