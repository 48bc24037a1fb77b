"""
Scanner Token Definitions.

Defines the token kinds emitted by the lexer and the ``Token`` record itself.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class TokenKind(str, Enum):
  """Enumeration of Lexer Token Types."""

  IDENTIFIER = "IDENTIFIER"
  NUMBER = "NUMBER"
  STRING = "STRING"
  TEMPLATE = "TEMPLATE"
  REGEX = "REGEX"
  PUNCTUATOR = "PUNCTUATOR"
  COMMENT = "COMMENT"


@dataclass
class Token:
  """
  Represents a lexical unit.

  Attributes:
      kind: The type of token.
      text: The raw source slice, quotes and delimiters included.
      start: Offset of the first character.
      end: Offset one past the last character.
      line: Line number of ``start`` (1-based).
      depth: Bracket nesting (``(``, ``[``, ``{``, ``${``) at ``start``.
      quote: Quote character for STRING tokens.
  """

  kind: TokenKind
  text: str
  start: int
  end: int
  line: int
  depth: int = 0
  quote: Optional[str] = None

  @property
  def value(self) -> str:
    """
    The unquoted contents of a STRING token, the raw text otherwise.

    Returns:
        str: Token value.
    """
    if self.kind == TokenKind.STRING and self.quote:
      inner = self.text[1:]
      if inner.endswith(self.quote):
        inner = inner[:-1]
      return inner
    return self.text

  def is_punct(self, *symbols: str) -> bool:
    return self.kind == TokenKind.PUNCTUATOR and self.text in symbols

  def is_word(self, *words: str) -> bool:
    return self.kind == TokenKind.IDENTIFIER and self.text in words
