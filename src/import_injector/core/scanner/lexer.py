"""
Lexical Scanner.

A single forward pass over ECMAScript-family source text, driven by an explicit
``ScanMode`` state machine. The lexer does not validate anything: it only needs
to know, at every offset, whether it is looking at real code or at the inside of
a string, comment, template or regex literal, so that identifier lookalikes in
the latter are never reported.

Transition table (``CODE`` is the only mode that opens others)::

    CODE --'//'--> LINE_COMMENT --'\\n'--> CODE
    CODE --'/*'--> BLOCK_COMMENT --'*/'--> CODE
    CODE --'\\''--> SINGLE_QUOTE_STRING --'\\'' | '\\n'--> CODE
    CODE --'"'--> DOUBLE_QUOTE_STRING --'"' | '\\n'--> CODE
    CODE --'`'--> TEMPLATE_LITERAL --'`'--> CODE
                  TEMPLATE_LITERAL --'${'--> CODE --matching '}'--> TEMPLATE_LITERAL
    CODE --'/' at expression start--> REGEX --'/' outside [...]--> CODE

Any mode still open at end of input is closed silently.
"""

import bisect
import re
from typing import Callable, Dict, List, Optional

from import_injector.core.scanner.tokens import Token, TokenKind
from import_injector.enums import ScanMode

WHITESPACE_RE = re.compile(r"\s+")
IDENTIFIER_RE = re.compile(r"(?:[^\W\d]|\$)[\w$]*")
NUMBER_RE = re.compile(r"\d[\w.]*|\.\d\w*")
FLAGS_RE = re.compile(r"[A-Za-z]*")

# Body of a quoted string up to (not including) the closing quote, a raw newline or EOF.
_STRING_BODY = {
  "'": re.compile(r"[^'\\\n]*(?:\\.[^'\\\n]*)*", re.DOTALL),
  '"': re.compile(r'[^"\\\n]*(?:\\.[^"\\\n]*)*', re.DOTALL),
}
# Body of a template chunk up to a closing backtick, a '${' or EOF.
_TEMPLATE_BODY = re.compile(r"[^`\\$]*(?:(?:\\.|\$(?!\{))[^`\\$]*)*", re.DOTALL)

# Keywords after which a '/' starts a regex literal rather than a division.
REGEX_PRECEDING_KEYWORDS = frozenset(
  {
    "return",
    "typeof",
    "instanceof",
    "in",
    "of",
    "new",
    "delete",
    "void",
    "throw",
    "case",
    "do",
    "else",
    "yield",
    "await",
  }
)

_OPENING = {"(": ")", "[": "]", "{": "}"}
_CLOSING = frozenset(_OPENING.values())
_INCREMENTS = ("++", "--")

_CODE_OPENERS: Dict[str, ScanMode] = {
  "//": ScanMode.LINE_COMMENT,
  "/*": ScanMode.BLOCK_COMMENT,
  "'": ScanMode.SINGLE_QUOTE_STRING,
  '"': ScanMode.DOUBLE_QUOTE_STRING,
  "`": ScanMode.TEMPLATE_LITERAL,
}


class Lexer:
  """
  Splits source text into a list of ``Token``s.

  Whitespace is dropped. Comments and literals are kept as single opaque tokens
  so that callers can still locate them.

  Attributes:
      text (str): The input.
      mode (ScanMode): Current state of the machine.
      tokens (List[Token]): Output, in source order.
  """

  def __init__(self, text: str) -> None:
    self.text = text
    self.length = len(text)
    self.pos = 0
    self.mode = ScanMode.CODE
    self.tokens: List[Token] = []

    self._region_start = 0
    self._depth = 0
    # One entry per open '${': brace depth inside that substitution.
    self._template_stack: List[int] = []
    self._prev: Optional[Token] = None
    # Whether the last `++` / `--` followed an operand.
    self._postfix = False
    self._newlines = [m.start() for m in re.finditer("\n", text)]

    self._handlers: Dict[ScanMode, Callable[[], None]] = {
      ScanMode.CODE: self._scan_code,
      ScanMode.LINE_COMMENT: self._scan_line_comment,
      ScanMode.BLOCK_COMMENT: self._scan_block_comment,
      ScanMode.SINGLE_QUOTE_STRING: self._scan_string,
      ScanMode.DOUBLE_QUOTE_STRING: self._scan_string,
      ScanMode.TEMPLATE_LITERAL: self._scan_template,
      ScanMode.REGEX: self._scan_regex,
    }

  def tokenize(self) -> List[Token]:
    """
    Runs the state machine to the end of the input.

    Returns:
        List[Token]: All tokens in source order.
    """
    if self.text.startswith("#!"):
      end = self._line_end(0)
      self._emit(TokenKind.COMMENT, 0, end)
      self.pos = end

    while self.pos < self.length:
      self._handlers[self.mode]()

    return self.tokens

  def line_of(self, offset: int) -> int:
    """
    Converts an offset to a 1-based line number.

    Args:
        offset (int): Character offset into the text.

    Returns:
        int: Line number.
    """
    return bisect.bisect_left(self._newlines, offset) + 1

  # --- Helpers ---

  def _line_end(self, start: int) -> int:
    idx = self.text.find("\n", start)
    return self.length if idx == -1 else idx

  def _emit(self, kind: TokenKind, start: int, end: int, quote: Optional[str] = None) -> Token:
    token = Token(kind, self.text[start:end], start, end, self.line_of(start), self._depth, quote)
    self.tokens.append(token)
    if kind != TokenKind.COMMENT:
      self._prev = token
    return token

  def _enter(self, mode: ScanMode, start: int, skip: int) -> None:
    self.mode = mode
    self._region_start = start
    self.pos = start + skip

  def _regex_allowed(self) -> bool:
    """
    Decides whether a '/' at the current position opens a regex literal.

    Returns:
        bool: False when the previous significant token ends an operand.
    """
    prev = self._prev
    if prev is None:
      return True
    if prev.text in _INCREMENTS:
      # Postfix `i++` ends an operand, prefix `++i` does not.
      return not self._postfix
    if prev.kind == TokenKind.PUNCTUATOR:
      return prev.text not in (")", "]")
    if prev.kind == TokenKind.IDENTIFIER:
      return prev.text in REGEX_PRECEDING_KEYWORDS
    if prev.kind == TokenKind.TEMPLATE:
      return prev.text.endswith("${")
    return False

  # --- Mode handlers ---

  def _scan_code(self) -> None:
    text, pos = self.text, self.pos
    char = text[pos]

    if char.isspace():
      self.pos = WHITESPACE_RE.match(text, pos).end()
      return

    pair = text[pos : pos + 2]
    if len(pair) == 2 and pair in _CODE_OPENERS:
      self._enter(_CODE_OPENERS[pair], pos, 2)
      return
    if char in _CODE_OPENERS:
      self._enter(_CODE_OPENERS[char], pos, 1)
      return
    if char == "/":
      if self._regex_allowed():
        self._enter(ScanMode.REGEX, pos, 1)
      else:
        self._emit(TokenKind.PUNCTUATOR, pos, pos + 1)
        self.pos += 1
      return

    match = IDENTIFIER_RE.match(text, pos)
    if match:
      self._emit(TokenKind.IDENTIFIER, pos, match.end())
      self.pos = match.end()
      return

    match = NUMBER_RE.match(text, pos)
    if match:
      self._emit(TokenKind.NUMBER, pos, match.end())
      self.pos = match.end()
      return

    if text.startswith("...", pos):
      self._emit(TokenKind.PUNCTUATOR, pos, pos + 3)
      self.pos += 3
      return
    if pair == "?." and not text[pos + 2 : pos + 3].isdigit():
      self._emit(TokenKind.PUNCTUATOR, pos, pos + 2)
      self.pos += 2
      return
    if pair in _INCREMENTS:
      self._postfix = not self._regex_allowed()
      self._emit(TokenKind.PUNCTUATOR, pos, pos + 2)
      self.pos += 2
      return

    if char in _OPENING:
      if char == "{" and self._template_stack:
        self._template_stack[-1] += 1
      self._emit(TokenKind.PUNCTUATOR, pos, pos + 1)
      self._depth += 1
      self.pos += 1
      return

    if char in _CLOSING:
      self._depth = max(self._depth - 1, 0)
      if char == "}" and self._template_stack:
        if self._template_stack[-1] == 0:
          self._template_stack.pop()
          self._enter(ScanMode.TEMPLATE_LITERAL, pos, 1)
          return
        self._template_stack[-1] -= 1
      self._emit(TokenKind.PUNCTUATOR, pos, pos + 1)
      self.pos += 1
      return

    self._emit(TokenKind.PUNCTUATOR, pos, pos + 1)
    self.pos += 1

  def _scan_line_comment(self) -> None:
    end = self._line_end(self.pos)
    self._emit(TokenKind.COMMENT, self._region_start, end)
    self.mode = ScanMode.CODE
    self.pos = end

  def _scan_block_comment(self) -> None:
    idx = self.text.find("*/", self.pos)
    end = self.length if idx == -1 else idx + 2
    self._emit(TokenKind.COMMENT, self._region_start, end)
    self.mode = ScanMode.CODE
    self.pos = end

  def _scan_string(self) -> None:
    quote = self.text[self._region_start]
    end = _STRING_BODY[quote].match(self.text, self.pos).end()
    if self.text.startswith(quote, end):
      end += 1
    self._emit(TokenKind.STRING, self._region_start, end, quote=quote)
    self.mode = ScanMode.CODE
    self.pos = end

  def _scan_template(self) -> None:
    end = _TEMPLATE_BODY.match(self.text, self.pos).end()
    if self.text.startswith("${", end):
      end += 2
      self._emit(TokenKind.TEMPLATE, self._region_start, end)
      self._template_stack.append(0)
      self._depth += 1
    else:
      if self.text.startswith("`", end):
        end += 1
      self._emit(TokenKind.TEMPLATE, self._region_start, end)
    self.mode = ScanMode.CODE
    self.pos = end

  def _scan_regex(self) -> None:
    text, pos = self.text, self.pos
    in_class = False
    while pos < self.length:
      char = text[pos]
      if char == "\\":
        pos += 2
        continue
      if char == "\n":
        # Not a regex after all; stop before the line break.
        break
      if char == "[":
        in_class = True
      elif char == "]":
        in_class = False
      elif char == "/" and not in_class:
        pos = FLAGS_RE.match(text, pos + 1).end()
        break
      pos += 1

    end = min(pos, self.length)
    self._emit(TokenKind.REGEX, self._region_start, end)
    self.mode = ScanMode.CODE
    self.pos = end


def tokenize(text: str) -> List[Token]:
  """
  Convenience wrapper around ``Lexer(text).tokenize()``.

  Args:
      text (str): Source text.

  Returns:
      List[Token]: Tokens in source order.
  """
  return Lexer(text).tokenize()
