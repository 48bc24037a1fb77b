"""
Statement Recognizer.

Walks the lexer's token stream and picks out the few statement shapes the
injector cares about:

1.  **Import declarations**: ``import x, { a, b as c } from 'mod'``,
    ``import * as ns from 'mod'``, ``import 'mod'``, TypeScript's
    ``import x = require('mod')`` and their ``import type`` forms. Their names
    are definitions, not usages.
2.  **Re-exports**: ``export { a } from 'mod'`` and ``export * as ns from 'mod'``.
    The listed names belong to another module and are never usages.
3.  **Occurrences**: every other identifier in code, minus member-access
    targets (``obj.name``, ``obj?.name``, ``#name``) and object-literal keys
    (``{ name: value }``).

Anything that does not fit a recognized shape is left as plain code.
"""

from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Set, Tuple

from import_injector.core.scanner.tokens import Token, TokenKind

_MEMBER_ACCESS = (".", "?.", "#")
_KEYWORDS = ("import", "export")


@dataclass
class Specifier:
  """
  One entry of a ``{ ... }`` import list.

  Attributes:
      imported: The exported name (``a`` in ``a as b``).
      local: The name bound in this file (``b`` in ``a as b``).
      type_only: True for ``type a`` entries.
  """

  imported: str
  local: str
  type_only: bool = False


@dataclass
class ImportDeclaration:
  """
  An import statement found in the source.

  Attributes:
      module_specifier: The ``from`` string, unquoted.
      start: Offset of the ``import`` keyword.
      end: Offset one past the statement (terminator included).
      quote_style: Quote character of the module specifier.
      has_semicolon: Whether the statement ends with ``;``.
      default_name: Name bound by a default import.
      namespace_name: Name bound by ``* as name``.
      specifiers: Entries of the ``{ ... }`` list.
      named_open: Offset of ``{`` when a named list is present.
      named_close: Offset of ``}`` when a named list is present.
      type_only: True for ``import type ...``.
      specifier_start: Offset of the first named entry, if any.
  """

  module_specifier: str
  start: int
  end: int
  quote_style: str = "'"
  has_semicolon: bool = False
  default_name: Optional[str] = None
  namespace_name: Optional[str] = None
  specifiers: List[Specifier] = field(default_factory=list)
  named_open: Optional[int] = None
  named_close: Optional[int] = None
  type_only: bool = False
  specifier_start: Optional[int] = None

  @property
  def has_named_list(self) -> bool:
    return self.named_open is not None

  @property
  def provided_names(self) -> Iterator[str]:
    """
    Yields every local name this declaration binds.

    Yields:
        str: Bound identifiers.
    """
    if self.default_name:
      yield self.default_name
    if self.namespace_name:
      yield self.namespace_name
    for spec in self.specifiers:
      yield spec.local


@dataclass
class Occurrence:
  """
  An identifier found in real code.

  Attributes:
      name: The identifier text.
      start: Offset of its first character.
      end: Offset one past its last character.
      line: 1-based line number.
  """

  name: str
  start: int
  end: int
  line: int


class StatementScanner:
  """
  Recognizes declarations and occurrences in a token stream.

  Comments are dropped up front; the remaining tokens are addressed by index.

  Attributes:
      tokens (List[Token]): Significant (non-comment) tokens.
      declarations (List[ImportDeclaration]): Import statements, in source order.
      occurrences (List[Occurrence]): Real-code identifiers, in source order.
      leading_end (Optional[int]): End offset of the contiguous leading import block.
  """

  def __init__(self, tokens: List[Token]) -> None:
    self.tokens = [t for t in tokens if t.kind != TokenKind.COMMENT]
    self.declarations: List[ImportDeclaration] = []
    self.occurrences: List[Occurrence] = []
    self.leading_end: Optional[int] = None

  def scan(self) -> "StatementScanner":
    """
    Classifies every token.

    Returns:
        StatementScanner: ``self``, populated.
    """
    excluded: Set[int] = set()
    brackets: List[str] = []
    leading_open = True
    idx = 0

    while idx < len(self.tokens):
      tok = self.tokens[idx]

      if tok.is_word("import") and not self._is_member(idx):
        parsed = self._parse_import(idx)
        if parsed:
          decl, next_idx = parsed
          self.declarations.append(decl)
          if leading_open:
            self.leading_end = decl.end
          idx = next_idx
          continue

      leading_open = False

      if tok.is_word("export") and not self._is_member(idx):
        excluded.update(self._parse_export(idx))

      if tok.kind == TokenKind.IDENTIFIER:
        if self._is_usage(idx, excluded, brackets):
          self.occurrences.append(Occurrence(tok.text, tok.start, tok.end, tok.line))
      else:
        self._track_brackets(tok, brackets)
      idx += 1

    return self

  # --- Context checks ---

  def _peek(self, idx: int) -> Optional[Token]:
    if 0 <= idx < len(self.tokens):
      return self.tokens[idx]
    return None

  def _is_usage(self, idx: int, excluded: Set[int], brackets: List[str]) -> bool:
    if idx in excluded or self.tokens[idx].is_word(*_KEYWORDS):
      return False
    return not self._is_member(idx) and not self._is_object_key(idx, brackets)

  def _is_member(self, idx: int) -> bool:
    prev = self._peek(idx - 1)
    return prev is not None and prev.is_punct(*_MEMBER_ACCESS)

  def _is_object_key(self, idx: int, brackets: List[str]) -> bool:
    prev, nxt = self._peek(idx - 1), self._peek(idx + 1)
    if not brackets or brackets[-1] != "{" or nxt is None or not nxt.is_punct(":"):
      return False
    return prev is not None and prev.is_punct("{", ",")

  @staticmethod
  def _track_brackets(tok: Token, brackets: List[str]) -> None:
    if tok.kind == TokenKind.TEMPLATE:
      if tok.text.startswith("}") and brackets:
        brackets.pop()
      if tok.text.endswith("${"):
        brackets.append("${")
    elif tok.is_punct("(", "[", "{"):
      brackets.append(tok.text)
    elif tok.is_punct(")", "]", "}") and brackets:
      brackets.pop()

  # --- Import declarations ---

  def _parse_import(self, idx: int) -> Optional[Tuple[ImportDeclaration, int]]:
    """
    Parses an import declaration starting at the ``import`` keyword.

    Args:
        idx (int): Index of the ``import`` token.

    Returns:
        Optional[Tuple[ImportDeclaration, int]]: The declaration and the index of
        the first token after it, or None if the shape is not an import declaration.
    """
    start_tok = self.tokens[idx]
    j = idx + 1
    tok = self._peek(j)
    if tok is None or tok.is_punct("(", "."):
      return None

    decl = ImportDeclaration(module_specifier="", start=start_tok.start, end=start_tok.end)

    if tok.kind != TokenKind.STRING:
      if tok.is_word("type") and self._starts_clause(j + 1):
        decl.type_only = True
        j += 1
        tok = self._peek(j)

      if tok is not None and tok.kind == TokenKind.IDENTIFIER and tok.text != "from":
        decl.default_name = tok.text
        j += 1
        tok = self._peek(j)
        if tok is not None and tok.is_punct("="):
          return self._parse_import_require(j + 1, decl)
        if tok is not None and tok.is_punct(","):
          j += 1
          tok = self._peek(j)

      if tok is not None and tok.is_punct("*"):
        as_tok, name_tok = self._peek(j + 1), self._peek(j + 2)
        if as_tok is None or not as_tok.is_word("as") or name_tok is None or name_tok.kind != TokenKind.IDENTIFIER:
          return None
        decl.namespace_name = name_tok.text
        j += 3
      elif tok is not None and tok.is_punct("{"):
        j = self._parse_named_list(j, decl)
        if j < 0:
          return None

      from_tok = self._peek(j)
      if from_tok is None or not from_tok.is_word("from"):
        return None
      j += 1
      tok = self._peek(j)

    if tok is None or tok.kind != TokenKind.STRING:
      return None

    decl.module_specifier = tok.value
    decl.quote_style = tok.quote or "'"
    decl.end = tok.end
    j += 1

    j = self._skip_attributes(j, decl)
    return decl, self._skip_terminator(j, decl)

  def _parse_import_require(self, j: int, decl: ImportDeclaration) -> Optional[Tuple[ImportDeclaration, int]]:
    """
    Parses the TypeScript ``import x = require('mod')`` tail.

    Args:
        j (int): Index of the token after ``=``.
        decl (ImportDeclaration): Declaration with ``default_name`` set.

    Returns:
        Optional[Tuple[ImportDeclaration, int]]: As ``_parse_import``; None for
        other ``import x = ...`` forms (namespace aliases), which stay plain code.
    """
    req, paren, spec, close = (self._peek(j + k) for k in range(4))
    if req is None or not req.is_word("require") or paren is None or not paren.is_punct("("):
      return None
    if spec is None or spec.kind != TokenKind.STRING or close is None or not close.is_punct(")"):
      return None

    decl.module_specifier = spec.value
    decl.quote_style = spec.quote or "'"
    decl.end = close.end
    return decl, self._skip_terminator(j + 4, decl)

  def _skip_terminator(self, j: int, decl: ImportDeclaration) -> int:
    term = self._peek(j)
    if term is not None and term.is_punct(";"):
      decl.has_semicolon = True
      decl.end = term.end
      j += 1
    return j

  def _starts_clause(self, j: int) -> bool:
    # `import type X from` / `import type { X } from`, but not `import type from`.
    tok = self._peek(j)
    if tok is None:
      return False
    return tok.is_punct("{", "*") or (tok.kind == TokenKind.IDENTIFIER and tok.text != "from")

  def _parse_named_list(self, j: int, decl: ImportDeclaration) -> int:
    """
    Parses ``{ a, type b, c as d, 'e-f' as g }``.

    Args:
        j (int): Index of the ``{`` token.
        decl (ImportDeclaration): Declaration to fill in.

    Returns:
        int: Index after ``}``, or -1 if the list is malformed.
    """
    decl.named_open = self.tokens[j].start
    j += 1

    while True:
      tok = self._peek(j)
      if tok is None:
        return -1
      if tok.is_punct("}"):
        decl.named_close = tok.start
        return j + 1
      if tok.is_punct(","):
        j += 1
        continue

      entry_start = tok.start
      type_only = False
      nxt = self._peek(j + 1)
      names_next = nxt is not None and nxt.kind in (TokenKind.IDENTIFIER, TokenKind.STRING)
      if tok.is_word("type") and names_next and not nxt.is_word("as"):
        type_only = True
        j += 1
        tok = nxt

      if tok.kind not in (TokenKind.IDENTIFIER, TokenKind.STRING):
        return -1
      imported = tok.value
      local = imported
      j += 1

      as_tok = self._peek(j)
      if as_tok is not None and as_tok.is_word("as"):
        name_tok = self._peek(j + 1)
        if name_tok is None or name_tok.kind != TokenKind.IDENTIFIER:
          return -1
        local = name_tok.text
        j += 2

      if decl.specifier_start is None:
        decl.specifier_start = entry_start
      decl.specifiers.append(Specifier(imported=imported, local=local, type_only=type_only))

  def _skip_attributes(self, j: int, decl: ImportDeclaration) -> int:
    # Import attributes: `with { type: 'json' }` (or the older `assert { ... }`).
    kw, brace = self._peek(j), self._peek(j + 1)
    if kw is None or not kw.is_word("with", "assert") or brace is None or not brace.is_punct("{"):
      return j

    depth = 0
    k = j + 1
    while k < len(self.tokens):
      tok = self.tokens[k]
      if tok.is_punct("{"):
        depth += 1
      elif tok.is_punct("}"):
        depth -= 1
        if depth == 0:
          decl.end = tok.end
          return k + 1
      k += 1
    return j

  # --- Export declarations ---

  def _parse_export(self, idx: int) -> Set[int]:
    """
    Finds the token indices of an export statement that must not count as usages.

    For ``export { a } from 'mod'`` and ``export * as ns from 'mod'`` that is every
    name in the statement. For a local ``export { a as b }`` it is only the
    exported aliases; ``a`` still refers to a local binding.

    Args:
        idx (int): Index of the ``export`` token.

    Returns:
        Set[int]: Indices to exclude from occurrence reporting.
    """
    j = idx + 1
    tok = self._peek(j)
    if tok is not None and tok.is_word("type"):
      j += 1
      tok = self._peek(j)
    if tok is None:
      return set()

    if tok.is_punct("*"):
      k = j + 1
      while k < len(self.tokens) and not self.tokens[k].is_word("from") and k - j <= 3:
        k += 1
      return set(range(idx, k + 1))

    if not tok.is_punct("{"):
      return set()

    aliases: Set[int] = set()
    k = j + 1
    while k < len(self.tokens) and not self.tokens[k].is_punct("}"):
      if self.tokens[k].is_word("as"):
        aliases.update((k, k + 1))
      k += 1

    from_tok = self._peek(k + 1)
    if from_tok is not None and from_tok.is_word("from"):
      return set(range(idx, k + 2))
    return aliases


def scan_statements(tokens: List[Token]) -> StatementScanner:
  """
  Runs a ``StatementScanner`` over ``tokens``.

  Args:
      tokens (List[Token]): Lexer output.

  Returns:
      StatementScanner: The populated scanner.
  """
  return StatementScanner(tokens).scan()
