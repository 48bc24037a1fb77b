"""
Tests for the mode-driven Lexer.

Verifies:
1. Identifiers are only produced in code mode.
2. Strings, comments, templates and regex literals are opaque tokens.
3. Template substitutions re-enter code mode, with nesting.
4. Regex versus division is decided from the previous significant token.
5. Unterminated regions close at end of input without raising.
"""

import pytest

from import_injector.core.scanner.lexer import Lexer, tokenize
from import_injector.core.scanner.tokens import TokenKind


def identifiers(code: str):
  return [t.text for t in tokenize(code) if t.kind == TokenKind.IDENTIFIER]


def kinds(code: str):
  return [t.kind for t in tokenize(code)]


def test_identifiers_and_punctuation():
  tokens = tokenize("console.log(fooBar())")
  assert [t.text for t in tokens] == ["console", ".", "log", "(", "fooBar", "(", ")", ")"]
  assert tokens[4].start == 12
  assert tokens[4].end == 18


@pytest.mark.parametrize(
  "code",
  [
    "'fooBar'",
    '"fooBar"',
    "'it\\'s fooBar'",
    "// fooBar",
    "/* fooBar */",
    "`fooBar`",
    "x = /fooBar/g",
  ],
)
def test_lookalikes_are_not_identifiers(code):
  assert "fooBar" not in identifiers(code)


def test_string_token_value_and_quote():
  tok = tokenize("import 'mod'")[1]
  assert tok.kind == TokenKind.STRING
  assert tok.quote == "'"
  assert tok.value == "mod"


def test_block_comment_spans_lines():
  tokens = tokenize("/*\n fooBar\n*/ bar")
  assert tokens[0].kind == TokenKind.COMMENT
  assert tokens[1].text == "bar"
  assert tokens[1].line == 3


def test_template_substitution_is_code():
  assert identifiers("`a ${fooBar} b`") == ["fooBar"]


def test_nested_template_substitution():
  code = "`outer ${ cond ? `inner ${fooBar({ a: 1 })}` : 'x' } tail ${baz}`"
  assert identifiers(code) == ["cond", "fooBar", "a", "baz"]


def test_braces_inside_substitution_do_not_close_it():
  code = "`${ {a: 1}.a } fooBar`"
  assert identifiers(code) == ["a", "a"]


def test_regex_after_assignment():
  code = "const regex = /\\//\nconst regex1 = /a[/]bcd/\nfooBar()"
  assert identifiers(code) == ["const", "regex", "const", "regex1", "fooBar"]
  assert kinds(code).count(TokenKind.REGEX) == 2


def test_regex_character_class_slash():
  tokens = tokenize("x = /a[/]b/gi; y")
  regex = [t for t in tokens if t.kind == TokenKind.REGEX]
  assert regex[0].text == "/a[/]b/gi"
  assert tokens[-1].text == "y"


@pytest.mark.parametrize("code", ["a / fooBar / b", "f() / fooBar / 2", "arr[0] / fooBar / 2", "1 / fooBar / 2"])
def test_division_after_operand(code):
  assert "fooBar" in identifiers(code)


def test_regex_after_keyword():
  assert "fooBar" not in identifiers("return /fooBar/.test(x)")


def test_division_after_postfix_increment():
  code = "let x = i++ / 2; const s = '/'; fooBar()"
  assert TokenKind.REGEX not in kinds(code)
  assert "fooBar" in identifiers(code)
  assert [t.text for t in tokenize("i-- / 2")] == ["i", "--", "/", "2"]


def test_regex_after_prefix_increment():
  tokens = tokenize("x = ++/a/.lastIndex")
  assert [t.kind for t in tokens if t.text == "/a/"] == [TokenKind.REGEX]


def test_regex_does_not_cross_lines():
  # A misclassified '/' must not swallow the following lines.
  code = "y = {} / 2\nfooBar()"
  assert "fooBar" in identifiers(code)


@pytest.mark.parametrize("code", ["'open", '"open', "`open ${x", "/* open", "x = /open[", "// open"])
def test_unterminated_regions_close_at_eof(code):
  tokens = Lexer(code).tokenize()
  assert tokens[-1].end <= len(code)


def test_string_stops_at_newline():
  assert identifiers("x = 'broken\nfooBar()") == ["x", "fooBar"]


def test_shebang_is_comment():
  tokens = tokenize("#!/usr/bin/env node\nfooBar()")
  assert tokens[0].kind == TokenKind.COMMENT
  assert tokens[1].text == "fooBar"


def test_depth_tracking():
  tokens = tokenize("f(a, [b]) c")
  by_text = {t.text: t.depth for t in tokens if t.kind == TokenKind.IDENTIFIER}
  assert by_text == {"f": 0, "a": 1, "b": 2, "c": 0}


def test_optional_chaining_and_spread_tokens():
  texts = [t.text for t in tokenize("a?.b; [...c]; d ? .5 : 1")]
  assert "?." in texts
  assert "..." in texts
  assert ".5" in texts


def test_line_numbers():
  lexer = Lexer("a\nb\n\nc")
  assert [t.line for t in lexer.tokenize()] == [1, 2, 4]
  assert lexer.line_of(0) == 1
