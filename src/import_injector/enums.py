"""
Enumerations for import-injector.

This module defines the enumerations shared by the scanner and the injector.
"""

from enum import Enum


class ScanMode(str, Enum):
  """
  Lexical state of the scanner.

  Exactly one mode is active at every character of the input. Only ``CODE``
  produces identifier tokens.
  """

  CODE = "code"
  LINE_COMMENT = "line_comment"  # // ...
  BLOCK_COMMENT = "block_comment"  # /* ... */
  SINGLE_QUOTE_STRING = "single_quote_string"  # '...'
  DOUBLE_QUOTE_STRING = "double_quote_string"  # "..."
  TEMPLATE_LITERAL = "template_literal"  # `...${ ... }...`
  REGEX = "regex"  # /.../flags


class Placement(str, Enum):
  """
  Where synthesized import statements are inserted.
  """

  LEADING = "leading"  # after the leading import block
  AT_FIRST_USE = "at_first_use"  # before the line of the first usage
