"""
Tests for offset-stable edit application.

Verifies:
1. Edits computed against the original text never disturb each other.
2. Same-offset insertions keep creation order.
3. Overlaps and out-of-range edits are rejected.
"""

import pytest

from import_injector.core.injector.edits import Edit, apply_edits


def test_no_edits_returns_same_object():
  code = "unchanged"
  assert apply_edits(code, []) is code


def test_edits_use_original_offsets():
  code = "import { foo } from 'x'\nbar()"
  edits = [Edit.insert(len(code), "\n// end"), Edit.insert(9, "fooBar, "), Edit.insert(0, "// start\n")]
  assert apply_edits(code, edits) == "// start\nimport { fooBar, foo } from 'x'\nbar()\n// end"


def test_replacement():
  assert apply_edits("import {} from 'x'", [Edit(8, 8, " a "), Edit(0, 6, "IMPORT")]) == "IMPORT { a } from 'x'"


def test_same_offset_insertions_keep_order():
  assert apply_edits("x", [Edit.insert(0, "a"), Edit.insert(0, "b")]) == "abx"


def test_overlap_rejected():
  with pytest.raises(ValueError, match="overlaps"):
    apply_edits("abcdef", [Edit(0, 3, "x"), Edit(2, 4, "y")])


def test_out_of_range_rejected():
  with pytest.raises(ValueError, match="outside"):
    apply_edits("abc", [Edit.insert(4, "x")])
