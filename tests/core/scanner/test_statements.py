"""
Tests for the Statement Recognizer and the ``scan`` facade.

Verifies:
1. Import declaration shapes and the names they bind.
2. Quote style, terminator and named-list offsets used for merging.
3. Re-export names are not usages; local export aliases are not usages.
4. Member access and object keys are not usages.
5. The leading import block and shebang header.
"""

import pytest

from import_injector.core.scanner import scan


def names(code: str):
  return [occ.name for occ in scan(code).occurrences]


def test_named_import():
  result = scan("import { a, b as c } from 'spec'")
  decl = result.declarations[0]
  assert decl.module_specifier == "spec"
  assert [(s.imported, s.local) for s in decl.specifiers] == [("a", "a"), ("b", "c")]
  assert list(decl.provided_names) == ["a", "c"]
  assert decl.quote_style == "'"
  assert decl.has_semicolon is False
  assert result.occurrences == []


def test_default_namespace_and_mixed_imports():
  result = scan('import d from "x";\nimport * as ns from "y";\nimport e, { f } from "z";\n')
  assert [d.module_specifier for d in result.declarations] == ["x", "y", "z"]
  assert result.declarations[0].default_name == "d"
  assert result.declarations[0].has_semicolon is True
  assert result.declarations[0].quote_style == '"'
  assert result.declarations[1].namespace_name == "ns"
  assert result.declarations[1].has_named_list is False
  assert result.provided_names == {"d", "ns", "e", "f"}


def test_side_effect_and_type_imports():
  result = scan("import 'polyfill'\nimport type { T } from 'types'\nimport type from 'weird'")
  side, typed, default_type = result.declarations
  assert side.module_specifier == "polyfill"
  assert list(side.provided_names) == []
  assert typed.type_only is True
  assert list(typed.provided_names) == ["T"]
  assert default_type.type_only is False
  assert default_type.default_name == "type"


def test_import_attributes_are_part_of_declaration():
  code = "import data from './data.json' with { type: 'json' };\nx"
  decl = scan(code).declarations[0]
  assert code[decl.start : decl.end] == "import data from './data.json' with { type: 'json' };"
  assert names(code) == ["x"]


def test_named_list_offsets():
  code = "import { foo } from 'test-id'"
  decl = scan(code).declarations[0]
  assert code[decl.named_open] == "{"
  assert code[decl.named_close] == "}"
  assert code[decl.specifier_start :].startswith("foo")


def test_empty_named_list():
  decl = scan("import {} from 'x'").declarations[0]
  assert decl.has_named_list
  assert decl.specifier_start is None


@pytest.mark.parametrize("code", ["import('mod').then(fooBar)", "import.meta.url; fooBar"])
def test_dynamic_import_is_code(code):
  result = scan(code)
  assert result.declarations == []
  assert "fooBar" in names(code)
  assert "import" not in names(code)


def test_reexport_names_are_not_usages():
  assert names('export { fooBar } from "test-id"') == []
  assert names("export * as fooBar from 'x'") == []
  assert names("export * from 'x'; fooBar") == ["fooBar"]


def test_local_export_alias():
  assert names("export { fooBar as baz }") == ["fooBar"]


def test_member_access_is_not_usage():
  assert names("obj.fooBar(); obj?.fooBar; this.#fooBar") == ["obj", "obj", "this"]


def test_spread_is_usage():
  assert names("[...fooBar]") == ["fooBar"]


def test_object_key_is_not_usage():
  assert names("x = { fooBar: 1, b: fooBaz }") == ["x", "fooBaz"]


def test_ternary_is_usage():
  assert names("const result = true ? false ? A : B : C") == ["const", "result", "true", "false", "A", "B", "C"]


def test_occurrence_positions():
  occ = scan("a\n  fooBar()").occurrences[1]
  assert (occ.name, occ.start, occ.end, occ.line) == ("fooBar", 4, 10, 2)


def test_leading_block_skips_comments():
  code = "/**\n* import { foo } from './foo'\n*/\n\n// import { foo1 } from './foo'\nimport { foo } from 'foo'\nconsole.log(fooBar())"
  result = scan(code)
  assert len(result.declarations) == 1
  assert result.leading_end == code.index("\nconsole")


def test_leading_block_stops_at_code():
  code = "import { foo } from 'foo'\nrun()\nimport { bar } from 'bar'\n"
  result = scan(code)
  assert len(result.declarations) == 2
  assert result.leading_end == code.index("\nrun")


def test_no_leading_block():
  assert scan("fooBar()").leading_end is None


def test_shebang_header():
  result = scan("#!/usr/bin/env node\nfooBar()")
  assert result.header_end == len("#!/usr/bin/env node\n")


def test_malformed_import_is_code():
  result = scan("import { fooBar")
  assert result.declarations == []
  assert names("import { fooBar") == ["fooBar"]


def test_typescript_import_require():
  result = scan("import fooBar = require('test-id');\nfooBar()")
  decl = result.declarations[0]
  assert decl.module_specifier == "test-id"
  assert decl.default_name == "fooBar"
  assert decl.has_semicolon is True
  assert decl.has_named_list is False
  assert result.leading_end == decl.end
  assert names("import fooBar = require('test-id');\nfooBar()") == ["fooBar"]
  assert result.provided_names == {"fooBar"}


def test_typescript_namespace_alias_is_code():
  assert scan("import Alias = Outer.Inner").declarations == []
