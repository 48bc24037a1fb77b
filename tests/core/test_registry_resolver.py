"""
Tests for the Binding Registry and the Usage Resolver.

Verifies:
1. Lookup by final name (alias wins over name).
2. Last-registered-wins on collisions, with a warning, keeping the first slot.
3. Resolver drops names already imported from any module.
4. Resolver output follows registration order, not source order.
"""

from import_injector.config import ImportBinding
from import_injector.core.registry import BindingRegistry
from import_injector.core.resolver import UsageResolver
from import_injector.core.scanner import scan


def binding(name, module, alias=None):
  return ImportBinding(name=name, from_=module, as_=alias)


def test_lookup_by_final_name():
  registry = BindingRegistry([binding("foo", "specifier5", "import5"), binding("bar", "b")])
  assert registry.lookup("import5").name == "foo"
  assert registry.lookup("foo") is None
  assert "bar" in registry
  assert len(registry) == 2


def test_collision_last_wins(captured_console):
  registry = BindingRegistry([binding("x", "first"), binding("y", "other"), binding("x", "second")])
  assert registry.lookup("x").from_ == "second"
  assert [b.final_name for b in registry.bindings] == ["x", "y"]
  assert "Duplicate import 'x'" in captured_console.export_text()


def test_identical_duplicate_is_silent(captured_console):
  BindingRegistry([binding("x", "same"), binding("x", "same")])
  assert "Duplicate" not in captured_console.export_text()


def test_order_of_unknown_sorts_last():
  registry = BindingRegistry([binding("a", "m")])
  assert registry.order_of("a") == 0
  assert registry.order_of("zzz") == 1


def resolve(registry, code):
  return [p.final_name for p in UsageResolver(registry).resolve(scan(code))]


def test_registration_order_wins_over_source_order():
  registry = BindingRegistry([binding("A", "t"), binding("B", "t"), binding("C", "t")])
  assert resolve(registry, "C(); B(); A(); C()") == ["A", "B", "C"]


def test_already_imported_from_other_module():
  registry = BindingRegistry([binding("ref", "vue")])
  assert resolve(registry, "import { ref } from '@vue/reactivity'\nref(1)") == []
  assert resolve(registry, "import ref from 'elsewhere'\nref(1)") == []
  assert resolve(registry, "import * as ref from 'ns'\nref.x") == []


def test_aliased_import_in_scope():
  registry = BindingRegistry([binding("ref", "vue")])
  assert resolve(registry, "import { other as ref } from 'x'\nref()") == []
  assert resolve(registry, "import { ref as other } from 'x'\nref()") == ["ref"]


def test_first_occurrence_is_kept():
  registry = BindingRegistry([binding("fooBar", "test-id")])
  pending = UsageResolver(registry).resolve(scan("a\nfooBar()\nfooBar()"))
  assert len(pending) == 1
  assert pending[0].occurrence.line == 2


def test_uncatalogued_names_ignored():
  registry = BindingRegistry([binding("fooBar", "test-id")])
  assert resolve(registry, "console.log(nonAutoImport())") == []
