"""
Import Statement Synthesis.

Renders brand-new import statements for a group of bindings sharing one module
specifier. Generated statements always use single quotes and a trailing
semicolon.
"""

from typing import Dict, Iterable, List

from import_injector.config import ImportBinding

DEFAULT_QUOTE = "'"


def render_clause(binding: ImportBinding) -> str:
  """
  Renders one entry of a ``{ ... }`` list.

  Args:
      binding (ImportBinding): A named binding.

  Returns:
      str: ``name`` or ``name as alias``.
  """
  if binding.final_name != binding.name:
    return f"{binding.name} as {binding.final_name}"
  return binding.name


def render_statements(module: str, bindings: Iterable[ImportBinding], quote: str = DEFAULT_QUOTE) -> List[str]:
  """
  Renders the import statements for one module.

  Default and namespace bindings each get their own statement; all named
  bindings share one ``{ ... }`` statement, in the order given.

  Args:
      module (str): Module specifier.
      bindings (Iterable[ImportBinding]): Bindings from ``module``.
      quote (str): Quote character for the specifier.

  Returns:
      List[str]: Statements, without line breaks.
  """
  source = f"{quote}{module}{quote}"
  statements: List[str] = []
  named: List[str] = []

  for binding in bindings:
    if binding.is_default:
      statements.append(f"import {binding.final_name} from {source};")
    elif binding.is_namespace:
      statements.append(f"import * as {binding.final_name} from {source};")
    else:
      named.append(render_clause(binding))

  if named:
    statements.append(f"import {{ {', '.join(named)} }} from {source};")
  return statements


def group_by_module(bindings: Iterable[ImportBinding]) -> Dict[str, List[ImportBinding]]:
  """
  Groups bindings by module specifier, keeping first-appearance order.

  Args:
      bindings (Iterable[ImportBinding]): Ordered bindings.

  Returns:
      Dict[str, List[ImportBinding]]: Module specifier to its bindings.
  """
  groups: Dict[str, List[ImportBinding]] = {}
  for binding in bindings:
    groups.setdefault(binding.from_, []).append(binding)
  return groups


def to_imports(bindings: Iterable[ImportBinding]) -> str:
  """
  Renders import statements for an arbitrary list of bindings.

  Example:
      >>> to_imports([ImportBinding(name="ref", from_="vue"), ImportBinding(name="computed", from_="vue")])
      "import { ref, computed } from 'vue';"

  Args:
      bindings (Iterable[ImportBinding]): Bindings to import.

  Returns:
      str: One statement per line, no trailing line break.
  """
  lines: List[str] = []
  for module, group in group_by_module(bindings).items():
    lines.extend(render_statements(module, group))
  return "\n".join(lines)


class SynthesisMixin:
  """
  Mixin rendering the statements for the groups that were not merged.
  """

  def _render_group(self, module: str, bindings: List[ImportBinding]) -> List[str]:
    return render_statements(module, bindings)
