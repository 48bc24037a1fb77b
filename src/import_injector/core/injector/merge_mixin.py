"""
Import Merge Mixin.

Splices new names into an existing ``import { ... } from 'mod'`` instead of
emitting a second statement for the same module. The declaration's quote style
and terminator are left untouched.
"""

from typing import List, Optional, Tuple

from rich.markup import escape

from import_injector.config import ImportBinding
from import_injector.core.injector.edits import Edit
from import_injector.core.injector.synthesis import render_clause
from import_injector.core.scanner import ImportDeclaration, ScanResult
from import_injector.utils.console import log_debug


class MergeMixin:
  """
  Mixin for merging named bindings into existing declarations.
  """

  @staticmethod
  def _merge_target(scan_result: ScanResult, module: str) -> Optional[ImportDeclaration]:
    """
    Finds the first declaration of ``module`` that has a ``{ ... }`` list.

    Default-only, namespace and ``import type`` declarations are not targets.

    Args:
        scan_result (ScanResult): Scanner output.
        module (str): Module specifier.

    Returns:
        Optional[ImportDeclaration]: The target, or None.
    """
    for decl in scan_result.declarations:
      if decl.module_specifier == module and decl.has_named_list and not decl.type_only:
        return decl
    return None

  def _merge_group(
    self, scan_result: ScanResult, module: str, bindings: List[ImportBinding]
  ) -> Tuple[Optional[Edit], List[ImportBinding]]:
    """
    Builds the merge edit for one module group.

    Args:
        scan_result (ScanResult): Scanner output.
        module (str): Module specifier of the group.
        bindings (List[ImportBinding]): Pending bindings of the group.

    Returns:
        Tuple[Optional[Edit], List[ImportBinding]]: The edit (None if nothing
        could be merged) and the bindings still needing a new statement.
    """
    target = self._merge_target(scan_result, module)
    named = [b for b in bindings if not (b.is_default or b.is_namespace)]
    if target is None or not named:
      return None, bindings

    clauses = ", ".join(render_clause(b) for b in named)
    if target.specifier_start is not None:
      edit = Edit.insert(target.specifier_start, f"{clauses}, ")
    else:
      # `import {} from 'mod'`
      edit = Edit(target.named_open + 1, target.named_close, f" {clauses} ")

    log_debug(f"Merging {escape(clauses)} into existing import from '{escape(module)}'")
    remaining = [b for b in bindings if b not in named]
    return edit, remaining
