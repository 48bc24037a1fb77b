"""
Usage Resolver.

Combines scanner output with the registry to find the bindings one call must
inject: catalogued names used in real code and not already bound by any import
declaration in the file, in registry order.
"""

from dataclasses import dataclass
from typing import Dict, List

from import_injector.config import ImportBinding
from import_injector.core.registry import BindingRegistry
from import_injector.core.scanner import Occurrence, ScanResult


@dataclass
class PendingBinding:
  """
  A binding that is used but not imported.

  Attributes:
      binding: The catalog entry.
      occurrence: The first real-code usage, in source order.
  """

  binding: ImportBinding
  occurrence: Occurrence

  @property
  def final_name(self) -> str:
    return self.binding.final_name


class UsageResolver:
  """
  Computes the minimal set of bindings to inject.
  """

  def __init__(self, registry: BindingRegistry) -> None:
    self.registry = registry

  def resolve(self, scan_result: ScanResult) -> List[PendingBinding]:
    """
    Resolves pending bindings for one scanned text.

    A name bound by an existing import from *any* module counts as in scope, so
    it is never auto-imported a second time.

    Args:
        scan_result (ScanResult): Scanner output.

    Returns:
        List[PendingBinding]: Pending bindings in registration order.
    """
    in_scope = scan_result.provided_names
    pending: Dict[str, PendingBinding] = {}

    for occ in scan_result.occurrences:
      if occ.name in pending or occ.name in in_scope:
        continue
      binding = self.registry.lookup(occ.name)
      if binding is not None:
        pending[occ.name] = PendingBinding(binding, occ)

    return sorted(pending.values(), key=lambda p: self.registry.order_of(p.final_name))
