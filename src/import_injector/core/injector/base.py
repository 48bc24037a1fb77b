"""
Base Injector Logic.

Holds the injector configuration and drives one injection: grouping the
pending bindings per module, asking the mixins for merge and placement edits,
and applying them to the original text.
"""

from typing import List, Tuple

from import_injector.config import ImportBinding, InjectorConfig
from import_injector.core.injector.edits import Edit, apply_edits
from import_injector.core.injector.synthesis import group_by_module
from import_injector.core.resolver import PendingBinding
from import_injector.core.scanner import Occurrence, ScanResult
from import_injector.enums import Placement


class BaseInjector:
  """
  Base class for import injection.

  The merge, synthesis and placement hooks (``_merge_group``, ``_render_group``,
  ``_placement_edits``) come from the mixins composed in ``Injector``.
  """

  def __init__(self, config: InjectorConfig) -> None:
    """
    Initializes the injector.

    Args:
        config: Resolved context options.
    """
    self.config = config
    self.merge_existing = config.merge_existing
    self.placement = config.placement

  def inject(self, scan_result: ScanResult, pending: List[PendingBinding]) -> Tuple[str, List[ImportBinding]]:
    """
    Rewrites the scanned text so that every pending binding is imported.

    Args:
        scan_result (ScanResult): Scanner output for the text.
        pending (List[PendingBinding]): Resolver output.

    Returns:
        Tuple[str, List[ImportBinding]]: The new text and the injected bindings.
        The text is returned unchanged when ``pending`` is empty.
    """
    if not pending:
      return scan_result.code, []

    edits: List[Edit] = []
    placements: List[Tuple[Occurrence, List[str]]] = []

    first_uses = {p.binding: p.occurrence for p in pending}
    for module, bindings in group_by_module(first_uses).items():
      if self.merge_existing:
        merge_edit, bindings = self._merge_group(scan_result, module, bindings)
        if merge_edit is not None:
          edits.append(merge_edit)
      if not bindings:
        continue

      first_use = min((first_uses[b] for b in bindings), key=lambda occ: occ.start)
      placements.append((first_use, self._render_group(module, bindings)))

    edits.extend(self._placement_edits(scan_result, placements, self.placement == Placement.AT_FIRST_USE))
    return apply_edits(scan_result.code, edits), [p.binding for p in pending]
