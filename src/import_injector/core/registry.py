"""
Binding Registry.

Normalizes the configured catalog into a ``final_name -> ImportBinding`` lookup
table. Registration order is kept: it is the canonical order of generated
import clauses, independent of where the names appear in the source.
"""

from typing import Dict, Iterable, List, Optional

from rich.markup import escape

from import_injector.config import ImportBinding
from import_injector.utils.console import log_warning


class BindingRegistry:
  """
  Catalog of importable bindings for one context.

  When two entries share a ``final_name`` the later one wins and a warning is
  logged. The surviving entry keeps the slot of the first registration.
  """

  def __init__(self, bindings: Optional[Iterable[ImportBinding]] = None) -> None:
    self._bindings: Dict[str, ImportBinding] = {}
    self._order: Dict[str, int] = {}
    if bindings is not None:
      self.register(bindings)

  def register(self, bindings: Iterable[ImportBinding]) -> None:
    """
    Adds bindings in order.

    Args:
        bindings: Catalog entries.
    """
    for binding in bindings:
      key = binding.final_name
      previous = self._bindings.get(key)
      if previous is not None and previous != binding:
        log_warning(
          f"Duplicate import '[bold magenta]{escape(key)}[/bold magenta]': "
          f"'{escape(previous.from_)}' is replaced by '{escape(binding.from_)}'."
        )
      if key not in self._order:
        self._order[key] = len(self._order)
      self._bindings[key] = binding

  def lookup(self, identifier: str) -> Optional[ImportBinding]:
    """
    Finds the binding for an identifier.

    Args:
        identifier (str): A name seen in code.

    Returns:
        Optional[ImportBinding]: The binding, or None if not catalogued.
    """
    return self._bindings.get(identifier)

  def order_of(self, final_name: str) -> int:
    """
    Returns the registration rank of a name (unknown names sort last).

    Args:
        final_name (str): A registered final name.

    Returns:
        int: Zero-based rank.
    """
    return self._order.get(final_name, len(self._order))

  @property
  def bindings(self) -> List[ImportBinding]:
    """
    All bindings in registration order.

    Returns:
        List[ImportBinding]: The catalog.
    """
    return sorted(self._bindings.values(), key=lambda b: self._order[b.final_name])

  def __contains__(self, identifier: object) -> bool:
    return identifier in self._bindings

  def __len__(self) -> int:
    return len(self._bindings)
