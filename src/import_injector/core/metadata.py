"""
Injection Metadata Tracker.

Keeps, for the lifetime of one context, how often each binding was injected and
into which modules. Updates are serialized by a lock so that concurrent
injection calls (threads or tasks) never lose an increment.
"""

import threading
from typing import Dict, Iterable, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

from import_injector.config import ImportBinding


class MetadataEntry(BaseModel):
  """
  Read-only usage record of one binding.
  """

  model_config = ConfigDict(frozen=True, populate_by_name=True)

  import_binding: ImportBinding = Field(..., alias="import", description="The injected binding.")
  count: int = Field(..., ge=1, description="Number of calls that injected the binding.")
  module_ids: Tuple[str, ...] = Field(
    default_factory=tuple,
    alias="moduleIds",
    description="Modules it was injected into, in first-seen order.",
  )

  def to_dict(self) -> Dict[str, object]:
    """
    Serializes with the JavaScript-style keys.

    Returns:
        Dict[str, object]: ``{"import", "count", "moduleIds"}``.
    """
    return {"import": self.import_binding.to_dict(), "count": self.count, "moduleIds": list(self.module_ids)}


class _Record:
  __slots__ = ("binding", "count", "module_ids")

  def __init__(self, binding: ImportBinding) -> None:
    self.binding = binding
    self.count = 0
    self.module_ids: List[str] = []


class MetadataTracker:
  """
  Lock-guarded ``final_name -> usage`` table.
  """

  def __init__(self) -> None:
    self._lock = threading.Lock()
    self._records: Dict[str, _Record] = {}

  def record(self, injected: Iterable[ImportBinding], module_id: Optional[str] = None) -> None:
    """
    Accounts for one injection call.

    Args:
        injected: Bindings the call injected.
        module_id: Identifier of the processed source, if the caller supplied one.
    """
    with self._lock:
      for binding in injected:
        record = self._records.get(binding.final_name)
        if record is None:
          record = self._records[binding.final_name] = _Record(binding)
        record.count += 1
        if module_id is not None and module_id not in record.module_ids:
          record.module_ids.append(module_id)

  def snapshot(self) -> Dict[str, MetadataEntry]:
    """
    Copies the current table.

    Returns:
        Dict[str, MetadataEntry]: Frozen entries keyed by final name.
    """
    with self._lock:
      return {
        name: MetadataEntry(import_binding=rec.binding, count=rec.count, module_ids=tuple(rec.module_ids))
        for name, rec in self._records.items()
      }
