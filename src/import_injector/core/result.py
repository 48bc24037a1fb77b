"""
Data structures representing the output of one injection call.

This module defines the ``InjectionResult`` Pydantic model, which carries the
rewritten code and the bindings that were injected into it.
"""

from typing import List

from pydantic import BaseModel, Field

from import_injector.config import ImportBinding


class InjectionResult(BaseModel):
  """
  Container for the result of ``inject_imports``.
  """

  code: str = Field(default="", description="The rewritten source code.")
  imports: List[ImportBinding] = Field(default_factory=list, description="Bindings injected by this call.")

  @property
  def modified(self) -> bool:
    """
    Check if the call changed the code.

    Returns:
        True if at least one binding was injected.
    """
    return len(self.imports) > 0
