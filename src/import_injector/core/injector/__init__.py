"""
Injector Package.

This package provides the ``Injector`` class, which turns the resolver's
pending bindings into text edits:
1.  **Merging**: splicing names into an existing ``import { ... }`` of the same module.
2.  **Synthesis**: rendering new ``import { ... } from '...';`` statements.
3.  **Placement**: inserting them after the leading imports or above the first usage.

Edits are applied through ``apply_edits`` against the original offsets.
"""

from import_injector.core.injector.base import BaseInjector
from import_injector.core.injector.edits import Edit, apply_edits
from import_injector.core.injector.merge_mixin import MergeMixin
from import_injector.core.injector.placement_mixin import PlacementMixin
from import_injector.core.injector.synthesis import SynthesisMixin, render_statements, to_imports


class Injector(MergeMixin, PlacementMixin, SynthesisMixin, BaseInjector):
  """
  Composite injector.

  Inherits functionality from:
  - :class:`MergeMixin`: merging into existing declarations.
  - :class:`PlacementMixin`: choosing insertion points.
  - :class:`SynthesisMixin`: rendering new statements.
  - :class:`BaseInjector`: configuration and orchestration.
  """


__all__ = ["Edit", "Injector", "apply_edits", "render_statements", "to_imports"]
