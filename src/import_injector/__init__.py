"""
import-injector Package.

Adds missing ``import`` declarations to ECMAScript-family source text for a
registered catalog of bindings ("auto-import"), leaving every other byte of
the text untouched.

Usage
-----

Simple String Injection
^^^^^^^^^^^^^^^^^^^^^^^

.. code-block:: python

    import import_injector as ii
    code = ii.inject_imports("console.log(fooBar())", imports=[{"name": "fooBar", "from": "test-id"}])
    print(code)
    # import { fooBar } from 'test-id';
    # console.log(fooBar())

Context Usage
^^^^^^^^^^^^^

.. code-block:: python

    from import_injector import create_context

    ctx = create_context(imports=[{"name": "ref", "from": "vue"}], mergeExisting=True, collectMeta=True)
    result = await ctx.inject_imports(source, "src/App.js")
    print(result.code)
    print(ctx.get_metadata())
"""

from typing import Any

from import_injector.config import ImportBinding, InjectorConfig
from import_injector.core.context import InjectorContext, create_context
from import_injector.core.injector import to_imports
from import_injector.core.metadata import MetadataEntry
from import_injector.core.result import InjectionResult

__version__ = "0.1.0"

# Name used by JavaScript tooling for the same factory.
create_unimport = create_context


def inject_imports(code: str, **options: Any) -> str:
  """
  Adds missing imports to a string in one call.

  This is a convenience wrapper that builds a throwaway ``InjectorContext``.
  Reuse a context (``create_context``) when processing many files.

  Args:
      code (str): Source text.
      **options: ``InjectorConfig`` fields, e.g. ``imports=[...]``.

  Returns:
      str: The rewritten source text.
  """
  return create_context(**options).transform(code).code


__all__ = [
  "ImportBinding",
  "InjectionResult",
  "InjectorConfig",
  "InjectorContext",
  "MetadataEntry",
  "create_context",
  "create_unimport",
  "inject_imports",
  "to_imports",
  "__version__",
]
