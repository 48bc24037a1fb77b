"""
Injector Context.

The ``InjectorContext`` is the per-caller entry point: it owns the resolved
configuration, the binding registry and the metadata tracker, and runs the
scan -> resolve -> inject pipeline for each source text. There is no
process-wide state; every caller builds its own context.

The pipeline:

1.  **Scan**: tokenize the text and find occurrences and import declarations.
2.  **Resolve**: keep catalogued names that are used but not imported.
3.  **Inject**: merge or synthesize statements and apply the edits.
4.  **Record**: update usage metadata (when ``collect_meta`` is on).
"""

from typing import Any, Dict, List, Optional

from rich.markup import escape

from import_injector.config import ImportBinding, InjectorConfig
from import_injector.core.injector import Injector
from import_injector.core.metadata import MetadataEntry, MetadataTracker
from import_injector.core.registry import BindingRegistry
from import_injector.core.resolver import UsageResolver
from import_injector.core.result import InjectionResult
from import_injector.core.scanner import scan
from import_injector.utils.console import log_debug


class InjectorContext:
  """
  Auto-import engine bound to one catalog.

  Example:
      >>> ctx = InjectorContext(InjectorConfig(imports=[{"name": "fooBar", "from": "test-id"}]))
      >>> ctx.transform("console.log(fooBar())").code
      "import { fooBar } from 'test-id';\\nconsole.log(fooBar())"
  """

  def __init__(self, config: Optional[InjectorConfig] = None) -> None:
    """
    Resolves the configuration once and builds the engine.

    Args:
        config: Options. Defaults to an empty catalog.
    """
    self.config = config or InjectorConfig()
    self.registry = BindingRegistry(self.config.imports)
    self.resolver = UsageResolver(self.registry)
    self.injector = Injector(self.config)
    self.metadata: Optional[MetadataTracker] = MetadataTracker() if self.config.collect_meta else None

  def transform(self, code: str, module_id: Optional[str] = None) -> InjectionResult:
    """
    Adds the missing imports to ``code``.

    Args:
        code (str): Source text.
        module_id (Optional[str]): Identifier of the source, recorded in metadata.

    Returns:
        InjectionResult: The rewritten code (identical to ``code`` when nothing
        is missing) and the injected bindings.
    """
    scan_result = scan(code)
    pending = self.resolver.resolve(scan_result)
    new_code, injected = self.injector.inject(scan_result, pending)

    if injected:
      names = ", ".join(b.final_name for b in injected)
      log_debug(f"Injected [bold magenta]{escape(names)}[/bold magenta] into {escape(module_id or '<anonymous>')}")
      if self.metadata is not None:
        self.metadata.record(injected, module_id)

    return InjectionResult(code=new_code, imports=injected)

  async def inject_imports(self, code: str, module_id: Optional[str] = None) -> InjectionResult:
    """
    Awaitable form of ``transform``, for hosts that schedule transforms as tasks.

    The work is synchronous and CPU-bound; nothing inside suspends.

    Args:
        code (str): Source text.
        module_id (Optional[str]): Identifier of the source, recorded in metadata.

    Returns:
        InjectionResult: See ``transform``.
    """
    return self.transform(code, module_id)

  def detect_imports(self, code: str) -> List[ImportBinding]:
    """
    Lists the bindings ``transform`` would inject, without rewriting.

    Args:
        code (str): Source text.

    Returns:
        List[ImportBinding]: Missing bindings in registration order.
    """
    return [p.binding for p in self.resolver.resolve(scan(code))]

  def get_imports(self) -> List[ImportBinding]:
    """
    Returns the catalog in registration order.

    Returns:
        List[ImportBinding]: Registered bindings.
    """
    return self.registry.bindings

  def get_metadata(self) -> Dict[str, MetadataEntry]:
    """
    Returns a snapshot of injection usage.

    Returns:
        Dict[str, MetadataEntry]: Entries keyed by final name; empty when
        ``collect_meta`` is off.
    """
    if self.metadata is None:
      return {}
    return self.metadata.snapshot()


def create_context(config: Optional[InjectorConfig] = None, **options: Any) -> InjectorContext:
  """
  Builds a context from a config object or from option keywords.

  Example:
      >>> ctx = create_context(imports=[{"name": "ref", "from": "vue"}], mergeExisting=True)

  Args:
      config (Optional[InjectorConfig]): A ready configuration.
      **options: ``InjectorConfig`` fields (snake_case or camelCase) used when
          ``config`` is not given.

  Returns:
      InjectorContext: The new context.

  Raises:
      ValueError: If both ``config`` and ``options`` are given.
      pydantic.ValidationError: If the options are invalid.
  """
  if config is not None and options:
    raise ValueError("Pass either a config object or option keywords, not both.")
  return InjectorContext(config or InjectorConfig.model_validate(options))
