"""
Injector Configuration Store.

Defines the catalog entry model (``ImportBinding``) and the option record
(``InjectorConfig``) resolved once when a context is created. Both accept the
camelCase keys used by JavaScript tooling (``from``, ``as``, ``mergeExisting``,
``injectAtEnd``, ``collectMeta``) as well as their snake_case field names.
"""

import sys
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from rich.markup import escape

from import_injector.enums import Placement
from import_injector.utils.console import log_info

if sys.version_info >= (3, 11):
  import tomllib
else:
  import tomli as tomllib

DEFAULT_EXPORT = "default"
NAMESPACE_EXPORT = "*"


class ImportBinding(BaseModel):
  """
  A catalog entry: one export of one module that may be auto-imported.

  Example:
      >>> ImportBinding.model_validate({"name": "ref", "from": "vue"}).final_name
      'ref'
      >>> ImportBinding(name="foo", from_="pkg", as_="bar").final_name
      'bar'
  """

  model_config = ConfigDict(frozen=True, populate_by_name=True)

  name: str = Field(..., description="The exported name, or 'default' / '*'.")
  from_: str = Field(..., alias="from", description="The module specifier to import from.")
  as_: Optional[str] = Field(None, alias="as", description="Local alias bound in the importing file.")

  @field_validator("name", "from_")
  @classmethod
  def validate_not_blank(cls, v: str) -> str:
    """
    Rejects empty names and specifiers.

    Args:
        v (str): The raw value.

    Returns:
        str: The stripped value.

    Raises:
        ValueError: If the value is blank.
    """
    v_clean = v.strip()
    if not v_clean:
      raise ValueError("Import names and module specifiers must not be empty.")
    return v_clean

  @model_validator(mode="after")
  def validate_alias(self) -> "ImportBinding":
    """
    Default and namespace imports have no name of their own to bind.

    Raises:
        ValueError: If ``name`` is 'default' or '*' and no alias is set.
    """
    if self.name in (DEFAULT_EXPORT, NAMESPACE_EXPORT) and not self.as_:
      raise ValueError(f"Binding '{self.name}' from '{self.from_}' requires an 'as' alias.")
    return self

  @property
  def final_name(self) -> str:
    """
    The identifier that appears in code and is bound by the import.

    Returns:
        str: The alias if given, else the exported name.
    """
    return self.as_ or self.name

  @property
  def is_default(self) -> bool:
    return self.name == DEFAULT_EXPORT

  @property
  def is_namespace(self) -> bool:
    return self.name == NAMESPACE_EXPORT

  def to_dict(self) -> Dict[str, str]:
    """
    Serializes with the JavaScript-style keys, alias always filled in.

    Returns:
        Dict[str, str]: ``{"name", "from", "as"}``.
    """
    return {"name": self.name, "from": self.from_, "as": self.final_name}


class InjectorConfig(BaseModel):
  """
  Options for one injector context.
  """

  model_config = ConfigDict(populate_by_name=True)

  imports: List[ImportBinding] = Field(default_factory=list, description="Ordered catalog of importable bindings.")
  merge_existing: bool = Field(
    False,
    alias="mergeExisting",
    description="Splice new names into an existing `import { ... }` from the same module.",
  )
  inject_at_end: bool = Field(
    False,
    alias="injectAtEnd",
    description="Insert each new statement before the line of its first usage instead of at the top.",
  )
  collect_meta: bool = Field(False, alias="collectMeta", description="Record per-binding injection usage.")

  @property
  def placement(self) -> Placement:
    """
    Resolves the placement policy selected by ``inject_at_end``.

    Returns:
        Placement: The active placement policy.
    """
    return Placement.AT_FIRST_USE if self.inject_at_end else Placement.LEADING

  @classmethod
  def load(cls, search_path: Optional[Path] = None, **overrides: Any) -> "InjectorConfig":
    """
    Loads options from ``[tool.import_injector]`` in the nearest pyproject.toml.

    Keyword overrides win over the file. ``None`` overrides are ignored so that
    unset command-line flags do not mask file values.

    Args:
        search_path (Optional[Path]): Directory to start searching from. Defaults to CWD.
        **overrides: Option values (snake_case or camelCase keys).

    Returns:
        InjectorConfig: The resolved configuration.
    """
    toml_config, toml_dir = _load_toml_settings(search_path or Path.cwd())
    if toml_config:
      log_info(f"Loaded import_injector settings from {escape(str(toml_dir / 'pyproject.toml'))}")
    merged = {**toml_config, **{k: v for k, v in overrides.items() if v is not None}}
    return cls.model_validate(merged)


def _load_toml_settings(start_path: Path) -> Tuple[Dict[str, Any], Optional[Path]]:
  """
  Searches ``start_path`` and its parents for a 'pyproject.toml' and extracts config.

  Args:
      start_path (Path): Directory to start search from.

  Returns:
      Tuple[Dict, Optional[Path]]: The config table and the directory it was found in.
  """
  current = start_path.resolve()

  for parent in [current, *current.parents]:
    toml_path = parent / "pyproject.toml"
    if toml_path.is_file():
      with open(toml_path, "rb") as f:
        data = tomllib.load(f)
      return data.get("tool", {}).get("import_injector", {}), parent

  return {}, None
