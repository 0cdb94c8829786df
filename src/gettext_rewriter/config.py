"""
Runtime Configuration Store.

Settings are read from the ``[tool.gettext_rewriter]`` table of the nearest
``pyproject.toml`` and can be overridden by CLI arguments.
"""

import keyword
import tomllib
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, Field, field_validator

TOOL_SECTION = "gettext_rewriter"


class RuntimeConfig(BaseModel):
  """
  Global configuration container for the rewrite engine.
  """

  fail_fast: bool = Field(False, description="If True, abort at the first usage error instead of collecting all.")
  interpolate_function: str = Field(
    "interpolate", description="Name of the runtime function performing %(name)s substitution."
  )
  include: List[str] = Field(
    default_factory=lambda: ["*.py"], description="Glob patterns selecting files in directory mode."
  )

  @field_validator("interpolate_function")
  @classmethod
  def validate_identifier(cls, v: str) -> str:
    """
    Ensures the interpolation function name can be emitted as a bare name.

    Args:
        v (str): The configured function name.

    Returns:
        str: The stripped name.

    Raises:
        ValueError: If the name is not a valid, non-keyword Python identifier.
    """
    v_clean = v.strip()
    if not v_clean.isidentifier() or keyword.iskeyword(v_clean):
      raise ValueError(f"Invalid interpolation function name: '{v}'")
    return v_clean

  @field_validator("include")
  @classmethod
  def validate_include(cls, v: List[str]) -> List[str]:
    if not v:
      raise ValueError("At least one include pattern is required.")
    return v

  @classmethod
  def load(
    cls,
    fail_fast: Optional[bool] = None,
    interpolate_function: Optional[str] = None,
    include: Optional[List[str]] = None,
    search_path: Optional[Path] = None,
  ) -> "RuntimeConfig":
    """
    Loads configuration from pyproject.toml and overrides with CLI arguments.

    Args:
        fail_fast (Optional[bool]): Override for fail-fast mode.
        interpolate_function (Optional[str]): Override for the interpolation function name.
        include (Optional[List[str]]): Override for directory include patterns.
        search_path (Optional[Path]): Directory to start searching for TOML config.

    Returns:
        RuntimeConfig: The fully resolved configuration object.
    """
    start_dir = search_path or Path.cwd()
    toml_config, _ = _load_toml_settings(start_dir)

    values: Dict[str, Any] = {}
    for key in cls.model_fields:
      if key in toml_config:
        values[key] = toml_config[key]

    if fail_fast is not None:
      values["fail_fast"] = fail_fast
    if interpolate_function is not None:
      values["interpolate_function"] = interpolate_function
    if include:
      values["include"] = include

    return cls(**values)


def _load_toml_settings(start_path: Path) -> Tuple[Dict[str, Any], Optional[Path]]:
  """
  Searches the start directory and its parents for 'pyproject.toml' and extracts config.

  Args:
      start_path (Path): Directory to start search from.

  Returns:
      Tuple[Dict, Optional[Path]]: The config dict and the directory it was found in.
  """
  current = start_path.resolve()

  for parent in [current, *current.parents]:
    toml_path = parent / "pyproject.toml"
    if toml_path.is_file():
      try:
        with open(toml_path, "rb") as f:
          data = tomllib.load(f)
      except (OSError, tomllib.TOMLDecodeError):
        return {}, None

      tool_section = data.get("tool", {})
      return tool_section.get(TOOL_SECTION, {}), parent

  return {}, None
