from __future__ import annotations

import re
from pathlib import Path
from typing import Any

import tomllib
from pydantic import BaseModel, ConfigDict, Field, field_validator

from contract.artifacts import DEFAULT_IDENTIFIER
from utils import DEFAULT_SRC_ROOT_PATTERN

CONFIG_FILENAME = "ggtag.toml"

DEFAULT_EXTENSIONS = (".js", ".ts", ".svelte", ".jsx", ".tsx", ".mjs", ".mts")

# The logging library's own sources and vendored packages are never rewritten.
DEFAULT_EXCLUDE_PATHS = ("/lib/gg.", "/lib/debug", "/node_modules/")

_JS_IDENTIFIER_RE = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")


class GgTagConfig(BaseModel):
    """Configuration for call-site rewriting."""

    model_config = ConfigDict(extra="forbid")

    output_dir: str = Field(
        default=".ggtag",
        description="Output directory for rewritten sources and the manifest",
    )
    identifier: str = Field(
        default=DEFAULT_IDENTIFIER,
        description="Name of the logging function whose calls are rewritten",
    )
    src_root_pattern: str = Field(
        default=DEFAULT_SRC_ROOT_PATTERN,
        description=(
            "Regex matching up to and including the source root folder; "
            "stripped for display paths"
        ),
    )
    extensions: list[str] = Field(
        default_factory=lambda: list(DEFAULT_EXTENSIONS),
        description="File extensions eligible for rewriting",
    )
    exclude_paths: list[str] = Field(
        default_factory=lambda: list(DEFAULT_EXCLUDE_PATHS),
        description="Module-id substrings that are never rewritten",
    )
    include: list[str] = Field(
        default_factory=list,
        description="Glob patterns for files to include (empty = all eligible files)",
    )
    exclude: list[str] = Field(
        default_factory=list,
        description="Glob patterns for files to exclude",
    )
    nested_gitignore: bool = Field(
        default=False,
        description=(
            "Enable nested .gitignore composition (default: false for root-only)"
        ),
    )
    manifest: bool = Field(
        default=True,
        description="Write callsites.jsonl next to the rewritten sources",
    )

    @field_validator("identifier")
    @classmethod
    def validate_identifier(cls, v: str) -> str:
        if not _JS_IDENTIFIER_RE.match(v):
            msg = f"identifier '{v}' is not a valid JavaScript identifier"
            raise ValueError(msg)
        return v

    @field_validator("src_root_pattern")
    @classmethod
    def validate_src_root_pattern(cls, v: str) -> str:
        try:
            re.compile(v)
        except re.error as exc:
            msg = f"src_root_pattern is not a valid regex: {exc}"
            raise ValueError(msg) from exc
        return v

    @field_validator("extensions", mode="before")
    @classmethod
    def validate_extensions(cls, v: Any) -> Any:
        """Extensions must be dotted suffixes; they are matched lowercase."""
        if not isinstance(v, list):
            msg = "extensions must be a list of strings"
            raise ValueError(msg)
        normalized: list[str] = []
        for ext in v:
            if not isinstance(ext, str) or not ext.startswith("."):
                msg = f"Invalid extension {ext!r}; extensions must start with '.'"
                raise ValueError(msg)
            normalized.append(ext.lower())
        return normalized


class ConfigError(Exception):
    """Raised when config file exists but cannot be parsed."""


def resolve_output_dir(root: Path, output_dir: str) -> Path:
    """Resolve a config-provided output_dir safely within the project root.

    The config output_dir must be a non-empty relative path that remains
    within the project root after resolution. Absolute paths and paths
    that escape the root are rejected.
    """
    if not output_dir:
        msg = "output_dir must be a non-empty relative path"
        raise ConfigError(msg)

    if output_dir.startswith("~"):
        msg = "output_dir must be a relative path within the project root"
        raise ConfigError(msg)

    output_path = Path(output_dir)
    if output_path.is_absolute():
        msg = "output_dir must be a relative path within the project root"
        raise ConfigError(msg)

    try:
        resolved_root = root.resolve()
        resolved_output = (resolved_root / output_path).resolve()
    except OSError as exc:
        msg = f"Failed to resolve output_dir '{output_dir}': {exc}"
        raise ConfigError(msg) from exc

    try:
        resolved_output.relative_to(resolved_root)
    except ValueError as exc:
        msg = f"output_dir '{output_dir}' escapes the project root"
        raise ConfigError(msg) from exc

    return resolved_output


def load_config(root: Path) -> GgTagConfig:
    """Load configuration from ggtag.toml if it exists."""
    config_path = Path(root) / CONFIG_FILENAME

    if not config_path.is_file():
        return GgTagConfig()

    try:
        with config_path.open("rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        msg = f"Invalid TOML in {config_path}: {e}"
        raise ConfigError(msg) from e

    try:
        return GgTagConfig.model_validate(data)
    except Exception as e:
        msg = f"Invalid config in {config_path}: {e}"
        raise ConfigError(msg) from e
