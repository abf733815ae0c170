from __future__ import annotations

from pathlib import Path
from typing import Any

import tomllib
from pydantic import BaseModel, ConfigDict, Field, field_validator

from databinding.templates import (
    DEFAULT_HOST_ELEMENTS,
    DEFAULT_TEMPLATE_TYPES,
    data_binding_template_predicate,
)
from markup.traversal import Predicate
from model.diagnostics import Severity

CONFIG_FILENAME = "bindscan.toml"

DEFAULT_EXTENSIONS = (".html", ".htm")


class TemplatesConfig(BaseModel):
    """Which ``<template>`` elements are treated as data-binding."""

    model_config = ConfigDict(extra="forbid")

    template_types: list[str] = Field(
        default_factory=lambda: list(DEFAULT_TEMPLATE_TYPES),
        description="Values of the `is` attribute that mark a data-binding template",
    )
    host_elements: list[str] = Field(
        default_factory=lambda: list(DEFAULT_HOST_ELEMENTS),
        description="Elements whose direct <template> child is data-binding",
    )

    def predicate(self) -> Predicate:
        return data_binding_template_predicate(
            self.template_types, self.host_elements
        )


class BindscanConfig(BaseModel):
    """Configuration for bindscan artifact generation."""

    model_config = ConfigDict(extra="forbid")

    output_dir: str = Field(
        default=".bindscan",
        description="Output directory for generated artifacts",
    )
    include: list[str] = Field(
        default_factory=list,
        description="Glob patterns for files to include (empty = all markup files)",
    )
    exclude: list[str] = Field(
        default_factory=list,
        description="Glob patterns for files to exclude",
    )
    extensions: list[str] = Field(
        default_factory=lambda: list(DEFAULT_EXTENSIONS),
        description="File extensions scanned for templates",
    )
    nested_gitignore: bool = Field(
        default=False,
        description=(
            "Enable nested .gitignore composition (default: false for root-only)"
        ),
    )
    min_severity: Severity = Field(
        default=Severity.INFO,
        description="Diagnostics below this severity are not reported",
    )
    templates: TemplatesConfig = Field(
        default_factory=TemplatesConfig,
        description="Data-binding template detection",
    )

    @field_validator("extensions", mode="before")
    @classmethod
    def validate_extensions(cls, v: Any) -> Any:
        """Require dotted extensions such as ".html"."""

        if v is None:
            return list(DEFAULT_EXTENSIONS)

        if not isinstance(v, list):
            msg = "extensions must be a list of strings"
            raise TypeError(msg)

        for extension in v:
            if not isinstance(extension, str) or not extension.startswith("."):
                msg = f"Invalid extension {extension!r}: expected e.g. '.html'"
                raise ValueError(msg)

        return [extension.lower() for extension in v]


class ConfigError(Exception):
    """Raised when config file exists but cannot be parsed."""


def resolve_output_dir(root: Path, output_dir: str) -> Path:
    """Resolve a config-provided output_dir safely within the repo root.

    The config output_dir must be a non-empty relative path that remains
    within the repository root after resolution. Absolute paths and paths
    that escape the root are rejected.
    """
    if not output_dir:
        msg = "output_dir must be a non-empty relative path"
        raise ConfigError(msg)

    if output_dir.startswith("~"):
        msg = "output_dir must be a relative path within the repo root"
        raise ConfigError(msg)

    output_path = Path(output_dir)
    if output_path.is_absolute():
        msg = "output_dir must be a relative path within the repo root"
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
        msg = f"output_dir '{output_dir}' escapes the repository root"
        raise ConfigError(msg) from exc

    return resolved_output


def load_config(root: Path) -> BindscanConfig:
    """Load configuration from bindscan.toml if it exists."""
    config_path = Path(root) / CONFIG_FILENAME

    if not config_path.is_file():
        return BindscanConfig()

    try:
        with config_path.open("rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        msg = f"Invalid TOML in {config_path}: {e}"
        raise ConfigError(msg) from e

    try:
        return BindscanConfig.model_validate(data)
    except Exception as e:
        msg = f"Invalid config in {config_path}: {e}"
        raise ConfigError(msg) from e
