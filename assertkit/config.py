"""
AssertKit — Configuration System

All configuration is Pydantic-validated and loaded from:
1. An optional YAML file (defaults for a project)
2. Environment variables (overrides), prefixed ``ASSERTKIT_``

Only defaults live here. Every constraint still captures its own options at
construction, so changing configuration never affects a built constraint.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from assertkit.primitives.common import ComparisonOptions

# ─── Sub-configs ──────────────────────────────────────────────────


class ComparisonConfig(BaseModel):
    tolerance: float = Field(default=0.0, ge=0.0)
    max_depth: int = Field(default=10, ge=0)
    canonicalize: bool = False
    ignore_case: bool = False

    def to_options(self) -> ComparisonOptions:
        return ComparisonOptions(
            tolerance=self.tolerance,
            max_depth=self.max_depth,
            canonicalize=self.canonicalize,
            ignore_case=self.ignore_case,
        )


class LoggingConfig(BaseModel):
    level: str = "WARNING"
    format: str = "console"  # "console" | "json"


# ─── Root Configuration ──────────────────────────────────────────


class AssertKitConfig(BaseSettings):
    """
    Root configuration. Loads from YAML, overridable by env vars.
    """

    model_config = SettingsConfigDict(
        env_prefix="ASSERTKIT_",
        env_nested_delimiter="__",
        extra="ignore",
    )

    comparison: ComparisonConfig = Field(default_factory=ComparisonConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge override into base."""
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def _env_overrides() -> dict[str, Any]:
    """Collect ASSERTKIT_* variables that must win over the YAML file."""
    raw: dict[str, Any] = {}
    if tolerance := os.environ.get("ASSERTKIT_COMPARISON__TOLERANCE"):
        raw.setdefault("comparison", {})["tolerance"] = float(tolerance)
    if max_depth := os.environ.get("ASSERTKIT_COMPARISON__MAX_DEPTH"):
        raw.setdefault("comparison", {})["max_depth"] = int(max_depth)
    if canonicalize := os.environ.get("ASSERTKIT_COMPARISON__CANONICALIZE"):
        raw.setdefault("comparison", {})["canonicalize"] = canonicalize.lower() in ("true", "1", "yes")
    if ignore_case := os.environ.get("ASSERTKIT_COMPARISON__IGNORE_CASE"):
        raw.setdefault("comparison", {})["ignore_case"] = ignore_case.lower() in ("true", "1", "yes")
    if level := os.environ.get("ASSERTKIT_LOGGING__LEVEL"):
        raw.setdefault("logging", {})["level"] = level
    if fmt := os.environ.get("ASSERTKIT_LOGGING__FORMAT"):
        raw.setdefault("logging", {})["format"] = fmt
    return raw


def load_config(config_path: str | Path | None = None) -> AssertKitConfig:
    """
    Load configuration from YAML file, then apply environment variable overrides.
    """
    raw: dict[str, Any] = {}

    if config_path:
        path = Path(config_path)
        if path.exists():
            with open(path) as f:
                raw = yaml.safe_load(f) or {}

    return AssertKitConfig(**_deep_merge(raw, _env_overrides()))
