"""Application configuration models and loader utilities."""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import Any, cast

from dotenv import dotenv_values
from pydantic import BaseModel, Field


class LoggingSettings(BaseModel):
    """Logging preferences."""

    level: str = Field(default="INFO", description="Root logging level")
    structured: bool = Field(
        default=False, description="Emit key=value records instead of plain text"
    )
    container_level: str | None = Field(
        default=None,
        description="Level for the service container logger; inherits root when unset",
    )


class ContainerSettings(BaseModel):
    """Settings controlling how the application wires its container."""

    verify_on_startup: bool = Field(
        default=True,
        description="Resolve every registered service during initialisation",
    )
    strict_validation: bool = Field(
        default=True,
        description="Require declared dependencies to be registered, not only required services",
    )


class AppSettings(BaseModel):
    """Aggregated application configuration."""

    app_name: str = Field(default="Type Quiz", description="Display name")
    version: str = Field(default="0.1.0", description="Reported application version")
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    container: ContainerSettings = Field(default_factory=ContainerSettings)


ENV_PREFIX = "TYPEQUIZ_"


def _normalize_key(raw_key: str) -> list[str]:
    """Convert an environment variable key into a nested attribute path."""
    trimmed = raw_key.removeprefix(ENV_PREFIX)
    return [segment.lower() for segment in trimmed.split("__") if segment]


def _merge_into_tree(tree: dict[str, Any], path: list[str], value: Any) -> None:
    """Assign a value to a nested dictionary given a path."""
    cursor = tree
    for segment in path[:-1]:
        next_node = cursor.setdefault(segment, {})
        cursor = cast(dict[str, Any], next_node)
    cursor[path[-1]] = value


def _coerce(value: str | None) -> Any:
    if value is None or value == "":
        return None
    lowered = value.lower()
    if lowered == "true":
        return True
    if lowered == "false":
        return False
    return value


def _collect_env_values(
    env_file: Path | str | None, include_environment: bool
) -> dict[str, Any]:
    """Load prefixed configuration values from an optional file and the environment."""
    combined: dict[str, str | None] = {}

    if env_file:
        env_path = Path(env_file)
        if env_path.is_file():
            combined.update(
                (key, value)
                for key, value in dotenv_values(env_path).items()
                if key and key.startswith(ENV_PREFIX)
            )

    if include_environment:
        combined.update(
            (key, value)
            for key, value in os.environ.items()
            if key.startswith(ENV_PREFIX)
        )

    collected: dict[str, Any] = {}
    for key, value in combined.items():
        path = _normalize_key(key)
        if path:
            _merge_into_tree(collected, path, _coerce(value))
    return collected


@lru_cache(maxsize=1)
def load_app_settings(
    env_file: Path | str | None = None,
    include_environment: bool = True,
    **overrides: Any,
) -> AppSettings:
    """Load application settings, applying env files and overrides.

    Environment variables win over the env file; keyword overrides win over
    both and replace whole top-level sections.
    """
    collected = _collect_env_values(env_file, include_environment)
    if overrides:
        collected.update(overrides)
    return AppSettings.model_validate(collected)


__all__ = [
    "AppSettings",
    "ContainerSettings",
    "ENV_PREFIX",
    "LoggingSettings",
    "load_app_settings",
]
