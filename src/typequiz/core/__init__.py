"""Core utilities for configuration, logging, and dependency wiring."""

from .config import AppSettings, ContainerSettings, LoggingSettings, load_app_settings
from .container import (
    CyclicDependencyError,
    ServiceContainer,
    ServiceKey,
    ServiceNotFoundError,
)
from .interfaces import ServiceModule
from .logging import configure_logging
from .models import ServiceBinding

__all__ = [
    "AppSettings",
    "ContainerSettings",
    "CyclicDependencyError",
    "LoggingSettings",
    "ServiceBinding",
    "ServiceContainer",
    "ServiceKey",
    "ServiceModule",
    "ServiceNotFoundError",
    "configure_logging",
    "load_app_settings",
]
