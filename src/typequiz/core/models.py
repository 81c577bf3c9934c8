"""Core data models shared by the bootstrap and application layers."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime
from typing import TYPE_CHECKING, Any, Literal

if TYPE_CHECKING:
    from .container import ServiceContainer, ServiceKey


@dataclass(slots=True)
class ServiceBinding:
    """Declarative registration: a named factory plus its declared dependencies."""

    name: str | ServiceKey[Any]
    factory: Callable[[ServiceContainer], Any]
    singleton: bool = True
    depends_on: tuple[str, ...] = ()

    @property
    def service_name(self) -> str:
        """Plain string name regardless of how the binding was declared."""
        return str(self.name)


@dataclass(slots=True)
class RegistrationSummary:
    """Snapshot of what a container registers and how services depend on each other."""

    total_services: int
    service_names: tuple[str, ...]
    dependency_graph: dict[str, list[str]] = field(default_factory=dict)


HealthStatus = Literal["healthy", "degraded", "unhealthy"]
ServiceStatus = Literal["ok", "error"]


@dataclass(slots=True)
class HealthReport:
    """Outcome of resolving the required services of an application."""

    status: HealthStatus
    services: dict[str, ServiceStatus]
    timestamp: datetime


@dataclass(slots=True)
class ApplicationInfo:
    """Status and registration details reported by an application."""

    name: str
    version: str
    initialized: bool
    services: RegistrationSummary
    build_time: datetime


__all__ = [
    "ApplicationInfo",
    "HealthReport",
    "HealthStatus",
    "RegistrationSummary",
    "ServiceBinding",
    "ServiceStatus",
]
