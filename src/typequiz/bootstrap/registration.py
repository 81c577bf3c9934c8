"""Registration of service modules into containers and checks over the result."""

from __future__ import annotations

import logging

from typequiz.core.container import ServiceContainer
from typequiz.core.interfaces import ServiceModule
from typequiz.core.models import RegistrationSummary

LOGGER = logging.getLogger(__name__)


class ConfigurationError(ValueError):
    """Raised when a configured container is missing required services."""

    def __init__(self, missing: list[str]) -> None:
        super().__init__(f"Required service not registered: {', '.join(missing)}")
        self.missing = missing


class DependencyVerificationError(RuntimeError):
    """Raised when registered services cannot all be resolved at startup."""


def configure_services(container: ServiceContainer, *modules: ServiceModule) -> None:
    """Register every binding of ``modules`` on ``container``, in order."""
    for module in modules:
        bindings = module.bindings()
        for binding in bindings:
            container.register(binding.name, binding.factory, binding.singleton)
        LOGGER.debug(
            "Configured %d binding(s) from %s", len(bindings), type(module).__name__
        )


def create_configured_container(
    *modules: ServiceModule, parent: ServiceContainer | None = None
) -> ServiceContainer:
    """Create a container, optionally under ``parent``, configured with ``modules``."""
    container = parent.create_child() if parent is not None else ServiceContainer()
    configure_services(container, *modules)
    return container


def validate_configuration(
    container: ServiceContainer,
    *modules: ServiceModule,
    include_dependencies: bool = True,
) -> bool:
    """Check that required services (and declared dependencies) are visible.

    Raises:
        ConfigurationError: listing every missing name.
    """
    expected: list[str] = []
    for module in modules:
        expected.extend(module.required_services())
        if include_dependencies:
            for binding in module.bindings():
                expected.extend(binding.depends_on)

    missing = [name for name in dict.fromkeys(expected) if not container.has(name)]
    if missing:
        raise ConfigurationError(missing)
    return True


def dependency_graph(*modules: ServiceModule) -> dict[str, list[str]]:
    """Map each bound service name to its declared dependencies."""
    graph: dict[str, list[str]] = {}
    for module in modules:
        for binding in module.bindings():
            graph[binding.service_name] = list(binding.depends_on)
    return graph


def verify_all_dependencies(container: ServiceContainer) -> bool:
    """Resolve every service the container owns; report failure instead of raising."""
    try:
        for name in container.get_service_names():
            container.resolve(name)
    except Exception as exc:  # noqa: BLE001  # pylint: disable=broad-exception-caught
        LOGGER.exception("Dependency verification failed: %s", exc)
        return False
    return True


def registration_summary(
    container: ServiceContainer, *modules: ServiceModule
) -> RegistrationSummary:
    """Summarise the names a container owns alongside the modules' dependency graph."""
    names = tuple(container.get_service_names())
    return RegistrationSummary(
        total_services=len(names),
        service_names=names,
        dependency_graph=dependency_graph(*modules),
    )


__all__ = [
    "ConfigurationError",
    "DependencyVerificationError",
    "configure_services",
    "create_configured_container",
    "dependency_graph",
    "registration_summary",
    "validate_configuration",
    "verify_all_dependencies",
]
