"""Bootstrap wiring: service modules and container configuration."""

from .modules import (
    APP_SETTINGS,
    CONTAINER_SETTINGS,
    LOGGING_SETTINGS,
    SERVICE_CATALOG,
    CoreServicesModule,
    ServiceCatalog,
)
from .registration import (
    ConfigurationError,
    DependencyVerificationError,
    configure_services,
    create_configured_container,
    dependency_graph,
    registration_summary,
    validate_configuration,
    verify_all_dependencies,
)

__all__ = [
    "APP_SETTINGS",
    "CONTAINER_SETTINGS",
    "ConfigurationError",
    "CoreServicesModule",
    "DependencyVerificationError",
    "LOGGING_SETTINGS",
    "SERVICE_CATALOG",
    "ServiceCatalog",
    "configure_services",
    "create_configured_container",
    "dependency_graph",
    "registration_summary",
    "validate_configuration",
    "verify_all_dependencies",
]
