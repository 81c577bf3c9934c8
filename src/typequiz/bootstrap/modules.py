"""Service modules bundled with the application."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from typequiz.core.config import AppSettings, ContainerSettings, LoggingSettings
from typequiz.core.container import ServiceContainer, ServiceKey
from typequiz.core.models import ServiceBinding

APP_SETTINGS: ServiceKey[AppSettings] = ServiceKey("AppSettings")
LOGGING_SETTINGS: ServiceKey[LoggingSettings] = ServiceKey("LoggingSettings")
CONTAINER_SETTINGS: ServiceKey[ContainerSettings] = ServiceKey("ContainerSettings")


@dataclass(slots=True)
class ServiceCatalog:
    """Names registered on the container that built the catalog."""

    app_name: str
    service_names: tuple[str, ...]


SERVICE_CATALOG: ServiceKey[ServiceCatalog] = ServiceKey("ServiceCatalog")


def _build_catalog(container: ServiceContainer) -> ServiceCatalog:
    settings = container.resolve(APP_SETTINGS)
    return ServiceCatalog(
        app_name=settings.app_name,
        service_names=tuple(container.get_service_names()),
    )


class CoreServicesModule:
    """Expose loaded configuration objects through the container."""

    def __init__(self, settings: AppSettings) -> None:
        self._settings = settings

    def bindings(self) -> Sequence[ServiceBinding]:
        settings = self._settings
        return (
            ServiceBinding(APP_SETTINGS, lambda _: settings),
            ServiceBinding(LOGGING_SETTINGS, lambda _: settings.logging),
            ServiceBinding(CONTAINER_SETTINGS, lambda _: settings.container),
            ServiceBinding(
                SERVICE_CATALOG,
                _build_catalog,
                singleton=False,
                depends_on=(APP_SETTINGS.name,),
            ),
        )

    def required_services(self) -> Sequence[str]:
        return (APP_SETTINGS.name, LOGGING_SETTINGS.name, CONTAINER_SETTINGS.name)


__all__ = [
    "APP_SETTINGS",
    "CONTAINER_SETTINGS",
    "CoreServicesModule",
    "LOGGING_SETTINGS",
    "SERVICE_CATALOG",
    "ServiceCatalog",
]
