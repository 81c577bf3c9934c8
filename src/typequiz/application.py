"""Application facade owning the root service container."""

from __future__ import annotations

import logging
import threading
from collections.abc import Sequence
from datetime import UTC, datetime
from typing import Any, TypeVar, overload

from typequiz.bootstrap import (
    CoreServicesModule,
    DependencyVerificationError,
    configure_services,
    registration_summary,
    validate_configuration,
    verify_all_dependencies,
)
from typequiz.core.config import AppSettings, load_app_settings
from typequiz.core.container import ServiceContainer, ServiceKey
from typequiz.core.interfaces import ServiceModule
from typequiz.core.models import (
    ApplicationInfo,
    HealthReport,
    HealthStatus,
    RegistrationSummary,
    ServiceStatus,
)

LOGGER = logging.getLogger(__name__)

T = TypeVar("T")

_FACTORY_LOCK = threading.Lock()


class ApplicationNotInitializedError(RuntimeError):
    """Raised when services are requested before :meth:`Application.initialize`."""


class Application:
    """Entry point wiring service modules into a container and exposing its services."""

    def __init__(
        self,
        settings: AppSettings | None = None,
        modules: Sequence[ServiceModule] = (),
    ) -> None:
        self.settings = settings or load_app_settings()
        self._modules: tuple[ServiceModule, ...] = (
            CoreServicesModule(self.settings),
            *modules,
        )
        self._container = ServiceContainer()
        self._initialized = False
        self._build_time = datetime.now(UTC)

    @property
    def modules(self) -> tuple[ServiceModule, ...]:
        return self._modules

    @property
    def is_initialized(self) -> bool:
        return self._initialized

    @property
    def container(self) -> ServiceContainer:
        """The application's container; available once initialised."""
        self.ensure_initialized()
        return self._container

    def initialize(self) -> None:
        """Configure, validate, and optionally verify every module's services.

        Calling it again after success is a no-op.
        """
        if self._initialized:
            return

        try:
            configure_services(self._container, *self._modules)
            validate_configuration(
                self._container,
                *self._modules,
                include_dependencies=self.settings.container.strict_validation,
            )
            if self.settings.container.verify_on_startup and not verify_all_dependencies(
                self._container
            ):
                raise DependencyVerificationError(
                    "Registered services could not all be resolved"
                )
        except Exception:
            LOGGER.exception("Failed to initialise application")
            self._container.clear()
            raise

        self._initialized = True
        LOGGER.info(
            "Initialised %s with %d service(s)",
            self.settings.app_name,
            len(self._container),
        )

    @overload
    def get(self, name: ServiceKey[T]) -> T: ...

    @overload
    def get(self, name: str) -> Any: ...

    def get(self, name: str | ServiceKey[Any]) -> Any:
        """Resolve a service from the application container."""
        self.ensure_initialized()
        return self._container.resolve(name)

    def required_services(self) -> list[str]:
        """Required names of every module, without duplicates."""
        names: dict[str, None] = {}
        for module in self._modules:
            names.update(dict.fromkeys(module.required_services()))
        return list(names)

    def application_info(self) -> ApplicationInfo:
        if self._initialized:
            services = registration_summary(self._container, *self._modules)
        else:
            services = RegistrationSummary(total_services=0, service_names=())
        return ApplicationInfo(
            name=self.settings.app_name,
            version=self.settings.version,
            initialized=self._initialized,
            services=services,
            build_time=self._build_time,
        )

    def health_check(self) -> HealthReport:
        """Resolve each required service and report which ones fail."""
        timestamp = datetime.now(UTC)
        if not self._initialized:
            return HealthReport(
                status="unhealthy", services={"application": "error"}, timestamp=timestamp
            )

        services: dict[str, ServiceStatus] = {}
        failed = False
        for name in self.required_services():
            try:
                instance = self._container.resolve(name)
            except Exception as exc:  # noqa: BLE001  # pylint: disable=broad-exception-caught
                LOGGER.warning("Health check could not resolve '%s': %s", name, exc)
                services[name] = "error"
                failed = True
            else:
                services[name] = "ok" if instance is not None else "error"

        status: HealthStatus = "healthy"
        if failed:
            status = "unhealthy"
        elif "error" in services.values():
            status = "degraded"
        return HealthReport(status=status, services=services, timestamp=timestamp)

    def create_child(self) -> Application:
        """Create an initialised application whose container inherits this one's services."""
        self.ensure_initialized()
        child = Application(self.settings, self._modules[1:])
        child._container = self._container.create_child()
        child._initialized = True
        return child

    def shutdown(self) -> None:
        if not self._initialized:
            return
        self._container.clear()
        self._initialized = False
        LOGGER.info("Shut down %s", self.settings.app_name)

    def ensure_initialized(self) -> None:
        if not self._initialized:
            raise ApplicationNotInitializedError(
                "Application not initialized. Call initialize() first."
            )


class ApplicationFactory:
    """Owner of the process-wide application instance."""

    _instance: Application | None = None

    @classmethod
    def get_instance(cls, settings: AppSettings | None = None) -> Application:
        """Return the global application, creating and initialising it on first use.

        ``settings`` only applies when the instance is created.
        """
        with _FACTORY_LOCK:
            if cls._instance is None:
                application = Application(settings)
                application.initialize()
                cls._instance = application
            return cls._instance

    @classmethod
    def reset(cls) -> None:
        """Shut down and drop the global instance, if any."""
        with _FACTORY_LOCK:
            if cls._instance is not None:
                cls._instance.shutdown()
                cls._instance = None

    @staticmethod
    def create_new(
        settings: AppSettings | None = None,
        modules: Sequence[ServiceModule] = (),
    ) -> Application:
        """Create an initialised application that is not the global one."""
        application = Application(settings, modules)
        application.initialize()
        return application


__all__ = ["Application", "ApplicationFactory", "ApplicationNotInitializedError"]
