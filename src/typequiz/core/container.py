"""Hierarchical service container with lazy singleton and transient lifecycles."""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar, overload

LOGGER = logging.getLogger(__name__)

T = TypeVar("T")

ServiceFactory = Callable[["ServiceContainer"], Any]


class ServiceNotFoundError(KeyError):
    """Raised when no container in the ancestor chain registers a name."""

    def __init__(self, name: str) -> None:
        super().__init__(name)
        self.name = name

    def __str__(self) -> str:
        return f"Service '{self.name}' is not registered"


class CyclicDependencyError(RuntimeError):
    """Raised when a factory re-enters construction of its own service."""

    def __init__(self, chain: tuple[str, ...]) -> None:
        super().__init__(f"Cyclic dependency detected: {' -> '.join(chain)}")
        self.chain = chain


@dataclass(frozen=True)
class ServiceKey(Generic[T]):
    """Typed token binding a service name to the type it resolves to."""

    name: str

    def __str__(self) -> str:
        return self.name


@dataclass(slots=True)
class _Registration:
    factory: ServiceFactory
    singleton: bool
    instance: Any = None
    realized: bool = False
    lock: threading.RLock = field(default_factory=threading.RLock, repr=False)


def _service_name(name: str | ServiceKey[Any]) -> str:
    return name.name if isinstance(name, ServiceKey) else name


class ServiceContainer:
    """Service registry resolving names locally first, then through its parent.

    Each container owns its registrations and the singleton instances cached
    for them. A child created with :meth:`create_child` sees every ancestor
    registration until it registers the same name itself, which shadows the
    ancestor entry for the child and its descendants only.

    First realization of a singleton is serialized on that registration alone,
    so concurrent resolutions construct it exactly once while lookups of other
    names proceed. The container lock only guards its registry and is never
    held while a factory runs.
    """

    def __init__(self, parent: ServiceContainer | None = None) -> None:
        """Initialise container storage."""
        self._parent = parent
        self._registry: dict[str, _Registration] = {}
        self._lock = threading.RLock()
        self._local = threading.local()

    @property
    def parent(self) -> ServiceContainer | None:
        """Container consulted for names missing from this registry."""
        return self._parent

    def register(
        self,
        name: str | ServiceKey[T],
        factory: Callable[[ServiceContainer], T],
        singleton: bool = True,
    ) -> None:
        """Register a factory under ``name``, replacing any previous entry."""
        key = _service_name(name)
        with self._lock:
            replaced = key in self._registry
            self._registry[key] = _Registration(factory=factory, singleton=singleton)
        LOGGER.debug(
            "%s service '%s' (%s)",
            "Replaced" if replaced else "Registered",
            key,
            "singleton" if singleton else "transient",
        )

    @overload
    def resolve(self, name: ServiceKey[T]) -> T: ...

    @overload
    def resolve(self, name: str) -> Any: ...

    def resolve(self, name: str | ServiceKey[Any]) -> Any:
        """Resolve a service, delegating to ancestors for unknown names.

        Singleton instances are cached in the container owning the
        registration, never in the container the lookup started from.
        Factory errors propagate unchanged.
        """
        key = _service_name(name)
        owner = self._owner_of(key)
        if owner is None:
            raise ServiceNotFoundError(key)
        if owner is not self:
            LOGGER.debug("Delegating '%s' to ancestor container", key)
        return owner._realize(key)

    @overload
    def try_resolve(self, name: ServiceKey[T]) -> T | None: ...

    @overload
    def try_resolve(self, name: str) -> Any | None: ...

    def try_resolve(self, name: str | ServiceKey[Any]) -> Any | None:
        """Resolve a service if visible from this container; return None otherwise."""
        if not self.has(name):
            return None
        return self.resolve(name)

    def has(self, name: str | ServiceKey[Any]) -> bool:
        """Return whether this container or an ancestor registers ``name``."""
        return self._owner_of(_service_name(name)) is not None

    def is_realized(self, name: str | ServiceKey[Any]) -> bool:
        """Return whether this container caches an instance for ``name``."""
        with self._lock:
            registration = self._registry.get(_service_name(name))
            return registration is not None and registration.realized

    def get_service_names(self) -> list[str]:
        """Names registered directly on this container, in registration order."""
        with self._lock:
            return list(self._registry)

    def clear(self) -> None:
        """Drop own registrations and cached instances; ancestors are untouched."""
        with self._lock:
            count = len(self._registry)
            self._registry.clear()
        LOGGER.debug("Cleared %d service registration(s)", count)

    def create_child(self) -> ServiceContainer:
        """Create an empty container whose lookups fall back to this one."""
        return ServiceContainer(parent=self)

    def __contains__(self, name: object) -> bool:
        if not isinstance(name, (str, ServiceKey)):
            return False
        return self.has(name)

    def __len__(self) -> int:
        with self._lock:
            return len(self._registry)

    def _owner_of(self, key: str) -> ServiceContainer | None:
        container: ServiceContainer | None = self
        while container is not None:
            with container._lock:
                if key in container._registry:
                    return container
            container = container._parent
        return None

    def _realize(self, key: str) -> Any:
        with self._lock:
            registration = self._registry.get(key)
        if registration is None:
            raise ServiceNotFoundError(key)
        if not registration.singleton:
            return self._invoke(key, registration.factory)

        # Reentrant so a self-referencing factory reaches the cycle check.
        with registration.lock:
            if registration.realized:
                return registration.instance
            instance = self._invoke(key, registration.factory)
            with self._lock:
                current = self._registry.get(key) is registration
            # A replaced or cleared registration keeps nothing.
            if current:
                registration.instance = instance
                registration.realized = True
                LOGGER.debug("Realized singleton service '%s'", key)
            return instance

    def _invoke(self, key: str, factory: ServiceFactory) -> Any:
        stack: list[str] | None = getattr(self._local, "constructing", None)
        if stack is None:
            stack = []
            self._local.constructing = stack
        if key in stack:
            chain = (*stack[stack.index(key) :], key)
            raise CyclicDependencyError(chain)
        stack.append(key)
        try:
            return factory(self)
        finally:
            stack.pop()


__all__ = [
    "CyclicDependencyError",
    "ServiceContainer",
    "ServiceFactory",
    "ServiceKey",
    "ServiceNotFoundError",
]
