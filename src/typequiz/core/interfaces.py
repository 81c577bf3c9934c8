"""Protocol interfaces for decoupling components."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol

from .models import ServiceBinding


class ServiceModule(Protocol):
    """Group of bindings contributed to a container at bootstrap."""

    def bindings(self) -> Sequence[ServiceBinding]:
        """Return the bindings to register, in registration order."""
        raise NotImplementedError

    def required_services(self) -> Sequence[str]:
        """Return names that must be resolvable once the module is configured."""
        raise NotImplementedError


__all__ = ["ServiceModule"]
