"""Tests for the application facade."""

from __future__ import annotations

from collections.abc import Iterator, Sequence

import pytest

from typequiz.application import (
    Application,
    ApplicationFactory,
    ApplicationNotInitializedError,
)
from typequiz.bootstrap import (
    APP_SETTINGS,
    ConfigurationError,
    DependencyVerificationError,
)
from typequiz.core.config import AppSettings, ContainerSettings
from typequiz.core.models import ServiceBinding


class GameSession:
    def __init__(self, settings: AppSettings) -> None:
        self.settings = settings


class StubModule:
    """Module stub returning predetermined bindings."""

    def __init__(
        self,
        bindings: Sequence[ServiceBinding],
        required: Sequence[str] = (),
    ) -> None:
        self._bindings = tuple(bindings)
        self._required = tuple(required)

    def bindings(self) -> Sequence[ServiceBinding]:
        return self._bindings

    def required_services(self) -> Sequence[str]:
        return self._required


def _session_module() -> StubModule:
    return StubModule(
        [
            ServiceBinding(
                "GameSession",
                lambda c: GameSession(c.resolve(APP_SETTINGS)),
                depends_on=("AppSettings",),
            )
        ],
        required=("GameSession",),
    )


@pytest.fixture()
def settings() -> AppSettings:
    return AppSettings(app_name="Quiz", version="9.9.9")


def test_initialize_wires_modules(settings: AppSettings) -> None:
    application = Application(settings, [_session_module()])

    application.initialize()

    assert application.is_initialized
    session = application.get("GameSession")
    assert session.settings is settings
    assert application.get("GameSession") is session


def test_initialize_is_idempotent(settings: AppSettings) -> None:
    application = Application(settings, [_session_module()])
    application.initialize()
    session = application.get("GameSession")

    application.initialize()

    assert application.get("GameSession") is session


def test_get_before_initialize_raises(settings: AppSettings) -> None:
    application = Application(settings)

    with pytest.raises(ApplicationNotInitializedError):
        application.get(APP_SETTINGS)
    with pytest.raises(ApplicationNotInitializedError):
        _ = application.container


def test_initialize_fails_on_missing_required_service(settings: AppSettings) -> None:
    application = Application(settings, [StubModule([], required=("Missing",))])

    with pytest.raises(ConfigurationError):
        application.initialize()

    assert not application.is_initialized


def test_initialize_fails_when_verification_fails(settings: AppSettings) -> None:
    def broken(_: object) -> None:
        raise RuntimeError("cannot build")

    application = Application(settings, [StubModule([ServiceBinding("Broken", broken)])])

    with pytest.raises(DependencyVerificationError):
        application.initialize()
    assert not application.is_initialized


def test_verification_can_be_disabled() -> None:
    def broken(_: object) -> None:
        raise RuntimeError("cannot build")

    settings = AppSettings(container=ContainerSettings(verify_on_startup=False))
    application = Application(settings, [StubModule([ServiceBinding("Broken", broken)])])

    application.initialize()

    with pytest.raises(RuntimeError, match="cannot build"):
        application.get("Broken")


def test_application_info(settings: AppSettings) -> None:
    application = Application(settings, [_session_module()])
    assert application.application_info().services.total_services == 0

    application.initialize()
    info = application.application_info()

    assert info.initialized
    assert info.name == "Quiz"
    assert info.version == "9.9.9"
    assert info.services.total_services == 5
    assert info.services.service_names[-1] == "GameSession"
    assert info.services.dependency_graph["GameSession"] == ["AppSettings"]


def test_health_check_reports_status(settings: AppSettings) -> None:
    application = Application(settings, [_session_module()])
    assert application.health_check().status == "unhealthy"
    assert application.health_check().services == {"application": "error"}

    application.initialize()
    report = application.health_check()

    assert report.status == "healthy"
    assert report.services["GameSession"] == "ok"
    assert set(report.services) == set(application.required_services())


def test_health_check_degraded_when_service_resolves_to_none(
    settings: AppSettings,
) -> None:
    module = StubModule([ServiceBinding("Empty", lambda _: None)], required=("Empty",))
    application = Application(settings, [module])
    application.initialize()

    report = application.health_check()

    assert report.status == "degraded"
    assert report.services["Empty"] == "error"


def test_child_application_shares_and_overrides(settings: AppSettings) -> None:
    application = Application(settings, [_session_module()])
    application.initialize()

    child = application.create_child()
    child.container.register("GameSession", lambda _: "child session")

    assert child.is_initialized
    assert child.container.parent is application.container
    assert child.get(APP_SETTINGS) is settings
    assert child.get("GameSession") == "child session"
    assert isinstance(application.get("GameSession"), GameSession)


def test_shutdown_clears_container(settings: AppSettings) -> None:
    application = Application(settings, [_session_module()])
    application.initialize()
    container = application.container

    application.shutdown()

    assert not application.is_initialized
    assert container.get_service_names() == []
    application.shutdown()


def test_health_check_unhealthy_when_required_service_fails() -> None:
    def broken(_: object) -> None:
        raise RuntimeError("cannot build")

    settings = AppSettings(container=ContainerSettings(verify_on_startup=False))
    module = StubModule([ServiceBinding("Broken", broken)], required=("Broken",))
    application = Application(settings, [module])
    application.initialize()

    report = application.health_check()

    assert report.status == "unhealthy"
    assert report.services["Broken"] == "error"
    assert report.services["AppSettings"] == "ok"


@pytest.fixture()
def global_application() -> Iterator[None]:
    """Ensure each test starts and ends without a global application."""

    ApplicationFactory.reset()
    yield
    ApplicationFactory.reset()


@pytest.mark.usefixtures("global_application")
def test_factory_returns_same_initialized_instance(settings: AppSettings) -> None:
    first = ApplicationFactory.get_instance(settings)
    second = ApplicationFactory.get_instance(AppSettings(app_name="Ignored"))

    assert first is second
    assert first.is_initialized
    assert second.settings is settings


@pytest.mark.usefixtures("global_application")
def test_factory_reset_shuts_down_instance(settings: AppSettings) -> None:
    first = ApplicationFactory.get_instance(settings)

    ApplicationFactory.reset()

    assert not first.is_initialized
    replacement = ApplicationFactory.get_instance(settings)
    assert replacement is not first
    assert replacement.is_initialized


@pytest.mark.usefixtures("global_application")
def test_factory_create_new_is_separate(settings: AppSettings) -> None:
    global_app = ApplicationFactory.get_instance(settings)

    fresh = ApplicationFactory.create_new(settings, [_session_module()])

    assert fresh is not global_app
    assert fresh.is_initialized
    assert isinstance(fresh.get("GameSession"), GameSession)
    assert not global_app.container.has("GameSession")
    assert ApplicationFactory.get_instance() is global_app
