"""Central test fixtures - imports from the sample application."""

import warnings
from pathlib import Path

import pytest

from flywheel import ApplicationSettings, ApplicationType, ConfigurationRegistry
from flywheel.context import clear_context
from tests.fixtures.sample_app import RecordingLoader, SampleApplication


@pytest.fixture(autouse=True)
def clear_request_context():
    """Clear the request context before and after each test."""
    clear_context()
    yield
    clear_context()


@pytest.fixture(autouse=True)
def restore_showwarning():
    """Put back whatever warnings hook was active before the test."""
    original = warnings.showwarning
    yield
    warnings.showwarning = original


@pytest.fixture
def registry() -> ConfigurationRegistry:
    """Create an isolated configuration registry."""
    return ConfigurationRegistry()


@pytest.fixture
def loader() -> RecordingLoader:
    """Create a loader that records alias imports."""
    return RecordingLoader()


@pytest.fixture
def settings() -> ApplicationSettings:
    """Create settings independent of the process environment."""
    return ApplicationSettings(error_log_level="ERROR", default_locale="en-Us")


@pytest.fixture
def app_dir(tmp_path: Path) -> Path:
    """Create an empty application directory."""
    path = tmp_path / "app"
    path.mkdir()
    return path


@pytest.fixture
def make_app(registry, loader, settings):
    """Factory booting applications against the isolated collaborators."""
    created = []

    def factory(config, app_type=ApplicationType.WEB, cls=SampleApplication, **kwargs):
        kwargs.setdefault("registry", registry)
        kwargs.setdefault("loader", loader)
        kwargs.setdefault("settings", settings)
        app = cls(config, app_type, **kwargs)
        created.append(app)
        return app

    yield factory

    for app in created:
        app.error_interceptor.uninstall()
