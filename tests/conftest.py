"""
Shared Test Configuration and Fixtures

Provides entry and configuration factories used across the test suite and
keeps configuration loading isolated from the developer's environment.
"""

import pytest

from activityfilter.core.config.models import AppConfig
from activityfilter.entries import Entry


def build_config(remove=None, options=None, run_on=None) -> AppConfig:
    """Build a validated AppConfig from camelCase sections, as written in config files."""
    data = {}
    if remove is not None:
        data["remove"] = remove
    if options is not None:
        data["options"] = options
    if run_on is not None:
        data["runOn"] = run_on
    return AppConfig.model_validate(data)


@pytest.fixture
def make_entry():
    """Factory for entries; every flag defaults to the 'plain, engaged' entry."""
    def _make(**overrides) -> Entry:
        values = {
            "id": "entry",
            "has_comments": True,
            "has_likes": True,
            "has_image": False,
            "has_video": False,
            "is_text_only": False,
            "text": "",
        }
        values.update(overrides)
        return Entry(**values)
    return _make


@pytest.fixture
def make_config():
    """Factory for configurations."""
    return build_config


@pytest.fixture(autouse=True)
def isolated_config_env(monkeypatch, tmp_path):
    """Keep config discovery away from real files and environment variables."""
    import os

    for key in list(os.environ):
        if key.startswith("ACTIVITYFILTER_"):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    monkeypatch.delenv("XDG_CONFIG_HOME", raising=False)
    monkeypatch.chdir(tmp_path)


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers", "cli: marks tests that drive the command-line interface"
    )
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests"
    )
