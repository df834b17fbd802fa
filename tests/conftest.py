"""Shared fixtures: isolate every test from the user's config and environment."""

import pytest

import scriptlib.config as config_module


@pytest.fixture(autouse=True)
def isolated_environment(tmp_path, monkeypatch):
    """Empty config location, no inherited SCRIPTLIB_* variables, no cached settings."""
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))
    for name in ("VERBOSE", "DEBUG", "DRY_RUN", "HELP"):
        monkeypatch.delenv(f"SCRIPTLIB_{name}", raising=False)
    config_module._settings_cache = None
    yield
    config_module._settings_cache = None
