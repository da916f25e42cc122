"""Shared fixtures for pepload tests."""

import pytest

from pepload import config as config_module
from pepload.cli.commands import config_cmd


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Point the config file at a temp dir and clear env overrides."""
    config_dir = tmp_path / "config"
    config_file = config_dir / "config.json"
    monkeypatch.setattr(config_module, "CONFIG_DIR", config_dir)
    monkeypatch.setattr(config_module, "CONFIG_FILE", config_file)
    monkeypatch.setattr(config_cmd, "CONFIG_FILE", config_file)
    for var in ("PEPLOAD_BUFFER_SIZE", "PEPLOAD_RAW_FORMAT", "PEPLOAD_CLI_MODE"):
        monkeypatch.delenv(var, raising=False)
    config_module.reset_config()
    yield config_file
    config_module.reset_config()
