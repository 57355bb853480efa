"""Shared fixtures for aoshelper tests."""

from __future__ import annotations

import pytest

from aoshelper.core.normalizer import build_index
from aoshelper.services.index_service import CommandIndex

SAMPLE_COMMANDS = {
    "show ip interface": {"description": "D1", "syntax": "show ip interface [name]"},
    "show ip isis status": {"description": "D2"},
    "show ip": "Displays IP settings.",
    "show vlan": {"description": "Displays VLANs.", "related_commands": [{"command": "vlan", "description": "Creates a VLAN."}]},
    "vlan": {"description": "Creates a VLAN.", "syntax": "vlan vlan_id [name description]"},
    "interfaces admin-state": {"description": "Enables or disables interfaces."},
}


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Keep config and history files out of the real home directory."""
    config_dir = tmp_path / "config"
    monkeypatch.setenv("AOSHELPER_CONFIG_DIR", str(config_dir))
    return config_dir


@pytest.fixture
def sample_commands():
    return {k: (dict(v) if isinstance(v, dict) else v) for k, v in SAMPLE_COMMANDS.items()}


@pytest.fixture
def root(sample_commands):
    return build_index(sample_commands)


@pytest.fixture
def index(sample_commands):
    return CommandIndex.from_raw(sample_commands)


@pytest.fixture(scope="session")
def bundled_index():
    return CommandIndex.load()
