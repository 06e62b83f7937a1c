"""Tests for configuration loading."""

import json

import pytest

from ndf.config import ConfigManager, NdfConfig, default_config_path
from ndf.errors import ConfigError


def write_config(path, data):
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


def test_defaults():
    config = NdfConfig()

    assert config.mode == "normal"
    assert config.bar_width == 50
    assert config.high_usage_ratio == 0.2
    assert config.anomaly_fraction == 0.10
    assert config.excluded_prefixes == []


def test_default_path_honours_xdg(monkeypatch, tmp_path):
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
    assert default_config_path() == tmp_path / "ndf" / "config.json"

    monkeypatch.delenv("XDG_CONFIG_HOME")
    assert default_config_path().parts[-3:] == (".config", "ndf", "config.json")


def test_missing_file(tmp_path):
    manager = ConfigManager(str(tmp_path / "config.json"))

    assert not manager.exists()
    assert manager.load_or_default() == NdfConfig()
    with pytest.raises(FileNotFoundError):
        manager.load()


def test_partial_config(tmp_path):
    path = write_config(tmp_path / "config.json", {"mode": "table", "anomaly_fraction": 0.25})

    config = ConfigManager(str(path)).load()

    assert config.mode == "table"
    assert config.anomaly_fraction == 0.25
    assert config.bar_width == 50


def test_full_config(tmp_path):
    data = {
        "mode": "compact",
        "bar_width": 30,
        "high_usage_ratio": 0.25,
        "anomaly_fraction": 0.05,
        "excluded_prefixes": ["/mnt/scratch"],
        "excluded_filesystems": ["nfs4"],
    }
    path = write_config(tmp_path / "config.json", data)

    assert ConfigManager(str(path)).load() == NdfConfig(**data)


@pytest.mark.parametrize("data", [
    {"mode": "fancy"},
    {"bar_width": 0},
    {"bar_width": "50"},
    {"bar_width": True},
    {"high_usage_ratio": 0},
    {"anomaly_fraction": 1.5},
    {"anomaly_fraction": None},
    {"excluded_prefixes": "/mnt"},
    {"colour": "always"},
])
def test_invalid_config(tmp_path, data):
    path = write_config(tmp_path / "config.json", data)

    with pytest.raises(ConfigError):
        ConfigManager(str(path)).load()


def test_malformed_json(tmp_path):
    path = tmp_path / "config.json"
    path.write_text("{not json", encoding="utf-8")

    with pytest.raises(ConfigError):
        ConfigManager(str(path)).load()


def test_non_object_json(tmp_path):
    path = write_config(tmp_path / "config.json", [1, 2])

    with pytest.raises(ConfigError, match="JSON object"):
        ConfigManager(str(path)).load()
