import json

import pytest

import settings
from errors import SettingsError


def write(path, data):
    path.write_text(json.dumps(data), encoding="utf-8")
    return str(path)


def test_defaults_fill_missing_keys(tmp_path):
    config = settings.load(write(tmp_path / "settings.json", {"mode": "veins", "area": [1, 2, 3, 4]}))
    assert config["mode"] == "veins"
    assert config["area"] == [1, 2, 3, 4]
    assert config["chunk_cache_size"] == 32
    assert config["max_vein_size"] == 16
    assert config["dedup"] == "location"


def test_missing_file_gives_defaults(tmp_path):
    assert settings.load(str(tmp_path / "nothing.json")) == settings.DEFAULTS


def test_environment_variable(tmp_path, monkeypatch):
    monkeypatch.setenv(settings.SETTINGS_ENV, write(tmp_path / "other.json", {"heatmap": "veins"}))
    assert settings.load()["heatmap"] == "veins"


def test_shipped_settings_are_valid():
    config = settings.load(settings.SETTINGS_FILE)
    assert config["target_blocks"] == settings.DEFAULTS["target_blocks"]


@pytest.mark.parametrize("key,value", [
    ("mode", "layers"),
    ("dedup", "everything"),
    ("heatmap", "red"),
    ("area", [0, 1]),
    ("chunk_cache_size", 0),
    ("max_vein_size", 0),
])
def test_invalid_values(tmp_path, key, value):
    with pytest.raises(SettingsError):
        settings.load(write(tmp_path / "settings.json", {key: value}))


def test_section_range():
    assert settings.section_range(None) is None
    assert settings.section_range([0, 4]) == range(0, 4)
