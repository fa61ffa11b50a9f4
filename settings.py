import json
import os

from errors import SettingsError

SETTINGS_FILE = os.path.join(os.path.dirname(os.path.abspath(__file__)), "settings.json")
SETTINGS_ENV = "MCA_ANALYZER_SETTINGS"

DEFAULTS = {
    "mode": "composition",
    "area": [0, 32, 0, 32],
    "chunk_cache_size": 32,
    "max_vein_size": 16,
    "target_blocks": ["minecraft:diamond_ore", "minecraft:deepslate_diamond_ore"],
    "vein_section_range": [0, 4],
    "composition_section_range": None,
    "dedup": "location",
    "global_palette": False,
    "heatmap": "seeds",
    "image": "diamonds.png",
    "log_level": "INFO",
}

CHOICES = {
    "mode": ("composition", "veins"),
    "dedup": ("location", "members"),
    "heatmap": ("seeds", "veins"),
}


def load(path=None) -> dict:
    '''
    read the settings json file and fill in every key it doesn't set from DEFAULTS
    path: the json file, falls back to $MCA_ANALYZER_SETTINGS and then to settings.json
    return: a new dict
    '''
    if path is None:
        path = os.environ.get(SETTINGS_ENV, SETTINGS_FILE)
    settings = dict(DEFAULTS)
    if os.path.exists(path):
        with open(path, encoding="utf-8") as f:
            settings.update(json.load(f))
    validate(settings)
    return settings


def validate(settings: dict):
    for key, allowed in CHOICES.items():
        if settings[key] not in allowed:
            raise SettingsError(f"{key} must be one of {', '.join(allowed)}, not {settings[key]!r}")
    if len(settings["area"]) != 4:
        raise SettingsError("area must be [min_x, max_x, min_z, max_z]")
    if settings["chunk_cache_size"] < 1:
        raise SettingsError("chunk_cache_size must be at least 1")
    if settings["max_vein_size"] < 1:
        raise SettingsError("max_vein_size must be at least 1")


def section_range(bounds):
    '''[start, end] from the json file -> range, null means every section'''
    if bounds is None:
        return None
    start, end = bounds
    return range(start, end)
