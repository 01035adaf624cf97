# config_manager.py
import json
import logging
from pathlib import Path

logger = logging.getLogger(__name__)

config_json = Path(__file__).resolve().parent.parent / "config.json"
ui_strings = Path(__file__).resolve().parent.parent / "ui_strings.json"


# Used for every key the file does not provide (or when the file is unreadable)
DEFAULT_SETTINGS = {
    "darkmode": False,
    "after_paste_enter": False,
    "debug": False,
    "history_limit": 10,
}

DEFAULT_DESCRIPTIONS = {
    "darkmode": "Dark mode",
    "after_paste_enter": "Calculate right after pasting",
    "debug": "Debug logging",
    "history_limit": "History entries",
}


def _read_json(path, defaults):
    try:
        with open(path, 'r', encoding='utf-8') as f:
            loaded = json.load(f)

    except (FileNotFoundError, json.JSONDecodeError) as e:
        logger.warning("Could not read %s, using defaults: %s", path, e)
        return dict(defaults)

    if not isinstance(loaded, dict):
        logger.warning("%s does not hold a JSON object, using defaults", path)
        return dict(defaults)

    merged = dict(defaults)
    merged.update(loaded)
    return merged


def load_setting_value(key_value):
    settings_dict = _read_json(config_json, DEFAULT_SETTINGS)

    if key_value == "all":
        return settings_dict

    else:
        return settings_dict.get(key_value, 0)


def load_setting_description(key_value):
    descriptions = _read_json(ui_strings, DEFAULT_DESCRIPTIONS)

    if key_value == "all":
        return descriptions

    else:
        return descriptions.get(key_value, "")


def save_setting(settings_dict):
    try:
        with open(config_json, 'w', encoding='utf-8') as f:
            json.dump(settings_dict, f, indent=4)
            logger.info("Settings saved to %s", config_json)
            return settings_dict

    except (OSError, TypeError) as e:
        logger.error("Settings could not be saved: %s", e)
        return {}
