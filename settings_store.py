"""
JSON settings file kept next to the script (or the frozen executable).
"""

import json
import logging
import sys
from pathlib import Path

logger = logging.getLogger(__name__)

CONFIG_NAME = "config.json"

DEFAULT_CONFIG = {
    "display_font": None,
    "show_history": True,
    "history_limit": 50,
}


def get_app_path():
    """Resolve the correct path for both script and frozen (PyInstaller) execution."""
    if getattr(sys, 'frozen', False):
        return Path(sys.executable).parent
    else:
        return Path(__file__).parent


def default_config_path():
    return get_app_path() / CONFIG_NAME


def load_config(path=None):
    """Load settings, falling back to defaults for anything missing or unreadable"""
    path = Path(path) if path is not None else default_config_path()
    config = dict(DEFAULT_CONFIG)

    if not path.exists():
        return config

    try:
        with open(path, 'r') as f:
            saved_config = json.load(f)
    except (OSError, ValueError) as e:
        logger.warning("Error loading config %s: %s", path, e)
        return config

    if not isinstance(saved_config, dict):
        logger.warning("Ignoring config %s: expected a JSON object", path)
        return config

    config.update({k: v for k, v in saved_config.items() if k in DEFAULT_CONFIG})

    limit = config.get("history_limit")
    if not isinstance(limit, int) or isinstance(limit, bool) or limit < 1:
        logger.warning("Invalid history_limit %r, using %d", limit, DEFAULT_CONFIG["history_limit"])
        config["history_limit"] = DEFAULT_CONFIG["history_limit"]

    return config


def save_config(config, path=None):
    """Save settings. Returns False if the file could not be written."""
    path = Path(path) if path is not None else default_config_path()
    try:
        with open(path, 'w') as f:
            json.dump(config, f, indent=4)
    except OSError as e:
        logger.warning("Error saving config %s: %s", path, e)
        return False
    return True
