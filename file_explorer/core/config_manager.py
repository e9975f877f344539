# file_explorer/core/config_manager.py

import json
import logging
import shutil
from dataclasses import asdict, dataclass, field
from pathlib import Path

# A dedicated logger for the module that manages the user's settings.
logger = logging.getLogger(__name__)

DEFAULT_THEME = "dark_theme.qss"


@dataclass
class ExplorerSettings:
    """
    User preferences that survive between sessions.

    quick_access is None until the user has pinned or unpinned something;
    the GUI then offers the default folders. An empty list means the user
    removed every pin.
    """

    theme: str = DEFAULT_THEME
    show_hidden: bool = False
    start_directory: str = field(default_factory=lambda: str(Path.home()))
    quick_access: list[str] | None = None


# The JSON type each stored value must have.
_FIELD_TYPES = {
    "theme": str,
    "show_hidden": bool,
    "start_directory": str,
}


def load_settings(settings_path: Path) -> ExplorerSettings:
    """
    Reads the settings file, falling back to defaults for anything missing.

    A missing, unreadable or corrupt file gives the default settings. A value
    of the wrong type is replaced by its default on its own, so one bad entry
    does not discard the rest. Unknown keys are ignored.
    """
    if not settings_path.exists():
        logger.info(f"No settings file at '{settings_path}'. Using defaults.")
        return ExplorerSettings()

    try:
        with open(settings_path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        logger.warning(f"Could not read settings from '{settings_path}', using defaults: {e}")
        return ExplorerSettings()

    if not isinstance(data, dict):
        logger.warning(f"Settings file '{settings_path}' does not hold an object. Using defaults.")
        return ExplorerSettings()

    values = {}
    for key, expected_type in _FIELD_TYPES.items():
        if key not in data:
            continue
        if isinstance(data[key], expected_type):
            values[key] = data[key]
        else:
            logger.warning(f"Ignoring setting '{key}': expected {expected_type.__name__}, got {data[key]!r}")

    quick_access = data.get("quick_access")
    if quick_access is not None:
        if isinstance(quick_access, list) and all(isinstance(path, str) for path in quick_access):
            values["quick_access"] = quick_access
        else:
            logger.warning(f"Ignoring setting 'quick_access': expected a list of paths, got {quick_access!r}")

    return ExplorerSettings(**values)


def save_settings(settings_path: Path, settings: ExplorerSettings) -> bool:
    """
    Writes the settings file, keeping a backup of the previous version.

    If the write fails, the backup is restored so the file is never left
    half-written.

    Returns:
        True if the settings were saved.
    """
    backup_path = settings_path.with_suffix(".json.bak")
    has_backup = False
    try:
        settings_path.parent.mkdir(parents=True, exist_ok=True)
        if settings_path.exists():
            shutil.copy(settings_path, backup_path)
            has_backup = True

        with open(settings_path, 'w', encoding='utf-8') as f:
            json.dump(asdict(settings), f, indent=2)
        logger.info(f"Settings saved to '{settings_path}'")
        return True

    except (OSError, TypeError) as e:
        logger.error(f"Failed to save settings: {e}", exc_info=True)
        if has_backup:
            shutil.copy(backup_path, settings_path)
            logger.warning("Restored settings from backup after a failed save.")
        return False
