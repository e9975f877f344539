# file_explorer/gui/resources.py

import logging
import sys
from pathlib import Path

from PySide6.QtCore import QDir, QSize
from PySide6.QtGui import QIcon
from PySide6.QtWidgets import QApplication, QStyle

logger = logging.getLogger(__name__)


def get_resource_path(relative_path: str) -> Path:
    """
    Gets the absolute path to a resource, working for both development (source)
    and production (PyInstaller bundled executable).
    """
    try:
        # PyInstaller unpacks bundled data into `sys._MEIPASS`.
        base_path = Path(sys._MEIPASS)
    except AttributeError:
        # Running from source: the project root is three levels up from this file.
        base_path = Path(__file__).resolve().parent.parent.parent

    return base_path / relative_path


ASSETS_PATH = get_resource_path('assets')
STYLES_PATH = ASSETS_PATH / 'styles'
ICONS_PATH = ASSETS_PATH / 'icons'
CONFIG_PATH = get_resource_path('config')
SETTINGS_FILE_PATH = CONFIG_PATH / 'settings.json'

# Every icon the application asks for. Custom SVGs in assets/icons override
# the platform's standard icons.
REQUIRED_ICONS = [
    "app_icon", "drive", "folder", "file", "back", "forward", "up", "refresh",
    "new-folder", "new-file", "copy", "cut", "paste", "rename", "trash",
    "pin", "settings", "error", "info",
]
FALLBACK_ICON_NAME = "app_icon"
ICON_SIZE = QSize(20, 20)
GRID_ICON_SIZE = QSize(48, 48)

# Qt's built-in icons, used when an SVG is missing.
_STANDARD_ICONS = {
    "app_icon": QStyle.StandardPixmap.SP_DirHomeIcon,
    "drive": QStyle.StandardPixmap.SP_DriveHDIcon,
    "folder": QStyle.StandardPixmap.SP_DirIcon,
    "file": QStyle.StandardPixmap.SP_FileIcon,
    "back": QStyle.StandardPixmap.SP_ArrowBack,
    "forward": QStyle.StandardPixmap.SP_ArrowForward,
    "up": QStyle.StandardPixmap.SP_FileDialogToParent,
    "refresh": QStyle.StandardPixmap.SP_BrowserReload,
    "new-folder": QStyle.StandardPixmap.SP_FileDialogNewFolder,
    "new-file": QStyle.StandardPixmap.SP_FileIcon,
    "copy": QStyle.StandardPixmap.SP_FileDialogContentsView,
    "cut": QStyle.StandardPixmap.SP_DialogDiscardButton,
    "paste": QStyle.StandardPixmap.SP_DialogOpenButton,
    "rename": QStyle.StandardPixmap.SP_FileDialogDetailedView,
    "trash": QStyle.StandardPixmap.SP_TrashIcon,
    "pin": QStyle.StandardPixmap.SP_DialogApplyButton,
    "settings": QStyle.StandardPixmap.SP_ComputerIcon,
    "error": QStyle.StandardPixmap.SP_MessageBoxCritical,
    "info": QStyle.StandardPixmap.SP_MessageBoxInformation,
}

_icon_cache = {}


def validate_assets():
    """Logs a warning for every theme or icon file the application cannot find."""
    logger.info("Validating GUI assets...")

    themes_dir = STYLES_PATH / 'themes'
    if not themes_dir.is_dir():
        logger.warning(f"Themes directory not found at: {themes_dir}")

    missing_icons = [name for name in REQUIRED_ICONS if not (ICONS_PATH / f"{name}.svg").exists()]
    if missing_icons:
        logger.info(f"Using standard icons for: {', '.join(missing_icons)}")
    else:
        logger.info("All custom icons found.")


def available_themes() -> list[str]:
    """Returns the stylesheet file names found in the themes directory."""
    themes_dir = STYLES_PATH / 'themes'
    if not themes_dir.is_dir():
        return []
    return sorted(path.name for path in themes_dir.glob('*.qss'))


def load_stylesheet(theme_file: str) -> str:
    """
    Loads a theme's stylesheet and registers the 'assets' search path so that
    relative urls like `url(assets:icons/up.svg)` resolve.
    """
    QDir.addSearchPath("assets", str(ASSETS_PATH))

    theme_path = STYLES_PATH / 'themes' / theme_file
    if theme_path.exists():
        logger.info(f"Loading theme: {theme_file}")
        return theme_path.read_text(encoding='utf-8')
    logger.error(f"Failed to load theme file: {theme_path}")
    return ""


def get_icon(name: str) -> QIcon:
    """
    Creates and caches an icon. An SVG in assets/icons wins; otherwise the
    platform's standard icon is used, and finally the application icon.
    """
    if name in _icon_cache:
        return _icon_cache[name]

    icon_path = ICONS_PATH / f"{name}.svg"
    if icon_path.exists():
        icon = QIcon(str(icon_path))
    elif name in _STANDARD_ICONS and QApplication.instance() is not None:
        icon = QApplication.style().standardIcon(_STANDARD_ICONS[name])
    elif name == FALLBACK_ICON_NAME:
        # Avoid recursing forever when even the fallback is missing.
        return QIcon()
    else:
        icon = get_icon(FALLBACK_ICON_NAME)
        if QApplication.instance() is None:
            # Standard icons need an application; try again once there is one.
            return icon
        logger.warning(f"Icon '{name}' not found. Using fallback.")

    _icon_cache[name] = icon
    return icon
