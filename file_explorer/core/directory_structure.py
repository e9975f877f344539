# file_explorer/core/directory_structure.py

import logging
import os
import string
import sys
from pathlib import Path

from .exceptions import DirectoryNotFoundError
from .file_item import FileItem
from .file_operations import FileType, is_hidden_path, sanitize_path

logger = logging.getLogger(__name__)

# The folders offered under "Quick Access" when the user has not pinned any.
DEFAULT_QUICK_ACCESS_FOLDERS = ["Desktop", "Documents", "Downloads", "Pictures", "Music", "Videos"]


def get_directory_contents(directory: str | os.PathLike, show_hidden: bool = False) -> list[FileItem]:
    """
    Lists the immediate children of a directory.

    Each child is typed as a folder or a file by inspecting the disk. Folders
    come first, then files, each sorted by name without regard to case.

    Args:
        directory: The directory to list.
        show_hidden: Whether entries the OS considers hidden are included.

    Returns:
        A list of FileItem objects. An empty directory gives an empty list.

    Raises:
        DirectoryNotFoundError: The path is missing, is not a directory, or
            cannot be read.
    """
    clean_path = sanitize_path(directory)
    try:
        with os.scandir(clean_path) as entries:
            children = []
            for entry in entries:
                if not show_hidden and is_hidden_path(entry.path):
                    continue
                file_type = FileType.FOLDER if _entry_is_dir(entry) else FileType.FILE
                children.append(FileItem(entry.path, file_type))
    except OSError as e:
        logger.warning(f"Could not list '{clean_path}': {e}")
        raise DirectoryNotFoundError(f"'{clean_path}' is not a readable directory.", path=clean_path, cause=e) from e

    children.sort(key=lambda item: (item.file_type is not FileType.FOLDER, item.file_name.casefold()))
    logger.debug(f"Listed {len(children)} entries in '{clean_path}' (show_hidden={show_hidden})")
    return children


def _entry_is_dir(entry: os.DirEntry) -> bool:
    try:
        return entry.is_dir()
    except OSError:
        # A broken or unreadable entry is shown as a plain file.
        return False


def get_drives() -> list[FileItem]:
    """Returns the mounted filesystem roots as drive items."""
    if sys.platform == "win32":
        if hasattr(os, "listdrives"):
            roots = os.listdrives()
        else:
            roots = [f"{letter}:\\" for letter in string.ascii_uppercase if os.path.exists(f"{letter}:\\")]
    else:
        roots = [os.path.abspath(os.sep)]
    return [FileItem(root, FileType.DRIVE) for root in roots]


def get_default_quick_access() -> list[FileItem]:
    """Returns the home folder followed by the usual user folders that exist."""
    home = Path.home()
    candidates = [home] + [home / name for name in DEFAULT_QUICK_ACCESS_FOLDERS]
    return [FileItem(path, FileType.FOLDER) for path in candidates if path.is_dir()]
