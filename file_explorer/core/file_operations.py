# file_explorer/core/file_operations.py

import logging
import os
import stat
import sys
from enum import Enum, auto
from pathlib import Path

from send2trash import send2trash

# Set up a logger for this module. The main application will configure its handlers.
logger = logging.getLogger(__name__)


class FileType(Enum):
    """
    The kind of entry a FileItem represents. Drives behave differently from
    folders (they cannot be created, renamed, moved or trashed).
    """
    DRIVE = auto()
    FOLDER = auto()
    FILE = auto()


def sanitize_path(path: str | os.PathLike) -> str:
    """
    Cleans up a user-typed or programmatic path.

    A leading '~' is expanded to the user's home directory, the path is made
    absolute, and separators are normalized to the OS-native form with no
    trailing separator and no '.' or '..' segments. Surrounding whitespace
    is kept, since it can be part of a real file name; trim typed text before
    calling this.

    Example:
        '~/Documents//notes/../' -> '/home/user/Documents'
    """
    raw = os.fspath(path)
    if raw.startswith("~"):
        raw = os.path.expanduser(raw)
    return os.path.abspath(raw)


def determine_type(path: str | os.PathLike) -> FileType:
    """
    Inspects the filesystem once and classifies a path as a folder or a file.

    Paths that do not exist are classified as files. Drives are never detected
    here; callers that need one must say so explicitly.
    """
    if os.path.isdir(path):
        return FileType.FOLDER
    return FileType.FILE


def is_hidden_path(path: str | os.PathLike) -> bool:
    """
    Returns whether the operating system considers an entry hidden.

    On Windows this is the 'hidden' file attribute, which requires the entry to
    exist. Everywhere else it is the dot-prefix naming convention.
    """
    name = os.path.basename(os.fspath(path))
    if sys.platform == "win32":
        try:
            attributes = os.stat(path).st_file_attributes
        except OSError:
            return False
        return bool(attributes & stat.FILE_ATTRIBUTE_HIDDEN)
    return name.startswith(".")


def send_item_to_trash(path: str | os.PathLike) -> bool:
    """
    Hands an entry over to the operating system's trash / recycle bin.

    Returns:
        True if the entry was trashed, False if the platform refused or the
        entry could not be found.
    """
    try:
        send2trash(os.fspath(path))
    except OSError as e:
        # send2trash raises TrashPermissionError (an OSError) when the platform
        # has no usable trash for this volume.
        logger.error(f"Could not send '{path}' to the trash: {e}")
        return False
    logger.info(f"Sent '{path}' to the trash.")
    return True


def get_unique_path(destination_path: Path) -> Path:
    """
    Generates a unique path if the destination already exists by appending a number.

    Example:
        If 'New Folder' exists, it will return 'New Folder_1'.
        If 'notes.txt' and 'notes_1.txt' exist, it will return 'notes_2.txt'.

    Args:
        destination_path: The original intended destination path.

    Returns:
        A path object that does not currently exist on the filesystem.
    """
    if not os.path.lexists(destination_path):
        return destination_path

    parent = destination_path.parent
    stem = destination_path.stem
    suffix = destination_path.suffix
    counter = 1

    while True:
        new_path = parent.joinpath(f"{stem}_{counter}{suffix}")
        if not os.path.lexists(new_path):
            logger.debug(f"Found unique path for '{destination_path}': '{new_path}'")
            return new_path
        counter += 1
