# file_explorer/core/file_item.py

import logging
import os
import shutil
from pathlib import Path

from .exceptions import FileOperationError, InvalidOperationError
from .file_operations import FileType, determine_type, is_hidden_path, sanitize_path, send_item_to_trash

logger = logging.getLogger(__name__)

# Returned by last_modified_time for entries that are not on disk.
MISSING_MODIFIED_TIME = 0.0


class FileItem:
    """
    A single entry on the local filesystem: a drive, a folder or a file.

    The item's type is fixed at construction. When no type is given the
    filesystem is inspected once: existing directories become folders and
    everything else (including paths that do not exist yet) becomes a file.
    Drives must always be constructed with an explicit FileType.DRIVE.

    The entry on disk may change or disappear at any time; every operation
    checks the disk again rather than trusting what was true at construction.
    """

    def __init__(self, path: str | os.PathLike, file_type: FileType | None = None):
        """
        Args:
            path: The location of the entry. It is sanitized immediately.
            file_type: The kind of entry. When omitted, it is detected from disk.
        """
        self._path = sanitize_path(path)
        self._file_type = file_type if file_type is not None else determine_type(self._path)

    # --- File Operations ---

    def move_to(self, target_directory: str | os.PathLike) -> None:
        """
        Moves the entry into a directory, keeping its name.

        Raises:
            InvalidOperationError: The item would land on itself, the item is a
                drive, or a folder would be moved inside its own tree.
            FileOperationError: The operating system refused the move, or an
                entry with the same name already exists in the target.
        """
        destination = self._destination_in(target_directory)
        self._check_target_directory(target_directory)

        if os.path.lexists(destination):
            raise FileOperationError(
                f"Cannot move '{self.file_name}': '{destination}' already exists.",
                path=destination,
                cause=FileExistsError(destination),
            )

        logger.info(f"Moving '{self._path}' to '{destination}'")
        try:
            # shutil.move renames in place when it can. Across filesystems it
            # falls back to copy-then-delete, recursively for folders.
            shutil.move(self._path, destination)
        except OSError as e:
            logger.error(f"Move of '{self._path}' failed: {e}")
            raise FileOperationError(f"Could not move '{self.file_name}': {e}", path=self._path, cause=e) from e

    def copy_to(self, target_directory: str | os.PathLike) -> None:
        """
        Copies the entry into a directory, keeping its name.

        If the entry no longer exists (for example it was deleted while still
        held on the clipboard), nothing is copied and no error is raised.

        Raises:
            InvalidOperationError: Same conditions as move_to().
            FileOperationError: The operating system refused the copy.
        """
        destination = self._destination_in(target_directory)

        if not os.path.lexists(self._path):
            logger.info(f"'{self._path}' no longer exists. Nothing to copy.")
            return

        self._check_target_directory(target_directory)

        logger.info(f"Copying '{self._path}' to '{destination}'")
        try:
            if self._file_type is FileType.FOLDER:
                # Existing folders at the destination are merged into.
                shutil.copytree(self._path, destination, symlinks=True, dirs_exist_ok=True)
            else:
                if os.path.isdir(destination):
                    raise IsADirectoryError(f"'{destination}' is a directory")
                shutil.copy2(self._path, destination)
        except OSError as e:
            logger.error(f"Copy of '{self._path}' failed: {e}")
            raise FileOperationError(f"Could not copy '{self.file_name}': {e}", path=self._path, cause=e) from e

    def write_to_disk(self) -> bool:
        """
        Creates the entry on disk: an empty file for files, a directory for folders.

        Returns:
            True if the entry was created. False if it already existed, if the
            item is a drive, or if a folder could not be created.

        Raises:
            FileOperationError: A file could not be created for a reason other
                than already existing.
        """
        if self._file_type is FileType.FILE:
            try:
                Path(self._path).touch(exist_ok=False)
            except FileExistsError:
                logger.debug(f"'{self._path}' already exists.")
                return False
            except OSError as e:
                logger.error(f"Could not create file '{self._path}': {e}")
                raise FileOperationError(f"Could not create '{self.file_name}': {e}", path=self._path, cause=e) from e
            logger.info(f"Created file '{self._path}'")
            return True

        if self._file_type is FileType.FOLDER:
            try:
                os.mkdir(self._path)
            except OSError as e:
                logger.warning(f"Could not create folder '{self._path}': {e}")
                return False
            logger.info(f"Created folder '{self._path}'")
            return True

        # Drives cannot be created.
        return False

    def rename(self, new_name: str) -> bool:
        """
        Renames the entry in place, keeping it in the same parent directory.

        Returns:
            True on success. False for drives, invalid names, names that are
            already taken, or any filesystem error.
        """
        if self._file_type is FileType.DRIVE:
            return False

        if not _is_valid_name(new_name):
            logger.warning(f"Refusing to rename '{self._path}' to invalid name '{new_name}'")
            return False

        target = os.path.join(os.path.dirname(self._path), new_name)
        if os.path.lexists(target):
            logger.warning(f"Cannot rename '{self._path}': '{new_name}' already exists.")
            return False

        try:
            os.rename(self._path, target)
        except OSError as e:
            logger.error(f"Rename of '{self._path}' to '{new_name}' failed: {e}", exc_info=True)
            return False

        logger.info(f"Renamed '{self._path}' to '{new_name}'")
        return True

    def send_to_trash(self) -> bool:
        """Moves the entry to the OS trash. Returns False for drives or on failure."""
        if self._file_type is FileType.DRIVE:
            return False
        return send_item_to_trash(self._path)

    # --- Queries ---

    @property
    def file_name(self) -> str:
        """The display name. Drives have no name segment, so their full path is used."""
        if self._file_type is FileType.DRIVE:
            return self._path
        return os.path.basename(self._path)

    @property
    def item_directory(self) -> str:
        """The absolute path of the entry."""
        return self._path

    @property
    def path(self) -> Path:
        return Path(self._path)

    @property
    def parent_directory(self) -> str:
        return os.path.dirname(self._path)

    @property
    def file_type(self) -> FileType:
        return self._file_type

    @property
    def is_hidden(self) -> bool:
        if self._file_type is FileType.DRIVE:
            return False
        return is_hidden_path(self._path)

    @property
    def exists(self) -> bool:
        return os.path.lexists(self._path)

    @property
    def last_modified_time(self) -> float:
        """Seconds since the epoch, or MISSING_MODIFIED_TIME if the entry is gone."""
        try:
            return os.path.getmtime(self._path)
        except OSError:
            return MISSING_MODIFIED_TIME

    @property
    def size(self) -> int:
        """Size in bytes for files; 0 for folders, drives and missing entries."""
        if self._file_type is not FileType.FILE:
            return 0
        try:
            return os.path.getsize(self._path)
        except OSError:
            return 0

    # --- Helpers ---

    def _destination_in(self, target_directory: str | os.PathLike) -> str:
        """Works out where the entry would land and applies the same-path guard."""
        destination = os.path.join(sanitize_path(target_directory), os.path.basename(self._path))

        if os.path.normcase(destination) == os.path.normcase(self._path):
            raise InvalidOperationError(
                f"'{self.file_name}' is already in '{target_directory}'.", path=self._path
            )
        if self._file_type is FileType.DRIVE:
            raise InvalidOperationError(f"Drive '{self._path}' cannot be moved or copied.", path=self._path)
        if self._file_type is FileType.FOLDER and _is_inside(destination, self._path):
            raise InvalidOperationError(
                f"Cannot place folder '{self.file_name}' inside itself.", path=self._path
            )
        return destination

    @staticmethod
    def _check_target_directory(target_directory: str | os.PathLike) -> None:
        target = sanitize_path(target_directory)
        if not os.path.isdir(target):
            error = NotADirectoryError(target)
            raise FileOperationError(f"'{target}' is not a directory.", path=target, cause=error) from error

    def __eq__(self, other):
        if not isinstance(other, FileItem):
            return NotImplemented
        return self._path == other._path and self._file_type is other._file_type

    def __hash__(self):
        return hash((self._path, self._file_type))

    def __repr__(self):
        return f"FileItem({self._path!r}, {self._file_type})"


def _is_valid_name(name: str) -> bool:
    """A name must be a single, non-empty path segment."""
    if not name or name in (".", ".."):
        return False
    separators = [os.sep] + ([os.altsep] if os.altsep else [])
    return not any(sep in name for sep in separators)


def _is_inside(candidate: str, folder: str) -> bool:
    candidate = os.path.normcase(candidate)
    folder = os.path.normcase(folder)
    return candidate.startswith(folder.rstrip(os.sep) + os.sep)
