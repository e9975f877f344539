# file_explorer/core/navigation.py

import logging
import os
from pathlib import Path
from typing import Callable

from .exceptions import DirectoryNotFoundError
from .file_operations import sanitize_path

logger = logging.getLogger(__name__)

DirectoryListener = Callable[[str], None]


class NavigationModel:
    """
    Owns the explorer's current directory and its back/forward history.

    Whoever displays the directory's contents registers a listener. Every time
    the current directory changes, each listener is called with the new path,
    synchronously and in registration order, and is expected to re-list it.
    """

    def __init__(self, start_directory: str | os.PathLike | None = None):
        start = sanitize_path(start_directory) if start_directory else str(Path.home())
        if not os.path.isdir(start):
            logger.warning(f"Start directory '{start}' does not exist. Falling back to the home folder.")
            start = str(Path.home())
        self._current_directory = start
        self._back_stack: list[str] = []
        self._forward_stack: list[str] = []
        self._listeners: list[DirectoryListener] = []

    # --- Listener Registration ---

    def add_listener(self, listener: DirectoryListener) -> None:
        if listener not in self._listeners:
            self._listeners.append(listener)

    def remove_listener(self, listener: DirectoryListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    # --- Navigation ---

    @property
    def current_directory(self) -> str:
        return self._current_directory

    @property
    def can_go_back(self) -> bool:
        return bool(self._back_stack)

    @property
    def can_go_forward(self) -> bool:
        return bool(self._forward_stack)

    def set_current_directory(self, path: str | os.PathLike) -> None:
        """
        Navigates to a new directory, recording the old one in the back history.

        Raises:
            DirectoryNotFoundError: The path is not an existing directory. The
                current directory and history are left untouched.
        """
        new_directory = self._validated(path)
        if new_directory == self._current_directory:
            return

        self._back_stack.append(self._current_directory)
        self._forward_stack.clear()
        self._change_to(new_directory)

    def go_back(self) -> bool:
        """Returns to the previous directory. Returns False if there is none."""
        if not self._back_stack:
            return False
        target = self._validated(self._back_stack[-1])
        self._back_stack.pop()
        self._forward_stack.append(self._current_directory)
        self._change_to(target)
        return True

    def go_forward(self) -> bool:
        """Re-visits the directory left by go_back(). Returns False if there is none."""
        if not self._forward_stack:
            return False
        target = self._validated(self._forward_stack[-1])
        self._forward_stack.pop()
        self._back_stack.append(self._current_directory)
        self._change_to(target)
        return True

    def go_up(self) -> bool:
        """Navigates to the parent directory. Returns False at a filesystem root."""
        parent = os.path.dirname(self._current_directory)
        if parent == self._current_directory:
            return False
        self.set_current_directory(parent)
        return True

    def refresh(self) -> None:
        """Asks every listener to re-list the current directory."""
        self._notify()

    # --- Helpers ---

    @staticmethod
    def _validated(path: str | os.PathLike) -> str:
        clean_path = sanitize_path(path)
        if not os.path.isdir(clean_path):
            raise DirectoryNotFoundError(f"'{clean_path}' is not a directory.", path=clean_path)
        return clean_path

    def _change_to(self, new_directory: str) -> None:
        logger.info(f"Current directory changed to '{new_directory}'")
        self._current_directory = new_directory
        self._notify()

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self._current_directory)
