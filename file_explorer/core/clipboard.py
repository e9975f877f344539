# file_explorer/core/clipboard.py

import logging
import os
from enum import Enum, auto
from typing import Iterable

from .file_item import FileItem

logger = logging.getLogger(__name__)


class ClipboardMode(Enum):
    """Whether pasting should duplicate the held items or relocate them."""
    COPY = auto()
    CUT = auto()


class FileClipboard:
    """
    Holds the items the user copied or cut until they are pasted.

    Copied items stay on the clipboard after pasting so they can be pasted
    again. An item deleted in the meantime is skipped by FileItem.copy_to().
    Cut items are moved on paste and the clipboard is then emptied.
    """

    def __init__(self):
        self._items: list[FileItem] = []
        self._mode = ClipboardMode.COPY

    @property
    def items(self) -> list[FileItem]:
        return list(self._items)

    @property
    def mode(self) -> ClipboardMode:
        return self._mode

    @property
    def is_empty(self) -> bool:
        return not self._items

    def copy(self, items: Iterable[FileItem]) -> None:
        self._hold(items, ClipboardMode.COPY)

    def cut(self, items: Iterable[FileItem]) -> None:
        self._hold(items, ClipboardMode.CUT)

    def clear(self) -> None:
        self._items = []
        self._mode = ClipboardMode.COPY

    def paste(self, target_directory: str | os.PathLike) -> list[FileItem]:
        """
        Copies or moves every held item into a directory.

        Returns:
            The items that were handled, in clipboard order.

        Raises:
            InvalidOperationError, FileOperationError: From the first item that
                fails. Items before it have already been pasted.
        """
        pasted = []
        for item in self._items:
            if self._mode is ClipboardMode.CUT:
                item.move_to(target_directory)
            else:
                item.copy_to(target_directory)
            pasted.append(item)

        logger.info(f"Pasted {len(pasted)} item(s) into '{target_directory}' ({self._mode.name.lower()})")
        if self._mode is ClipboardMode.CUT:
            self.clear()
        return pasted

    def _hold(self, items: Iterable[FileItem], mode: ClipboardMode) -> None:
        self._items = list(items)
        self._mode = mode
        logger.debug(f"Clipboard now holds {len(self._items)} item(s) to {mode.name.lower()}")
