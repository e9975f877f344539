# file_explorer/gui/action_controller.py

import logging
import os
from pathlib import Path

from PySide6.QtCore import QObject, QUrl, Signal, Slot
from PySide6.QtGui import QDesktopServices

from file_explorer.core.exceptions import ExplorerError, InvalidOperationError
from file_explorer.core.file_item import FileItem
from file_explorer.core.file_operations import FileType, get_unique_path

from .view_models import MainViewModel

logger = logging.getLogger(__name__)

DEFAULT_FOLDER_NAME = "New Folder"
DEFAULT_FILE_NAME = "New File.txt"


class ActionController(QObject):
    """
    The non-visual brain of the GUI: carries out the file operations the user
    asks for and reports the outcome.

    Every operation runs synchronously on the GUI thread, then the file grid is
    refreshed. Errors from the core are logged and turned into message boxes
    via show_message_box; nothing here lets an exception escape into Qt.
    """
    status_updated = Signal(str, bool)
    show_message_box = Signal(str, str, str)

    def __init__(self, view_model: MainViewModel, parent=None):
        super().__init__(parent)
        self.view_model = view_model

    # --- Creation ---

    def create_folder(self, name: str = DEFAULT_FOLDER_NAME) -> FileItem | None:
        """Creates a folder in the current directory, numbering the name if taken."""
        return self._create(name, FileType.FOLDER)

    def create_file(self, name: str = DEFAULT_FILE_NAME) -> FileItem | None:
        """Creates an empty file in the current directory, numbering the name if taken."""
        return self._create(name, FileType.FILE)

    def _create(self, name: str, file_type: FileType) -> FileItem | None:
        target = get_unique_path(Path(self.view_model.current_directory) / name)
        item = FileItem(target, file_type)
        try:
            created = item.write_to_disk()
        except ExplorerError as e:
            self._report_error("Create Failed", e)
            return None

        if not created:
            self.status_updated.emit(f"Could not create '{item.file_name}'.", True)
            return None

        self.status_updated.emit(f"Created '{item.file_name}'.", False)
        self.view_model.refresh()
        return item

    # --- Clipboard ---

    def copy_items(self, items: list[FileItem]):
        if not items:
            return
        self.view_model.clipboard.copy(items)
        self.status_updated.emit(f"Copied {len(items)} item(s).", False)

    def cut_items(self, items: list[FileItem]):
        if not items:
            return
        self.view_model.clipboard.cut(items)
        self.status_updated.emit(f"Cut {len(items)} item(s).", False)

    @Slot()
    def paste(self) -> bool:
        """Pastes the clipboard into the current directory."""
        clipboard = self.view_model.clipboard
        if clipboard.is_empty:
            self.status_updated.emit("Nothing to paste.", False)
            return False

        try:
            pasted = clipboard.paste(self.view_model.current_directory)
        except InvalidOperationError as e:
            logger.warning(f"Paste rejected: {e}")
            self.show_message_box.emit("info", "Cannot Paste", str(e))
            return False
        except ExplorerError as e:
            self._report_error("Paste Failed", e)
            return False
        finally:
            self.view_model.refresh()

        self.status_updated.emit(f"Pasted {len(pasted)} item(s).", False)
        return True

    # --- Item Operations ---

    def rename_item(self, item: FileItem, new_name: str) -> bool:
        if not new_name or new_name == item.file_name:
            return False
        if not item.rename(new_name):
            self.show_message_box.emit(
                "critical", "Rename Failed",
                f"Could not rename '{item.file_name}' to '{new_name}'.\n"
                "The name may already be taken or be invalid."
            )
            return False

        self.status_updated.emit(f"Renamed '{item.file_name}' to '{new_name}'.", False)
        self.view_model.refresh()
        return True

    def trash_items(self, items: list[FileItem]) -> int:
        """Sends items to the trash. Returns how many were trashed."""
        if not items:
            return 0
        failed = [item.file_name for item in items if not item.send_to_trash()]
        trashed = len(items) - len(failed)
        self.view_model.refresh()

        if failed:
            self.show_message_box.emit(
                "critical", "Move to Trash Failed",
                "These items could not be moved to the trash:\n" + "\n".join(failed)
            )
        self.status_updated.emit(f"Moved {trashed} item(s) to the trash.", bool(failed))
        return trashed

    def open_item(self, item: FileItem) -> bool:
        """Navigates into folders and drives; hands files to the desktop's default application."""
        if item.file_type is not FileType.FILE:
            return self.view_model.open_item(item)

        if not os.path.exists(item.item_directory):
            self.status_updated.emit(f"'{item.file_name}' no longer exists.", True)
            self.view_model.refresh()
            return False
        opened = QDesktopServices.openUrl(QUrl.fromLocalFile(item.item_directory))
        if not opened:
            self.status_updated.emit(f"No application could open '{item.file_name}'.", True)
        return opened

    def pin_to_quick_access(self, item: FileItem) -> bool:
        if item.file_type is not FileType.FOLDER:
            return False
        return self.view_model.quick_access.pin(item.item_directory)

    # --- Helpers ---

    def _report_error(self, title: str, error: ExplorerError):
        logger.error(f"{title}: {error}")
        self.status_updated.emit(f"Error: {error}", True)
        self.show_message_box.emit("critical", title, str(error))
