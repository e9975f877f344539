# file_explorer/gui/view_models.py

"""
View models sitting between the explorer core and the Qt widgets.

The widgets never touch the filesystem directly. They read from these
objects and call their methods; the view models talk to the core
(NavigationModel, get_directory_contents, FileClipboard) and announce
changes through Qt signals.
"""

import datetime
import logging
import os

from PySide6.QtCore import QAbstractListModel, QModelIndex, QObject, Qt, Signal

from file_explorer.core.clipboard import FileClipboard
from file_explorer.core.config_manager import ExplorerSettings
from file_explorer.core.directory_structure import get_default_quick_access, get_directory_contents, get_drives
from file_explorer.core.exceptions import DirectoryNotFoundError
from file_explorer.core.file_item import FileItem
from file_explorer.core.file_operations import FileType, sanitize_path
from file_explorer.core.navigation import NavigationModel

from .resources import get_icon

logger = logging.getLogger(__name__)

# Custom role used by views and the controller to fetch the underlying FileItem.
FileItemRole = Qt.ItemDataRole.UserRole + 1

_ICON_NAMES = {
    FileType.DRIVE: "drive",
    FileType.FOLDER: "folder",
    FileType.FILE: "file",
}


class FileItemViewModel:
    """Presentation data for one FileItem."""

    def __init__(self, item: FileItem):
        self.item = item

    @property
    def display_name(self) -> str:
        return self.item.file_name

    @property
    def icon_name(self) -> str:
        return _ICON_NAMES[self.item.file_type]

    @property
    def tooltip(self) -> str:
        modified = self.item.last_modified_time
        if not modified:
            return self.item.item_directory
        stamp = datetime.datetime.fromtimestamp(modified).strftime("%Y-%m-%d %H:%M")
        return f"{self.item.item_directory}\nModified: {stamp}"


class FileGridModel(QAbstractListModel):
    """A list model exposing FileItemViewModels to a QListView."""

    def __init__(self, parent=None):
        super().__init__(parent)
        self._items: list[FileItemViewModel] = []

    def rowCount(self, parent=QModelIndex()):
        if parent.isValid():
            return 0
        return len(self._items)

    def data(self, index: QModelIndex, role: int = Qt.ItemDataRole.DisplayRole):
        if not index.isValid() or index.row() >= len(self._items):
            return None

        view_model = self._items[index.row()]
        if role == Qt.ItemDataRole.DisplayRole:
            return view_model.display_name
        if role == Qt.ItemDataRole.DecorationRole:
            return get_icon(view_model.icon_name)
        if role == Qt.ItemDataRole.ToolTipRole:
            return view_model.tooltip
        if role == FileItemRole:
            return view_model.item
        return None

    def set_items(self, items: list[FileItemViewModel]):
        """Replaces the whole listing."""
        self.beginResetModel()
        self._items = list(items)
        self.endResetModel()

    def item_at(self, row: int) -> FileItem | None:
        if 0 <= row < len(self._items):
            return self._items[row].item
        return None

    def items(self) -> list[FileItem]:
        return [view_model.item for view_model in self._items]


class FileGridViewModel(QObject):
    """
    Keeps the file grid in step with the navigation model.

    It registers itself as a NavigationModel listener and re-lists the new
    directory on every change. If a listing fails, the previous contents stay
    on screen and listing_failed is emitted.
    """
    contents_updated = Signal(int)
    listing_failed = Signal(str)

    def __init__(self, navigation: NavigationModel, show_hidden: bool = False, parent=None):
        super().__init__(parent)
        self.navigation = navigation
        self.model = FileGridModel(self)
        self._show_hidden = show_hidden
        navigation.add_listener(self.current_directory_changed)
        self.update_contents()

    @property
    def show_hidden(self) -> bool:
        return self._show_hidden

    def set_show_hidden(self, value: bool):
        if value != self._show_hidden:
            self._show_hidden = value
            self.update_contents()

    def update_contents(self) -> bool:
        """Re-lists the current directory. Returns False if the listing failed."""
        directory = self.navigation.current_directory
        try:
            children = get_directory_contents(directory, self._show_hidden)
        except DirectoryNotFoundError as e:
            logger.error(f"Could not refresh the file grid: {e}")
            self.listing_failed.emit(str(e))
            return False

        self.model.set_items([FileItemViewModel(child) for child in children])
        self.contents_updated.emit(len(children))
        return True

    def current_directory_changed(self, directory: str):
        self.update_contents()


class QuickAccessViewModel(QObject):
    """
    The drives and pinned folders shown beside the file grid.

    pinned_paths of None means nothing was ever configured and the default
    folders are offered. An empty list is kept empty.
    """
    entries_changed = Signal()

    def __init__(self, pinned_paths: list[str] | None = None, parent=None):
        super().__init__(parent)
        if pinned_paths is not None:
            self._pinned = [sanitize_path(path) for path in pinned_paths]
        else:
            self._pinned = [item.item_directory for item in get_default_quick_access()]

    @property
    def pinned_paths(self) -> list[str]:
        return list(self._pinned)

    def entries(self) -> list[FileItem]:
        """Pinned folders that still exist, followed by the drives."""
        pinned = [FileItem(path, FileType.FOLDER) for path in self._pinned if os.path.isdir(path)]
        return pinned + get_drives()

    def pin(self, path: str) -> bool:
        clean_path = sanitize_path(path)
        if clean_path in self._pinned or not os.path.isdir(clean_path):
            return False
        self._pinned.append(clean_path)
        logger.info(f"Pinned '{clean_path}' to Quick Access.")
        self.entries_changed.emit()
        return True

    def unpin(self, path: str) -> bool:
        clean_path = sanitize_path(path)
        if clean_path not in self._pinned:
            return False
        self._pinned.remove(clean_path)
        logger.info(f"Unpinned '{clean_path}' from Quick Access.")
        self.entries_changed.emit()
        return True


class MainViewModel(QObject):
    """Composes the other view models and owns navigation for the main window."""
    current_directory_changed = Signal(str)
    navigation_failed = Signal(str)
    history_changed = Signal(bool, bool)

    def __init__(self, settings: ExplorerSettings, parent=None):
        super().__init__(parent)
        self.settings = settings
        self.navigation = NavigationModel(settings.start_directory)
        self.file_grid = FileGridViewModel(self.navigation, settings.show_hidden, self)
        self.quick_access = QuickAccessViewModel(settings.quick_access, self)
        self.clipboard = FileClipboard()
        self.navigation.add_listener(self._on_directory_changed)

    @property
    def current_directory(self) -> str:
        return self.navigation.current_directory

    def user_updated_directory(self, text: str) -> bool:
        """Navigates to a path typed into the location bar, ignoring surrounding whitespace."""
        return self._navigate(self.navigation.set_current_directory, text.strip())

    def open_item(self, item: FileItem) -> bool:
        """Navigates into a folder or drive. Files are not handled here."""
        if item.file_type is FileType.FILE:
            return False
        return self._navigate(self.navigation.set_current_directory, item.item_directory)

    def go_back_directory(self) -> bool:
        return self._navigate(self.navigation.go_back)

    def go_forward_directory(self) -> bool:
        return self._navigate(self.navigation.go_forward)

    def go_up_directory(self) -> bool:
        return self._navigate(self.navigation.go_up)

    def refresh(self):
        self.file_grid.update_contents()

    def sync_settings(self) -> ExplorerSettings:
        """Copies the current session state into the settings object."""
        self.settings.show_hidden = self.file_grid.show_hidden
        self.settings.start_directory = self.current_directory
        self.settings.quick_access = self.quick_access.pinned_paths
        return self.settings

    def _navigate(self, action, *args) -> bool:
        try:
            moved = action(*args)
        except DirectoryNotFoundError as e:
            logger.warning(f"Navigation failed: {e}")
            self.navigation_failed.emit(str(e))
            # Put the location bar back to where we really are.
            self.current_directory_changed.emit(self.current_directory)
            return False
        # set_current_directory returns None; the history moves return a bool.
        return moved is not False

    def _on_directory_changed(self, directory: str):
        self.current_directory_changed.emit(directory)
        self.history_changed.emit(self.navigation.can_go_back, self.navigation.can_go_forward)
