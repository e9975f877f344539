# file_explorer/gui/widgets.py

from PySide6.QtCore import QModelIndex, QSize, Qt, Signal, Slot
from PySide6.QtWidgets import (
    QAbstractItemView, QHBoxLayout, QLabel, QLineEdit, QListView, QListWidget,
    QListWidgetItem, QSizePolicy, QWidget
)

from file_explorer.core.file_item import FileItem

from .resources import GRID_ICON_SIZE, get_icon
from .view_models import FileItemRole, FileItemViewModel


class LocationBar(QLineEdit):
    """
    The editable path at the top of the window. Pressing Enter emits
    path_entered with the typed text; set_directory() replaces the text
    without emitting anything.
    """
    path_entered = Signal(str)

    def __init__(self, parent=None):
        super().__init__(parent)
        self.setPlaceholderText("Type a path and press Enter")
        self.returnPressed.connect(self._on_return_pressed)

    @Slot()
    def _on_return_pressed(self):
        self.path_entered.emit(self.text())

    @Slot(str)
    def set_directory(self, directory: str):
        self.setText(directory)


class QuickAccessPanel(QListWidget):
    """The list of pinned folders and drives on the left of the window."""
    item_activated = Signal(object)

    def __init__(self, parent=None):
        super().__init__(parent)
        self.setMaximumWidth(220)
        self.setIconSize(QSize(18, 18))
        self.itemClicked.connect(self._on_item_clicked)

    def set_entries(self, entries: list[FileItem]):
        self.clear()
        for entry in entries:
            view_model = FileItemViewModel(entry)
            row = QListWidgetItem(get_icon(view_model.icon_name), view_model.display_name)
            row.setToolTip(entry.item_directory)
            row.setData(FileItemRole, entry)
            self.addItem(row)

    @Slot(QListWidgetItem)
    def _on_item_clicked(self, row: QListWidgetItem):
        self.item_activated.emit(row.data(FileItemRole))


class FileGridView(QListView):
    """An icon grid of the current directory's contents."""
    item_activated = Signal(object)

    def __init__(self, parent=None):
        super().__init__(parent)
        self.setViewMode(QListView.ViewMode.IconMode)
        self.setResizeMode(QListView.ResizeMode.Adjust)
        self.setMovement(QListView.Movement.Static)
        self.setIconSize(GRID_ICON_SIZE)
        self.setGridSize(QSize(110, 90))
        self.setWordWrap(True)
        self.setUniformItemSizes(True)
        self.setSelectionMode(QAbstractItemView.SelectionMode.ExtendedSelection)
        self.setEditTriggers(QAbstractItemView.EditTrigger.NoEditTriggers)
        self.setContextMenuPolicy(Qt.ContextMenuPolicy.CustomContextMenu)
        self.activated.connect(self._on_activated)

    def selected_items(self) -> list[FileItem]:
        """The FileItems behind the current selection, in display order."""
        indexes = sorted(self.selectionModel().selectedIndexes(), key=lambda index: index.row())
        return [index.data(FileItemRole) for index in indexes]

    @Slot(QModelIndex)
    def _on_activated(self, index: QModelIndex):
        item = index.data(FileItemRole)
        if item is not None:
            self.item_activated.emit(item)


class StatusWidget(QWidget):
    """Shows the result of the last operation and the item count."""

    def __init__(self, parent=None):
        super().__init__(parent)
        layout = QHBoxLayout(self)
        layout.setContentsMargins(10, 2, 10, 2)

        self.status_label = QLabel("Status:")
        self.status_label.setObjectName("StatusLabel")
        self.status_message = QLabel("Ready.")
        self.status_message.setWordWrap(True)
        self.item_count = QLabel("")

        self.setSizePolicy(QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Minimum)

        layout.addWidget(self.status_label)
        layout.addWidget(self.status_message)
        layout.addStretch()
        layout.addWidget(self.item_count)

    @Slot(str, bool)
    def set_status(self, message: str, is_error: bool = False):
        """Updates the status message and colours it red for errors."""
        self.status_message.setText(message)
        if is_error:
            self.status_message.setStyleSheet("color: #BF616A;")  # Nord Red
        else:
            self.status_message.setStyleSheet("")

    @Slot(int)
    def set_item_count(self, count: int):
        self.item_count.setText(f"{count} item(s)")
