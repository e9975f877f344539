# file_explorer/gui/main_window.py

import logging
import sys
from pathlib import Path

from PySide6.QtCore import QPoint, Qt, Slot
from PySide6.QtGui import QAction, QActionGroup, QKeySequence
from PySide6.QtWidgets import (
    QApplication, QInputDialog, QMainWindow, QMenu, QMessageBox, QSplitter,
    QToolBar, QVBoxLayout, QWidget
)

from file_explorer.core.config_manager import ExplorerSettings, load_settings, save_settings
from file_explorer.core.file_item import FileItem
from file_explorer.core.file_operations import FileType
from file_explorer.utils.logger import setup_logging

from .action_controller import ActionController
from .resources import (
    ICON_SIZE, SETTINGS_FILE_PATH, available_themes, get_icon, load_stylesheet, validate_assets
)
from .view_models import MainViewModel
from .widgets import FileGridView, LocationBar, QuickAccessPanel, StatusWidget

logger = logging.getLogger(__name__)

WINDOW_TITLE = "File Explorer"


class MainWindow(QMainWindow):
    """
    The explorer's main window: a toolbar with navigation buttons and the
    location bar, the quick access panel on the left and the file grid on the
    right. All state lives in MainViewModel; all file operations go through
    ActionController.
    """

    def __init__(self, settings: ExplorerSettings | None = None, settings_path: Path = SETTINGS_FILE_PATH):
        super().__init__()
        self.settings_path = settings_path
        self.settings = settings if settings is not None else load_settings(settings_path)

        self.setWindowTitle(WINDOW_TITLE)
        self.setWindowIcon(get_icon("app_icon"))
        self.setGeometry(100, 100, 1000, 650)

        self.view_model = MainViewModel(self.settings, self)
        self.action_controller = ActionController(self.view_model, self)

        self._create_actions()
        self._create_toolbar()
        self._create_menus()
        self._create_central_widget()
        self._connect_signals()

        self.location_bar.set_directory(self.view_model.current_directory)
        self.quick_access_panel.set_entries(self.view_model.quick_access.entries())
        self.status_widget.set_item_count(self.view_model.file_grid.model.rowCount())
        self._update_history_buttons(self.view_model.navigation.can_go_back, self.view_model.navigation.can_go_forward)

    # --- UI Construction ---

    def _create_actions(self):
        self.back_action = QAction(get_icon("back"), "Back", self)
        self.back_action.setShortcut(QKeySequence.StandardKey.Back)
        self.forward_action = QAction(get_icon("forward"), "Forward", self)
        self.forward_action.setShortcut(QKeySequence.StandardKey.Forward)
        self.up_action = QAction(get_icon("up"), "Up", self)
        self.up_action.setShortcut(QKeySequence("Alt+Up"))
        self.refresh_action = QAction(get_icon("refresh"), "Refresh", self)
        self.refresh_action.setShortcut(QKeySequence.StandardKey.Refresh)

        self.new_folder_action = QAction(get_icon("new-folder"), "New Folder", self)
        self.new_folder_action.setShortcut(QKeySequence("Ctrl+Shift+N"))
        self.new_file_action = QAction(get_icon("new-file"), "New File", self)
        self.copy_action = QAction(get_icon("copy"), "Copy", self)
        self.copy_action.setShortcut(QKeySequence.StandardKey.Copy)
        self.cut_action = QAction(get_icon("cut"), "Cut", self)
        self.cut_action.setShortcut(QKeySequence.StandardKey.Cut)
        self.paste_action = QAction(get_icon("paste"), "Paste", self)
        self.paste_action.setShortcut(QKeySequence.StandardKey.Paste)
        self.rename_action = QAction(get_icon("rename"), "Rename...", self)
        self.rename_action.setShortcut(QKeySequence("F2"))
        self.trash_action = QAction(get_icon("trash"), "Move to Trash", self)
        self.trash_action.setShortcut(QKeySequence.StandardKey.Delete)
        self.pin_action = QAction(get_icon("pin"), "Pin to Quick Access", self)

        self.show_hidden_action = QAction("Show Hidden Items", self, checkable=True)
        self.show_hidden_action.setChecked(self.view_model.file_grid.show_hidden)

    def _create_toolbar(self):
        toolbar = QToolBar("Navigation", self)
        toolbar.setIconSize(ICON_SIZE)
        toolbar.setMovable(False)
        toolbar.addAction(self.back_action)
        toolbar.addAction(self.forward_action)
        toolbar.addAction(self.up_action)
        toolbar.addAction(self.refresh_action)

        self.location_bar = LocationBar(self)
        toolbar.addWidget(self.location_bar)
        self.addToolBar(toolbar)

    def _create_menus(self):
        """Creates the File, Edit and View menus."""
        menu_bar = self.menuBar()

        file_menu = menu_bar.addMenu("&File")
        file_menu.addAction(self.new_folder_action)
        file_menu.addAction(self.new_file_action)
        file_menu.addSeparator()
        exit_action = file_menu.addAction("E&xit")
        exit_action.triggered.connect(self.close)

        edit_menu = menu_bar.addMenu("&Edit")
        for action in (self.copy_action, self.cut_action, self.paste_action):
            edit_menu.addAction(action)
        edit_menu.addSeparator()
        edit_menu.addAction(self.rename_action)
        edit_menu.addAction(self.trash_action)
        edit_menu.addSeparator()
        edit_menu.addAction(self.pin_action)

        view_menu = menu_bar.addMenu("&View")
        view_menu.addAction(self.show_hidden_action)
        theme_menu = view_menu.addMenu("Theme")
        theme_menu.setIcon(get_icon("settings"))
        theme_group = QActionGroup(self)
        for theme_file in available_themes():
            label = theme_file.removesuffix(".qss").replace("_", " ").title()
            theme_action = QAction(label, self, checkable=True)
            theme_action.setChecked(theme_file == self.settings.theme)
            theme_action.triggered.connect(lambda checked=False, name=theme_file: self._handle_theme_change(name))
            theme_group.addAction(theme_action)
            theme_menu.addAction(theme_action)

    def _create_central_widget(self):
        self.quick_access_panel = QuickAccessPanel(self)
        self.file_grid_view = FileGridView(self)
        self.file_grid_view.setModel(self.view_model.file_grid.model)

        splitter = QSplitter(Qt.Orientation.Horizontal, self)
        splitter.addWidget(self.quick_access_panel)
        splitter.addWidget(self.file_grid_view)
        splitter.setStretchFactor(1, 1)

        self.status_widget = StatusWidget(self)

        container = QWidget(self)
        layout = QVBoxLayout(container)
        layout.setContentsMargins(4, 4, 4, 4)
        layout.addWidget(splitter)
        layout.addWidget(self.status_widget)
        self.setCentralWidget(container)

    def _connect_signals(self):
        view_model = self.view_model
        controller = self.action_controller

        # Navigation
        self.back_action.triggered.connect(lambda: view_model.go_back_directory())
        self.forward_action.triggered.connect(lambda: view_model.go_forward_directory())
        self.up_action.triggered.connect(lambda: view_model.go_up_directory())
        self.refresh_action.triggered.connect(lambda: view_model.refresh())
        self.location_bar.path_entered.connect(view_model.user_updated_directory)
        view_model.current_directory_changed.connect(self.location_bar.set_directory)
        view_model.history_changed.connect(self._update_history_buttons)
        view_model.navigation_failed.connect(lambda message: self.status_widget.set_status(message, True))
        view_model.file_grid.listing_failed.connect(lambda message: self.status_widget.set_status(message, True))
        view_model.file_grid.contents_updated.connect(self.status_widget.set_item_count)
        view_model.quick_access.entries_changed.connect(
            lambda: self.quick_access_panel.set_entries(view_model.quick_access.entries())
        )

        # Items
        self.file_grid_view.item_activated.connect(controller.open_item)
        self.quick_access_panel.item_activated.connect(view_model.open_item)
        self.file_grid_view.customContextMenuRequested.connect(self._show_context_menu)

        # File operations
        self.new_folder_action.triggered.connect(lambda: controller.create_folder())
        self.new_file_action.triggered.connect(lambda: controller.create_file())
        self.copy_action.triggered.connect(lambda: controller.copy_items(self.file_grid_view.selected_items()))
        self.cut_action.triggered.connect(lambda: controller.cut_items(self.file_grid_view.selected_items()))
        self.paste_action.triggered.connect(lambda: controller.paste())
        self.rename_action.triggered.connect(self._rename_selected)
        self.trash_action.triggered.connect(self._trash_selected)
        self.pin_action.triggered.connect(self._pin_selected)
        self.show_hidden_action.toggled.connect(view_model.file_grid.set_show_hidden)

        # Feedback
        controller.status_updated.connect(self.status_widget.set_status)
        controller.show_message_box.connect(self._show_message_box)

    # --- Slots ---

    @Slot(bool, bool)
    def _update_history_buttons(self, can_go_back: bool, can_go_forward: bool):
        self.back_action.setEnabled(can_go_back)
        self.forward_action.setEnabled(can_go_forward)

    @Slot(QPoint)
    def _show_context_menu(self, position: QPoint):
        menu = QMenu(self)
        if self.file_grid_view.selected_items():
            for action in (self.copy_action, self.cut_action, self.rename_action, self.trash_action, self.pin_action):
                menu.addAction(action)
            menu.addSeparator()
        menu.addAction(self.paste_action)
        menu.addAction(self.new_folder_action)
        menu.addAction(self.new_file_action)
        menu.exec(self.file_grid_view.viewport().mapToGlobal(position))

    @Slot()
    def _rename_selected(self):
        selected = self.file_grid_view.selected_items()
        if len(selected) != 1:
            return
        item: FileItem = selected[0]
        new_name, accepted = QInputDialog.getText(self, "Rename", "New name:", text=item.file_name)
        if accepted:
            self.action_controller.rename_item(item, new_name.strip())

    @Slot()
    def _trash_selected(self):
        selected = self.file_grid_view.selected_items()
        if not selected:
            return
        reply = QMessageBox.question(
            self, "Move to Trash",
            f"Move {len(selected)} item(s) to the trash?",
            QMessageBox.StandardButton.Yes | QMessageBox.StandardButton.No, QMessageBox.StandardButton.No
        )
        if reply == QMessageBox.StandardButton.Yes:
            self.action_controller.trash_items(selected)

    @Slot()
    def _pin_selected(self):
        for item in self.file_grid_view.selected_items():
            if item.file_type is FileType.FOLDER:
                self.action_controller.pin_to_quick_access(item)

    @Slot(str)
    def _handle_theme_change(self, theme_file: str):
        """Applies the selected theme and remembers the choice."""
        self.settings.theme = theme_file
        QApplication.instance().setStyleSheet(load_stylesheet(theme_file))
        self.status_widget.set_status(f"Theme changed to {theme_file}.")

    @Slot(str, str, str)
    def _show_message_box(self, msg_type, title, message):
        """Shows message boxes requested by the controller."""
        if msg_type == "critical":
            QMessageBox.critical(self, title, message)
        else:
            QMessageBox.information(self, title, message)

    def closeEvent(self, event):
        """Saves the session's settings before closing."""
        if not save_settings(self.settings_path, self.view_model.sync_settings()):
            logger.warning("Settings could not be saved on exit.")
        event.accept()


def run_gui(start_directory: str | None = None):
    """Configures logging, builds the application and runs the Qt event loop."""
    setup_logging()
    validate_assets()

    app = QApplication(sys.argv)
    settings = load_settings(SETTINGS_FILE_PATH)
    if start_directory:
        settings.start_directory = start_directory
    app.setStyleSheet(load_stylesheet(settings.theme))

    window = MainWindow(settings)
    window.show()

    sys.exit(app.exec())
