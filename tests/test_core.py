# tests/test_core.py

import json
import os
import sys
from pathlib import Path

import pytest

from file_explorer.core import file_operations
from file_explorer.core.clipboard import ClipboardMode, FileClipboard
from file_explorer.core.config_manager import ExplorerSettings, load_settings, save_settings
from file_explorer.core.directory_structure import get_default_quick_access, get_directory_contents, get_drives
from file_explorer.core.exceptions import DirectoryNotFoundError, FileOperationError, InvalidOperationError
from file_explorer.core.file_item import MISSING_MODIFIED_TIME, FileItem
from file_explorer.core.file_operations import FileType, get_unique_path, sanitize_path
from file_explorer.core.navigation import NavigationModel

posix_only = pytest.mark.skipif(sys.platform == "win32", reason="dot-prefix hiding is a POSIX convention")


# Pytest fixture to create a temporary directory structure for testing
@pytest.fixture
def temp_dirs(tmp_path):
    """Creates a source folder with a file and an empty target folder."""
    source_dir = tmp_path / "source"
    target_dir = tmp_path / "target"
    source_dir.mkdir()
    target_dir.mkdir()
    (source_dir / "notes.txt").write_text("hello")
    return source_dir, target_dir


# --- Tests for file_operations.py ---

def test_sanitize_path_expands_home():
    assert sanitize_path("~") == str(Path.home())


def test_sanitize_path_normalizes_separators_and_segments(tmp_path):
    messy = f"{tmp_path}{os.sep}{os.sep}a{os.sep}.{os.sep}b{os.sep}..{os.sep}"
    assert sanitize_path(messy) == str(tmp_path / "a")


def test_get_unique_path_appends_number(tmp_path):
    (tmp_path / "New Folder").mkdir()
    (tmp_path / "New Folder_1").mkdir()

    assert get_unique_path(tmp_path / "New Folder") == tmp_path / "New Folder_2"
    assert get_unique_path(tmp_path / "fresh.txt") == tmp_path / "fresh.txt"


# --- Tests for FileItem: construction and queries ---

def test_explicit_type_is_kept(tmp_path):
    for file_type in FileType:
        assert FileItem(tmp_path, file_type).file_type is file_type


def test_auto_detect_existing_directory_is_folder(tmp_path):
    assert FileItem(tmp_path).file_type is FileType.FOLDER


def test_auto_detect_missing_path_is_file(tmp_path):
    assert FileItem(tmp_path / "does-not-exist").file_type is FileType.FILE


def test_auto_detect_existing_file_is_file(temp_dirs):
    source_dir, _ = temp_dirs
    assert FileItem(source_dir / "notes.txt").file_type is FileType.FILE


def test_file_name_of_folder_and_file(tmp_path):
    assert FileItem(tmp_path).file_name == tmp_path.name
    assert FileItem(tmp_path / "testFile.txt").file_name == "testFile.txt"


def test_file_name_of_drive_is_raw_path(tmp_path):
    drive = FileItem(tmp_path, FileType.DRIVE)
    assert drive.file_name == str(tmp_path)


def test_item_directory_is_absolute_path(tmp_path):
    assert FileItem(tmp_path).item_directory == str(tmp_path)
    assert FileItem(tmp_path / "testFile.txt").item_directory == str(tmp_path / "testFile.txt")


def test_item_directory_of_tilde_is_home():
    assert FileItem("~").item_directory == str(Path.home())


@posix_only
def test_dot_prefixed_entries_are_hidden(tmp_path):
    assert FileItem(tmp_path / ".hiddenTestFolder").is_hidden
    assert FileItem(tmp_path / ".hiddenTestFile.txt").is_hidden


def test_plain_entries_are_not_hidden(tmp_path):
    assert not FileItem(tmp_path).is_hidden
    assert not FileItem(tmp_path / "testFile.txt").is_hidden


def test_last_modified_time_matches_disk(temp_dirs):
    source_dir, _ = temp_dirs
    path = source_dir / "notes.txt"
    assert FileItem(path).last_modified_time == os.path.getmtime(path)
    assert FileItem(source_dir).last_modified_time == os.path.getmtime(source_dir)


def test_last_modified_time_of_missing_entry_is_sentinel(tmp_path):
    assert FileItem(tmp_path / "gone.txt").last_modified_time == MISSING_MODIFIED_TIME


def test_size_of_file_and_folder(temp_dirs):
    source_dir, _ = temp_dirs
    assert FileItem(source_dir / "notes.txt").size == 5
    assert FileItem(source_dir).size == 0


def test_equality_uses_path_and_type(tmp_path):
    assert FileItem(tmp_path, FileType.FOLDER) == FileItem(f"{tmp_path}{os.sep}", FileType.FOLDER)
    assert FileItem(tmp_path, FileType.FOLDER) != FileItem(tmp_path, FileType.DRIVE)
    assert FileItem(tmp_path / "a", FileType.FILE) != FileItem(tmp_path / "b", FileType.FILE)
    assert len({FileItem(tmp_path), FileItem(str(tmp_path))}) == 1


# --- Tests for FileItem: move and copy ---

def test_move_to_own_parent_is_invalid(tmp_path):
    folder = FileItem(tmp_path)
    with pytest.raises(InvalidOperationError):
        folder.move_to(tmp_path.parent)
    assert tmp_path.is_dir()


def test_copy_to_own_parent_is_invalid(temp_dirs):
    source_dir, _ = temp_dirs
    with pytest.raises(InvalidOperationError):
        FileItem(source_dir / "notes.txt").copy_to(source_dir)


def test_move_file(temp_dirs):
    source_dir, target_dir = temp_dirs
    FileItem(source_dir / "notes.txt").move_to(target_dir)

    assert not (source_dir / "notes.txt").exists()
    assert (target_dir / "notes.txt").read_text() == "hello"


def test_move_folder_moves_whole_tree(temp_dirs):
    source_dir, target_dir = temp_dirs
    (source_dir / "nested").mkdir()
    (source_dir / "nested" / "deep.txt").touch()

    FileItem(source_dir).move_to(target_dir)

    assert not source_dir.exists()
    assert (target_dir / "source" / "notes.txt").is_file()
    assert (target_dir / "source" / "nested" / "deep.txt").is_file()


def test_move_refuses_to_overwrite(temp_dirs):
    source_dir, target_dir = temp_dirs
    (target_dir / "notes.txt").write_text("keep me")

    with pytest.raises(FileOperationError):
        FileItem(source_dir / "notes.txt").move_to(target_dir)

    assert (target_dir / "notes.txt").read_text() == "keep me"
    assert (source_dir / "notes.txt").exists()


def test_move_missing_source_is_a_filesystem_failure(temp_dirs):
    source_dir, target_dir = temp_dirs
    with pytest.raises(FileOperationError):
        FileItem(source_dir / "ghost.txt", FileType.FILE).move_to(target_dir)


def test_move_into_missing_directory_fails(temp_dirs):
    source_dir, target_dir = temp_dirs
    with pytest.raises(FileOperationError):
        FileItem(source_dir / "notes.txt").move_to(target_dir / "nope")
    assert (source_dir / "notes.txt").exists()


def test_move_folder_into_itself_is_invalid(temp_dirs):
    source_dir, _ = temp_dirs
    (source_dir / "inner").mkdir()
    with pytest.raises(InvalidOperationError):
        FileItem(source_dir).move_to(source_dir / "inner")


def test_drives_cannot_be_moved_or_copied(tmp_path):
    drive = FileItem(tmp_path / "drive", FileType.DRIVE)
    (tmp_path / "elsewhere").mkdir()
    with pytest.raises(InvalidOperationError):
        drive.move_to(tmp_path / "elsewhere")
    with pytest.raises(InvalidOperationError):
        drive.copy_to(tmp_path / "elsewhere")


def test_copy_file(temp_dirs):
    source_dir, target_dir = temp_dirs
    FileItem(source_dir / "notes.txt").copy_to(target_dir)

    assert (source_dir / "notes.txt").exists()
    assert (target_dir / "notes.txt").read_text() == "hello"


def test_copy_folder_is_recursive(temp_dirs):
    source_dir, target_dir = temp_dirs
    (source_dir / "nested").mkdir()
    (source_dir / "nested" / "deep.txt").write_text("deep")

    FileItem(source_dir).copy_to(target_dir)

    assert (source_dir / "nested" / "deep.txt").exists()
    assert (target_dir / "source" / "nested" / "deep.txt").read_text() == "deep"


def test_copy_of_deleted_source_does_nothing(tmp_path):
    target_dir = tmp_path / "targetFolder"
    target_dir.mkdir()
    imaginary = FileItem(tmp_path / "imaginaryFolder")

    imaginary.copy_to(target_dir)

    assert list(target_dir.iterdir()) == []


def test_copy_file_into_non_directory_fails(temp_dirs):
    source_dir, target_dir = temp_dirs
    (target_dir / "plain.txt").touch()
    with pytest.raises(FileOperationError):
        FileItem(source_dir / "notes.txt").copy_to(target_dir / "plain.txt")


# --- Tests for FileItem: create, rename, trash ---

def test_write_to_disk_creates_empty_file(tmp_path):
    item = FileItem(tmp_path / "file.txt")
    assert item.write_to_disk() is True
    assert (tmp_path / "file.txt").is_file()
    assert (tmp_path / "file.txt").stat().st_size == 0


def test_write_to_disk_creates_folder(tmp_path):
    item = FileItem(tmp_path / "folder", FileType.FOLDER)
    assert item.write_to_disk() is True
    assert (tmp_path / "folder").is_dir()


def test_write_to_disk_does_nothing_for_drive(tmp_path):
    item = FileItem(tmp_path / "drive", FileType.DRIVE)
    assert item.write_to_disk() is False
    assert not (tmp_path / "drive").exists()


def test_write_to_disk_reports_existing_entries(temp_dirs):
    source_dir, _ = temp_dirs
    assert FileItem(source_dir / "notes.txt", FileType.FILE).write_to_disk() is False
    assert FileItem(source_dir, FileType.FOLDER).write_to_disk() is False
    assert (source_dir / "notes.txt").read_text() == "hello"


def test_write_to_disk_file_in_missing_folder_raises(tmp_path):
    with pytest.raises(FileOperationError):
        FileItem(tmp_path / "missing" / "file.txt", FileType.FILE).write_to_disk()


def test_write_to_disk_folder_in_missing_folder_returns_false(tmp_path):
    assert FileItem(tmp_path / "missing" / "folder", FileType.FOLDER).write_to_disk() is False


def test_rename(temp_dirs):
    source_dir, _ = temp_dirs
    assert FileItem(source_dir / "notes.txt").rename("renamed.txt") is True
    assert (source_dir / "renamed.txt").read_text() == "hello"
    assert not (source_dir / "notes.txt").exists()


def test_rename_onto_existing_name_fails(temp_dirs):
    source_dir, _ = temp_dirs
    (source_dir / "other.txt").write_text("other")

    assert FileItem(source_dir / "notes.txt").rename("other.txt") is False
    assert (source_dir / "notes.txt").read_text() == "hello"
    assert (source_dir / "other.txt").read_text() == "other"


def test_rename_rejects_invalid_names(temp_dirs):
    source_dir, _ = temp_dirs
    item = FileItem(source_dir / "notes.txt")
    for bad_name in ("", ".", "..", f"sub{os.sep}notes.txt"):
        assert item.rename(bad_name) is False
    assert (source_dir / "notes.txt").exists()


def test_rename_missing_entry_returns_false(tmp_path):
    assert FileItem(tmp_path / "ghost.txt").rename("still-ghost.txt") is False


def test_rename_drive_returns_false(tmp_path):
    assert FileItem(tmp_path, FileType.DRIVE).rename("other") is False


def test_send_to_trash_uses_send2trash(temp_dirs, monkeypatch):
    source_dir, _ = temp_dirs
    trashed = []
    monkeypatch.setattr(file_operations, "send2trash", trashed.append)

    assert FileItem(source_dir / "notes.txt").send_to_trash() is True
    assert trashed == [str(source_dir / "notes.txt")]


def test_send_to_trash_reports_failure(temp_dirs, monkeypatch):
    source_dir, _ = temp_dirs

    def refuse(path):
        raise PermissionError(f"no trash for {path}")

    monkeypatch.setattr(file_operations, "send2trash", refuse)
    assert FileItem(source_dir / "notes.txt").send_to_trash() is False


def test_send_drive_to_trash_returns_false(tmp_path, monkeypatch):
    monkeypatch.setattr(file_operations, "send2trash", lambda path: pytest.fail("drive was trashed"))
    assert FileItem(tmp_path, FileType.DRIVE).send_to_trash() is False


# --- End-to-end scenario ---

def test_create_copy_and_guarded_move(tmp_path):
    file_item = FileItem(tmp_path / "a.txt", FileType.FILE)
    assert file_item.write_to_disk()
    assert (tmp_path / "a.txt").is_file()

    folder_item = FileItem(tmp_path / "sub", FileType.FOLDER)
    assert folder_item.write_to_disk()
    assert (tmp_path / "sub").is_dir()

    file_item.copy_to(tmp_path / "sub")
    assert (tmp_path / "sub" / "a.txt").is_file()
    assert (tmp_path / "a.txt").is_file()

    with pytest.raises(InvalidOperationError):
        folder_item.move_to(tmp_path)
    assert (tmp_path / "sub" / "a.txt").is_file()


# --- Tests for directory_structure.py ---

@pytest.fixture
def populated_dir(tmp_path):
    (tmp_path / "beta.txt").touch()
    (tmp_path / "Alpha.txt").touch()
    (tmp_path / "zeta").mkdir()
    (tmp_path / "Gamma").mkdir()
    (tmp_path / ".secret").touch()
    (tmp_path / ".config").mkdir()
    return tmp_path


@posix_only
def test_listing_hides_hidden_entries_by_default(populated_dir):
    names = [item.file_name for item in get_directory_contents(populated_dir)]
    assert names == ["Gamma", "zeta", "Alpha.txt", "beta.txt"]


@posix_only
def test_listing_includes_hidden_entries_when_asked(populated_dir):
    names = {item.file_name for item in get_directory_contents(populated_dir, show_hidden=True)}
    assert {".secret", ".config"} <= names
    assert len(names) == 6


def test_listing_types_children(populated_dir):
    items = {item.file_name: item for item in get_directory_contents(populated_dir, show_hidden=True)}
    assert items["zeta"].file_type is FileType.FOLDER
    assert items["beta.txt"].file_type is FileType.FILE
    assert items["zeta"].item_directory == str(populated_dir / "zeta")


def test_listing_is_not_recursive(tmp_path):
    (tmp_path / "outer").mkdir()
    (tmp_path / "outer" / "inner.txt").touch()
    assert [item.file_name for item in get_directory_contents(tmp_path)] == ["outer"]


@posix_only
def test_listing_keeps_trailing_whitespace_in_names(tmp_path):
    (tmp_path / "report ").write_text("spaced")
    (tmp_path / "report").write_text("plain")

    items = get_directory_contents(tmp_path)
    assert sorted(item.file_name for item in items) == ["report", "report "]

    spaced = next(item for item in items if item.file_name == "report ")
    assert spaced.exists
    assert spaced.item_directory == str(tmp_path / "report ")
    assert spaced.rename("renamed") is True
    assert (tmp_path / "renamed").read_text() == "spaced"
    assert (tmp_path / "report").read_text() == "plain"


@posix_only
def test_trash_targets_name_with_trailing_whitespace(tmp_path, monkeypatch):
    (tmp_path / "a.txt ").touch()
    (tmp_path / "a.txt").touch()
    trashed = []
    monkeypatch.setattr(file_operations, "send2trash", trashed.append)

    [spaced] = [item for item in get_directory_contents(tmp_path) if item.file_name == "a.txt "]
    assert spaced.send_to_trash() is True
    assert trashed == [str(tmp_path / "a.txt ")]


def test_listing_empty_directory(tmp_path):
    assert get_directory_contents(tmp_path) == []


def test_listing_missing_directory_raises(tmp_path):
    with pytest.raises(DirectoryNotFoundError):
        get_directory_contents(tmp_path / "missing")


def test_listing_a_file_raises(temp_dirs):
    source_dir, _ = temp_dirs
    with pytest.raises(DirectoryNotFoundError):
        get_directory_contents(source_dir / "notes.txt")


def test_get_drives_returns_drive_items():
    drives = get_drives()
    assert drives
    assert all(drive.file_type is FileType.DRIVE for drive in drives)


def test_default_quick_access_uses_home(monkeypatch, tmp_path):
    (tmp_path / "Documents").mkdir()
    monkeypatch.setattr(Path, "home", classmethod(lambda cls: tmp_path))

    paths = [item.item_directory for item in get_default_quick_access()]
    assert paths == [str(tmp_path), str(tmp_path / "Documents")]


# --- Tests for navigation.py ---

@pytest.fixture
def nav_tree(tmp_path):
    (tmp_path / "one").mkdir()
    (tmp_path / "two").mkdir()
    return tmp_path


def test_navigation_notifies_listeners(nav_tree):
    navigation = NavigationModel(nav_tree)
    seen = []
    navigation.add_listener(seen.append)

    navigation.set_current_directory(nav_tree / "one")

    assert navigation.current_directory == str(nav_tree / "one")
    assert seen == [str(nav_tree / "one")]


def test_navigation_back_and_forward(nav_tree):
    navigation = NavigationModel(nav_tree)
    navigation.set_current_directory(nav_tree / "one")
    navigation.set_current_directory(nav_tree / "two")

    assert navigation.go_back() is True
    assert navigation.current_directory == str(nav_tree / "one")
    assert navigation.can_go_forward

    assert navigation.go_forward() is True
    assert navigation.current_directory == str(nav_tree / "two")
    assert navigation.go_forward() is False


def test_navigating_clears_forward_history(nav_tree):
    navigation = NavigationModel(nav_tree)
    navigation.set_current_directory(nav_tree / "one")
    navigation.go_back()
    navigation.set_current_directory(nav_tree / "two")

    assert not navigation.can_go_forward


def test_navigation_to_missing_directory_keeps_state(nav_tree):
    navigation = NavigationModel(nav_tree)
    seen = []
    navigation.add_listener(seen.append)

    with pytest.raises(DirectoryNotFoundError):
        navigation.set_current_directory(nav_tree / "missing")

    assert navigation.current_directory == str(nav_tree)
    assert not navigation.can_go_back
    assert seen == []


def test_navigation_same_directory_is_ignored(nav_tree):
    navigation = NavigationModel(nav_tree)
    seen = []
    navigation.add_listener(seen.append)

    navigation.set_current_directory(f"{nav_tree}{os.sep}")

    assert seen == []
    assert not navigation.can_go_back


def test_navigation_go_up(nav_tree):
    navigation = NavigationModel(nav_tree / "one")
    assert navigation.go_up() is True
    assert navigation.current_directory == str(nav_tree)

    root = NavigationModel(os.path.abspath(os.sep))
    assert root.go_up() is False


def test_navigation_back_to_deleted_directory_raises(nav_tree):
    navigation = NavigationModel(nav_tree / "one")
    navigation.set_current_directory(nav_tree / "two")
    (nav_tree / "one").rmdir()

    with pytest.raises(DirectoryNotFoundError):
        navigation.go_back()
    assert navigation.current_directory == str(nav_tree / "two")
    assert navigation.can_go_back


def test_removed_listener_is_not_called(nav_tree):
    navigation = NavigationModel(nav_tree)
    seen = []
    navigation.add_listener(seen.append)
    navigation.remove_listener(seen.append)

    navigation.set_current_directory(nav_tree / "one")
    assert seen == []


# --- Tests for clipboard.py ---

def test_copy_paste_keeps_source_and_clipboard(temp_dirs):
    source_dir, target_dir = temp_dirs
    clipboard = FileClipboard()
    clipboard.copy([FileItem(source_dir / "notes.txt")])

    pasted = clipboard.paste(target_dir)

    assert len(pasted) == 1
    assert (source_dir / "notes.txt").exists()
    assert (target_dir / "notes.txt").exists()
    assert not clipboard.is_empty
    assert clipboard.mode is ClipboardMode.COPY


def test_cut_paste_moves_and_empties_clipboard(temp_dirs):
    source_dir, target_dir = temp_dirs
    clipboard = FileClipboard()
    clipboard.cut([FileItem(source_dir / "notes.txt")])

    clipboard.paste(target_dir)

    assert not (source_dir / "notes.txt").exists()
    assert (target_dir / "notes.txt").exists()
    assert clipboard.is_empty


def test_pasting_a_deleted_copy_is_harmless(temp_dirs):
    source_dir, target_dir = temp_dirs
    clipboard = FileClipboard()
    clipboard.copy([FileItem(source_dir / "notes.txt")])
    (source_dir / "notes.txt").unlink()

    clipboard.paste(target_dir)

    assert not (target_dir / "notes.txt").exists()


def test_paste_into_same_folder_is_invalid(temp_dirs):
    source_dir, _ = temp_dirs
    clipboard = FileClipboard()
    clipboard.copy([FileItem(source_dir / "notes.txt")])

    with pytest.raises(InvalidOperationError):
        clipboard.paste(source_dir)


# --- Tests for config_manager.py ---

def test_settings_round_trip(tmp_path):
    settings_path = tmp_path / "config" / "settings.json"
    settings = ExplorerSettings(theme="light_theme.qss", show_hidden=True,
                                start_directory=str(tmp_path), quick_access=[str(tmp_path)])

    assert save_settings(settings_path, settings) is True
    assert load_settings(settings_path) == settings


def test_settings_defaults_when_missing(tmp_path):
    assert load_settings(tmp_path / "nope.json") == ExplorerSettings()


def test_settings_defaults_when_corrupt(tmp_path):
    settings_path = tmp_path / "settings.json"
    settings_path.write_text("{not json")
    assert load_settings(settings_path) == ExplorerSettings()


def test_settings_ignore_unknown_keys(tmp_path):
    settings_path = tmp_path / "settings.json"
    settings_path.write_text(json.dumps({"theme": "light_theme.qss", "window_size": [1, 2]}))

    settings = load_settings(settings_path)
    assert settings.theme == "light_theme.qss"
    assert settings.show_hidden is False


def test_saving_settings_keeps_a_backup(tmp_path):
    settings_path = tmp_path / "settings.json"
    save_settings(settings_path, ExplorerSettings(theme="first.qss"))
    save_settings(settings_path, ExplorerSettings(theme="second.qss"))

    backup = json.loads((tmp_path / "settings.json.bak").read_text())
    assert backup["theme"] == "first.qss"


def test_settings_with_wrong_types_fall_back_per_field(tmp_path):
    settings_path = tmp_path / "settings.json"
    settings_path.write_text(json.dumps({
        "theme": "light_theme.qss",
        "start_directory": 5,
        "show_hidden": "yes",
        "quick_access": [7],
    }))

    settings = load_settings(settings_path)

    assert settings.theme == "light_theme.qss"
    assert settings.start_directory == str(Path.home())
    assert settings.show_hidden is False
    assert settings.quick_access is None
    assert NavigationModel(settings.start_directory).current_directory == str(Path.home())


def test_settings_keep_an_empty_quick_access_list(tmp_path):
    settings_path = tmp_path / "settings.json"
    save_settings(settings_path, ExplorerSettings(quick_access=[]))

    assert load_settings(settings_path).quick_access == []
    assert ExplorerSettings().quick_access is None


# --- Tests for utils/logger.py ---

def test_logger_manager_places_log_file(tmp_path):
    from file_explorer.utils.logger import LoggerManager

    manager = LoggerManager('custom.log', log_dir=tmp_path)
    assert manager.log_file_path == tmp_path / 'custom.log'
