# file_explorer/cli/main.py

import datetime
import logging
import os
from pathlib import Path

import click
from rich.console import Console
from rich.table import Table
from tqdm import tqdm

from file_explorer.core.directory_structure import get_directory_contents, get_drives
from file_explorer.core.exceptions import ExplorerError
from file_explorer.core.file_item import FileItem
from file_explorer.core.file_operations import FileType
from file_explorer.utils.logger import setup_logging

console = Console()
logger = logging.getLogger(__name__)

_TYPE_LABELS = {
    FileType.DRIVE: "[bold magenta]Drive[/bold magenta]",
    FileType.FOLDER: "[bold blue]Folder[/bold blue]",
    FileType.FILE: "File",
}
_PAST_TENSE = {"copy": "copied", "move": "moved"}


def _fail(message: str):
    """Prints an error in red and exits with a non-zero status."""
    console.print(f"[bold red]Error: {message}[/bold red]")
    raise SystemExit(1)


def _format_size(size: int) -> str:
    for unit in ("B", "KB", "MB", "GB"):
        if size < 1024:
            return f"{size:.0f} {unit}" if unit == "B" else f"{size:.1f} {unit}"
        size /= 1024
    return f"{size:.1f} TB"


# --- Main Command Group ---
@click.group(context_settings=dict(help_option_names=['-h', '--help']))
@click.version_option(version="1.0", prog_name="File Explorer")
def fx():
    """
    File Explorer command-line interface.

    The same file operations the graphical explorer offers: list, create,
    copy, move, rename and send to the trash.
    """
    setup_logging(console_level=logging.WARNING)


@fx.command(name="ls")
@click.argument('directory', default=".", type=click.Path(path_type=Path))
@click.option('-a', '--all', 'show_hidden', is_flag=True, help="Include hidden entries.")
def list_directory(directory: Path, show_hidden: bool):
    """Lists the contents of DIRECTORY (default: the current directory)."""
    try:
        children = get_directory_contents(directory, show_hidden)
    except ExplorerError as e:
        _fail(str(e))

    table = Table(title=str(directory.expanduser().resolve()), style="cyan", title_style="bold magenta")
    table.add_column("Name", style="green", no_wrap=True)
    table.add_column("Type")
    table.add_column("Size", justify="right")
    table.add_column("Modified", style="yellow")

    for child in children:
        modified = datetime.datetime.fromtimestamp(child.last_modified_time).strftime("%Y-%m-%d %H:%M")
        size = _format_size(child.size) if child.file_type is FileType.FILE else ""
        table.add_row(child.file_name, _TYPE_LABELS[child.file_type], size, modified)

    console.print(table)
    console.print(f"{len(children)} item(s).")


@fx.command()
def drives():
    """Lists the mounted drives."""
    for drive in get_drives():
        console.print(f"{_TYPE_LABELS[drive.file_type]}  {drive.file_name}")


@fx.command()
@click.argument('path', type=click.Path(path_type=Path))
def mkdir(path: Path):
    """Creates the folder PATH."""
    if FileItem(path, FileType.FOLDER).write_to_disk():
        console.print(f"[bold green]Created folder '{path}'.[/bold green]")
    else:
        _fail(f"Could not create folder '{path}'. It may already exist.")


@fx.command()
@click.argument('path', type=click.Path(path_type=Path))
def touch(path: Path):
    """Creates the empty file PATH."""
    try:
        created = FileItem(path, FileType.FILE).write_to_disk()
    except ExplorerError as e:
        _fail(str(e))
    if created:
        console.print(f"[bold green]Created file '{path}'.[/bold green]")
    else:
        console.print(f"[yellow]'{path}' already exists.[/yellow]")


def _transfer(sources: tuple[Path, ...], destination: Path, verb: str):
    """Copies or moves each source into the destination directory. verb is "copy" or "move"."""
    items = [FileItem(source) for source in sources]
    try:
        for item in tqdm(items, desc=verb.capitalize(), unit="item", disable=len(items) < 2):
            if verb == "move":
                item.move_to(destination)
            else:
                item.copy_to(destination)
    except ExplorerError as e:
        logger.error(f"CLI {verb} failed.", exc_info=True)
        _fail(str(e))
    console.print(f"[bold green]Done: {len(items)} item(s) {_PAST_TENSE[verb]} to '{destination}'.[/bold green]")


@fx.command()
@click.argument('sources', nargs=-1, required=True, type=click.Path(path_type=Path))
@click.argument('destination', type=click.Path(file_okay=False, path_type=Path))
def cp(sources: tuple[Path, ...], destination: Path):
    """Copies SOURCES into the DESTINATION folder."""
    _transfer(sources, destination, "copy")


@fx.command()
@click.argument('sources', nargs=-1, required=True, type=click.Path(path_type=Path))
@click.argument('destination', type=click.Path(file_okay=False, path_type=Path))
def mv(sources: tuple[Path, ...], destination: Path):
    """Moves SOURCES into the DESTINATION folder."""
    # Dangling symlinks count as existing.
    missing = [str(source) for source in sources if not os.path.lexists(source)]
    if missing:
        _fail(f"No such file or folder: {', '.join(missing)}")
    _transfer(sources, destination, "move")


@fx.command()
@click.argument('path', type=click.Path(exists=True, path_type=Path))
@click.argument('new_name')
def rename(path: Path, new_name: str):
    """Renames PATH to NEW_NAME within its folder."""
    if FileItem(path).rename(new_name):
        console.print(f"[bold green]Renamed '{path.name}' to '{new_name}'.[/bold green]")
    else:
        _fail(f"Could not rename '{path.name}' to '{new_name}'.")


@fx.command()
@click.argument('paths', nargs=-1, required=True, type=click.Path(exists=True, path_type=Path))
@click.option('-y', '--yes', is_flag=True, help="Do not ask for confirmation.")
def trash(paths: tuple[Path, ...], yes: bool):
    """Sends PATHS to the trash."""
    if not yes:
        click.confirm(f"Move {len(paths)} item(s) to the trash?", abort=True)

    failed = [path for path in paths if not FileItem(path).send_to_trash()]
    for path in failed:
        console.print(f"[bold red]Could not move '{path}' to the trash.[/bold red]")
    if failed:
        raise SystemExit(1)
    console.print(f"[bold green]Moved {len(paths)} item(s) to the trash.[/bold green]")
