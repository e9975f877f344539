# assets/check_assets.py
"""
Reports which custom icons and themes the explorer will pick up.

Missing icons are not an error: the GUI draws Qt's standard icon instead.
Run from anywhere: python assets/check_assets.py
"""
from pathlib import Path
import sys

# The script lives outside the package; make the project importable when it is not installed.
sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from rich.console import Console
from rich.table import Table

from file_explorer.gui.resources import ICONS_PATH, REQUIRED_ICONS, STYLES_PATH, available_themes

console = Console()


def icon_report() -> dict[str, bool]:
    """Maps every icon name the GUI requests to whether a custom SVG exists for it."""
    return {name: (ICONS_PATH / f"{name}.svg").is_file() for name in REQUIRED_ICONS}


def main() -> int:
    report = icon_report()

    table = Table(title=f"Icons in {ICONS_PATH}", title_style="bold magenta")
    table.add_column("Icon", style="green")
    table.add_column("Source")
    for name, custom in report.items():
        table.add_row(name, "[bold cyan]custom SVG[/bold cyan]" if custom else "Qt standard icon")
    console.print(table)

    custom_count = sum(report.values())
    console.print(f"{custom_count}/{len(report)} icons are custom.")

    themes = available_themes()
    if not themes:
        console.print(f"[bold red]No themes found in {STYLES_PATH / 'themes'}.[/bold red]")
        return 1
    console.print(f"Themes: {', '.join(themes)}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
