# file_explorer/main.py

import click

from file_explorer.cli.main import fx


@click.group(context_settings=dict(help_option_names=['-h', '--help']))
def main():
    """
    File Explorer: a desktop file browser with a matching command-line tool.

    Example (GUI): python -m file_explorer.main gui
    Example (CLI): python -m file_explorer.main cli --help
    """
    pass


@click.command()
@click.argument('directory', required=False, type=click.Path(exists=True, file_okay=False))
def gui(directory):
    """Launches the graphical explorer, optionally opened at DIRECTORY."""
    # Imported here so the CLI works on machines without a display server.
    from file_explorer.gui.main_window import run_gui
    run_gui(directory)


main.add_command(gui)
main.add_command(fx, name='cli')

if __name__ == '__main__':
    main()
