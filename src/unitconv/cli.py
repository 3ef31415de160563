#!/usr/bin/env python3
"""Command line interface for unitconv"""
import sys

import rich_click as click
from rich_click import RichGroup

from unitconv import __version__
from unitconv import app_hooks

click.rich_click.USE_RICH_MARKUP = True
click.rich_click.USE_MARKDOWN = False
click.rich_click.MARKUP_MODE = "rich"
click.rich_click.SHOW_ARGUMENTS = True
click.rich_click.GROUP_ARGUMENTS_OPTIONS = True
click.rich_click.SHOW_METAVARS_COLUMN = False
click.rich_click.APPEND_METAVARS_HELP = True
click.rich_click.STYLE_ERRORS_SUGGESTION = "#ff5555"
click.rich_click.ERRORS_SUGGESTION = "Try running the '--help' flag for more information."
click.rich_click.MAX_WIDTH = 120
click.rich_click.STYLE_OPTION = "#ff79c6"  # Dracula Pink - for option flags
click.rich_click.STYLE_SWITCH = "#50fa7b"  # Dracula Green - for switches
click.rich_click.STYLE_METAVAR = "#8BE9FD not bold"
click.rich_click.STYLE_HEADER_TEXT = "bold yellow"
click.rich_click.STYLE_USAGE = "#BD93F9"
click.rich_click.STYLE_HELPTEXT = "#B3B8C0"
click.rich_click.STYLE_COMMAND = "#50fa7b"

DISPLAY_CHOICES = ["all", "si", "si-only", "imp", "imp-only"]


@click.group(cls=RichGroup, context_settings={"help_option_names": ["-h", "--help"], "max_content_width": 120})
@click.version_option(version=__version__, prog_name="GOOBITS UNITCONV")
def main():
    """📏 [bold color(6)]GOOBITS UNITCONV[/bold color(6)] - Metric and imperial annotations for quantities in HTML

    Finds quantities such as "100 km", "4 1/2 lbs" or "20-25 °C" in page text and
    inserts the converted value next to each one, ready to be toggled with units.css.
    """
    pass


@main.command()
@click.argument("FILES", nargs=-1, required=True)
@click.option("-o", "--output", type=str, help="📄 Output file (default: stdout)")
@click.option("--display", type=click.Choice(DISPLAY_CHOICES), help="👀 Toggle class to set on <body>")
@click.option("--parser", type=str, help="🧩 BeautifulSoup parser (default from config: html.parser)")
@click.option("--debug", is_flag=True, help="🐞 Enable detailed debug logging")
@click.option("--config", type=str, help="⚙️ Path to custom config file")
def convert(files, output, display, parser, debug, config):
    """🔁 Annotate quantities in HTML files ('-' reads stdin)"""
    sys.exit(
        app_hooks.on_convert(
            files=files, output=output, display=display, parser=parser, debug=debug, config=config
        )
    )


@main.command()
@click.option("--json", is_flag=True, help="📋 Output the unit table as JSON")
def units(json):
    """📚 List the units that are recognized and what they convert to"""
    sys.exit(app_hooks.on_units(json=json))


@main.command()
@click.option("-o", "--output", type=str, help="📄 Output file (default: stdout)")
def stylesheet(output):
    """🎨 Print the stylesheet that maps unit-show-* toggles to visibility"""
    sys.exit(app_hooks.on_stylesheet(output=output))


def cli_entry():
    """Entry point for the installed ``unitconv`` command."""
    main()


if __name__ == "__main__":
    cli_entry()
