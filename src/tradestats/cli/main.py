"""TradeStats CLI main entry point."""

import click

from tradestats import __version__
from tradestats.cli.commands import analyze_command


@click.group()
@click.version_option(version=__version__)
def main():
    """TradeStats - Trading Performance & Risk Analytics"""
    pass


# Register commands
main.add_command(analyze_command)


if __name__ == "__main__":
    main()
