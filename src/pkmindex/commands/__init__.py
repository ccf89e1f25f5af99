"""Subcommand modules for pkmindex.

register_commands() imports lazily so ``pkmindex --help`` stays fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Attach every command and group to the root CLI group."""
    from pkmindex.commands.index_cmd import index_cmd
    from pkmindex.commands.links import links
    from pkmindex.commands.metadata import metadata
    from pkmindex.commands.remove import remove
    from pkmindex.commands.show import show

    cli.add_command(links)
    cli.add_command(index_cmd)
    cli.add_command(remove)
    cli.add_command(show)
    cli.add_command(metadata)
