"""Command: dump all stored metadata."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from pkmindex.commands._base import PkmCommand
from pkmindex.services.query import QueryService

if TYPE_CHECKING:
    from pkmindex.commands._context import AppContext


@click.command(cls=PkmCommand, examples="  pkmindex metadata\n  pkmindex --json metadata")
@click.pass_obj
def metadata(app: AppContext) -> None:
    """List every metadata entry in the index, by path then key."""
    app.emit(QueryService(app.workspace).list_metadata())
