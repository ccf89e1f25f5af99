"""AppContext — shared Click context for all commands.

Built once by the root group and passed down with ``@click.pass_obj``.
The workspace opens lazily so ``--help`` never touches the database.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from pkmindex.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from pkmindex.config.settings import PkmSettings
    from pkmindex.infrastructure.workspace import Workspace
    from pkmindex.services.result import ServiceResult


class AppContext:
    """Settings, the lazily opened workspace, and result emission."""

    def __init__(self, settings: PkmSettings) -> None:
        from pkmindex.config.logging import configure_logging

        self.settings = settings
        self._workspace: Workspace | None = None
        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

    @property
    def workspace(self) -> Workspace:
        if self._workspace is None:
            from pkmindex.infrastructure.workspace import Workspace

            self._workspace = Workspace(self.settings)
        return self._workspace

    def close(self) -> None:
        if self._workspace is not None:
            self._workspace.close()
            self._workspace = None

    def emit(self, result: ServiceResult) -> None:
        """Print *result*; on failure print to stderr and exit 1.

        Warnings go to stderr in human mode so piped stdout stays clean.
        """
        settings = OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )
        output = format_result(result, settings=settings)
        if result.ok:
            click.echo(output)
            # In JSON mode, warnings are already in the serialized payload.
            if not settings.json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)
