"""Tests for the ``show`` and ``metadata`` commands."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from pkmindex.cli import cli
from tests.conftest import write_note


@pytest.mark.usefixtures("_isolated_workspace")
class TestShowCommand:
    def test_json(self, cli_runner: CliRunner, notes_root: Path) -> None:
        write_note(notes_root, "a.typ", "= Getting Started\n<intro> [[b]]\n")
        cli_runner.invoke(cli, ["index"])
        result = cli_runner.invoke(cli, ["--json", "show", "a.typ"])
        assert result.exit_code == 0
        data = json.loads(result.stdout)["data"]
        assert data["path"] == str(notes_root / "a.typ")
        assert [lbl["name"] for lbl in data["labels"]] == ["getting-started", "intro"]
        assert data["labels"][0]["is_implicit"] is True

    def test_verbose_lists_labels(self, cli_runner: CliRunner, notes_root: Path) -> None:
        write_note(notes_root, "a.typ", "= Getting Started\n[[b:sec|See]]\n")
        cli_runner.invoke(cli, ["index"])
        result = cli_runner.invoke(cli, ["-v", "show", "a.typ"])
        assert result.exit_code == 0
        assert "getting-started" in result.output
        assert "[[b:sec|See]]" in result.output

    def test_not_indexed(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "show", "nope.typ"])
        assert result.exit_code == 1
        assert "NOT_FOUND" in result.output


@pytest.mark.usefixtures("_isolated_workspace")
class TestMetadataCommand:
    def test_empty(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["metadata"])
        assert result.exit_code == 0
        assert "(no metadata)" in result.output

    def test_json_empty(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "metadata"])
        assert result.exit_code == 0
        assert json.loads(result.stdout)["data"] == {"count": 0, "items": []}
