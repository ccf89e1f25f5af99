"""Tests for the ``index`` and ``remove`` commands."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from pkmindex.cli import cli
from tests.conftest import write_note


@pytest.mark.usefixtures("_isolated_workspace")
class TestIndexCommand:
    def test_rebuild_without_paths(self, cli_runner: CliRunner, notes_root: Path) -> None:
        write_note(notes_root, "a.typ", "[[b]]")
        write_note(notes_root, "sub/b.typ", "")
        result = cli_runner.invoke(cli, ["--json", "index"])
        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["op"] == "rebuild"
        assert data["data"]["count"] == 2
        assert (notes_root / ".pkm-cache.db").exists()

    def test_single_file(self, cli_runner: CliRunner, notes_root: Path) -> None:
        write_note(notes_root, "a.typ", "= Title\n[[b]]")
        result = cli_runner.invoke(cli, ["--json", "index", "a.typ"])
        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["op"] == "index_file"
        assert data["data"] == {"path": "a.typ", "wikilinks": 1, "labels": 1, "errors": []}

    def test_several_files_with_failure(self, cli_runner: CliRunner, notes_root: Path) -> None:
        write_note(notes_root, "a.typ", "")
        result = cli_runner.invoke(cli, ["--json", "index", "a.typ", "missing.typ"])
        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["op"] == "index"
        assert data["data"]["count"] == 1
        assert data["data"]["errors"][0]["code"] == "IO_ERROR"
        assert len(data["warnings"]) == 1

    def test_missing_single_file_fails(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["index", "missing.typ"])
        assert result.exit_code == 1
        assert "ERROR" in result.output

    def test_human_summary(self, cli_runner: CliRunner, notes_root: Path) -> None:
        write_note(notes_root, "a.typ", "")
        result = cli_runner.invoke(cli, ["index"])
        assert result.exit_code == 0
        assert "rebuild" in result.output
        assert "indexed: 1" in result.output

    def test_quiet_lists_paths(self, cli_runner: CliRunner, notes_root: Path) -> None:
        write_note(notes_root, "b.typ", "")
        write_note(notes_root, "a.typ", "")
        result = cli_runner.invoke(cli, ["-q", "index"])
        assert result.exit_code == 0
        assert result.stdout.splitlines() == ["a.typ", "b.typ"]

    def test_root_option(
        self, cli_runner: CliRunner, tmp_path_factory: pytest.TempPathFactory
    ) -> None:
        other = tmp_path_factory.mktemp("other-root")
        write_note(other, "x.typ", "[[y]]")
        result = cli_runner.invoke(cli, ["--json", "--root", str(other), "index"])
        assert result.exit_code == 0
        assert json.loads(result.stdout)["data"]["count"] == 1
        assert (other / ".pkm-cache.db").exists()


@pytest.mark.usefixtures("_isolated_workspace")
class TestRemoveCommand:
    def test_remove_indexed(self, cli_runner: CliRunner, notes_root: Path) -> None:
        write_note(notes_root, "a.typ", "[[b]]")
        cli_runner.invoke(cli, ["index"])
        result = cli_runner.invoke(cli, ["--json", "remove", "a.typ"])
        assert result.exit_code == 0
        assert json.loads(result.stdout)["data"]["removed"] is True

        backlinks = cli_runner.invoke(cli, ["--json", "links", "backward", "b.typ"])
        assert json.loads(backlinks.stdout)["data"]["count"] == 0

    def test_remove_unknown(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "remove", "never.typ"])
        assert result.exit_code == 0
        assert json.loads(result.stdout)["data"]["removed"] is False
