"""Integration workflow tests — multi-step scenarios spanning several services.

These exercise the index as a whole: notes are edited, renamed and
deleted on disk between indexing passes, and the link queries must track
the files.
"""

from __future__ import annotations

from pathlib import Path

from sqlalchemy import func, select

from pkmindex.infrastructure.database.schema import wikilinks
from pkmindex.infrastructure.workspace import Workspace
from pkmindex.services.indexing import IndexService
from pkmindex.services.links import LinkService
from pkmindex.services.query import QueryService
from tests.conftest import write_note


class TestEditReindexQuery:
    """Write notes → rebuild → edit one → reindex it → backlinks follow."""

    def test_backlinks_follow_edits(self, workspace: Workspace, notes_root: Path) -> None:
        index_svc = IndexService(workspace)
        links = LinkService(workspace)

        a = write_note(notes_root, "a.typ", "= A\nLinks to [[target]].\n")
        write_note(notes_root, "b.typ", "Nothing yet.\n")
        target = write_note(notes_root, "topics/target.typ", "= Target\n<anchor>\n")
        assert index_svc.rebuild().data["count"] == 3

        before = links.backward_links(target)
        assert [Path(i["source_file"]).name for i in before.data["links"]] == ["a.typ"]

        b = notes_root / "b.typ"
        b.write_text("Now [[target:anchor|see anchor]].\n", encoding="utf-8")
        a.write_text("= A\nNo links here.\n", encoding="utf-8")
        index_svc.index_paths([a, b])

        after = links.backward_links(target)
        assert [Path(i["source_file"]).name for i in after.data["links"]] == ["b.typ"]
        assert after.data["links"][0]["wikilink"]["label"] == "anchor"

    def test_rebuild_tracks_deletion(self, workspace: Workspace, notes_root: Path) -> None:
        index_svc = IndexService(workspace)
        write_note(notes_root, "hub.typ", "[[x]] [[y]] [[z]]\n")
        spoke = write_note(notes_root, "spoke.typ", "[[x]]\n")
        index_svc.rebuild()
        with workspace.index.engine.connect() as conn:
            assert conn.execute(select(func.count()).select_from(wikilinks)).scalar_one() == 4

        spoke.unlink()
        result = index_svc.rebuild()
        assert result.data["removed"] == ["spoke.typ"]
        with workspace.index.engine.connect() as conn:
            assert conn.execute(select(func.count()).select_from(wikilinks)).scalar_one() == 3

        names = [
            Path(i["source_file"]).name
            for i in LinkService(workspace).backward_links(notes_root / "x.typ").data["links"]
        ]
        assert names == ["hub.typ"]


class TestShowAfterIndex:
    def test_show_matches_parse(self, workspace: Workspace, notes_root: Path) -> None:
        note = write_note(
            notes_root,
            "n.typ",
            "= Getting Started\nSee [[guide:setup|the guide]] <fig:overview>\n",
        )
        IndexService(workspace).index_file(note)
        data = QueryService(workspace).get_file(note).data
        assert data["metadata"] == {"title": None, "tags": [], "alias": [], "custom": {}}
        assert [(w["target"], w["label"], w["alias"]) for w in data["wikilinks"]] == [
            ("guide", "setup", "the guide")
        ]
        assert [(lbl["name"], lbl["is_implicit"]) for lbl in data["labels"]] == [
            ("getting-started", True),
            ("fig:overview", False),
        ]
