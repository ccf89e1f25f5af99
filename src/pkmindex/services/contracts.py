"""Request/response contracts for the link queries.

These are the shapes a front end (CLI, editor integration) exchanges
with the index. ``handle_*`` functions translate a request straight into
an Index call and wrap the answer; they add no logic of their own and let
errors propagate.
"""

from __future__ import annotations

from dataclasses import asdict
from pathlib import Path
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ConfigDict

if TYPE_CHECKING:
    from pkmindex.domain.models import Wikilink
    from pkmindex.infrastructure.index import Index


def dump_validated[T: BaseModel](model_cls: type[T], data: dict[str, Any]) -> dict[str, Any]:
    """Validate *data* against *model_cls* and return a JSON-safe payload dict."""
    return model_cls.model_validate(data).model_dump(mode="json")


class WikilinkItem(BaseModel):
    """Wire form of a :class:`~pkmindex.domain.models.Wikilink`."""

    model_config = ConfigDict(frozen=True)

    target: str
    alias: str | None = None
    label: str | None = None
    line: int
    column: int

    @classmethod
    def from_domain(cls, link: Wikilink) -> WikilinkItem:
        return cls(**asdict(link))


class ForwardLinksRequest(BaseModel):
    file_path: Path


class ForwardLinksResponse(BaseModel):
    links: list[WikilinkItem]


class BackwardLinksRequest(BaseModel):
    file_path: Path


class BacklinkInfo(BaseModel):
    """A backward link together with the file it was found in."""

    source_file: Path
    wikilink: WikilinkItem


class BackwardLinksResponse(BaseModel):
    links: list[BacklinkInfo]


def handle_forward_links(index: Index, request: ForwardLinksRequest) -> ForwardLinksResponse:
    """Answer a forward-links request from :meth:`Index.get_forward_links`."""
    links = index.get_forward_links(request.file_path)
    return ForwardLinksResponse(links=[WikilinkItem.from_domain(w) for w in links])


def handle_backward_links(index: Index, request: BackwardLinksRequest) -> BackwardLinksResponse:
    """Answer a backward-links request from :meth:`Index.get_backward_links`."""
    backlinks = index.get_backward_links(request.file_path)
    return BackwardLinksResponse(
        links=[
            BacklinkInfo(source_file=source, wikilink=WikilinkItem.from_domain(link))
            for source, link in backlinks
        ]
    )


class LabelItem(BaseModel):
    name: str
    line: int
    column: int
    is_implicit: bool


class MetadataItem(BaseModel):
    title: str | None = None
    tags: list[str]
    alias: list[str]
    custom: dict[str, Any]


class ParsedFileData(BaseModel):
    """Payload contract for ``QueryService.get_file``."""

    path: str
    metadata: MetadataItem
    wikilinks: list[WikilinkItem]
    labels: list[LabelItem]


class MetadataRow(BaseModel):
    path: str
    key: str
    value: str


class MetadataListData(BaseModel):
    """Payload contract for ``QueryService.list_metadata``."""

    count: int
    items: list[MetadataRow]
