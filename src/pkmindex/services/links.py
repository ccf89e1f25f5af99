"""LinkService — forward and backward link queries as ServiceResults."""

from __future__ import annotations

from pathlib import Path

from pkmindex.services.base import HANDLED_ERRORS, BaseService
from pkmindex.services.contracts import (
    BackwardLinksRequest,
    ForwardLinksRequest,
    handle_backward_links,
    handle_forward_links,
)
from pkmindex.services.result import ServiceResult


class LinkService(BaseService):
    """Read-only link queries against the workspace index."""

    def forward_links(self, path: Path) -> ServiceResult:
        """Links written in *path*. An unindexed file yields an empty list."""
        op = "forward_links"
        try:
            response = handle_forward_links(
                self._workspace.index, ForwardLinksRequest(file_path=path)
            )
        except HANDLED_ERRORS as exc:
            return self._fail(op, exc, path)
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "path": str(path),
                "count": len(response.links),
                **response.model_dump(mode="json"),
            },
        )

    def backward_links(self, path: Path) -> ServiceResult:
        """Links in any indexed file whose target is the stem of *path*."""
        op = "backward_links"
        try:
            response = handle_backward_links(
                self._workspace.index, BackwardLinksRequest(file_path=path)
            )
        except HANDLED_ERRORS as exc:
            return self._fail(op, exc, path)
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "path": str(path),
                "target": Path(path).stem,
                "count": len(response.links),
                **response.model_dump(mode="json"),
            },
        )
