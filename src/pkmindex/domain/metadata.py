"""Shape the metadata tool's JSON output into :class:`Metadata`.

Recognized keys are ``title`` (string), ``tags`` and ``alias`` (arrays of
strings). Every other key lands in ``custom`` unchanged.
"""

from __future__ import annotations

import json
from typing import Any

from pkmindex.domain.errors import MetadataParseError
from pkmindex.domain.models import Metadata

RESERVED_KEYS = frozenset({"title", "tags", "alias"})


def _string_items(value: Any) -> list[str]:
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, str)]


def metadata_from_dict(data: dict[str, Any]) -> Metadata:
    """Fold a decoded JSON object into a Metadata value."""
    metadata = Metadata()
    for key, value in data.items():
        if key == "title":
            metadata.title = value if isinstance(value, str) else None
        elif key == "tags":
            metadata.tags = _string_items(value)
        elif key == "alias":
            metadata.alias = _string_items(value)
        else:
            metadata.custom[key] = value
    return metadata


def parse_metadata_json(raw: str) -> Metadata:
    """Decode *raw* JSON into Metadata.

    A valid JSON value that is not an object yields empty Metadata.

    Raises:
        MetadataParseError: If *raw* is not valid JSON.
    """
    try:
        value = json.loads(raw)
    except json.JSONDecodeError as exc:
        msg = f"Malformed metadata JSON: {exc}"
        raise MetadataParseError(msg) from exc
    if not isinstance(value, dict):
        return Metadata()
    return metadata_from_dict(value)
