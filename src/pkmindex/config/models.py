"""Pydantic configuration sections with code-baked defaults.

pkmindex.toml only needs to contain overrides; an empty file is valid.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class IndexConfig(BaseModel):
    """[index] section."""

    model_config = {"frozen": True}

    extensions: list[str] = Field(default_factory=lambda: [".typ"])
    skip_dirs: list[str] = Field(
        default_factory=lambda: [".git", ".hg", ".svn", "node_modules", "__pycache__"]
    )


class MetadataConfig(BaseModel):
    """[metadata] section — the external ``typst query`` call."""

    model_config = {"frozen": True}

    enabled: bool = True
    command: str = "typst"
    timeout: float = 30.0
