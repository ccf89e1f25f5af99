"""Operation-specific Rich renderers for ServiceResult.

Dispatched by ``result.op``; unknown ops fall back to key-value output.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from pkmindex.output.console import create_console, get_output

if TYPE_CHECKING:
    from rich.console import Console

    from pkmindex.services.result import ServiceResult


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render *result* as styled text (plain when not on a terminal)."""
    console = create_console()
    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console, verbose=verbose)
    else:
        _render_error(result, console, verbose=verbose)
    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """One line per item for list-like results, else ``OK: op``."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} — {msg}"

    if result.op == "forward_links":
        return "\n".join(link["target"] for link in result.data.get("links", []))
    if result.op == "backward_links":
        return "\n".join(str(link["source_file"]) for link in result.data.get("links", []))
    if result.op in ("index", "rebuild"):
        return "\n".join(str(item["path"]) for item in result.data.get("items", []))
    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult) -> None:
    console.print(Text("OK", style="pkm.ok"), Text(f"  {result.op}", style="pkm.op"))


def _field(console: Console, key: str, value: Any) -> None:
    style = "pkm.path" if key in ("path", "source_file") else ""
    console.print(Text(f"  {key}:", style="pkm.key"), Text(str(value), style=style))


def _link_text(link: dict[str, Any]) -> str:
    inner = link["target"]
    if link.get("label"):
        inner += f":{link['label']}"
    if link.get("alias"):
        inner += f"|{link['alias']}"
    return f"[[{inner}]]"


# ── Error renderer ────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    console.print(
        Text("ERROR", style="pkm.error"), Text(f"  {result.op}", style="pkm.op"), " — ", msg
    )
    if verbose and err:
        console.print(Text(f"  code: {err.code}", style="dim"))
        for k, v in err.detail.items():
            console.print(f"    {k}: {v}")


# ── Link renderers ────────────────────────────────────────────────────


def _render_forward(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    _field(console, "path", result.data.get("path", ""))
    links = result.data.get("links", [])
    if not links:
        console.print("  (no links)")
        return
    table = Table(show_header=True, pad_edge=False)
    table.add_column("Pos", style="pkm.pos", justify="right")
    table.add_column("Target", style="pkm.target")
    table.add_column("Label")
    table.add_column("Alias")
    for link in links:
        table.add_row(
            f"{link['line']}:{link['column']}",
            link["target"],
            link.get("label") or "",
            link.get("alias") or "",
        )
    console.print(table)


def _render_backward(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    _field(console, "target", result.data.get("target", ""))
    links = result.data.get("links", [])
    if not links:
        console.print("  (no backlinks)")
        return
    table = Table(show_header=True, pad_edge=False)
    table.add_column("Source", style="pkm.path")
    table.add_column("Pos", style="pkm.pos", justify="right")
    table.add_column("Link")
    for item in links:
        link = item["wikilink"]
        table.add_row(str(item["source_file"]), f"{link['line']}:{link['column']}", _link_text(link))
    console.print(table)


# ── Query renderers ───────────────────────────────────────────────────


def _render_file(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    d = result.data
    _status_line(console, result)
    _field(console, "path", d["path"])
    meta = d["metadata"]
    if meta.get("title") is not None:
        _field(console, "title", meta["title"])
    if meta.get("tags"):
        _field(console, "tags", ", ".join(meta["tags"]))
    if meta.get("alias"):
        _field(console, "alias", ", ".join(meta["alias"]))
    for key, value in meta.get("custom", {}).items():
        _field(console, key, json.dumps(value))

    _field(console, "wikilinks", len(d["wikilinks"]))
    if verbose:
        for link in d["wikilinks"]:
            console.print(f"    {link['line']}:{link['column']}  {_link_text(link)}")

    _field(console, "labels", len(d["labels"]))
    for label in d["labels"] if verbose else []:
        style = "pkm.implicit" if label["is_implicit"] else ""
        console.print(
            f"    {label['line']}:{label['column']}  ", Text(label["name"], style=style)
        )


def _render_metadata(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    items = result.data.get("items", [])
    if not items:
        console.print("  (no metadata)")
        return
    table = Table(show_header=True, pad_edge=False)
    table.add_column("Path", style="pkm.path")
    table.add_column("Key", style="pkm.key")
    table.add_column("Value")
    for row in items:
        table.add_row(row["path"], row["key"], row["value"])
    console.print(table)


# ── Mutation renderers ────────────────────────────────────────────────


def _render_indexed(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    d = result.data
    _field(console, "indexed", d.get("count", 0))
    if "removed" in d:
        _field(console, "removed", len(d["removed"]))
    _field(console, "errors", len(d.get("errors", [])))
    if verbose:
        for item in d.get("items", []):
            console.print(
                f"    {item['path']}  ({item['wikilinks']} links, {item['labels']} labels)"
            )


def _render_index_file(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    d = result.data
    _field(console, "path", d["path"])
    _field(console, "wikilinks", d["wikilinks"])
    _field(console, "labels", d["labels"])
    _field(console, "errors", len(d.get("errors", [])))


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    for key, value in result.data.items():
        _field(console, key, value)


_OP_RENDERERS: dict[str, Any] = {
    "forward_links": _render_forward,
    "backward_links": _render_backward,
    "get_file": _render_file,
    "list_metadata": _render_metadata,
    "index_file": _render_index_file,
    "index": _render_indexed,
    "rebuild": _render_indexed,
}
