"""
AssistKit — Command Line Interface
===================================
Terminal driver for the assist engine.

Commands:
  list     — Show the assists applicable at a caret/selection
  resolve  — Show (or apply) fully resolved assists
  group    — Group a digit string with `_` separators

The caret is given with --offset, a selection with --range START:END,
or by `<|>` markers inside the file itself.

Usage:
  assistkit list src/main.rs --offset 120
  assistkit resolve fixture.rs --apply split_string
"""

import json
import logging
from pathlib import Path
from typing import Optional, Tuple

import typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from assistkit.config import AssistConfig
from assistkit.edit.text_range import TextRange
from assistkit.models import ResolvedAssist
from assistkit.numbers.grouping import group as group_digits
from assistkit.orchestrator.driver import AssistDriver
from assistkit.syntax.base import Language
from assistkit.syntax.markers import CURSOR_MARKER, add_cursor, as_range, extract_range_or_offset
from assistkit.syntax.providers import language_for_path

_config = AssistConfig.from_env()

# Configure logging
logging.basicConfig(
    level=getattr(logging, _config.log_level, logging.WARNING),
    format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
    datefmt="%H:%M:%S",
)

console = Console()
app = typer.Typer(name="assistkit", help="AssistKit code assist engine")


def _fail(message: str) -> None:
    console.print(f"[bold red]{escape(message)}[/bold red]")
    raise typer.Exit(1)


def _parse_range(spec: str) -> TextRange:
    try:
        start, end = (int(part) for part in spec.split(":"))
        return TextRange(start, end)
    except ValueError:
        _fail(f"Invalid range {spec!r}, expected START:END with START <= END")


def _load(
    path: Path,
    offset: Optional[int],
    range_spec: Optional[str],
    language: Optional[Language],
) -> Tuple[str, TextRange, AssistDriver]:
    if not path.exists():
        _fail(f"File not found: {path}")
    text = path.read_text()

    if offset is not None and range_spec is not None:
        _fail("Use either --offset or --range, not both")
    if offset is not None:
        if offset < 0:
            _fail(f"Invalid offset {offset}")
        range = TextRange.empty(offset)
    elif range_spec is not None:
        range = _parse_range(range_spec)
    elif CURSOR_MARKER in text:
        range_or_offset, text = extract_range_or_offset(text)
        range = as_range(range_or_offset)
    else:
        _fail(f"No caret given: pass --offset, --range or put {CURSOR_MARKER} in the file")

    if range.end > len(text):
        _fail(f"Range {range} is outside the file ({len(text)} characters)")

    config = AssistConfig(
        language=language or language_for_path(path) or _config.language,
        disabled=_config.disabled,
        log_level=_config.log_level,
    )
    return text, range, AssistDriver(config)


def _print_resolved(resolved: list) -> None:
    table = Table(title="Resolved assists")
    table.add_column("ID", style="cyan")
    table.add_column("Label")
    table.add_column("Target", justify="right")
    table.add_column("Cursor", justify="right")
    table.add_column("Operations")
    for r in resolved:
        ops = escape(", ".join(f"{op.range}→{op.text!r}" for op in r.edit.operations))
        table.add_row(
            r.label.id.value,
            r.label.label,
            str(r.edit.target) if r.edit.target else "-",
            str(r.edit.cursor) if r.edit.cursor is not None else "-",
            ops,
        )
    console.print(table)


def _apply(text: str, range: TextRange, assist: ResolvedAssist) -> Tuple[str, int]:
    new_text, translate = assist.edit.finalize(text)
    cursor = assist.edit.cursor_in(new_text)
    if cursor is None:
        cursor = translate(range.end)
    return new_text, cursor


# ── Commands ─────────────────────────────────────────────────────────────────

@app.command(name="list")
def cmd_list(
    path: Path = typer.Argument(..., help="Source file"),
    offset: Optional[int] = typer.Option(None, help="Caret offset"),
    range_spec: Optional[str] = typer.Option(None, "--range", help="Selection START:END"),
    language: Optional[Language] = typer.Option(None, help="Override language detection"),
):
    """List the assists applicable at the caret or selection."""
    text, range, driver = _load(path, offset, range_spec, language)
    labels = driver.list_applicable(text, range)
    if not labels:
        console.print("[yellow]No assists applicable[/yellow]")
        return

    table = Table(title=f"Assists at {range}")
    table.add_column("ID", style="cyan")
    table.add_column("Label")
    for label in labels:
        table.add_row(label.id.value, label.label)
    console.print(table)


@app.command(name="resolve")
def cmd_resolve(
    path: Path = typer.Argument(..., help="Source file"),
    offset: Optional[int] = typer.Option(None, help="Caret offset"),
    range_spec: Optional[str] = typer.Option(None, "--range", help="Selection START:END"),
    language: Optional[Language] = typer.Option(None, help="Override language detection"),
    as_json: bool = typer.Option(False, "--json", help="Print resolved assists as JSON"),
    apply_id: Optional[str] = typer.Option(None, "--apply", help="Apply the assist with this id"),
    write: bool = typer.Option(False, help="Write the applied edit back to the file"),
):
    """Resolve every applicable assist, optionally applying one."""
    text, range, driver = _load(path, offset, range_spec, language)
    resolved = driver.resolve_all(text, range)

    if apply_id is None:
        if as_json:
            typer.echo(json.dumps([r.to_dict() for r in resolved], indent=2))
        elif resolved:
            _print_resolved(resolved)
        else:
            console.print("[yellow]No assists applicable[/yellow]")
        return

    chosen = next((r for r in resolved if r.label.id.value == apply_id), None)
    if chosen is None:
        available = ", ".join(r.label.id.value for r in resolved) or "none"
        _fail(f"Assist '{apply_id}' is not applicable. Applicable assists: [{available}]")

    new_text, cursor = _apply(text, range, chosen)
    if write:
        path.write_text(new_text)
        console.print(Panel(
            f"[bold green]Applied {chosen.label.label}[/bold green]\n"
            f"File: [cyan]{path}[/cyan]\nCursor: [cyan]{cursor}[/cyan]",
            title="APPLY",
            border_style="green",
        ))
    else:
        typer.echo(add_cursor(new_text, cursor), nl=False)


@app.command(name="group")
def cmd_group(
    digits: str = typer.Argument(..., help="Digits, with or without separators"),
    size: int = typer.Option(3, help="Group size"),
):
    """Group a digit string from the right."""
    if size <= 0:
        _fail(f"Group size must be positive, got {size}")
    typer.echo(group_digits(digits, size))


if __name__ == "__main__":
    app()
