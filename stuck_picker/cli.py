"""
Stuck Picker — CLI entry point.

All commands follow this pattern:
  1. Load ``AppConfig`` via ``load_config()``.
  2. Configure logging.
  3. Validate inputs.
  4. Execute action (pick, feedback, list editing).
  5. Report result to stdout.

Install and run::

    pip install -e .
    stuck-picker --help
    stuck-picker list-files
    stuck-picker pick --file food.csv
    stuck-picker pick --tag Italian
    stuck-picker feedback "Pizza" --like
    stuck-picker create-list snacks.csv --item "Chips=Salty;Crunchy"
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

import typer

app = typer.Typer(
    name="stuck-picker",
    help="Stuck Picker — weighted suggestions from your own CSV lists.",
    add_completion=False,
)

_CONFIG_HELP = "Path to TOML config file (default: config/default.toml)."


# ── Helpers ───────────────────────────────────────────────────────────────────

def _load_config_or_exit(config_path: Optional[str] = None):
    """Load AppConfig, printing a friendly error and exiting on failure."""
    from pydantic import ValidationError

    from stuck_picker.config import load_config

    try:
        cfg_path = Path(config_path) if config_path else None
        return load_config(cfg_path)
    except FileNotFoundError as exc:
        typer.echo(f"[ERROR] {exc}", err=True)
        raise typer.Exit(code=1)
    except (ValidationError, ValueError) as exc:
        typer.echo(f"[ERROR] Config validation failed: {exc}", err=True)
        raise typer.Exit(code=1)


def _configure_logging(config):
    """Set up logging from config."""
    from stuck_picker.utils.logging import configure_logging
    configure_logging(config.logging)


def _service(config_path: Optional[str]):
    """Config + logging + a loaded ``PickerService``."""
    from stuck_picker.service import PickerService

    config = _load_config_or_exit(config_path)
    _configure_logging(config)
    return PickerService(config).load()


def _list_path(config_path: Optional[str], filename: str) -> Path:
    config = _load_config_or_exit(config_path)
    _configure_logging(config)
    return Path(config.data.lists_dir) / filename


def _prompt(question: str) -> str:
    return typer.prompt(question, default="", show_default=False, prompt_suffix="\n>> ")


def _parse_entry(raw: str) -> tuple[str, str]:
    name, sep, tags = raw.partition("=")
    if not sep:
        raise ValueError(f"Item '{raw}' must look like NAME=TAG1;TAG2.")
    return name, tags


# ── Commands ──────────────────────────────────────────────────────────────────

@app.command("validate-config")
def validate_config(
    config_path: Optional[str] = typer.Option(None, "--config", help=_CONFIG_HELP),
    show_full: bool = typer.Option(
        False,
        "--full",
        help="Print full config including all fields.",
    ),
) -> None:
    """Validate the configuration file and print parsed values.

    Exits with code 1 if the config fails validation.
    """
    config = _load_config_or_exit(config_path)

    typer.echo("Configuration validated successfully.")
    typer.echo("")
    typer.echo(f"  Lists directory:  {config.data.lists_dir}")
    typer.echo(f"  Selection seed:   {config.selection.seed}")
    typer.echo(f"  Log level:        {config.logging.level}")
    typer.echo(f"  Debug mode:       {config.debug}")

    if show_full:
        typer.echo("")
        typer.echo("Full config (JSON):")
        typer.echo(json.dumps(config.model_dump(), indent=2, default=str))

    typer.echo("")
    typer.echo("[OK] Config valid.")


@app.command("list-files")
def list_files(
    config_path: Optional[str] = typer.Option(None, "--config", help=_CONFIG_HELP),
) -> None:
    """List the CSV files found in the lists directory."""
    service = _service(config_path)
    files = service.files()
    if not files:
        typer.echo(f"No CSV files found in '{service.lists.lists_dir}'.")
        return
    for i, filename in enumerate(files, start=1):
        count = len(service.store.items_for_file(filename))
        typer.echo(f"  [{i}] {filename} ({count} item(s))")


@app.command("list-tags")
def list_tags(
    config_path: Optional[str] = typer.Option(None, "--config", help=_CONFIG_HELP),
) -> None:
    """List every tag with the number of items carrying it."""
    service = _service(config_path)
    tags = service.tags()
    if not tags:
        typer.echo("No tags loaded.")
        return
    for tag in tags:
        typer.echo(f"  {tag} ({len(service.store.group(tag))} item(s))")


@app.command("pick")
def pick(
    file: Optional[str] = typer.Option(
        None,
        "--file",
        "-f",
        help="Browse one list file; feedback spreads to items sharing a tag.",
    ),
    tag: Optional[str] = typer.Option(
        None,
        "--tag",
        "-t",
        help="Browse one tag; feedback changes only the suggested item.",
    ),
    config_path: Optional[str] = typer.Option(None, "--config", help=_CONFIG_HELP),
) -> None:
    """Suggest items one at a time and record like / dislike feedback.

    \b
    Answers:
      y     like (then accept / skip / back)
      n     dislike and pick again
      s     skip for this session
      back  return
    Without --file or --tag, choose a file by number or name.
    """
    from stuck_picker.session import PickSession

    if file and tag:
        typer.echo("[ERROR] Use either --file or --tag, not both.", err=True)
        raise typer.Exit(code=1)

    service = _service(config_path)
    session = PickSession(service, prompt=_prompt, echo=typer.echo)

    try:
        if tag is not None:
            if service.store.group(tag) is None:
                typer.echo(f"[ERROR] Unknown tag: {tag}", err=True)
                raise typer.Exit(code=1)
            result = session.browse_tag(tag)
        else:
            filename = file or _choose_file(service.files())
            if filename not in service.files():
                typer.echo(f"[ERROR] Unknown list file: {filename}", err=True)
                raise typer.Exit(code=1)
            result = session.browse_file(filename)
    except OSError as exc:
        typer.echo(f"[ERROR] Could not save scores: {exc}", err=True)
        raise typer.Exit(code=1)

    typer.echo(f"[OK] Session ended: {result.outcome}.")


def _choose_file(files: list[str]) -> str:
    if not files:
        typer.echo("[ERROR] No CSV files found.", err=True)
        raise typer.Exit(code=1)
    typer.echo("Available files:")
    for i, filename in enumerate(files, start=1):
        typer.echo(f"  [{i}] {filename}")
    choice = _prompt("Type a number or filename").strip()
    if choice.isdigit() and 1 <= int(choice) <= len(files):
        return files[int(choice) - 1]
    return choice


@app.command("feedback")
def feedback(
    name: str = typer.Argument(..., help="Item name (exact case unless --tag is given)."),
    liked: bool = typer.Option(True, "--like/--dislike", help="Like or dislike the item."),
    tag: Optional[str] = typer.Option(
        None,
        "--tag",
        "-t",
        help="Only change the item within this tag (case-insensitive name, no spreading).",
    ),
    config_path: Optional[str] = typer.Option(None, "--config", help=_CONFIG_HELP),
) -> None:
    """Record one like / dislike without the interactive loop."""
    service = _service(config_path)
    try:
        if tag is not None:
            changed = service.give_category_feedback(tag, name, liked)
        else:
            changed = service.give_feedback(name, liked)
    except OSError as exc:
        typer.echo(f"[ERROR] Could not save scores: {exc}", err=True)
        raise typer.Exit(code=1)

    if not changed:
        typer.echo(f"[ERROR] No item named '{name}' found.", err=True)
        raise typer.Exit(code=1)

    for item in sorted(changed, key=lambda i: (i.source_file or "", i.row_index or 0)):
        typer.echo(f"  {item.name}: {item.score}")
    typer.echo(f"[OK] Updated {len(changed)} item(s).")


@app.command("create-list")
def create_list_cmd(
    filename: str = typer.Argument(..., help="New list filename, e.g. snacks.csv."),
    items: Optional[list[str]] = typer.Option(
        None,
        "--item",
        "-i",
        help="Item as NAME=TAG1;TAG2. Repeatable.",
    ),
    config_path: Optional[str] = typer.Option(None, "--config", help=_CONFIG_HELP),
) -> None:
    """Create a new list file in the lists directory."""
    from stuck_picker.lists.editor import create_list

    config = _load_config_or_exit(config_path)
    _configure_logging(config)

    try:
        entries = [_parse_entry(raw) for raw in items or []]
        path = create_list(Path(config.data.lists_dir), filename, entries)
    except (ValueError, FileExistsError) as exc:
        typer.echo(f"[ERROR] {exc}", err=True)
        raise typer.Exit(code=1)

    typer.echo(f"[OK] Created {path.name}.")


@app.command("show-list")
def show_list(
    filename: str = typer.Argument(..., help="List filename."),
    config_path: Optional[str] = typer.Option(None, "--config", help=_CONFIG_HELP),
) -> None:
    """Show every row of a list with its position."""
    from stuck_picker.lists.editor import open_list

    try:
        editable = open_list(_list_path(config_path, filename))
    except (FileNotFoundError, ValueError) as exc:
        typer.echo(f"[ERROR] {exc}", err=True)
        raise typer.Exit(code=1)

    if not editable.rows:
        typer.echo("→ No items in this list.")
        return
    for i, row in enumerate(editable.rows, start=1):
        typer.echo(f"  [{i}] {row.name} (tags={row.tags_text}, score={row.score_text})")


@app.command("add-item")
def add_item(
    filename: str = typer.Argument(..., help="List filename."),
    name: str = typer.Argument(..., help="Item name."),
    tags: str = typer.Argument(..., help="Semicolon-separated tags."),
    config_path: Optional[str] = typer.Option(None, "--config", help=_CONFIG_HELP),
) -> None:
    """Append an item (score 0) to an existing list."""
    from stuck_picker.lists.editor import open_list

    try:
        editable = open_list(_list_path(config_path, filename))
        row = editable.add(name, tags)
        editable.save()
    except (FileNotFoundError, ValueError, OSError) as exc:
        typer.echo(f"[ERROR] {exc}", err=True)
        raise typer.Exit(code=1)

    typer.echo(f"[OK] Added: {row.name}")


@app.command("remove-item")
def remove_item(
    filename: str = typer.Argument(..., help="List filename."),
    position: int = typer.Argument(..., help="1-based row position (see show-list)."),
    config_path: Optional[str] = typer.Option(None, "--config", help=_CONFIG_HELP),
) -> None:
    """Remove the item at POSITION from a list."""
    from stuck_picker.lists.editor import open_list

    try:
        editable = open_list(_list_path(config_path, filename))
        row = editable.remove(position)
        editable.save()
    except (FileNotFoundError, ValueError, IndexError, OSError) as exc:
        typer.echo(f"[ERROR] {exc}", err=True)
        raise typer.Exit(code=1)

    typer.echo(f"[OK] Removed: {row.name}")


# ── Entry point ───────────────────────────────────────────────────────────────

if __name__ == "__main__":
    app()
