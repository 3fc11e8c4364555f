"""
List editing: create new CSV lists and change rows of existing ones.

Rows written by the editor start with score ``0``. Editing works on the raw
file text, not on a ``PreferenceStore``; callers reload the store afterwards
so new or removed rows are picked up.
"""

from __future__ import annotations

import csv
import logging
from dataclasses import dataclass, field
from pathlib import Path

from stuck_picker.lists.csv_store import (
    DEFAULT_HEADER,
    LIST_SUFFIX,
    ListRow,
    format_score,
    header_columns,
    is_header_row,
)

logger = logging.getLogger(__name__)

NEW_ROW_SCORE = "0"
MISSING_SCORE = format_score(0.0)


def create_list(
    lists_dir: Path,
    filename: str,
    entries: list[tuple[str, str]],
) -> Path:
    """Write a new list file with a ``name,tags,score`` header.

    Args:
        lists_dir: Directory holding the lists (created if missing).
        filename:  New filename; must end with ``.csv``.
        entries:   ``(name, tags_text)`` pairs. Entries with a blank name or
                   blank tags are dropped.

    Returns:
        Path of the created file.

    Raises:
        ValueError:      Bad filename, or no usable entries.
        FileExistsError: If the file already exists.
    """
    filename = filename.strip()
    if not filename.lower().endswith(LIST_SUFFIX):
        raise ValueError(f"Filename must end with {LIST_SUFFIX}: '{filename}'")
    if Path(filename).name != filename:
        raise ValueError(f"Filename must not contain a directory part: '{filename}'")

    path = Path(lists_dir) / filename
    if path.exists():
        raise FileExistsError(f"List file already exists: {path}")

    rows: list[ListRow] = []
    for name, tags_text in entries:
        name, tags_text = name.strip(), tags_text.strip()
        if not name:
            continue
        if not tags_text:
            logger.warning("Entry %r has no tags; skipped", name)
            continue
        rows.append(ListRow(name, tags_text, NEW_ROW_SCORE))

    if not rows:
        raise ValueError("No items entered; list not created.")

    editable = EditableList(path=path, header=list(DEFAULT_HEADER), rows=rows)
    path.parent.mkdir(parents=True, exist_ok=True)
    editable.save()
    logger.info("Created %s with %d item(s)", filename, len(rows))
    return path


@dataclass
class EditableList:
    """Rows of one list file opened for editing.

    Attributes:
        path:       File on disk.
        has_header: Whether a header row is written on save.
        header:     Header columns, widened to three.
        rows:       Data rows in file order.
    """

    path:       Path
    has_header: bool = True
    header:     list[str] = field(default_factory=lambda: list(DEFAULT_HEADER))
    rows:       list[ListRow] = field(default_factory=list)

    def add(self, name: str, tags_text: str) -> ListRow:
        """Append a row with score ``0``.

        Raises:
            ValueError: If ``name`` or ``tags_text`` is blank.
        """
        name, tags_text = name.strip(), tags_text.strip()
        if not name:
            raise ValueError("Name cannot be blank.")
        if not tags_text:
            raise ValueError("Must enter at least one tag.")
        row = ListRow(name, tags_text, NEW_ROW_SCORE)
        self.rows.append(row)
        return row

    def remove(self, position: int) -> ListRow:
        """Remove and return the row at 1-based ``position``.

        Raises:
            IndexError: If ``position`` is out of range.
        """
        if not 1 <= position <= len(self.rows):
            raise IndexError(
                f"Position {position} out of range (list has {len(self.rows)} item(s))."
            )
        return self.rows.pop(position - 1)

    def save(self) -> None:
        with self.path.open("w", newline="", encoding="utf-8") as f:
            writer = csv.writer(f, lineterminator="\n")
            if self.has_header:
                writer.writerow(self.header)
            for row in self.rows:
                writer.writerow(row.as_cells())
        logger.info("Saved %d row(s) to %s", len(self.rows), self.path.name)


def open_list(path: Path) -> EditableList:
    """Read a list file for editing.

    The header is recognised the same way the loader does it (first non-blank
    row starting with ``name``) and widened to three columns. Every other
    non-blank row with at least a name and a tags cell is kept; a missing
    score is filled in as ``0.0``. Single-cell rows carry no tags and are
    dropped. A leading UTF-8 byte-order mark is ignored.

    Raises:
        FileNotFoundError: If ``path`` does not exist.
        ValueError:        If the file has no non-blank rows.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"List file not found: {path}")

    with path.open(encoding="utf-8-sig", newline="") as f:
        lines = [cells for cells in csv.reader(f) if any(c.strip() for c in cells)]
    if not lines:
        raise ValueError(f"List file is empty: {path.name}")

    editable = EditableList(path=path, has_header=is_header_row(lines[0]))
    if editable.has_header:
        editable.header = header_columns(lines[0])
        lines = lines[1:]

    for cells in lines:
        if len(cells) < 2:
            logger.warning("%s: dropping row without tags: %r", path.name, cells)
            continue
        score_text = cells[2] if len(cells) >= 3 and cells[2].strip() else MISSING_SCORE
        editable.rows.append(ListRow(cells[0], cells[1], score_text))
    return editable
