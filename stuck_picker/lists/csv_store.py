"""
CSV list directory: scan, parse and persist.

File format — comma delimited, optional header row, ``\\n`` line endings::

    name,tags,score
    Pizza,Food;Italian;Comfort,1.2
    Ramen,Food;Japanese

Parsing rules:
  - Only ``*.csv`` files directly inside the directory (suffix matched
    case-insensitively), in sorted filename order.
  - Blank lines are ignored.
  - If the first non-blank row starts with a ``name`` cell (any case) it is the
    header. A header whose third column is ``score`` is kept; otherwise it is
    widened to ``[col0, col1, "score"]``.
  - ``tags`` is ``;``-separated. Rows with an empty name or no non-empty tag
    are skipped and are not written back.
  - A missing or unparseable score reads as ``0.0``.
  - Every kept row's score text is normalized to ``repr(float)``.

Persistence rewrites each affected file in full: the header (if the file had
one) then every kept row, columns ``name, tags, score``.
"""

from __future__ import annotations

import csv
import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path

from pydantic import ValidationError

from stuck_picker.models.item import ItemRecord, split_tags
from stuck_picker.preferences.item import Item

logger = logging.getLogger(__name__)

LIST_SUFFIX = ".csv"
DEFAULT_HEADER = ["name", "tags", "score"]


def format_score(score: float) -> str:
    """Shortest round-trip decimal text for a float score (e.g. ``"0.2"``)."""
    return repr(float(score))


@dataclass
class ListRow:
    """One kept data row, as text."""

    name:       str
    tags_text:  str
    score_text: str

    def as_cells(self) -> list[str]:
        return [self.name, self.tags_text, self.score_text]


@dataclass
class ListFile:
    """In-memory copy of one list file.

    Attributes:
        filename:   Bare filename, used as the source-file id of its items.
        path:       Full path on disk.
        has_header: Whether the file had a header row (written back if so).
        header:     Three header columns.
        rows:       Kept data rows; ``ItemRecord.row_index`` indexes this list.
    """

    filename:   str
    path:       Path
    has_header: bool = False
    header:     list[str] = field(default_factory=lambda: list(DEFAULT_HEADER))
    rows:       list[ListRow] = field(default_factory=list)

    def write(self) -> None:
        """Overwrite the file on disk with header (if any) + all rows."""
        with self.path.open("w", newline="", encoding="utf-8") as f:
            writer = csv.writer(f, lineterminator="\n")
            if self.has_header:
                writer.writerow(self.header)
            for row in self.rows:
                writer.writerow(row.as_cells())


def parse_list_file(path: Path) -> tuple[ListFile, list[ItemRecord]]:
    """Parse one list file into its in-memory copy and load records.

    Args:
        path: Path to an existing CSV list.

    Returns:
        ``(list_file, records)`` where ``records[i].row_index == i``.

    Raises:
        OSError: If the file cannot be read.
    """
    list_file = ListFile(filename=path.name, path=path)
    records: list[ItemRecord] = []
    seen_content = False

    with path.open(encoding="utf-8-sig", newline="") as f:
        for line_no, cells in enumerate(csv.reader(f), start=1):
            if not any(c.strip() for c in cells):
                continue

            if not seen_content:
                seen_content = True
                if is_header_row(cells):
                    list_file.has_header = True
                    list_file.header = header_columns(cells)
                    continue

            name = cells[0].strip()
            tags_text = cells[1].strip() if len(cells) >= 2 else ""
            tags = split_tags(tags_text)
            if not name or not tags:
                logger.warning(
                    "%s line %d: skipping row without a name or tags: %r",
                    path.name, line_no, cells,
                )
                continue

            score = _parse_score(cells[2] if len(cells) >= 3 else "", path.name, line_no)
            row_index = len(list_file.rows)
            try:
                record = ItemRecord(
                    name=name,
                    tags=tags,
                    score=score,
                    source_file=path.name,
                    row_index=row_index,
                )
            except ValidationError as exc:
                logger.warning("%s line %d: invalid row skipped: %s", path.name, line_no, exc)
                continue

            list_file.rows.append(ListRow(name, tags_text, format_score(score)))
            records.append(record)

    return list_file, records


def is_header_row(cells: list[str]) -> bool:
    """True for a first row whose leading cell is ``name`` (any case)."""
    return len(cells) >= 2 and cells[0].strip().lower() == "name"


def header_columns(cells: list[str]) -> list[str]:
    """Three header columns, the third forced to ``score`` unless it is one."""
    if len(cells) >= 3 and cells[2].strip().lower() == "score":
        return [cells[0], cells[1], cells[2]]
    return [cells[0], cells[1], "score"]


def _parse_score(raw: str, filename: str, line_no: int) -> float:
    text = raw.strip()
    if not text:
        return 0.0
    try:
        return float(text)
    except ValueError:
        logger.warning(
            "%s line %d: unparseable score %r, using 0.0", filename, line_no, text
        )
        return 0.0


class ListDirectory:
    """All list files of one directory, kept in memory for write-back.

    Usage::

        lists = ListDirectory(Path("data"))
        store = PreferenceStore(lists.scan())
        changed = store.apply_feedback("Pizza", liked=True)
        lists.persist(changed)
    """

    def __init__(self, lists_dir: Path) -> None:
        self.lists_dir = Path(lists_dir)
        self.files: dict[str, ListFile] = {}

    def list_paths(self) -> list[Path]:
        """Sorted ``*.csv`` paths directly inside the directory."""
        if not self.lists_dir.is_dir():
            return []
        return sorted(
            p for p in self.lists_dir.iterdir()
            if p.is_file() and p.suffix.lower() == LIST_SUFFIX
        )

    def scan(self) -> list[ItemRecord]:
        """Re-read every list file.

        Replaces ``self.files``. A missing directory or an unreadable file is
        logged and contributes nothing.

        Returns:
            Load records for all files, in filename then row order.
        """
        self.files = {}
        if not self.lists_dir.is_dir():
            logger.error("Lists directory '%s' not found or not a directory.", self.lists_dir)
            return []

        paths = self.list_paths()
        if not paths:
            logger.warning("No CSV files found in directory '%s'.", self.lists_dir)
            return []

        records: list[ItemRecord] = []
        for path in paths:
            try:
                list_file, file_records = parse_list_file(path)
            except (OSError, UnicodeDecodeError, csv.Error) as exc:
                logger.error("Failed to parse %s: %s", path.name, exc)
                continue
            self.files[list_file.filename] = list_file
            records.extend(file_records)

        logger.info(
            "Scanned %d list file(s) with %d item(s) in '%s'",
            len(self.files), len(records), self.lists_dir,
        )
        return records

    def filenames(self) -> list[str]:
        return sorted(self.files)

    def persist(self, changed: Iterable[Item]) -> list[str]:
        """Write the current score of each changed item and rewrite its file.

        Items without a source location, or whose file is no longer known,
        are skipped.

        Args:
            changed: Items returned by a feedback call.

        Returns:
            Sorted filenames that were rewritten.

        Raises:
            OSError: If a file cannot be written. In-memory scores are left as
                they are.
        """
        affected: set[str] = set()
        for item in changed:
            if item.source_file is None or item.row_index is None:
                continue
            list_file = self.files.get(item.source_file)
            if list_file is None or item.row_index >= len(list_file.rows):
                logger.warning(
                    "No stored row for %r (%s:%s); score not persisted",
                    item.name, item.source_file, item.row_index,
                )
                continue
            list_file.rows[item.row_index].score_text = format_score(item.score)
            affected.add(item.source_file)

        written = sorted(affected)
        for filename in written:
            list_file = self.files[filename]
            try:
                list_file.write()
            except OSError as exc:
                logger.error("Failed to write list file %s: %s", filename, exc)
                raise
        if written:
            logger.info("Persisted scores to %s", ", ".join(written))
        return written
