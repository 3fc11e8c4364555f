"""
PickerService: wires the list directory, the preference store and the random
source together for the CLI and the interactive sessions.

Flow for one feedback event::

    candidates = service.candidates_for_file("food.csv", skipped={"Ramen"})
    item       = service.pick(candidates)
    changed    = service.give_feedback(item.name, liked=True)   # store + disk

The store is mutated first; the directory then rewrites the affected files.
A write failure surfaces as ``OSError`` with in-memory scores already settled.
"""

from __future__ import annotations

import logging
import random
from collections.abc import Collection
from pathlib import Path

from stuck_picker.config import AppConfig
from stuck_picker.lists.csv_store import ListDirectory
from stuck_picker.preferences.item import Item
from stuck_picker.preferences.selector import RandomSource, select
from stuck_picker.preferences.store import PreferenceStore

logger = logging.getLogger(__name__)


class PickerService:
    """One picker session over one lists directory.

    Attributes:
        config:        Application configuration.
        lists:         The CSV list directory.
        store:         Preference state built from ``lists``.
        random_source: Uniform ``[0, 1)`` generator used for every pick.
    """

    def __init__(
        self,
        config: AppConfig,
        lists_dir: Path | None = None,
        random_source: RandomSource | None = None,
    ) -> None:
        self.config = config
        self.lists = ListDirectory(Path(lists_dir or config.data.lists_dir))
        self.store = PreferenceStore()
        if random_source is None:
            random_source = random.Random(config.selection.seed).random
        self.random_source = random_source

    def load(self) -> PickerService:
        """Scan the lists directory and (re)build the store."""
        records = self.lists.scan()
        self.store.reload(records)
        for filename in self.lists.filenames():
            self.store.register_file(filename)
        return self

    reload = load

    # ── Candidates ────────────────────────────────────────────────────────────

    def files(self) -> list[str]:
        return self.store.files()

    def tags(self) -> list[str]:
        return self.store.tags()

    def candidates_for_file(
        self, filename: str, skipped: Collection[str] = ()
    ) -> list[Item]:
        """Items of ``filename`` whose names are not in ``skipped``."""
        return [i for i in self.store.items_for_file(filename) if i.name not in skipped]

    def candidates_for_tag(self, tag: str, skipped: Collection[str] = ()) -> list[Item]:
        """Members of the ``tag`` group whose names are not in ``skipped``."""
        group = self.store.group(tag)
        if group is None:
            return []
        return [i for i in group.members if i.name not in skipped]

    def pick(self, candidates: list[Item]) -> Item:
        """Weighted pick; raises ``EmptyInputError`` for no candidates."""
        return select(candidates, self.random_source)

    # ── Feedback ──────────────────────────────────────────────────────────────

    def give_feedback(self, name: str, liked: bool) -> set[Item]:
        """Propagating feedback, then persist every changed item's file."""
        changed = self.store.apply_feedback(name, liked)
        if changed:
            self.lists.persist(changed)
        return changed

    def give_category_feedback(self, tag: str, name: str, liked: bool) -> set[Item]:
        """Single-item feedback within one tag group, then persist."""
        changed = self.store.apply_category_feedback(tag, name, liked)
        if changed:
            self.lists.persist(changed)
        return changed
