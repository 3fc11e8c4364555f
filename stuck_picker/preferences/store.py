"""
PreferenceStore: the owner of every loaded ``Item`` and of the indices that
reach them.

Indices
-------
    items     list[Item]              — flat collection, load order (owner)
    by_name   dict[str, Item]         — exact-case; the last loaded duplicate wins
    by_tag    dict[str, TagGroup]     — one group per unique tag
    by_file   dict[str, list[Item]]   — source filename → items in row order

All indices hold references to the same ``Item`` objects, so a score written
through one path is visible through every other.

Feedback
--------
``apply_feedback(name, liked)`` — propagating mode (browse by file):
    primary:  like() / dislike()
    peers:    every other item sharing ≥ 1 tag → nudge(±0.2), floored at -0.9
    returns:  {primary} ∪ peers, whether or not a value actually moved

``apply_category_feedback(tag, name, liked)`` — single-item mode (browse by
tag): case-insensitive lookup inside one tag group, like() / dislike() on that
item only.

Unknown names are a silent no-op that returns an empty set. The store does no
I/O; persisting the returned items is the caller's job.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterable

from stuck_picker.models.item import ItemRecord
from stuck_picker.preferences.category import TagGroup
from stuck_picker.preferences.item import PEER_DELTA, Item

logger = logging.getLogger(__name__)


class PreferenceStore:
    """In-memory preference state for one session.

    Build with ``load()``; replace everything with ``reload()``. Feedback and
    reload calls are serialized by a per-store lock.
    """

    def __init__(self, records: Iterable[ItemRecord] | None = None) -> None:
        self.items: list[Item] = []
        self.by_name: dict[str, Item] = {}
        self.by_tag: dict[str, TagGroup] = {}
        self.by_file: dict[str, list[Item]] = {}
        self._lock = threading.Lock()
        if records is not None:
            self.load(records)

    # ── Lifecycle ─────────────────────────────────────────────────────────────

    def load(self, records: Iterable[ItemRecord]) -> list[Item]:
        """Create items from ``records`` and add them to every index.

        Args:
            records: Load records in source order.

        Returns:
            The newly created items, in the same order as ``records``.
        """
        with self._lock:
            return self._load(records)

    def reload(self, records: Iterable[ItemRecord]) -> list[Item]:
        """Clear every index and the flat collection, then load ``records``."""
        with self._lock:
            self.items.clear()
            self.by_name.clear()
            self.by_tag.clear()
            self.by_file.clear()
            return self._load(records)

    def _load(self, records: Iterable[ItemRecord]) -> list[Item]:
        created: list[Item] = []
        for rec in records:
            item = Item(
                name=rec.name,
                tags=list(rec.tags),
                score=rec.score,
                source_file=rec.source_file,
                row_index=rec.row_index,
            )
            self.items.append(item)
            if item.name in self.by_name:
                logger.warning(
                    "Duplicate item name %r (from %s) replaces the earlier entry in the name index",
                    item.name, item.source_file,
                )
            self.by_name[item.name] = item
            if item.source_file is not None:
                self.by_file.setdefault(item.source_file, []).append(item)
            created.append(item)

        self._index_tags(created)
        logger.info(
            "Loaded %d item(s) across %d tag group(s) from %d file(s)",
            len(self.items), len(self.by_tag), len(self.by_file),
        )
        return created

    def register_file(self, file_id: str) -> None:
        """Make ``file_id`` visible in ``files()`` even if it holds no items."""
        self.by_file.setdefault(file_id, [])

    def _index_tags(self, new_items: list[Item]) -> None:
        for item in new_items:
            for tag in dict.fromkeys(item.tags):
                group = self.by_tag.get(tag)
                if group is None:
                    group = self.by_tag[tag] = TagGroup(tag)
                group.add(item)

    # ── Queries ───────────────────────────────────────────────────────────────

    def get_item(self, name: str) -> Item | None:
        """Exact-case lookup in the store-wide name index."""
        return self.by_name.get(name)

    def group(self, tag: str) -> TagGroup | None:
        return self.by_tag.get(tag)

    def items_for_file(self, file_id: str) -> list[Item]:
        """Items loaded from ``file_id`` in row order; empty if unknown."""
        return list(self.by_file.get(file_id, []))

    def tags(self) -> list[str]:
        return sorted(self.by_tag)

    def files(self) -> list[str]:
        return sorted(self.by_file)

    def peers_of(self, primary: Item) -> list[Item]:
        """Every other item sharing at least one tag with ``primary``."""
        return [
            other for other in self.items
            if other is not primary and other.shares_tag_with(primary)
        ]

    def __len__(self) -> int:
        return len(self.items)

    # ── Feedback ──────────────────────────────────────────────────────────────

    def apply_feedback(self, name: str, liked: bool) -> set[Item]:
        """Apply like/dislike to ``name`` and propagate to tag-sharing peers.

        Args:
            name:  Exact-case item name.
            liked: ``True`` for like, ``False`` for dislike.

        Returns:
            The set of items whose score was written: the primary plus every
            peer. Empty when ``name`` is unknown (nothing is mutated).
        """
        with self._lock:
            primary = self.get_item(name)
            if primary is None:
                logger.debug("Feedback for unknown item %r ignored", name)
                return set()

            peers = self.peers_of(primary)
            if liked:
                primary.like()
            else:
                primary.dislike()

            delta = PEER_DELTA if liked else -PEER_DELTA
            for peer in peers:
                peer.nudge(delta)

        changed = {primary, *peers}
        logger.info(
            "%s %r → score=%s; %d peer(s) nudged by %+.1f",
            "Liked" if liked else "Disliked", primary.name, primary.score,
            len(peers), delta,
        )
        return changed

    def apply_category_feedback(self, tag: str, name: str, liked: bool) -> set[Item]:
        """Apply like/dislike to one member of the ``tag`` group, no propagation.

        The member is found case-insensitively within that group only.

        Returns:
            ``{item}`` on success; an empty set for an unknown tag or name.
        """
        with self._lock:
            group = self.by_tag.get(tag)
            if group is None:
                logger.debug("Category feedback for unknown tag %r ignored", tag)
                return set()
            item = group.find_member_casefold(name)
            if item is None:
                return set()
            if liked:
                item.like()
            else:
                item.dislike()

        logger.info(
            "%s %r in tag %r → score=%s",
            "Liked" if liked else "Disliked", item.name, tag, item.score,
        )
        return {item}
