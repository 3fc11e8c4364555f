"""
The mutable, scored item shared by every index of a ``PreferenceStore``.

Score rules
-----------
    like()          score += 1.0              (no upper bound)
    dislike()       score = max(score - 1.0, -0.9)
    nudge(delta)    score = max(score + delta, -0.9)

The floor keeps ``score + 1.0`` (the selection weight before its own floor)
strictly positive for every item that has received feedback. Loaded scores are
taken as-is, so an item may start below the floor.
"""

from __future__ import annotations

from dataclasses import dataclass, field

SCORE_FLOOR = -0.9
LIKE_DELTA = 1.0
PEER_DELTA = 0.2


@dataclass(eq=False)
class Item:
    """A recommendable entry from a list.

    Items compare and hash by identity: two rows with the same name are two
    distinct items, and a ``set[Item]`` of changed items never merges them.

    Attributes:
        name:        Case-sensitive identifier.
        tags:        Non-empty tag list in source order.
        score:       Mutable preference score.
        source_file: Filename the item was loaded from, if any.
        row_index:   Row position within ``source_file``.
    """

    name:        str
    tags:        list[str]
    score:       float = 0.0
    source_file: str | None = None
    row_index:   int | None = None
    _tag_set:    frozenset[str] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        if not self.tags:
            raise ValueError(f"Item '{self.name}' must have at least one tag.")
        self.score = float(self.score)
        self._tag_set = frozenset(self.tags)

    @property
    def tag_set(self) -> frozenset[str]:
        return self._tag_set

    def shares_tag_with(self, other: Item) -> bool:
        return not self._tag_set.isdisjoint(other.tag_set)

    def like(self) -> None:
        self.score += LIKE_DELTA

    def dislike(self) -> None:
        self.score = max(self.score - LIKE_DELTA, SCORE_FLOOR)

    def nudge(self, delta: float) -> None:
        """Apply a propagated delta, clamped at the score floor."""
        self.score = max(self.score + delta, SCORE_FLOOR)
