"""
Tag groups: every item carrying one tag, in load order.

A ``TagGroup`` holds references to ``Item`` objects owned by the store, so a
score change made through any index is visible here. Membership is fixed when
the store index is built.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from stuck_picker.preferences.item import Item
from stuck_picker.preferences.selector import RandomSource, select

logger = logging.getLogger(__name__)


@dataclass
class TagGroup:
    """Items sharing ``tag``.

    Attributes:
        tag:     The shared tag (case-sensitive key).
        members: Items in the order they were loaded.
    """

    tag:     str
    members: list[Item] = field(default_factory=list)

    def add(self, item: Item) -> None:
        self.members.append(item)

    def __len__(self) -> int:
        return len(self.members)

    def select_random(self, random_source: RandomSource | None = None) -> Item:
        """Weighted draw over all members.

        Raises:
            EmptyInputError: If the group has no members.
        """
        return select(self.members, random_source)

    def find_member_casefold(self, name: str) -> Item | None:
        """Case-insensitive lookup of a member by name.

        A member whose name matches exactly is preferred, so ``Tea`` and
        ``tea`` in one group stay addressable. Otherwise the first
        case-insensitive match in load order is returned, or ``None``.
        """
        wanted = name.casefold()
        found: Item | None = None
        for item in self.members:
            if item.name == name:
                return item
            if found is None and item.name.casefold() == wanted:
                found = item
        if found is not None:
            return found
        logger.debug("No member named %r in tag group %r", name, self.tag)
        return None
