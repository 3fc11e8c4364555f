"""
Interactive picking sessions.

Two flows share one loop:

  browse_file(filename) — candidates are the file's items; like/dislike goes
                          through the propagating ``give_feedback``.
  browse_tag(tag)       — candidates are the tag group's members; like/dislike
                          goes through the single-item ``give_category_feedback``.

Loop
----
    eligible = candidates minus names skipped this session
    none left            → EXHAUSTED
    suggest weighted pick
      y    → like, then ask accept / skip / back
      n    → dislike, pick again
      s    → skip this name, pick again
      back → BACK
    accept → ACCEPTED with the item

Input is read through an injected ``prompt`` callable and output written
through ``echo`` so the loop runs unchanged under the CLI and under tests.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from enum import StrEnum

from stuck_picker.preferences.item import Item
from stuck_picker.service import PickerService

logger = logging.getLogger(__name__)

Prompt = Callable[[str], str]
Echo = Callable[[str], None]


class SessionOutcome(StrEnum):
    ACCEPTED = "accepted"
    BACK = "back"
    EXHAUSTED = "exhausted"


@dataclass
class SessionResult:
    outcome: SessionOutcome
    item:    Item | None = None


class PickSession:
    """Drives one browse flow against a ``PickerService``."""

    def __init__(self, service: PickerService, prompt: Prompt, echo: Echo) -> None:
        self.service = service
        self.prompt = prompt
        self.echo = echo

    def browse_file(self, filename: str) -> SessionResult:
        self.echo(f"You selected file: {filename}")
        return self._run(
            candidates=lambda skipped: self.service.candidates_for_file(filename, skipped),
            feedback=self.service.give_feedback,
            empty_message="No items in this file.",
        )

    def browse_tag(self, tag: str) -> SessionResult:
        self.echo(f"You selected tag: {tag}")
        return self._run(
            candidates=lambda skipped: self.service.candidates_for_tag(tag, skipped),
            feedback=lambda name, liked: self.service.give_category_feedback(tag, name, liked),
            empty_message="No items with this tag.",
        )

    def _run(
        self,
        candidates: Callable[[set[str]], list[Item]],
        feedback: Callable[[str, bool], set[Item]],
        empty_message: str,
    ) -> SessionResult:
        skipped: set[str] = set()
        if not candidates(skipped):
            self.echo(empty_message)
            return SessionResult(SessionOutcome.EXHAUSTED)

        self.echo("Type 'back' at any time to return.")
        while True:
            eligible = candidates(skipped)
            if not eligible:
                self.echo("No more options available.")
                return SessionResult(SessionOutcome.EXHAUSTED)

            suggestion = self.service.pick(eligible)
            self.echo("")
            self.echo(f"Suggested: {suggestion.name}")

            answer = self._ask(
                "Options: [y = like]  [n = dislike]  [s = skip]  [back = return]",
                {"y", "n", "s", "back"},
            )
            if answer == "back":
                return SessionResult(SessionOutcome.BACK)
            if answer == "s":
                skipped.add(suggestion.name)
                self.echo(f"Skipping '{suggestion.name}'. Picking another...")
                continue

            liked = answer == "y"
            feedback(suggestion.name, liked)
            if not liked:
                self.echo(f"Marked '{suggestion.name}' as disliked. Picking another...")
                continue

            decision = self._ask(
                "You liked it. Accept or skip? (accept/skip)   [back to return]",
                {"accept", "skip", "back"},
            )
            if decision == "back":
                return SessionResult(SessionOutcome.BACK)
            if decision == "accept":
                self.echo(f"Great! Enjoy: {suggestion.name}")
                logger.info("Accepted %r", suggestion.name)
                return SessionResult(SessionOutcome.ACCEPTED, suggestion)
            skipped.add(suggestion.name)
            self.echo(f"Skipping '{suggestion.name}' after liking. Picking another...")

    def _ask(self, question: str, valid: set[str]) -> str:
        """Prompt until the answer (case-insensitive) is one of ``valid``."""
        while True:
            answer = self.prompt(question).strip().lower()
            if answer in valid:
                return answer
            self.echo(f"→ Please type one of: {', '.join(sorted(valid))}.")
