"""
Shared pytest fixtures for the Stuck Picker test suite.

Provides:
  - ``make_record``: factory for ``ItemRecord`` load records.
  - ``food_store``: the A/B/C store used across preference tests.
  - ``lists_dir``: a temporary lists directory with two CSV files.
  - ``sequence_source``: a fixed-sequence uniform random source.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from pathlib import Path

import pytest

from stuck_picker.config import AppConfig, DataConfig
from stuck_picker.models.item import ItemRecord
from stuck_picker.preferences.store import PreferenceStore


def _record(
    name: str,
    tags: list[str],
    score: float = 0.0,
    source_file: str | None = None,
    row_index: int | None = None,
) -> ItemRecord:
    return ItemRecord(
        name=name,
        tags=tags,
        score=score,
        source_file=source_file,
        row_index=row_index,
    )


@pytest.fixture
def make_record() -> Callable[..., ItemRecord]:
    return _record


@pytest.fixture
def food_store() -> PreferenceStore:
    """A{Food,Italian}, B{Food}, C{Drink}, all at score 0.0."""
    return PreferenceStore([
        _record("A", ["Food", "Italian"]),
        _record("B", ["Food"]),
        _record("C", ["Drink"]),
    ])


FOOD_CSV = (
    "name,tags,score\n"
    "Pizza,Food;Italian,0.0\n"
    "Ramen,Food;Japanese,1.5\n"
    "Lasagna,Food;Italian\n"
)

DRINKS_CSV = (
    "Espresso,Drink;Italian,0\n"
    "Green Tea,Drink;Japanese,-0.5\n"
)


@pytest.fixture
def lists_dir(tmp_path: Path) -> Path:
    """Directory with ``food.csv`` (header) and ``drinks.csv`` (no header)."""
    d = tmp_path / "lists"
    d.mkdir()
    (d / "food.csv").write_text(FOOD_CSV, encoding="utf-8")
    (d / "drinks.csv").write_text(DRINKS_CSV, encoding="utf-8")
    return d


@pytest.fixture
def app_config(lists_dir: Path) -> AppConfig:
    return AppConfig(data=DataConfig(lists_dir=str(lists_dir)))


def _sequence(values: Iterable[float]) -> Callable[[], float]:
    it = iter(values)
    return lambda: next(it)


@pytest.fixture
def sequence_source() -> Callable[[Iterable[float]], Callable[[], float]]:
    """Build a random source that returns ``values`` in order."""
    return _sequence
