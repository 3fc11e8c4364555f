"""
Tests for stuck_picker/service.py — PickerService wiring.
"""

from __future__ import annotations

import pytest

from stuck_picker.config import AppConfig, DataConfig, SelectionConfig
from stuck_picker.preferences.selector import EmptyInputError
from stuck_picker.service import PickerService


@pytest.fixture
def service(app_config) -> PickerService:
    return PickerService(app_config, random_source=lambda: 0.0).load()


def test_load_builds_store_from_directory(service):
    assert service.files() == ["drinks.csv", "food.csv"]
    assert "Italian" in service.tags()
    assert len(service.store) == 5


def test_empty_list_file_is_listed(app_config, lists_dir):
    (lists_dir / "empty.csv").write_text("name,tags,score\n", encoding="utf-8")
    service = PickerService(app_config).load()
    assert "empty.csv" in service.files()
    assert service.candidates_for_file("empty.csv") == []


def test_candidates_exclude_skipped_names(service):
    names = [i.name for i in service.candidates_for_file("food.csv", skipped={"Ramen"})]
    assert names == ["Pizza", "Lasagna"]


def test_candidates_for_tag(service):
    assert [i.name for i in service.candidates_for_tag("Italian")] == ["Espresso", "Pizza", "Lasagna"]
    assert service.candidates_for_tag("Unknown") == []


def test_pick_uses_injected_source(service):
    assert service.pick(service.candidates_for_file("food.csv")).name == "Pizza"


def test_pick_empty_raises(service):
    with pytest.raises(EmptyInputError):
        service.pick([])


def test_seeded_picks_are_reproducible(lists_dir):
    config = AppConfig(
        data=DataConfig(lists_dir=str(lists_dir)),
        selection=SelectionConfig(seed=99),
    )
    first = PickerService(config).load()
    second = PickerService(config).load()
    candidates_a = first.candidates_for_file("food.csv")
    candidates_b = second.candidates_for_file("food.csv")
    picks_a = [first.pick(candidates_a).name for _ in range(20)]
    picks_b = [second.pick(candidates_b).name for _ in range(20)]
    assert picks_a == picks_b


def test_give_feedback_persists(service, lists_dir):
    changed = service.give_feedback("Pizza", liked=True)
    assert {i.name for i in changed} == {"Pizza", "Ramen", "Lasagna", "Espresso"}
    assert "Pizza,Food;Italian,1.0" in (lists_dir / "food.csv").read_text(encoding="utf-8")


def test_give_feedback_unknown_writes_nothing(service, lists_dir):
    before = (lists_dir / "food.csv").read_text(encoding="utf-8")
    assert service.give_feedback("Nope", liked=True) == set()
    assert (lists_dir / "food.csv").read_text(encoding="utf-8") == before


def test_give_category_feedback_persists_single_item(service, lists_dir):
    changed = service.give_category_feedback("Italian", "espresso", liked=False)
    assert [i.name for i in changed] == ["Espresso"]
    drinks = (lists_dir / "drinks.csv").read_text(encoding="utf-8")
    assert "Espresso,Drink;Italian,-0.9" in drinks
    assert "Pizza,Food;Italian,0.0" in (lists_dir / "food.csv").read_text(encoding="utf-8")


def test_reload_picks_up_new_rows(service, lists_dir):
    with (lists_dir / "food.csv").open("a", encoding="utf-8") as f:
        f.write("Tacos,Food;Mexican\n")
    service.reload()
    assert service.store.get_item("Tacos") is not None
