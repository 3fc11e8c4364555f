"""
Tests for stuck_picker/models/item.py — ItemRecord validation and split_tags().
"""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from stuck_picker.models.item import ItemRecord, split_tags


class TestItemRecord:
    def test_valid_record(self):
        rec = ItemRecord(name="Pizza", tags=["Food", "Italian"], score=1.5,
                         source_file="food.csv", row_index=0)
        assert rec.name == "Pizza"
        assert rec.tags == ["Food", "Italian"]
        assert rec.score == 1.5

    def test_defaults(self):
        rec = ItemRecord(name="Pizza", tags=["Food"])
        assert rec.score == 0.0
        assert rec.source_file is None
        assert rec.row_index is None

    def test_name_is_stripped(self):
        assert ItemRecord(name="  Pizza ", tags=["Food"]).name == "Pizza"

    def test_blank_name_rejected(self):
        with pytest.raises(ValidationError):
            ItemRecord(name="   ", tags=["Food"])

    def test_tags_cleaned(self):
        rec = ItemRecord(name="Pizza", tags=[" Food ", "", "  ", "Italian"])
        assert rec.tags == ["Food", "Italian"]

    def test_no_usable_tags_rejected(self):
        with pytest.raises(ValidationError):
            ItemRecord(name="Pizza", tags=["", " "])

    def test_score_below_floor_accepted(self):
        assert ItemRecord(name="Pizza", tags=["Food"], score=-7.0).score == -7.0

    def test_negative_row_index_rejected(self):
        with pytest.raises(ValidationError):
            ItemRecord(name="Pizza", tags=["Food"], row_index=-1)

    def test_frozen(self):
        rec = ItemRecord(name="Pizza", tags=["Food"])
        with pytest.raises(ValidationError):
            rec.score = 3.0


class TestSplitTags:
    def test_splits_on_semicolon(self):
        assert split_tags("Food;Italian;Comfort") == ["Food", "Italian", "Comfort"]

    def test_strips_and_drops_empty(self):
        assert split_tags(" Food ; ;Italian;") == ["Food", "Italian"]

    def test_empty_text(self):
        assert split_tags("") == []
