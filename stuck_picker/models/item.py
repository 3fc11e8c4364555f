"""
Load records for list items.

``ItemRecord`` is the validated shape handed from the list-directory layer to
``PreferenceStore.load()``: one record per CSV data row. The store never parses
text itself — everything it needs arrives through these records.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator

TAG_SEPARATOR = ";"


class ItemRecord(BaseModel):
    """One source row describing an item.

    Attributes:
        name: Item name; surrounding whitespace is stripped.
        tags: Tag tokens in source order. Tokens are stripped and empty tokens
            dropped; at least one must remain.
        score: Initial preference score. Any float is accepted, including
            values below the mutation floor.
        source_file: Filename the row came from, or ``None`` when the record
            was not read from a list file.
        row_index: Position of the row among the file's kept data rows.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    tags: list[str]
    score: float = 0.0
    source_file: Optional[str] = None
    row_index: Optional[int] = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Item name must be non-empty.")
        return v

    @field_validator("tags")
    @classmethod
    def validate_tags(cls, v: list[str]) -> list[str]:
        cleaned = [t.strip() for t in v if t.strip()]
        if not cleaned:
            raise ValueError("Item must carry at least one non-empty tag.")
        return cleaned

    @field_validator("row_index")
    @classmethod
    def validate_row_index(cls, v: Optional[int]) -> Optional[int]:
        if v is not None and v < 0:
            raise ValueError(f"row_index must be >= 0, got {v}.")
        return v


def split_tags(text: str) -> list[str]:
    """Split a ``;``-separated tag field into stripped, non-empty tokens."""
    return [t.strip() for t in text.split(TAG_SEPARATOR) if t.strip()]
