from __future__ import annotations

from enum import Enum
from typing import Any
from uuid import uuid4

from pydantic import ConfigDict, Field, field_validator

from .base import TimestampedModel

NO_NOTEBOOK = "0"


def normalize_tags(tags: list[str]) -> list[str]:
    """Strip tags and drop empties and duplicates, keeping order."""
    normalized: list[str] = []
    for tag in tags:
        stripped = tag.strip()
        if stripped and stripped not in normalized:
            normalized.append(stripped)
    return normalized


class TrashState(str, Enum):
    """Lifecycle of a note derived from its persisted ``trash`` marker.

    ``0`` is active and ``1`` is trashed. Any other value is kept as-is in
    storage and reported as UNKNOWN: it is not active, and it is not the
    trashed state that makes ``remove`` erase the note.
    """

    ACTIVE = "active"
    TRASHED = "trashed"
    UNKNOWN = "unknown"

    @classmethod
    def from_marker(cls, trash: int) -> TrashState:
        if trash == 0:
            return cls.ACTIVE
        if trash == 1:
            return cls.TRASHED
        return cls.UNKNOWN


class Note(TimestampedModel):
    """Note domain model."""

    model_config = ConfigDict(validate_assignment=True)

    id: str = Field(default_factory=lambda: uuid4().hex, description="Unique note identifier")
    profile_id: str = Field(description="Partition the note belongs to")

    title: str = Field(default="", max_length=255)
    content: str = Field(default="")

    # Task checklist counters
    task_all: int = Field(default=0, ge=0)
    task_completed: int = Field(default=0, ge=0)

    # Organization
    is_favorite: bool = False
    notebook_id: str = Field(default=NO_NOTEBOOK, description="Owning notebook or the no-notebook sentinel")
    tags: list[str] = Field(default_factory=list, description="Tags for categorization")
    files: list[str] = Field(default_factory=list, description="Ids of attached files")
    trash: int = Field(default=0, ge=0, description="0 active, 1 trashed")

    # Filled by attachment lookup only, never persisted
    notebook: Any = Field(default=None, exclude=True)
    file_models: list[Any] | None = Field(default=None, exclude=True)

    @field_validator("notebook_id", mode="before")
    @classmethod
    def normalize_notebook_id(cls, v: Any) -> str:
        if v is None or v == "" or v == 0:
            return NO_NOTEBOOK
        return str(v)

    @field_validator("tags")
    @classmethod
    def validate_tags(cls, v: list[str]) -> list[str]:
        return normalize_tags(v)

    @property
    def trash_state(self) -> TrashState:
        return TrashState.from_marker(self.trash)

    @property
    def is_active(self) -> bool:
        return self.trash_state is TrashState.ACTIVE

    @property
    def has_notebook(self) -> bool:
        return self.notebook_id != NO_NOTEBOOK

    def set(self, data: dict[str, Any]) -> Note:
        """Apply field overrides in place, validating each assignment."""
        for key, value in data.items():
            if key not in type(self).model_fields:
                raise ValueError(f"Unknown note field: {key}")
            setattr(self, key, value)
        return self
