from __future__ import annotations

from datetime import datetime  # noqa: TCH003
from typing import Any

from pydantic import Field

from notesync.core.models.base import AppBaseModel
from notesync.core.models.note import NO_NOTEBOOK


class NoteCreate(AppBaseModel):
    title: str = Field(default="", max_length=255, description="Note title")
    content: str = Field(default="", description="Note content")
    task_all: int = Field(default=0, ge=0)
    task_completed: int = Field(default=0, ge=0)
    is_favorite: bool = False
    notebook_id: str = Field(default=NO_NOTEBOOK, description="Owning notebook id, or \"0\" for none")
    tags: list[str] = Field(default_factory=list)
    files: list[str] = Field(default_factory=list)


class NoteUpdate(AppBaseModel):
    title: str | None = Field(default=None, max_length=255)
    content: str | None = None
    task_all: int | None = Field(default=None, ge=0)
    task_completed: int | None = Field(default=None, ge=0)
    is_favorite: bool | None = None
    notebook_id: str | None = None
    tags: list[str] | None = None
    files: list[str] | None = None


class NoteRead(AppBaseModel):
    id: str
    profile_id: str
    title: str
    content: str
    task_all: int
    task_completed: int
    is_favorite: bool
    notebook_id: str
    tags: list[str]
    files: list[str]
    trash: int
    created_at: datetime
    updated_at: datetime | None


class NoteDetail(NoteRead):
    """Note with the notebook and file models resolved by attachment lookup."""

    notebook: Any = None
    file_models: list[Any] | None = None


class NoteSaveResponse(AppBaseModel):
    note: NoteRead
    tag_sync_error: str | None = None
