from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from pydantic import Field

from notesync.core.models.base import AppBaseModel

if TYPE_CHECKING:
    from notesync.core.models.note import Note


class FindOptions(AppBaseModel):
    """Criteria handed to the primitive find of a repository."""

    profile_id: str
    conditions: dict[str, Any] = Field(default_factory=dict)
    sort_field: str | None = None
    sort_desc: bool = True


@dataclass(frozen=True)
class SaveResult:
    """Outcome of `NotesModule.save_model`.

    The note is persisted whenever a SaveResult exists; ``tag_sync_error``
    holds the failure of the tag request when tag synchronization was asked
    for and did not succeed.
    """

    saved: Note
    tag_sync_error: BaseException | None = None

    @property
    def ok(self) -> bool:
        return self.tag_sync_error is None
