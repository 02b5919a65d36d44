from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from notesync.core.models.collection import NoteCollection
    from notesync.core.models.note import Note
    from notesync.core.schemas.note_query import FindOptions


class EntityRepository(ABC):
    """Primitive persistence operations for notes.

    Every operation is scoped to a profile partition and has no side effects
    on other entities. Implementations perform I/O and therefore expose async
    methods; a failed call raises and leaves nothing half-written.
    """

    @abstractmethod
    async def save(self, model: Note, data: dict[str, Any] | None = None) -> Note:  # pragma: no cover - interface only
        """Apply ``data`` to the model, persist it and return it."""

    @abstractmethod
    async def save_all(self, collection: NoteCollection, data: dict[str, Any]) -> NoteCollection:  # pragma: no cover
        """Apply ``data`` to every note of the collection and persist them in one write."""

    @abstractmethod
    async def find(self, options: FindOptions) -> NoteCollection:  # pragma: no cover
        """Return the notes of a partition matching ``options.conditions``.

        Results are ordered by ``options.sort_field`` when one is given.
        """

    @abstractmethod
    async def find_model(self, *, id: str, profile_id: str) -> Note | None:  # pragma: no cover
        """Fetch a note by id or return None if not found."""

    @abstractmethod
    async def remove(self, model: Note) -> bool:  # pragma: no cover
        """Erase a note permanently. Return True if a row was removed."""
