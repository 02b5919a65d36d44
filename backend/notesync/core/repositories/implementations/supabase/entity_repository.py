from __future__ import annotations

from typing import TYPE_CHECKING, Any

from postgrest.exceptions import APIError

from notesync.config import settings
from notesync.core.exceptions import PersistenceError
from notesync.core.models.collection import NoteCollection
from notesync.core.models.note import Note
from notesync.core.repositories.entity_repository import EntityRepository
from notesync.utils.logging import get_logger

logger = get_logger(__name__)

if TYPE_CHECKING:
    from collections.abc import Callable

    from supabase import Client

    from notesync.core.schemas.note_query import FindOptions


class SupabaseNoteRepository(EntityRepository):
    """Supabase implementation of the EntityRepository.

    Uses Supabase's PostgREST client for CRUD. Assumes a notes table with
    columns matching the persisted `Note` fields and a composite key of
    (profile_id, id). Every query filters on ``profile_id``.
    """

    def __init__(self, client: Client, table_name: str | None = None) -> None:
        self._client: Client = client
        self._table_name = table_name or settings.notes_table

    async def save(self, model: Note, data: dict[str, Any] | None = None) -> Note:
        # Changes reach the caller's model only after the write succeeds
        pending = self._prepare(model, data)
        row = self._note_to_row(pending)
        resp = await self._run(
            lambda: self._client.table(self._table_name)
            .upsert(row)
            .execute()
        )
        if not resp.data:
            raise PersistenceError(f"Note {model.id} was not saved")
        self._commit(model, pending, data)
        return model

    async def save_all(self, collection: NoteCollection, data: dict[str, Any]) -> NoteCollection:
        if not len(collection):
            return collection
        pending = [self._prepare(note, data) for note in collection]
        rows = [self._note_to_row(note) for note in pending]
        # Single upsert so the batch lands or fails as a whole
        await self._run(
            lambda: self._client.table(self._table_name)
            .upsert(rows)
            .execute()
        )
        for note, saved in zip(collection, pending):
            self._commit(note, saved, data)
        return collection

    async def find(self, options: FindOptions) -> NoteCollection:
        def _query():
            q = self._client.table(self._table_name).select("*").eq("profile_id", options.profile_id)
            for column, value in options.conditions.items():
                q = q.eq(column, value)
            if options.sort_field:
                q = q.order(options.sort_field, desc=options.sort_desc)
            return q.execute()

        resp = await self._run(_query)
        items = resp.data or []
        return NoteCollection(self._row_to_note(i) for i in items)

    async def find_model(self, *, id: str, profile_id: str) -> Note | None:
        resp = await self._run(
            lambda: self._client.table(self._table_name)
            .select("*")
            .eq("profile_id", profile_id)
            .eq("id", id)
            .limit(1)
            .execute()
        )
        items = resp.data or []
        if not items:
            return None
        return self._row_to_note(items[0])

    async def remove(self, model: Note) -> bool:
        resp = await self._run(
            lambda: self._client.table(self._table_name)
            .delete()
            .eq("profile_id", model.profile_id)
            .eq("id", model.id)
            .execute()
        )
        items = resp.data or []
        return len(items) > 0

    @staticmethod
    async def _run(func: Callable[[], Any]) -> Any:
        import asyncio
        try:
            return await asyncio.to_thread(func)
        except APIError as err:
            logger.error("Supabase request failed: %s (code=%s)", err.message, err.code)
            raise PersistenceError(err.message or "Storage request failed") from err

    @staticmethod
    def _prepare(model: Note, data: dict[str, Any] | None) -> Note:
        pending = model.model_copy(deep=True)
        if data:
            pending.set(data)
        pending.touch()
        return pending

    @staticmethod
    def _commit(model: Note, pending: Note, data: dict[str, Any] | None) -> None:
        model.set({**(data or {}), "updated_at": pending.updated_at})

    @staticmethod
    def _row_to_note(row: dict[str, Any]) -> Note:
        normalized = dict(row)
        for field in ("tags", "files"):
            if normalized.get(field) is None:
                normalized[field] = []
        return Note.model_validate(normalized)

    @staticmethod
    def _note_to_row(note: Note) -> dict[str, Any]:
        # Hydration fields are excluded on the model itself
        return note.model_dump(mode="json")
