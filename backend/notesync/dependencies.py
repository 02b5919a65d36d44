from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import Request

from notesync.core.repositories.implementations.supabase.entity_repository import (
    SupabaseNoteRepository,
)
from notesync.db.base import get_supabase_client
from notesync.utils.logging import get_logger

logger = get_logger(__name__)

if TYPE_CHECKING:
    from notesync.core.repositories.entity_repository import EntityRepository
    from notesync.core.services.notes_module import NotesModule


def get_note_repository() -> EntityRepository:
    """Build the repository backing the notes module."""
    return SupabaseNoteRepository(get_supabase_client())


def get_notes_module(request: Request) -> NotesModule:
    """Return the notes module started by the application lifespan."""
    module = getattr(request.app.state, "notes_module", None)
    if module is None:
        raise RuntimeError("Notes module is not running")
    return module
