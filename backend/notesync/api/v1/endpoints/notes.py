from __future__ import annotations

from fastapi import APIRouter, Depends, status

from notesync.api.v1.schemas.note import (
    NoteCreate,
    NoteDetail,
    NoteRead,
    NoteSaveResponse,
    NoteUpdate,
)
from notesync.core.exceptions import NoteNotFoundError
from notesync.core.models.collection import NoteFilter
from notesync.core.models.note import Note
from notesync.core.schemas.note_query import SaveResult  # noqa: TCH001
from notesync.core.services.notes_module import NotesModule
from notesync.dependencies import get_notes_module

router = APIRouter()


def _save_response(result: SaveResult) -> NoteSaveResponse:
    error = result.tag_sync_error
    return NoteSaveResponse(
        note=NoteRead.model_validate(result.saved),
        tag_sync_error=str(error) if error is not None else None,
    )


async def _get_or_404(module: NotesModule, profile_id: str, note_id: str) -> Note:
    note = await module.find_model(id=note_id, profile_id=profile_id)
    if note is None:
        raise NoteNotFoundError(note_id)
    return note


@router.get("/", response_model=list[NoteRead])
async def list_notes(
    profile_id: str,
    filter: NoteFilter | None = None,
    query: str | None = None,
    module: NotesModule = Depends(get_notes_module),
):
    notes = await module.find(profile_id=profile_id, filter=filter, query=query)
    return [NoteRead.model_validate(n) for n in notes]


@router.post("/", response_model=NoteSaveResponse, status_code=status.HTTP_201_CREATED)
async def create_note(
    profile_id: str,
    payload: NoteCreate,
    save_tags: bool = True,
    module: NotesModule = Depends(get_notes_module),
):
    note = Note(profile_id=profile_id, **payload.model_dump())
    result = await module.save_model(note, save_tags=save_tags)
    return _save_response(result)


@router.get("/{note_id}", response_model=NoteDetail)
async def get_note(
    profile_id: str,
    note_id: str,
    attachments: bool = False,
    module: NotesModule = Depends(get_notes_module),
):
    note = await module.find_model(id=note_id, profile_id=profile_id, find_attachments=attachments)
    if note is None:
        raise NoteNotFoundError(note_id)
    return NoteDetail(
        **note.model_dump(),
        notebook=note.notebook,
        file_models=note.file_models,
    )


@router.put("/{note_id}", response_model=NoteSaveResponse)
async def update_note(
    profile_id: str,
    note_id: str,
    payload: NoteUpdate,
    save_tags: bool = True,
    module: NotesModule = Depends(get_notes_module),
):
    note = await _get_or_404(module, profile_id, note_id)
    changes = payload.model_dump(exclude_unset=True, exclude_none=True)
    result = await module.save_model(note, data=changes, save_tags=save_tags)
    return _save_response(result)


@router.delete("/{note_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_note(
    profile_id: str,
    note_id: str,
    module: NotesModule = Depends(get_notes_module),
):
    """Move the note to trash, or erase it when it is already there."""
    note = await _get_or_404(module, profile_id, note_id)
    await module.remove(note)
    return None


@router.post("/{note_id}/restore", response_model=NoteRead)
async def restore_note(
    profile_id: str,
    note_id: str,
    module: NotesModule = Depends(get_notes_module),
):
    note = await _get_or_404(module, profile_id, note_id)
    restored = await module.restore(note)
    return NoteRead.model_validate(restored)
