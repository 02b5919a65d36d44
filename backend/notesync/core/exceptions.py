from __future__ import annotations


class NoteSyncError(Exception):
    """Base for every controlled error raised by the notes layer."""

    code = "notesync_error"
    status_code = 500

    def __init__(self, message: str, *, code: str | None = None, status_code: int | None = None) -> None:
        self.message = message
        if code is not None:
            self.code = code
        if status_code is not None:
            self.status_code = status_code
        super().__init__(message)


class NoteNotFoundError(NoteSyncError):
    code = "note_not_found"
    status_code = 404

    def __init__(self, note_id: str) -> None:
        super().__init__(f"Note {note_id} not found")
        self.note_id = note_id


class PersistenceError(NoteSyncError):
    """The storage backend rejected or failed a primitive operation."""

    code = "persistence_error"
    status_code = 503


class BusError(NoteSyncError):
    code = "bus_error"


class NoHandlerError(BusError):
    code = "no_handler"

    def __init__(self, channel: str, name: str) -> None:
        super().__init__(f"No handler for '{name}' on channel '{channel}'")
        self.channel = channel
        self.name = name


class HandlerConflictError(BusError):
    code = "handler_conflict"

    def __init__(self, channel: str, name: str) -> None:
        super().__init__(f"Channel '{channel}' already replies to '{name}'")
        self.channel = channel
        self.name = name


class CollaboratorError(NoteSyncError):
    """A request to another entity module failed."""

    code = "collaborator_error"
    status_code = 502


class AttachmentLookupError(CollaboratorError):
    code = "attachment_lookup_failed"
