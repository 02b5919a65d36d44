from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Iterator

    from notesync.core.models.note import Note


class NoteFilter(str, Enum):
    """Named views over a list of notes."""

    ACTIVE = "active"
    FAVORITE = "favorite"
    TRASHED = "trashed"
    NOTEBOOK = "notebook"
    TAG = "tag"
    TASK = "task"
    SEARCH = "search"


def _active(note: Note, query: str | None) -> bool:
    return note.trash == 0


def _favorite(note: Note, query: str | None) -> bool:
    return note.is_favorite and note.trash == 0


def _trashed(note: Note, query: str | None) -> bool:
    return note.trash == 1


def _notebook(note: Note, query: str | None) -> bool:
    return note.trash == 0 and note.notebook_id == query


def _tag(note: Note, query: str | None) -> bool:
    return note.trash == 0 and query in note.tags


def _task(note: Note, query: str | None) -> bool:
    return note.trash == 0 and note.task_all > 0


def _search(note: Note, query: str | None) -> bool:
    if note.trash != 0:
        return False
    if not query:
        return True
    needle = query.lower()
    return needle in note.title.lower() or needle in note.content.lower()


FILTERS: dict[NoteFilter, Callable[[Note, str | None], bool]] = {
    NoteFilter.ACTIVE: _active,
    NoteFilter.FAVORITE: _favorite,
    NoteFilter.TRASHED: _trashed,
    NoteFilter.NOTEBOOK: _notebook,
    NoteFilter.TAG: _tag,
    NoteFilter.TASK: _task,
    NoteFilter.SEARCH: _search,
}


class NoteCollection:
    """Ordered set of notes from one profile partition."""

    def __init__(self, notes: Iterable[Note] = ()) -> None:
        self.models: list[Note] = list(notes)

    def __iter__(self) -> Iterator[Note]:
        return iter(self.models)

    def __len__(self) -> int:
        return len(self.models)

    def __getitem__(self, index: int) -> Note:
        return self.models[index]

    def __repr__(self) -> str:
        return f"NoteCollection({self.ids()!r})"

    def ids(self) -> list[str]:
        return [note.id for note in self.models]

    def get(self, note_id: str) -> Note | None:
        for note in self.models:
            if note.id == note_id:
                return note
        return None

    def filter_list(self, name: NoteFilter | str, query: str | None = None) -> NoteCollection:
        """Return a new collection holding only the notes the named filter keeps.

        Raises ValueError for names outside `NoteFilter`.
        """
        predicate = FILTERS[NoteFilter(name)]
        return NoteCollection(note for note in self.models if predicate(note, query))
