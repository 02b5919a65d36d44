from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING, Any, Protocol

from notesync.config import settings
from notesync.core.exceptions import AttachmentLookupError
from notesync.core.models.collection import NoteCollection
from notesync.core.models.note import NO_NOTEBOOK, normalize_tags
from notesync.core.schemas.note_query import FindOptions, SaveResult
from notesync.utils.logging import get_logger

if TYPE_CHECKING:
    from notesync.core.bus import Channel, Router
    from notesync.core.models.collection import NoteFilter
    from notesync.core.models.note import Note
    from notesync.core.repositories.entity_repository import EntityRepository

logger = get_logger(__name__)


class PartitionedEntity(Protocol):
    id: Any
    profile_id: str


class NotesModule:
    """Coordinates note persistence with the modules owning related entities.

    Wraps the primitive repository with trash/restore semantics, the notebook
    cascade, tag synchronization and attachment hydration. Other modules are
    reached only through channels of the injected router. `start` registers
    the ``restore`` and ``changeNotebookId`` replies on the notes channel and
    `stop` releases them.
    """

    replies = ("restore", "changeNotebookId")

    def __init__(self, repo: EntityRepository, router: Router) -> None:
        self._repo = repo
        self._router = router
        self.channel: Channel = router.channel(settings.notes_channel)
        self._started = False

    @property
    def started(self) -> bool:
        return self._started

    def start(self) -> None:
        if self._started:
            return
        self.channel.reply_many({
            "restore": self._reply_restore,
            "changeNotebookId": self._reply_change_notebook_id,
        })
        self._started = True
        logger.info("Notes module replying on %s", self.channel.name)

    def stop(self) -> None:
        if not self._started:
            return
        self.channel.stop_replying(*self.replies)
        self._started = False
        logger.info("Notes module stopped replying on %s", self.channel.name)

    async def _reply_restore(self, *, model: Note) -> Note:
        return await self.restore(model)

    async def _reply_change_notebook_id(self, *, model: PartitionedEntity, remove_notes: bool = False) -> NoteCollection:
        return await self.change_notebook_id(model, remove_notes=remove_notes)

    async def save_model(
        self,
        model: Note,
        *,
        data: dict[str, Any] | None = None,
        save_tags: bool = False,
    ) -> SaveResult:
        """Persist a note, optionally making sure its tags exist.

        The tag request runs alongside the save and never undoes it. Its
        failure is returned in `SaveResult.tag_sync_error`; a failed save
        raises.
        """
        if not save_tags:
            saved = await self._repo.save(model, data)
            return SaveResult(saved=saved)

        # Tags sees the list the note will store
        tags = normalize_tags(list((data or {}).get("tags", model.tags)))
        saved, tag_outcome = await asyncio.gather(
            self._repo.save(model, data),
            self._router.channel(settings.tags_channel).request(
                "addTags", tags=tags, profile_id=model.profile_id,
            ),
            return_exceptions=True,
        )

        tag_error = tag_outcome if isinstance(tag_outcome, BaseException) else None
        if isinstance(saved, BaseException):
            if tag_error is not None:
                logger.warning("Tag sync for note %s also failed: %s", model.id, tag_error)
            raise saved
        if tag_error is not None:
            logger.warning("Note %s saved but tag sync failed: %s", model.id, tag_error)
        return SaveResult(saved=saved, tag_sync_error=tag_error)

    async def save(self, collection: NoteCollection, data: dict[str, Any]) -> NoteCollection:
        return await self._repo.save_all(collection, data)

    async def remove(self, model: Note) -> Note | None:
        """Move an active note to trash, or erase a note already in trash."""
        if model.trash == 1:
            await self._repo.remove(model)
            logger.info("Note %s erased", model.id)
            return None

        await self.save_model(model, data={"trash": 1})
        self.channel.trigger("destroy:model", model=model)
        logger.info("Note %s moved to trash", model.id)
        return model

    async def restore(self, model: Note) -> Note:
        await self.save_model(model, data={"trash": 0})
        self.channel.trigger("restore:model", model=model)
        logger.info("Note %s restored", model.id)
        return model

    async def change_notebook_id(self, model: PartitionedEntity, *, remove_notes: bool = False) -> NoteCollection:
        """Detach every note of a notebook, trashing them too when asked."""
        if model.id is None or model.id == "":
            return NoteCollection()

        collection = await self.find(
            profile_id=model.profile_id,
            conditions={"notebook_id": str(model.id)},
        )
        if not len(collection):
            return collection

        data: dict[str, Any] = {"notebook_id": NO_NOTEBOOK}
        if remove_notes:
            data["trash"] = 1

        logger.info(
            "Moving %d notes out of notebook %s (trash=%s)",
            len(collection), model.id, remove_notes,
        )
        return await self.save(collection, data)

    async def find(
        self,
        *,
        profile_id: str,
        conditions: dict[str, Any] | None = None,
        filter: NoteFilter | str | None = None,
        query: str | None = None,
    ) -> NoteCollection:
        sort_field = await self._router.channel(settings.configs_channel).request(
            "findConfig", name=settings.sort_config_name,
        )
        options = FindOptions(
            profile_id=profile_id,
            conditions=conditions or {},
            sort_field=sort_field or settings.default_sort_field,
        )
        collection = await self._repo.find(options)
        if filter:
            collection = collection.filter_list(filter, query)
        return collection

    async def find_model(self, *, id: str, profile_id: str, find_attachments: bool = False) -> Note | None:
        model = await self._repo.find_model(id=id, profile_id=profile_id)
        if model is None or not find_attachments:
            return model
        return await self.find_attachments(model)

    async def find_attachments(self, model: Note) -> Note:
        """Fetch the notebook and file models of a note in parallel.

        Both lookups must succeed; otherwise AttachmentLookupError is raised
        and the note is left without hydration fields.
        """
        notebooks = self._router.channel(settings.notebooks_channel)
        files = self._router.channel(settings.files_channel)
        try:
            async with asyncio.TaskGroup() as group:
                notebook_task = group.create_task(notebooks.request(
                    "findModel", profile_id=model.profile_id, id=model.notebook_id,
                ))
                files_task = group.create_task(files.request(
                    "findFiles", profile_id=model.profile_id, ids=list(model.files),
                ))
        except Exception as err:
            # A failed lookup cancels the other one
            logger.error("Attachment lookup failed for note %s: %s", model.id, err)
            raise AttachmentLookupError(f"Could not load attachments of note {model.id}") from err

        model.notebook = notebook_task.result()
        model.file_models = files_task.result()
        return model

    async def find_or_fetch(self, *, model: Note | None = None, **criteria: Any) -> Note | None:
        if model is not None:
            return model
        return await self.find_model(**criteria)
