"""Shared fixtures: in-memory storage, a private router and fake collaborators."""

from __future__ import annotations

from typing import Any

import pytest

from notesync.config import settings
from notesync.core.bus import Router
from notesync.core.services.notes_module import NotesModule
from tests.fakes import InMemoryNoteRepository, Recorder

# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def router() -> Router:
    return Router()


@pytest.fixture()
def repo() -> InMemoryNoteRepository:
    return InMemoryNoteRepository()


@pytest.fixture()
def sort_config(router: Router) -> Recorder:
    handler = Recorder(reply="created_at")
    router.channel(settings.configs_channel).reply("findConfig", handler)
    return handler


@pytest.fixture()
def module(repo: InMemoryNoteRepository, router: Router, sort_config: Recorder):
    mod = NotesModule(repo, router)
    mod.start()
    yield mod
    mod.stop()


@pytest.fixture()
def events(module: NotesModule) -> dict[str, list[dict[str, Any]]]:
    """Payloads of destroy:model and restore:model events, by event name."""
    seen: dict[str, list[dict[str, Any]]] = {"destroy:model": [], "restore:model": []}
    for name, bucket in seen.items():
        module.channel.on(name, lambda bucket=bucket, **payload: bucket.append(payload))
    return seen

