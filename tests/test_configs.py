"""Tests for the settings-backed findConfig responder."""

from __future__ import annotations

from notesync.config import settings
from notesync.core.bus import Router
from notesync.core.services.configs import SettingsConfigResponder


async def test_answers_sort_config_from_settings():
    router = Router()
    responder = SettingsConfigResponder(router)
    assert responder.start() is True

    channel = router.channel(settings.configs_channel)
    assert await channel.request("findConfig", name=settings.sort_config_name) == settings.default_sort_field
    assert await channel.request("findConfig", name="unknown") is None


def test_defers_to_existing_configs_module():
    router = Router()
    channel = router.channel(settings.configs_channel)
    channel.reply("findConfig", lambda *, name: "title")

    responder = SettingsConfigResponder(router)
    assert responder.start() is False
    responder.stop()
    assert channel.has_handler("findConfig")


def test_stop_releases_handler():
    router = Router()
    responder = SettingsConfigResponder(router)
    responder.start()
    responder.stop()
    assert not router.channel(settings.configs_channel).has_handler("findConfig")
