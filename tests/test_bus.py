"""Unit tests for notesync.core.bus."""

from __future__ import annotations

import pytest

from notesync.core.bus import Channel, Router
from notesync.core.exceptions import HandlerConflictError, NoHandlerError


@pytest.fixture()
def channel() -> Channel:
    return Channel("collections/Test")


class TestRequests:
    async def test_sync_handler_reply_is_returned(self, channel: Channel):
        channel.reply("findConfig", lambda *, name: f"value-of-{name}")
        assert await channel.request("findConfig", name="sortnotes") == "value-of-sortnotes"

    async def test_payload_name_reaches_async_handler(self, channel: Channel):
        async def handler(*, name):
            return name

        channel.reply_once("findConfig", handler)
        assert await channel.request("findConfig", name="sortnotes") == "sortnotes"

    async def test_async_handler_reply_is_awaited(self, channel: Channel):
        async def handler(**payload):
            return payload

        channel.reply("echo", handler)
        assert await channel.request("echo", a=1) == {"a": 1}

    async def test_unknown_request_raises(self, channel: Channel):
        with pytest.raises(NoHandlerError) as exc_info:
            await channel.request("missing")
        assert exc_info.value.name == "missing"
        assert exc_info.value.channel == "collections/Test"

    def test_second_handler_conflicts(self, channel: Channel):
        channel.reply("save", lambda: None)
        with pytest.raises(HandlerConflictError):
            channel.reply("save", lambda: None)

    def test_reply_many_registers_nothing_on_conflict(self, channel: Channel):
        channel.reply("b", lambda: None)
        with pytest.raises(HandlerConflictError):
            channel.reply_many({"a": lambda: None, "b": lambda: None})
        assert not channel.has_handler("a")

    async def test_reply_once_answers_a_single_request(self, channel: Channel):
        channel.reply_once("ping", lambda: "pong")
        assert await channel.request("ping") == "pong"
        assert not channel.has_handler("ping")

    def test_stop_replying_named_and_all(self, channel: Channel):
        channel.reply_many({"a": lambda: None, "b": lambda: None, "c": lambda: None})
        channel.stop_replying("a")
        assert not channel.has_handler("a")
        assert channel.has_handler("b")
        channel.stop_replying()
        assert not channel.has_handler("b")
        assert not channel.has_handler("c")


class TestEvents:
    def test_trigger_calls_listeners_in_order(self, channel: Channel):
        seen = []
        channel.on("destroy:model", lambda **p: seen.append(("first", p)))
        channel.on("destroy:model", lambda **p: seen.append(("second", p)))

        channel.trigger("destroy:model", model="m")

        assert seen == [("first", {"model": "m"}), ("second", {"model": "m"})]

    def test_off_removes_one_or_all_listeners(self, channel: Channel):
        seen = []

        def listener(**payload):
            seen.append(payload)

        channel.on("restore:model", listener)
        channel.off("restore:model", listener)
        channel.trigger("restore:model", model=1)
        assert seen == []

        channel.on("restore:model", listener)
        channel.off("restore:model")
        channel.trigger("restore:model", model=2)
        assert seen == []

    def test_trigger_without_listeners(self, channel: Channel):
        channel.trigger("nothing")

    def test_payload_may_carry_an_event_key(self, channel: Channel):
        seen = []
        channel.on("change", lambda **p: seen.append(p))
        channel.trigger("change", event="rename")
        assert seen == [{"event": "rename"}]


class TestRouter:
    def test_channel_is_created_once(self):
        router = Router()
        assert router.channel("collections/Notes") is router.channel("collections/Notes")

    def test_routers_do_not_share_channels(self):
        assert Router().channel("x") is not Router().channel("x")

    def test_reset_drops_channels(self):
        router = Router()
        first = router.channel("x")
        first.reply("a", lambda: None)
        router.reset()
        assert not router.channel("x").has_handler("a")
