from __future__ import annotations

import inspect
from typing import TYPE_CHECKING, Any

from notesync.core.exceptions import HandlerConflictError, NoHandlerError
from notesync.utils.logging import get_logger

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping

logger = get_logger(__name__)


class Channel:
    """Named request-reply and publish-subscribe endpoint.

    One handler answers a given request name; a second registration for the
    same name raises `HandlerConflictError` until the first is released with
    `stop_replying`. Events fan out to every listener in registration order.
    """

    def __init__(self, name: str) -> None:
        self.name = name
        self._handlers: dict[str, Callable[..., Any]] = {}
        self._listeners: dict[str, list[Callable[..., Any]]] = {}

    def reply(self, name: str, handler: Callable[..., Any]) -> None:
        if name in self._handlers:
            raise HandlerConflictError(self.name, name)
        self._handlers[name] = handler
        logger.debug("Channel %s replies to %s", self.name, name)

    def reply_many(self, handlers: Mapping[str, Callable[..., Any]]) -> None:
        conflicts = [name for name in handlers if name in self._handlers]
        if conflicts:
            raise HandlerConflictError(self.name, conflicts[0])
        for name, handler in handlers.items():
            self.reply(name, handler)

    def reply_once(self, name: str, handler: Callable[..., Any]) -> None:
        """Register a handler that is released after answering one request."""

        def _once(**payload: Any) -> Any:
            self.stop_replying(name)
            return handler(**payload)

        self.reply(name, _once)

    def stop_replying(self, *names: str) -> None:
        if not names:
            self._handlers.clear()
            return
        for name in names:
            self._handlers.pop(name, None)

    def has_handler(self, name: str) -> bool:
        return name in self._handlers

    async def request(self, name: str, /, **payload: Any) -> Any:
        handler = self._handlers.get(name)
        if handler is None:
            raise NoHandlerError(self.name, name)
        result = handler(**payload)
        if inspect.isawaitable(result):
            result = await result
        return result

    def on(self, event: str, listener: Callable[..., Any]) -> None:
        self._listeners.setdefault(event, []).append(listener)

    def off(self, event: str, listener: Callable[..., Any] | None = None) -> None:
        if listener is None:
            self._listeners.pop(event, None)
            return
        listeners = self._listeners.get(event, [])
        if listener in listeners:
            listeners.remove(listener)

    def trigger(self, event: str, /, **payload: Any) -> None:
        for listener in list(self._listeners.get(event, [])):
            listener(**payload)


class Router:
    """Registry of channels shared by the modules of one application."""

    def __init__(self) -> None:
        self._channels: dict[str, Channel] = {}

    def channel(self, name: str) -> Channel:
        existing = self._channels.get(name)
        if existing is None:
            existing = self._channels[name] = Channel(name)
        return existing

    def reset(self) -> None:
        self._channels.clear()
