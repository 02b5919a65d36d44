from __future__ import annotations

from typing import TYPE_CHECKING

from notesync.config import settings
from notesync.utils.logging import get_logger

if TYPE_CHECKING:
    from notesync.core.bus import Router

logger = get_logger(__name__)


class SettingsConfigResponder:
    """Answers ``findConfig`` from application settings.

    Used when the host application runs without its own configs module, so
    that listing notes still resolves a sort field.
    """

    def __init__(self, router: Router) -> None:
        self.channel = router.channel(settings.configs_channel)
        self._values: dict[str, str] = {settings.sort_config_name: settings.default_sort_field}
        self._registered = False

    def find_config(self, *, name: str) -> str | None:
        return self._values.get(name)

    def start(self) -> bool:
        """Register unless another module already answers ``findConfig``."""
        if self.channel.has_handler("findConfig"):
            logger.debug("findConfig already answered on %s", self.channel.name)
            return False
        self.channel.reply("findConfig", self.find_config)
        self._registered = True
        return True

    def stop(self) -> None:
        if self._registered:
            self.channel.stop_replying("findConfig")
            self._registered = False
