from __future__ import annotations

from functools import lru_cache

from supabase import Client, create_client
from supabase.lib.client_options import ClientOptions

from notesync.config import settings
from notesync.utils.logging import get_logger

logger = get_logger(__name__)


@lru_cache(maxsize=1)
def get_supabase_client() -> Client:
    """Return the cached Supabase client backing the notes table."""
    logger.debug("Initializing Supabase client")
    if not settings.supabase_url:
        raise RuntimeError("supabase_url is required for the storage client")
    if not settings.supabase_key:
        raise RuntimeError("supabase_key is required for the storage client")
    return create_client(
        settings.supabase_url,
        settings.supabase_key,
        options=ClientOptions(auto_refresh_token=False, persist_session=False),
    )
