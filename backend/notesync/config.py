from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="NOTESYNC_",
        extra="ignore",
        case_sensitive=False,
    )

    # Application
    debug: bool = False
    log_level: str = "INFO"

    # API
    api_prefix: str = "/api/v1"
    cors_origins: list[str] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ]
    root_path: str = ""

    # Supabase (storage backend)
    supabase_url: str | None = None
    supabase_key: str | None = None
    notes_table: str = "notes"

    # Message bus channels
    notes_channel: str = "collections/Notes"
    tags_channel: str = "collections/Tags"
    notebooks_channel: str = "collections/Notebooks"
    files_channel: str = "collections/Files"
    configs_channel: str = "collections/Configs"

    # Listing
    sort_config_name: str = "sortnotes"
    default_sort_field: str = "created_at"


settings = Settings()
