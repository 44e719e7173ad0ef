"""Codec configuration (settings and environment).

Single source of truth for all configuration. Uses pydantic-settings
with .env support; every variable is read with the FIRESTORE_CODEC_
prefix (e.g. FIRESTORE_CODEC_PROJECT_ID). Limits are validated at load
time.
"""

from functools import lru_cache

from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from firestore_codec.core.constants import (
    DEFAULT_DATABASE_ID,
    MAX_DOCUMENT_SIZE,
    MAX_NESTING_DEPTH,
)


class Settings(BaseSettings):
    """Codec settings loaded from environment and .env.

    All settings are optional. project_id is only required by
    Serializer.from_settings(); callers that build a DatabaseId themselves
    never need it.
    """

    # App
    app_name: str = "firestore-codec"
    app_version: str = "1.0.0"
    debug: bool = False

    # Database the serializer resolves document keys against
    project_id: str = ""
    database_id: str = DEFAULT_DATABASE_ID

    # Encoding: ceiling for one top-level value (service document limit)
    max_document_size: int = MAX_DOCUMENT_SIZE

    # Nested length-delimited messages allowed below the top level, enforced
    # on encode (InternalCodecError) and decode (DATA_LOSS) alike.
    # Each map level costs three (MapValue, FieldsEntry, Value).
    max_nesting_depth: int = MAX_NESTING_DEPTH
    # Raise InternalCodecError instead of returning DATA_LOSS on an unknown
    # Value field number. Meant for development builds.
    abort_on_unknown_field: bool = False

    model_config = SettingsConfigDict(
        env_prefix="FIRESTORE_CODEC_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    @model_validator(mode="after")
    def validate_limits(self) -> "Settings":
        """Validate size and depth limits.

        - max_document_size must be positive and cannot exceed the
          service limit (1 MiB - 4 bytes).
        - max_nesting_depth must be at least 1.
        - database_id must be non-empty.
        """
        if not 0 < self.max_document_size <= MAX_DOCUMENT_SIZE:
            raise ValueError(
                f"max_document_size must be between 1 and {MAX_DOCUMENT_SIZE}, "
                f"got: {self.max_document_size}"
            )
        if self.max_nesting_depth < 1:
            raise ValueError(
                f"max_nesting_depth must be at least 1, got: {self.max_nesting_depth}"
            )
        if not self.database_id:
            raise ValueError(
                "FIRESTORE_CODEC_DATABASE_ID must be non-empty; "
                f"use {DEFAULT_DATABASE_ID!r} for the default database."
            )
        return self


@lru_cache
def get_settings() -> Settings:
    """Return cached codec settings (single instance per process).

    Validation runs on first call, not at import time. In tests, call
    get_settings.cache_clear() before overriding env vars so the next
    get_settings() uses the new values.

    Returns:
        Loaded and validated Settings instance.
    """
    return Settings()
