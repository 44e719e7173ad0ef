"""Core: configuration and constants."""

from firestore_codec.core.config import Settings, get_settings

__all__ = ["Settings", "get_settings"]
