"""Application services."""

from firestore_codec.application.services.serializer import Serializer

__all__ = ["Serializer"]
