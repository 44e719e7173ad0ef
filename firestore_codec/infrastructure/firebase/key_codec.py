"""Translate DocumentKeys to/from Firestore resource names.

Resource name format:

    projects/{project_id}/databases/{database_id}/documents/{local/path}

Keys are only ever produced by this client for its own database, so a
malformed or foreign name is a programmer error, not bad input.
"""

from firestore_codec.core.constants import (
    RESOURCE_DATABASES,
    RESOURCE_DOCUMENTS,
    RESOURCE_PROJECTS,
)
from firestore_codec.domain.value_objects.core import DatabaseId, DocumentKey, ResourcePath
from firestore_codec.shared.utils.assertions import hard_assert


def encode_database_id(database_id: DatabaseId) -> ResourcePath:
    """Return projects/{project_id}/databases/{database_id} as a path."""
    return ResourcePath(
        (
            RESOURCE_PROJECTS,
            database_id.project_id,
            RESOURCE_DATABASES,
            database_id.database_id,
        )
    )


def encode_resource_name(database_id: DatabaseId, path: ResourcePath) -> str:
    """Return the full resource name of ``path`` under ``database_id``."""
    return (
        encode_database_id(database_id)
        .append(RESOURCE_DOCUMENTS)
        .append(path)
        .canonical_string()
    )


def is_valid_resource_name(path: ResourcePath) -> bool:
    """Whether ``path`` starts with projects/{p}/databases/{d}."""
    return (
        len(path) >= 4
        and path[0] == RESOURCE_PROJECTS
        and path[2] == RESOURCE_DATABASES
    )


def decode_resource_name(encoded: str) -> ResourcePath:
    """Parse a resource name into a path.

    Raises:
        InternalCodecError: If the name is not a valid resource name.
    """
    hard_assert("//" not in encoded, "Tried to deserialize invalid key %s", encoded)
    resource = ResourcePath.from_string(encoded)
    hard_assert(
        is_valid_resource_name(resource),
        "Tried to deserialize invalid key %s",
        resource.canonical_string(),
    )
    return resource


def extract_local_path(resource_name: ResourcePath) -> ResourcePath:
    """Return the document path after projects/{p}/databases/{d}/documents.

    Raises:
        InternalCodecError: If the name has no documents segment.
    """
    hard_assert(
        len(resource_name) > 4 and resource_name[4] == RESOURCE_DOCUMENTS,
        "Tried to deserialize invalid key %s",
        resource_name.canonical_string(),
    )
    return resource_name.pop_first(5)


def encode_key(database_id: DatabaseId, key: DocumentKey) -> str:
    return encode_resource_name(database_id, key.path)


def decode_key(database_id: DatabaseId, name: str) -> DocumentKey:
    """Decode a resource name into a DocumentKey of ``database_id``.

    Raises:
        InternalCodecError: If the name is malformed, belongs to another
            project or database, or does not address a document.
    """
    resource = decode_resource_name(name)
    hard_assert(
        resource[1] == database_id.project_id,
        "Tried to deserialize key from different project.",
    )
    hard_assert(
        resource[3] == database_id.database_id,
        "Tried to deserialize key from different database.",
    )
    local_path = extract_local_path(resource)
    hard_assert(
        DocumentKey.is_document_key(local_path),
        "Tried to deserialize invalid key %s (not a document path)",
        resource.canonical_string(),
    )
    return DocumentKey(local_path)
