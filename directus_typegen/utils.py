"""Utility functions for loading Directus metadata from disk.

This module reads schema snapshots (the JSON returned by
``GET /schema/snapshot`` or written by ``directus schema snapshot``) for
offline generation.
"""

import json
from pathlib import Path
from typing import Any

from .codegen.core.schema import CollectionDescriptor, build_collections
from .logging_config import get_logger

logger = get_logger(__name__)


class SnapshotLoaderError(Exception):
    """Custom exception for snapshot loading errors."""

    pass


def load_json_from_file(file_path: str | Path) -> Any:
    """Load JSON data from a local file.

    Args:
        file_path: Path to the JSON file.

    Returns:
        Parsed JSON data.

    Raises:
        SnapshotLoaderError: If the file is missing, unreadable or not JSON.
    """
    file_path = Path(file_path)
    logger.debug(f"Attempting to load JSON from file: {file_path}")

    if not file_path.exists():
        logger.error(f"File not found: {file_path}")
        raise SnapshotLoaderError(f"File not found: {file_path}")

    if file_path.suffix.lower() != ".json":
        logger.warning(f"File does not have .json extension: {file_path}")

    try:
        with file_path.open("r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        logger.error(f"Invalid JSON in file {file_path}: {e}")
        raise SnapshotLoaderError(f"Invalid JSON in file {file_path}: {e}") from e
    except OSError as e:
        logger.error(f"Error reading file {file_path}: {e}")
        raise SnapshotLoaderError(f"Error reading file {file_path}: {e}") from e

    logger.info(f"Successfully loaded JSON from {file_path}")
    return data


def load_snapshot(
    file_path: str | Path, include_system: bool = False
) -> dict[str, CollectionDescriptor]:
    """Load collection descriptors from a schema snapshot file.

    The snapshot may be the bare ``{"collections": [...], "fields": [...]}``
    object or wrapped in the API's ``{"data": {...}}`` envelope.

    Args:
        file_path: Path to the snapshot JSON.
        include_system: Keep ``directus_*`` system collections.

    Returns:
        Ordered mapping of collection key to descriptor.

    Raises:
        SnapshotLoaderError: If the file cannot be read or has the wrong shape.
    """
    data = load_json_from_file(file_path)

    if isinstance(data, dict) and isinstance(data.get("data"), dict):
        data = data["data"]

    if not isinstance(data, dict):
        raise SnapshotLoaderError(f"Snapshot must be a JSON object: {file_path}")

    collections = data.get("collections")
    fields = data.get("fields")
    if not isinstance(collections, list) or not isinstance(fields, list):
        raise SnapshotLoaderError(
            f"Snapshot must contain 'collections' and 'fields' lists: {file_path}"
        )

    try:
        return build_collections(collections, fields, include_system=include_system)
    except (KeyError, TypeError, AttributeError) as e:
        raise SnapshotLoaderError(f"Malformed snapshot {file_path}: {e!r}") from e
