"""Generate TypeScript declarations from Directus collection metadata."""

from .codegen import (
    GeneratorConfig,
    NamingCollisionError,
    generate,
    generate_directus_types,
    generate_from_collections,
    load_config,
)
from .api import DirectusClient, MetadataAuthError, MetadataFetchError
from .utils import SnapshotLoaderError, load_snapshot

__version__ = "0.1.0"

__all__ = [
    "DirectusClient",
    "GeneratorConfig",
    "MetadataAuthError",
    "MetadataFetchError",
    "NamingCollisionError",
    "SnapshotLoaderError",
    "generate",
    "generate_directus_types",
    "generate_from_collections",
    "load_config",
    "load_snapshot",
]
