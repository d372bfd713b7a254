"""
Directus Type Generation Module

Generates TypeScript declarations from Directus collection metadata.
"""

from pathlib import Path
from typing import Any, Mapping, Optional

from ..logging_config import get_logger
from .core.generator import (
    CodeGenerator,
    GenerationResult,
    GeneratorError,
    NamingCollisionError,
    generate_code,
)
from .core.schema import (
    CollectionDescriptor,
    FieldDescriptor,
    FieldMeta,
    FieldSchema,
    convert_metadata,
)
from .core.config import GeneratorConfig, ConfigManager, ConfigError, load_config
from .languages.typescript import TypeScriptGenerator

logger = get_logger(__name__)


def _as_descriptors(collections: Any) -> Mapping[str, CollectionDescriptor]:
    """Accept descriptors or raw grouped metadata."""
    if isinstance(collections, Mapping) and all(
        isinstance(value, CollectionDescriptor) for value in collections.values()
    ):
        return collections
    return convert_metadata(collections)


def generate(collections: Any, config: Optional[GeneratorConfig] = None) -> str:
    """
    Generate TypeScript declarations for the given collections.

    Pure with respect to its input: identical collections and config give
    byte-identical output, and nothing is written anywhere.

    Args:
        collections: Mapping of collection key to CollectionDescriptor, or
            raw grouped metadata accepted by ``convert_metadata``
        config: Generator configuration (defaults apply when omitted)

    Returns:
        Generated TypeScript source

    Raises:
        NamingCollisionError: If two collections map to the same type name
    """
    generator = TypeScriptGenerator(config or GeneratorConfig())
    return generator.generate(_as_descriptors(collections))


def generate_from_collections(
    collections: Any, config: Optional[GeneratorConfig] = None
) -> GenerationResult:
    """
    Generate code with validation warnings and metadata.

    Args:
        collections: Collections as accepted by :func:`generate`
        config: Generator configuration

    Returns:
        GenerationResult with generated code
    """
    generator = TypeScriptGenerator(config or GeneratorConfig())
    return generate_code(generator, _as_descriptors(collections))


def write_output(code: str, output_file: str | Path) -> Path:
    """Write generated code, creating parent directories."""
    output_path = Path(output_file)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(code, encoding="utf-8")
    logger.info(f"Directus types generated successfully at {output_path}")
    return output_path


def generate_directus_types(config: Optional[GeneratorConfig] = None, client=None) -> str:
    """
    Fetch metadata from a Directus instance and generate types.

    The output file is written only after generation succeeded, so a
    failed fetch or a naming collision leaves nothing behind.

    Args:
        config: Configuration; ``output_file=None`` skips writing
        client: Metadata provider with ``fetch_collections(include_system=...)``
            (defaults to a DirectusClient built from the config)

    Returns:
        Generated TypeScript source

    Raises:
        MetadataFetchError: If the metadata cannot be fetched
        NamingCollisionError: If two collections map to the same type name
    """
    from ..api import DirectusClient

    config = config or load_config()

    if client is None:
        with DirectusClient(
            config.directus_url, config.directus_token, timeout=config.timeout
        ) as own_client:
            collections = own_client.fetch_collections(
                include_system=config.include_system_collections
            )
    else:
        collections = client.fetch_collections(
            include_system=config.include_system_collections
        )

    code = generate(collections, config)

    if config.output_file:
        write_output(code, config.output_file)

    return code


__all__ = [
    "CodeGenerator",
    "GenerationResult",
    "GeneratorError",
    "NamingCollisionError",
    "CollectionDescriptor",
    "FieldDescriptor",
    "FieldMeta",
    "FieldSchema",
    "GeneratorConfig",
    "ConfigManager",
    "ConfigError",
    "TypeScriptGenerator",
    "generate",
    "generate_code",
    "generate_from_collections",
    "generate_directus_types",
    "load_config",
    "write_output",
]
