"""
Core code generation components.

Provides base classes and utilities used by all language generators.
"""

from .generator import (
    CodeGenerator,
    GeneratorError,
    NamingCollisionError,
    GenerationResult,
    generate_code,
)
from .schema import (
    CollectionDescriptor,
    FieldDescriptor,
    FieldMeta,
    FieldSchema,
    GeneratedType,
    Member,
    SchemaEntry,
    build_collections,
    convert_metadata,
)
from .naming import (
    format_property_key,
    is_safe_identifier,
    pascal_case,
    singularize,
)
from .config import GeneratorConfig, ConfigManager, ConfigError, load_config
from .templates import TemplateEngine, TemplateError, create_template_engine

__all__ = [
    # Base generator interface
    "CodeGenerator",
    "GeneratorError",
    "NamingCollisionError",
    "GenerationResult",
    "generate_code",
    # Metadata model
    "CollectionDescriptor",
    "FieldDescriptor",
    "FieldMeta",
    "FieldSchema",
    "GeneratedType",
    "Member",
    "SchemaEntry",
    "build_collections",
    "convert_metadata",
    # Naming utilities
    "format_property_key",
    "is_safe_identifier",
    "pascal_case",
    "singularize",
    # Configuration system
    "GeneratorConfig",
    "ConfigManager",
    "ConfigError",
    "load_config",
    # Template system
    "TemplateEngine",
    "TemplateError",
    "create_template_engine",
]
