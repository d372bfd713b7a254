"""
TypeScript code generator module.

Generates TypeScript interfaces from Directus collection metadata.
"""

from .generator import TypeScriptGenerator, create_typescript_generator
from .types import (
    DATA_TYPE_MAP,
    DataKind,
    FieldClassification,
    TypeScriptTypeConfig,
    TypeScriptTypeMapper,
    classify_field,
    determine_field_type,
    map_data_type,
    should_include_field,
)
from .docs import format_jsdoc, generate_jsdoc_comment

__all__ = [
    # Generator
    "TypeScriptGenerator",
    "create_typescript_generator",
    # Type system
    "DATA_TYPE_MAP",
    "DataKind",
    "FieldClassification",
    "TypeScriptTypeConfig",
    "TypeScriptTypeMapper",
    "classify_field",
    "determine_field_type",
    "map_data_type",
    "should_include_field",
    # Documentation
    "format_jsdoc",
    "generate_jsdoc_comment",
]
