"""
TypeScript code generator implementation.

Generates one interface per Directus collection and an aggregate schema
interface mapping collection keys to those interfaces.
"""

from typing import Dict, List, Mapping, Optional

from ....logging_config import get_logger
from ...core.config import GeneratorConfig
from ...core.generator import CodeGenerator, NamingCollisionError
from ...core.naming import is_safe_identifier, pascal_case, singularize
from ...core.schema import (
    CollectionDescriptor,
    GeneratedType,
    Member,
    SchemaEntry,
)
from .docs import format_jsdoc, generate_jsdoc_comment
from .types import TypeScriptTypeConfig, TypeScriptTypeMapper

logger = get_logger(__name__)


class TypeScriptGenerator(CodeGenerator):
    """Code generator for TypeScript interfaces."""

    def __init__(self, config: Optional[GeneratorConfig] = None):
        """Initialize TypeScript generator with configuration."""
        super().__init__(config)
        self.type_mapper = TypeScriptTypeMapper(
            TypeScriptTypeConfig(type_overrides=dict(self.config.type_overrides))
        )

    @property
    def language_name(self) -> str:
        """Return the language name."""
        return "typescript"

    @property
    def file_extension(self) -> str:
        """Return TypeScript file extension."""
        return ".ts"

    def resolve_type_name(self, collection: CollectionDescriptor) -> str:
        """Interface name for a collection."""
        name = collection.name
        if not collection.is_singleton or self.config.singularize_singletons:
            name = singularize(name)
        return pascal_case(name)

    def generate(self, collections: Mapping[str, CollectionDescriptor]) -> str:
        """Generate the complete TypeScript module for all collections."""
        generated_types = self.build_types(collections)

        blocks = [self._render_type(generated) for generated in generated_types]
        blocks.append(self._render_schema(self.build_schema_mapping(collections)))

        return "\n".join(blocks)

    def generate_single_schema(self, collection: CollectionDescriptor) -> str:
        """Generate the interface block for one collection."""
        return self._render_type(self.build_type(collection))

    def build_types(self, collections: Mapping[str, CollectionDescriptor]) -> List[GeneratedType]:
        """
        Build interface data for every collection, in input order.

        Raises:
            NamingCollisionError: If two collections share a type name or
                one takes the aggregate schema name
        """
        owners: Dict[str, str] = {self.config.schema_name: "<aggregate schema>"}
        generated_types = []

        for key, collection in collections.items():
            generated = self.build_type(collection)

            owner = owners.get(generated.type_name)
            if owner is not None:
                raise NamingCollisionError(generated.type_name, owner, key)
            owners[generated.type_name] = key

            generated_types.append(generated)

        return generated_types

    def build_type(self, collection: CollectionDescriptor) -> GeneratedType:
        """Build interface data for one collection."""
        type_name = self.resolve_type_name(collection)
        members = []

        for field in collection.fields:
            classification = self.type_mapper.classify(field)
            if not classification.include:
                logger.debug(f"Skipping hidden field {collection.name}.{field.field}")
                continue

            members.append(
                Member(
                    name=field.field,
                    type_expression=classification.type_expression,
                    optional=classification.optional,
                    nullable=classification.nullable,
                    doc_line=generate_jsdoc_comment(field) if self.config.add_comments else "",
                )
            )

        logger.debug(f"Collection {collection.name} -> {type_name} ({len(members)} members)")
        return GeneratedType(
            type_name=type_name,
            collection=collection.name,
            members=members,
            note=collection.note,
        )

    def build_schema_mapping(
        self, collections: Mapping[str, CollectionDescriptor]
    ) -> List[SchemaEntry]:
        """Entries of the aggregate schema interface, in input order."""
        return [
            SchemaEntry(
                collection_key=key,
                type_name=self.resolve_type_name(collection),
                is_array=not collection.is_singleton,
            )
            for key, collection in collections.items()
        ]

    def _render_type(self, generated: GeneratedType) -> str:
        doc_line = format_jsdoc(generated.note) if self.config.add_comments else ""
        return self.render_template(
            "ts_interface",
            {
                "type_name": generated.type_name,
                "members": generated.members,
                "doc_line": doc_line,
                "indent": self.config.indent,
            },
        )

    def _render_schema(self, entries: List[SchemaEntry]) -> str:
        return self.render_template(
            "ts_schema",
            {
                "schema_name": self.config.schema_name,
                "entries": entries,
                "indent": self.config.indent,
            },
        )

    def validate_schemas(self, collections: Mapping[str, CollectionDescriptor]) -> List[str]:
        """Validate collections for TypeScript generation."""
        warnings = super().validate_schemas(collections)

        for key, collection in collections.items():
            type_name = self.resolve_type_name(collection)
            if not is_safe_identifier(type_name):
                warnings.append(
                    f"Collection '{key}' produces an invalid type name '{type_name}'"
                )

            included = [f for f in collection.fields if self.type_mapper.should_include(f)]
            if collection.fields and not included:
                warnings.append(f"Collection '{key}' has only hidden fields")

            for field in included:
                if self.type_mapper.determine_type(field) == self.type_mapper.config.unknown_type:
                    warnings.append(f"Unknown type in {key}.{field.field}")

        return warnings


def create_typescript_generator(config: Optional[GeneratorConfig] = None, **overrides) -> TypeScriptGenerator:
    """Create a TypeScript generator, applying keyword overrides to the config."""
    if config is None:
        from ...core.config import load_config

        config = load_config(custom_config=overrides, environ={})
    elif overrides:
        from dataclasses import replace

        config = replace(config, **overrides)

    return TypeScriptGenerator(config)
