"""Tests for TypeScript generation end to end."""

from __future__ import annotations

from dataclasses import replace

import pytest

from directus_typegen.codegen import (
    GeneratorConfig,
    NamingCollisionError,
    TypeScriptGenerator,
    generate,
    generate_from_collections,
)
from directus_typegen.codegen.core.schema import (
    CollectionDescriptor,
    FieldDescriptor,
    FieldMeta,
    FieldSchema,
    build_collections,
)
from directus_typegen.codegen.languages.typescript.generator import (
    create_typescript_generator,
)


EXPECTED_SAMPLE = (
    "export interface Article {\n"
    "\tid: number;\n"
    "\ttitle: string;\n"
    "\t/** Main content */\n"
    "\tbody?: string | null;\n"
    "}\n"
    "\n"
    "export interface Settings {\n"
    "\tsite_name?: string;\n"
    "}\n"
    "\n"
    "export interface Schema {\n"
    "\tarticles: Article[];\n"
    "\tsettings: Settings;\n"
    "}\n"
)


@pytest.fixture
def sample(raw_collections, raw_fields) -> dict[str, CollectionDescriptor]:
    return build_collections(raw_collections, raw_fields)


def _collection(name: str, *fields: FieldDescriptor, singleton: bool = False) -> CollectionDescriptor:
    return CollectionDescriptor(name=name, is_singleton=singleton, fields=fields)


def _string_field(name: str) -> FieldDescriptor:
    return FieldDescriptor(field=name, schema=FieldSchema(data_type="string"))


# ---------------------------------------------------------------------------
# Output format
# ---------------------------------------------------------------------------


class TestGenerate:
    def test_sample_output(self, sample) -> None:
        assert generate(sample) == EXPECTED_SAMPLE

    def test_output_is_deterministic(self, sample) -> None:
        assert generate(sample) == generate(dict(sample))

    def test_collection_order_preserved(self, sample) -> None:
        reordered = {"settings": sample["settings"], "articles": sample["articles"]}
        code = generate(reordered)
        assert code.index("interface Settings") < code.index("interface Article")
        assert code.index("settings: Settings;") < code.index("articles: Article[];")

    def test_empty_input(self) -> None:
        assert generate({}) == "export interface Schema {\n}\n"

    def test_collection_without_fields(self) -> None:
        code = generate({"drafts": _collection("drafts")})
        assert "export interface Draft {\n}\n" in code
        assert "\tdrafts: Draft[];\n" in code

    def test_raw_grouped_metadata_accepted(self, field_factory) -> None:
        code = generate(
            {
                "pages": {
                    "meta": {"singleton": False},
                    "fields": [field_factory("pages", "slug", "string", required=True)],
                }
            }
        )
        assert "export interface Page {\n\tslug: string;\n}\n" in code

    def test_hidden_alias_field_omitted(self) -> None:
        hidden = FieldDescriptor(field="divider", meta=FieldMeta(hidden=True), type="alias")
        code = generate({"pages": _collection("pages", _string_field("title"), hidden)})
        assert "divider" not in code
        assert "title?: string;" in code

    def test_primary_key_never_optional(self) -> None:
        pk = FieldDescriptor(
            field="id",
            schema=FieldSchema(is_primary_key=True, is_nullable=True, data_type="uuid"),
        )
        code = generate({"pages": _collection("pages", pk)})
        assert "\tid: string;\n" in code

    def test_non_identifier_keys_quoted(self) -> None:
        code = generate({"blog-posts": _collection("blog-posts", _string_field("first-name"))})
        assert "\t'first-name'?: string;\n" in code
        assert "\t'blog-posts': BlogPost[];\n" in code

    def test_relations(self) -> None:
        author = FieldDescriptor(
            field="author",
            schema=FieldSchema(data_type="uuid", is_nullable=True),
            meta=FieldMeta(interface="select-dropdown-m2o"),
        )
        tags = FieldDescriptor(field="tags", meta=FieldMeta(interface="list-m2m"), type="alias")
        code = generate({"posts": _collection("posts", author, tags)})
        assert "\tauthor?: string | null;\n" in code
        assert "\ttags?: (number | string)[];\n" in code

    def test_collection_note_rendered(self) -> None:
        collection = CollectionDescriptor(name="posts", note="Blog posts")
        assert generate({"posts": collection}).startswith(
            "/** Blog posts */\nexport interface Post {\n"
        )


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------


class TestGeneratorConfig:
    def test_space_indentation(self, sample) -> None:
        code = generate(sample, GeneratorConfig(use_tabs=False, indent_size=2))
        assert "\n  id: number;\n" in code
        assert "\t" not in code

    def test_comments_disabled(self, sample) -> None:
        code = generate(sample, GeneratorConfig(add_comments=False))
        assert "/**" not in code
        assert "\tbody?: string | null;\n" in code

    def test_custom_schema_name(self, sample) -> None:
        code = generate(sample, GeneratorConfig(schema_name="DirectusSchema"))
        assert "export interface DirectusSchema {\n" in code

    def test_singletons_keep_name_by_default(self, sample) -> None:
        assert "export interface Settings {" in generate(sample)

    def test_singularize_singletons(self, sample) -> None:
        code = generate(sample, GeneratorConfig(singularize_singletons=True))
        assert "export interface Setting {" in code
        assert "\tsettings: Setting;\n" in code

    def test_type_overrides(self) -> None:
        created = FieldDescriptor(field="created", schema=FieldSchema(data_type="timestamp"))
        config = GeneratorConfig(type_overrides={"datetime": "Date"})
        assert "\tcreated?: Date;\n" in generate({"posts": _collection("posts", created)}, config)

    def test_factory_applies_overrides(self) -> None:
        generator = create_typescript_generator(GeneratorConfig(), schema_name="Cms")
        assert generator.config.schema_name == "Cms"

    def test_factory_without_config(self) -> None:
        generator = create_typescript_generator(use_tabs=False)
        assert generator.config.indent == "    "


# ---------------------------------------------------------------------------
# Naming collisions
# ---------------------------------------------------------------------------


class TestNamingCollisions:
    def test_singular_and_plural_collide(self) -> None:
        collections = {"article": _collection("article"), "articles": _collection("articles")}
        with pytest.raises(NamingCollisionError) as exc_info:
            generate(collections)

        assert exc_info.value.type_name == "Article"
        assert exc_info.value.first == "article"
        assert exc_info.value.second == "articles"

    def test_collision_with_schema_name(self) -> None:
        with pytest.raises(NamingCollisionError):
            generate({"schemas": _collection("schemas")})

    def test_collision_reported_in_result(self) -> None:
        result = generate_from_collections(
            {"user_profiles": _collection("user_profiles"), "userProfiles": _collection("userProfiles")}
        )
        assert result.success is False
        assert result.code == ""
        assert "UserProfile" in result.error_message
        assert isinstance(result.exception, NamingCollisionError)


# ---------------------------------------------------------------------------
# Generation results and validation
# ---------------------------------------------------------------------------


class TestGenerationResult:
    def test_metadata(self, sample) -> None:
        result = generate_from_collections(sample)

        assert result.success is True
        assert result.code == EXPECTED_SAMPLE
        assert result.metadata["language"] == "typescript"
        assert result.metadata["file_extension"] == ".ts"
        assert result.metadata["collection_count"] == 2
        assert result.metadata["singleton_count"] == 1
        assert result.metadata["field_count"] == 4
        assert result.metadata["schema_name"] == "Schema"

    def test_sample_has_no_warnings(self, sample) -> None:
        assert generate_from_collections(sample).warnings == []

    def test_warnings(self) -> None:
        location = FieldDescriptor(field="location", schema=FieldSchema(data_type="geometry"))
        hidden = FieldDescriptor(field="divider", meta=FieldMeta(hidden=True))
        result = generate_from_collections(
            {
                "empty": _collection("empty"),
                "places": _collection("places", location),
                "layout": _collection("layout", hidden),
                "2fa_codes": _collection("2fa_codes"),
            }
        )

        assert result.success is True
        assert "Collection 'empty' has no fields" in result.warnings
        assert "Unknown type in places.location" in result.warnings
        assert "Collection 'layout' has only hidden fields" in result.warnings
        assert any("invalid type name" in w for w in result.warnings)

    def test_single_schema(self, sample) -> None:
        generator = TypeScriptGenerator(replace(GeneratorConfig(), add_comments=False))
        assert generator.generate_single_schema(sample["settings"]) == (
            "export interface Settings {\n\tsite_name?: string;\n}\n"
        )
