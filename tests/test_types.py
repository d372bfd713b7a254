"""Tests for the TypeScript type mapping rules."""

from __future__ import annotations

import pytest

from directus_typegen.codegen.core.schema import FieldDescriptor, FieldMeta, FieldSchema
from directus_typegen.codegen.languages.typescript.types import (
    DATA_TYPE_MAP,
    DataKind,
    TypeScriptTypeConfig,
    TypeScriptTypeMapper,
    classify_field,
    determine_field_type,
    map_data_type,
    normalize_data_type,
    should_include_field,
)


def _field(
    data_type: str | None = "string",
    *,
    primary_key: bool = False,
    nullable: bool = False,
    required: bool = False,
    hidden: bool = False,
    interface: str | None = None,
    type_hint: str | None = None,
    with_schema: bool = True,
    with_meta: bool = True,
) -> FieldDescriptor:
    schema = (
        FieldSchema(is_primary_key=primary_key, is_nullable=nullable, data_type=data_type)
        if with_schema
        else None
    )
    meta = FieldMeta(required=required, hidden=hidden, interface=interface) if with_meta else None
    return FieldDescriptor(field="value", schema=schema, meta=meta, type=type_hint)


# ---------------------------------------------------------------------------
# Storage type table
# ---------------------------------------------------------------------------


_EXPECTED_TS = {
    DataKind.NUMBER: "number",
    DataKind.BOOLEAN: "boolean",
    DataKind.STRING: "string",
    DataKind.DATETIME: "string",
    DataKind.JSON: "Record<string, unknown>",
    DataKind.CSV: "string[]",
}


class TestDataTypeMap:
    @pytest.mark.parametrize(("tag", "kind"), sorted(DATA_TYPE_MAP.items()))
    def test_every_tag_maps_to_its_typescript_type(self, tag: str, kind: DataKind) -> None:
        assert determine_field_type(_field(tag)) == _EXPECTED_TS[kind]

    @pytest.mark.parametrize(
        ("tag", "normalized"),
        [
            ("VARCHAR(255)", "varchar"),
            ("decimal(10, 2)", "decimal"),
            ("  Integer ", "integer"),
            (None, ""),
        ],
    )
    def test_normalize(self, tag: str | None, normalized: str) -> None:
        assert normalize_data_type(tag) == normalized

    def test_parameterized_tag_maps(self) -> None:
        assert map_data_type("DECIMAL(10, 2)") is DataKind.NUMBER

    def test_unknown_tag(self) -> None:
        assert map_data_type("geometry") is DataKind.UNKNOWN
        assert determine_field_type(_field("geometry")) == "unknown"


# ---------------------------------------------------------------------------
# Type precedence
# ---------------------------------------------------------------------------


class TestDetermineType:
    def test_json_hint_beats_storage_type(self) -> None:
        assert determine_field_type(_field("text", type_hint="json")) == "Record<string, unknown>"

    def test_csv_hint(self) -> None:
        assert determine_field_type(_field("text", type_hint="csv")) == "string[]"

    def test_type_hint_used_without_schema(self) -> None:
        assert determine_field_type(_field(with_schema=False, type_hint="integer")) == "number"

    def test_missing_everything_is_unknown(self) -> None:
        assert determine_field_type(_field(with_schema=False, with_meta=False)) == "unknown"

    def test_to_one_relation_uses_key_type(self) -> None:
        assert determine_field_type(_field("integer", interface="select-dropdown-m2o")) == "number"
        assert determine_field_type(_field("uuid", interface="file-image")) == "string"

    def test_to_one_relation_without_key_type(self) -> None:
        field = _field(with_schema=False, interface="select-dropdown-m2o")
        assert determine_field_type(field) == "number | string"

    def test_custom_m2o_interface(self) -> None:
        assert determine_field_type(_field("integer", interface="my-custom-m2o")) == "number"

    @pytest.mark.parametrize("interface", ["list-o2m", "list-m2m", "list-m2a", "files"])
    def test_to_many_relation(self, interface: str) -> None:
        field = _field(with_schema=False, type_hint="alias", interface=interface)
        assert determine_field_type(field) == "(number | string)[]"

    def test_plain_interface_falls_through(self) -> None:
        assert determine_field_type(_field("boolean", interface="boolean")) == "boolean"


class TestTypeOverrides:
    def test_override_by_tag(self) -> None:
        mapper = TypeScriptTypeMapper(TypeScriptTypeConfig(type_overrides={"uuid": "UUID"}))
        assert mapper.determine_type(_field("uuid")) == "UUID"
        assert mapper.determine_type(_field("string")) == "string"

    def test_override_by_kind(self) -> None:
        mapper = TypeScriptTypeMapper(TypeScriptTypeConfig(type_overrides={"datetime": "Date"}))
        assert mapper.determine_type(_field("timestamp")) == "Date"
        assert mapper.determine_type(_field("date")) == "Date"

    def test_json_override(self) -> None:
        mapper = TypeScriptTypeMapper(TypeScriptTypeConfig(type_overrides={"json": "any"}))
        assert mapper.determine_type(_field("text", type_hint="json")) == "any"

    def test_tag_override_applies_to_relation_key(self) -> None:
        mapper = TypeScriptTypeMapper(TypeScriptTypeConfig(type_overrides={"uuid": "UUID"}))
        author = _field("uuid", interface="select-dropdown-m2o")
        assert mapper.determine_type(author) == "UUID"

    def test_kind_override_applies_to_relation_key(self) -> None:
        mapper = TypeScriptTypeMapper(TypeScriptTypeConfig(type_overrides={"number": "bigint"}))
        assert mapper.determine_type(_field("integer", interface="many-to-one")) == "bigint"


# ---------------------------------------------------------------------------
# Inclusion, optionality, nullability
# ---------------------------------------------------------------------------


class TestClassification:
    def test_hidden_alias_excluded(self) -> None:
        assert not should_include_field(_field(with_schema=False, hidden=True))

    def test_hidden_column_included(self) -> None:
        assert should_include_field(_field(hidden=True))

    def test_field_without_meta_included(self) -> None:
        assert should_include_field(_field(with_meta=False))

    def test_primary_key_never_optional_or_nullable(self) -> None:
        result = classify_field(_field("integer", primary_key=True, nullable=True))
        assert result.optional is False
        assert result.nullable is False

    def test_required_field_not_nullable(self) -> None:
        result = classify_field(_field(required=True, nullable=True))
        assert result.optional is False
        assert result.nullable is False

    def test_optional_nullable_field(self) -> None:
        result = classify_field(_field("text", nullable=True))
        assert result.include is True
        assert result.type_expression == "string"
        assert result.optional is True
        assert result.nullable is True

    def test_field_without_schema_or_meta(self) -> None:
        result = classify_field(_field(with_schema=False, with_meta=False))
        assert result.include is True
        assert result.optional is True
        assert result.nullable is False
