"""
TypeScript type system for code generation.

Decides which fields are emitted and maps Directus data types, semantic
type hints and relation interfaces to TypeScript type expressions.
"""

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Optional

from ...core.schema import FieldDescriptor


class DataKind(Enum):
    """Closed set of value kinds a storage type can map to."""

    NUMBER = "number"
    BOOLEAN = "boolean"
    STRING = "string"
    DATETIME = "datetime"
    JSON = "json"
    CSV = "csv"
    UNKNOWN = "unknown"


# Storage type tag (lower-cased, without length/precision) -> kind.
# Covers Directus abstract types and common database-native spellings.
DATA_TYPE_MAP: Dict[str, DataKind] = {
    # Numbers
    "integer": DataKind.NUMBER,
    "int": DataKind.NUMBER,
    "smallint": DataKind.NUMBER,
    "tinyint": DataKind.NUMBER,
    "mediumint": DataKind.NUMBER,
    "biginteger": DataKind.NUMBER,
    "bigint": DataKind.NUMBER,
    "float": DataKind.NUMBER,
    "real": DataKind.NUMBER,
    "double": DataKind.NUMBER,
    "double precision": DataKind.NUMBER,
    "decimal": DataKind.NUMBER,
    "numeric": DataKind.NUMBER,
    # Booleans
    "boolean": DataKind.BOOLEAN,
    "bool": DataKind.BOOLEAN,
    # Strings
    "string": DataKind.STRING,
    "text": DataKind.STRING,
    "varchar": DataKind.STRING,
    "character varying": DataKind.STRING,
    "char": DataKind.STRING,
    "character": DataKind.STRING,
    "uuid": DataKind.STRING,
    "hash": DataKind.STRING,
    # Dates travel as ISO-8601 text
    "timestamp": DataKind.DATETIME,
    "timestamp with time zone": DataKind.DATETIME,
    "timestamp without time zone": DataKind.DATETIME,
    "datetime": DataKind.DATETIME,
    "date": DataKind.DATETIME,
    "time": DataKind.DATETIME,
    "time with time zone": DataKind.DATETIME,
    "time without time zone": DataKind.DATETIME,
    # Structured values
    "json": DataKind.JSON,
    "jsonb": DataKind.JSON,
    "csv": DataKind.CSV,
}

# Interfaces whose value is the primary key of one related record
TO_ONE_INTERFACES = frozenset(
    {"select-dropdown-m2o", "many-to-one", "file", "file-image"}
)

# Interfaces whose value is a list of related primary keys
TO_MANY_INTERFACES = frozenset(
    {"list-o2m", "list-m2m", "list-m2a", "files", "list-o2m-tree-view"}
)

_TYPE_PARAMETERS = re.compile(r"\s*\(.*\)\s*$")


def normalize_data_type(data_type: Optional[str]) -> str:
    """Lower-case a storage type tag and drop ``(length, scale)``."""
    if not data_type:
        return ""
    return _TYPE_PARAMETERS.sub("", data_type).strip().lower()


def map_data_type(data_type: Optional[str]) -> DataKind:
    """Map a storage type tag to its kind; unrecognized tags are UNKNOWN."""
    return DATA_TYPE_MAP.get(normalize_data_type(data_type), DataKind.UNKNOWN)


@dataclass
class TypeScriptTypeConfig:
    """Configuration for TypeScript type mapping behavior."""

    number_type: str = "number"
    boolean_type: str = "boolean"
    string_type: str = "string"
    datetime_type: str = "string"
    json_type: str = "Record<string, unknown>"
    csv_type: str = "string[]"
    unknown_type: str = "unknown"

    # Primary key of a related record whose key type is not known
    relation_type: str = "number | string"

    # Data type tag or kind value -> TypeScript type
    type_overrides: Dict[str, str] = field(default_factory=dict)

    def kind_type(self, kind: DataKind) -> str:
        """TypeScript spelling of a kind, honoring overrides by kind name."""
        if kind.value in self.type_overrides:
            return self.type_overrides[kind.value]
        return {
            DataKind.NUMBER: self.number_type,
            DataKind.BOOLEAN: self.boolean_type,
            DataKind.STRING: self.string_type,
            DataKind.DATETIME: self.datetime_type,
            DataKind.JSON: self.json_type,
            DataKind.CSV: self.csv_type,
            DataKind.UNKNOWN: self.unknown_type,
        }[kind]


@dataclass(frozen=True)
class FieldClassification:
    """Result of classifying one field."""

    include: bool
    type_expression: str
    optional: bool
    nullable: bool


class TypeScriptTypeMapper:
    """
    Central engine for mapping Directus fields to TypeScript types.

    Every method is total over structurally valid descriptors: missing
    ``schema``/``meta`` objects and unknown data types degrade to
    permissive defaults instead of raising.
    """

    def __init__(self, config: Optional[TypeScriptTypeConfig] = None):
        """Initialize with type configuration."""
        self.config = config or TypeScriptTypeConfig()

    def should_include(self, field: FieldDescriptor) -> bool:
        """Hidden fields without a backing column are left out."""
        hidden = field.meta is not None and field.meta.hidden
        return not (hidden and field.schema is None)

    def is_required(self, field: FieldDescriptor) -> bool:
        """Primary keys and fields marked required."""
        if field.schema is not None and field.schema.is_primary_key:
            return True
        return field.meta is not None and field.meta.required

    def is_nullable(self, field: FieldDescriptor) -> bool:
        """Nullable columns, unless the field is required."""
        nullable = field.schema is not None and field.schema.is_nullable
        return nullable and not self.is_required(field)

    def storage_type(self, field: FieldDescriptor) -> Optional[str]:
        """Column data type, or the type hint for fields without a column."""
        if field.schema is not None and field.schema.data_type:
            return field.schema.data_type
        return field.type

    def determine_type(self, field: FieldDescriptor) -> str:
        """
        Map a field to a TypeScript type expression.

        Precedence: relation interface, ``json`` hint, ``csv`` hint,
        then the storage type table.
        """
        interface = field.meta.interface if field.meta is not None else None

        if interface:
            relation_type = self._relation_type(field, interface)
            if relation_type is not None:
                return relation_type

        if field.type == "json":
            return self.config.kind_type(DataKind.JSON)

        if field.type == "csv":
            return self.config.kind_type(DataKind.CSV)

        return self._storage_type_expression(self.storage_type(field))

    def classify(self, field: FieldDescriptor) -> FieldClassification:
        """Compute inclusion, type, optionality and nullability."""
        return FieldClassification(
            include=self.should_include(field),
            type_expression=self.determine_type(field),
            optional=not self.is_required(field),
            nullable=self.is_nullable(field),
        )

    def _relation_type(self, field: FieldDescriptor, interface: str) -> Optional[str]:
        """Type of a relation field, or None when the interface is not one."""
        if interface in TO_MANY_INTERFACES:
            return f"({self.config.relation_type})[]"

        if interface in TO_ONE_INTERFACES or "m2o" in interface:
            data_type = field.schema.data_type if field.schema is not None else None
            if map_data_type(data_type) in (DataKind.NUMBER, DataKind.STRING):
                return self._storage_type_expression(data_type)
            return self.config.relation_type

        return None

    def _storage_type_expression(self, data_type: Optional[str]) -> str:
        normalized = normalize_data_type(data_type)
        if normalized in self.config.type_overrides:
            return self.config.type_overrides[normalized]
        return self.config.kind_type(map_data_type(normalized))


_default_mapper = TypeScriptTypeMapper()


def should_include_field(field: FieldDescriptor) -> bool:
    """Whether the field appears in the generated interface."""
    return _default_mapper.should_include(field)


def determine_field_type(field: FieldDescriptor) -> str:
    """TypeScript type expression for a field with default settings."""
    return _default_mapper.determine_type(field)


def classify_field(field: FieldDescriptor) -> FieldClassification:
    """Classify a field with default settings."""
    return _default_mapper.classify(field)
