"""
Core metadata representation for code generation.

Converts Directus collection/field JSON (REST responses or schema
snapshots) into immutable descriptors that generators work with.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

from ...logging_config import get_logger
from .naming import format_property_key

logger = get_logger(__name__)

SYSTEM_COLLECTION_PREFIX = "directus_"


@dataclass(frozen=True)
class FieldSchema:
    """Backing database column of a field."""

    is_primary_key: bool = False
    is_nullable: bool = False
    data_type: Optional[str] = None


@dataclass(frozen=True)
class FieldMeta:
    """UI-level metadata of a field."""

    required: bool = False
    hidden: bool = False
    interface: Optional[str] = None
    note: Optional[str] = None


@dataclass(frozen=True)
class FieldDescriptor:
    """A single field of a collection as reported by the API."""

    field: str
    schema: Optional[FieldSchema] = None
    meta: Optional[FieldMeta] = None
    type: Optional[str] = None  # Semantic type hint: alias, json, csv, ...


@dataclass(frozen=True)
class CollectionDescriptor:
    """A collection with its ordered fields."""

    name: str
    is_singleton: bool = False
    fields: Tuple[FieldDescriptor, ...] = ()
    note: Optional[str] = None


@dataclass
class Member:
    """One emitted property of a generated interface."""

    name: str
    type_expression: str
    optional: bool = False
    nullable: bool = False
    doc_line: str = ""

    @property
    def key(self) -> str:
        """Property key as emitted, quoted when needed."""
        return format_property_key(self.name)

    @property
    def annotation(self) -> str:
        """Type expression including the null union."""
        if self.nullable:
            return f"{self.type_expression} | null"
        return self.type_expression


@dataclass
class GeneratedType:
    """Derived interface for one collection."""

    type_name: str
    collection: str
    members: List[Member] = field(default_factory=list)
    note: Optional[str] = None


@dataclass(frozen=True)
class SchemaEntry:
    """One line of the aggregate schema interface."""

    collection_key: str
    type_name: str
    is_array: bool

    @property
    def key(self) -> str:
        return format_property_key(self.collection_key)


def _pick(data: Mapping[str, Any], *keys: str, default: Any = None) -> Any:
    """Return the first present key (snake_case first, then camelCase)."""
    for key in keys:
        if key in data and data[key] is not None:
            return data[key]
    return default


def convert_field(raw: Mapping[str, Any]) -> FieldDescriptor:
    """
    Convert one raw field object to a FieldDescriptor.

    Args:
        raw: Field object from ``GET /fields`` or a schema snapshot

    Returns:
        FieldDescriptor with missing sub-objects left as None
    """
    raw_schema = raw.get("schema")
    raw_meta = raw.get("meta")

    schema = None
    if isinstance(raw_schema, Mapping):
        schema = FieldSchema(
            is_primary_key=bool(_pick(raw_schema, "is_primary_key", "isPrimaryKey")),
            is_nullable=bool(_pick(raw_schema, "is_nullable", "isNullable")),
            data_type=_pick(raw_schema, "data_type", "dataType"),
        )

    meta = None
    if isinstance(raw_meta, Mapping):
        meta = FieldMeta(
            required=bool(raw_meta.get("required")),
            hidden=bool(raw_meta.get("hidden")),
            interface=raw_meta.get("interface"),
            note=_pick(raw_meta, "note", "description"),
        )

    return FieldDescriptor(
        field=str(raw["field"]),
        schema=schema,
        meta=meta,
        type=raw.get("type"),
    )


def convert_collection(
    raw: Mapping[str, Any], fields: Iterable[Mapping[str, Any]] = ()
) -> CollectionDescriptor:
    """
    Convert one raw collection object to a CollectionDescriptor.

    Fields are taken from ``raw["fields"]`` when present, otherwise from
    the ``fields`` argument.
    """
    meta = raw.get("meta") or {}
    raw_fields = raw.get("fields")
    if raw_fields is None:
        raw_fields = fields

    return CollectionDescriptor(
        name=str(_pick(raw, "collection", "name")),
        is_singleton=bool(_pick(meta, "singleton", default=raw.get("isSingleton"))),
        fields=tuple(convert_field(item) for item in raw_fields),
        note=meta.get("note"),
    )


def group_fields(raw_fields: Iterable[Mapping[str, Any]]) -> Dict[str, List[Mapping[str, Any]]]:
    """Group a flat field list by owning collection, preserving order."""
    grouped: Dict[str, List[Mapping[str, Any]]] = {}
    for raw in raw_fields:
        grouped.setdefault(raw["collection"], []).append(raw)
    return grouped


def build_collections(
    raw_collections: Iterable[Mapping[str, Any]],
    raw_fields: Iterable[Mapping[str, Any]],
    include_system: bool = False,
) -> Dict[str, CollectionDescriptor]:
    """
    Join raw collections with their fields.

    Folder collections (``schema: null``) have no table and are skipped,
    as are ``directus_*`` system collections unless requested.

    Args:
        raw_collections: Objects from ``GET /collections``
        raw_fields: Objects from ``GET /fields``
        include_system: Keep system collections

    Returns:
        Ordered mapping of collection key to descriptor
    """
    fields_by_collection = group_fields(raw_fields)
    collections: Dict[str, CollectionDescriptor] = {}

    for raw in raw_collections:
        name = raw["collection"]
        if "schema" in raw and raw["schema"] is None:
            logger.debug(f"Skipping folder collection {name}")
            continue
        if name.startswith(SYSTEM_COLLECTION_PREFIX) and not include_system:
            logger.debug(f"Skipping system collection {name}")
            continue

        collections[name] = convert_collection(raw, fields_by_collection.get(name, []))

    logger.info(f"Built {len(collections)} collection descriptors")
    return collections


def convert_metadata(data: Any) -> Dict[str, CollectionDescriptor]:
    """
    Convert already-grouped metadata into descriptors.

    Accepts either a mapping of collection key to collection object or a
    list of collection objects, each carrying its own ``fields`` list.
    Descriptor instances are passed through unchanged.
    """
    if isinstance(data, Mapping):
        items = list(data.items())
    else:
        items = [(None, item) for item in data]

    collections: Dict[str, CollectionDescriptor] = {}
    for key, raw in items:
        if isinstance(raw, CollectionDescriptor):
            descriptor = raw
        else:
            if key is not None and "collection" not in raw and "name" not in raw:
                raw = {**raw, "collection": key}
            descriptor = convert_collection(raw)
        collections[key if key is not None else descriptor.name] = descriptor

    return collections
