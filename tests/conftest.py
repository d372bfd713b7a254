"""Shared test fixtures for directus_typegen.

Provides raw Directus metadata in the shapes returned by ``GET /collections``
and ``GET /fields``, plus a clean environment for configuration tests.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest

from directus_typegen.codegen.core.config import ENV_VARS


# ---------------------------------------------------------------------------
# Environment isolation
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _clean_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Drop Directus variables so the developer's shell cannot leak in."""
    for variable in ENV_VARS:
        monkeypatch.delenv(variable, raising=False)


# ---------------------------------------------------------------------------
# Raw metadata
# ---------------------------------------------------------------------------


def make_field(
    collection: str,
    name: str,
    data_type: str | None = "string",
    *,
    primary_key: bool = False,
    nullable: bool = False,
    required: bool = False,
    hidden: bool = False,
    interface: str | None = None,
    note: str | None = None,
    type_hint: str | None = None,
    with_schema: bool = True,
) -> dict[str, Any]:
    """Build a raw field object as the /fields endpoint returns it."""
    return {
        "collection": collection,
        "field": name,
        "type": type_hint if type_hint is not None else data_type,
        "schema": (
            {
                "is_primary_key": primary_key,
                "is_nullable": nullable,
                "data_type": data_type,
            }
            if with_schema
            else None
        ),
        "meta": {
            "required": required,
            "hidden": hidden,
            "interface": interface,
            "note": note,
        },
    }


@pytest.fixture
def field_factory():
    """Factory for raw field objects."""
    return make_field


@pytest.fixture
def raw_collections() -> list[dict[str, Any]]:
    return [
        {"collection": "articles", "meta": {"singleton": False}, "schema": {"name": "articles"}},
        {"collection": "settings", "meta": {"singleton": True}, "schema": {"name": "settings"}},
    ]


@pytest.fixture
def raw_fields() -> list[dict[str, Any]]:
    return [
        make_field("articles", "id", "integer", primary_key=True),
        make_field("articles", "title", "string", required=True),
        make_field("articles", "body", "text", nullable=True, note="Main content"),
        make_field("settings", "site_name", "string"),
    ]


@pytest.fixture
def snapshot_file(tmp_path: Path, raw_collections, raw_fields) -> Path:
    """A schema snapshot on disk holding the sample metadata."""
    path = tmp_path / "snapshot.json"
    path.write_text(
        json.dumps({"collections": raw_collections, "fields": raw_fields}),
        encoding="utf-8",
    )
    return path
