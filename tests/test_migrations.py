"""Checks on the catalog migration's search indexes."""

import re
from pathlib import Path

MIGRATION = (
    Path(__file__).resolve().parents[1]
    / "supabase"
    / "migrations"
    / "20261019000000_catalog_entries.sql"
)


def _sql() -> str:
    return " ".join(MIGRATION.read_text(encoding="utf-8").lower().split())


def test_unaccent_wrapper_is_immutable() -> None:
    sql = _sql()

    definition = sql.split("create or replace function f_unaccent", 1)[1].split("$$", 1)[0]

    assert "immutable" in definition


def test_search_predicates_use_indexed_expressions() -> None:
    sql = _sql()
    indexed = set(re.findall(r"gin \(f_unaccent\((\w+)\) gin_trgm_ops\)", sql))
    body = sql.split("create or replace function search_catalog_candidates", 1)[1]
    filtered = set(re.findall(r"f_unaccent\(c\.(\w+)\) (?:ilike|%)", body))

    assert indexed == {"product_name", "brands", "localized_name"}
    assert filtered == indexed
    assert "set_config('pg_trgm.similarity_threshold'" in body
    assert "similarity(" not in body.split("where", 1)[1].split("order by", 1)[0]
