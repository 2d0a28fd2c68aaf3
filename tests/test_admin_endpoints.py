"""Tests for admin endpoints."""

import json

from fastapi.testclient import TestClient

from recipe_nutrition.api.app import create_app
from recipe_nutrition.api.models import SyncRequest
from tests.conftest import make_entry

ADMIN_HEADERS = {"X-Admin-Token": "admin-token"}


def test_admin_requires_token(container) -> None:
    client = TestClient(create_app(container))

    assert client.get("/admin/health").status_code == 401
    assert (
        client.get("/admin/health", headers={"X-Admin-Token": "wrong"}).status_code
        == 401
    )
    assert client.get("/admin/health", headers=ADMIN_HEADERS).status_code == 200


def test_catalog_count(container, catalog_repository) -> None:
    catalog_repository.add(make_entry("1", "Milk"), make_entry("2", "Butter"))
    client = TestClient(create_app(container))

    response = client.get("/admin/catalog/count", headers=ADMIN_HEADERS)

    assert response.status_code == 200
    assert response.json() == {"count": 2}


def test_catalog_sync_runs_in_background(container, catalog_repository, dump_source) -> None:
    dump_source.lines = [
        json.dumps({"code": "1", "product_name": "Milk"}),
        json.dumps({"product_name": "No code"}),
        json.dumps({"code": "2", "product_name": "Butter"}),
    ]
    client = TestClient(create_app(container))

    response = client.post("/admin/catalog/sync", headers=ADMIN_HEADERS)

    assert response.status_code == 202
    data = response.json()
    assert data["status"] == "accepted"
    assert data["options"]["batch_size"] == 2000
    assert catalog_repository.count() == 2


def test_catalog_sync_applies_overrides(container, catalog_repository, dump_source) -> None:
    dump_source.lines = [
        json.dumps(
            {
                "code": "1",
                "product_name": "Milk",
                "product_name_sk": "Mlieko",
                "countries_tags": ["en:czech-republic"],
            }
        ),
        json.dumps({"code": "2", "countries_tags": ["en:germany"]}),
    ]
    client = TestClient(create_app(container))

    response = client.post(
        "/admin/catalog/sync",
        headers=ADMIN_HEADERS,
        json={
            "strict_region": True,
            "region_tag": " en:czech-republic ",
            "target_language": " SK ",
        },
    )

    assert response.status_code == 202
    assert response.json()["options"]["target_language"] == "sk"
    assert set(catalog_repository.entries) == {"1"}
    assert catalog_repository.entries["1"].name == "Mlieko"


def test_catalog_sync_failure_keeps_catalog_unchanged(
    container, catalog_repository, dump_source
) -> None:
    dump_source.lines = [json.dumps({"code": "1"}), json.dumps({"code": "2"})]
    dump_source.fail_after = 1
    client = TestClient(create_app(container))

    response = client.post("/admin/catalog/sync", headers=ADMIN_HEADERS)

    assert response.status_code == 202
    assert catalog_repository.count() == 0


def test_sync_request_normalizes_languages() -> None:
    request = SyncRequest(target_language=" CS ", fallback_language="EN", region_tag=" x ")

    assert request.target_language == "cs"
    assert request.fallback_language == "en"
    assert request.region_tag == "x"
    assert SyncRequest().target_language is None
