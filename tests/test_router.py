"""HTTP tests for the catalogue routes."""

import pytest
from fastapi.testclient import TestClient

from design_library.catalog.router import get_snapshot, get_store
from design_library.catalog.store import CatalogSnapshot, DesignStore
from design_library.main import app


@pytest.fixture
def client(catalog):
    snapshot = CatalogSnapshot(
        designs=tuple(catalog),
        colors=("Black", "Navy"),
        tags=({"name": "Union"},),
    )
    app.dependency_overrides[get_snapshot] = lambda: snapshot
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


def _ids(response):
    return [d["id"] for d in response.json()["designs"]]


def test_health_check(client):
    response = client.get("/")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_list_designs_envelope(client):
    response = client.get("/api/catalog/designs", params={"perPage": "3", "pageNumber": "2"})

    assert response.status_code == 200
    data = response.json()
    assert data["pageNumber"] == 2
    assert data["perPage"] == 3
    assert data["total"] == 8
    assert data["totalPages"] == 3
    # featured (1003, 1002) first, then descending design numbers
    assert _ids(response) == [6, 5, 4]
    assert data["designs"][0]["designNumber"] == "1007"
    assert len(data["designs"][0]["tags"]) == 12


def test_list_designs_filters(client):
    response = client.get(
        "/api/catalog/designs",
        params={
            "designType": "Screen Print",
            "keywords": "Tough",
            "subcategories": "Staff Favorites",
        },
    )

    assert response.status_code == 200
    assert _ids(response) == [5]


def test_comma_separated_keywords(client):
    response = client.get("/api/catalog/designs", params={"keywords": "Gold, Embossed"})

    assert _ids(response) == [1]


def test_featured_flag_requires_literal_true(client):
    featured = client.get("/api/catalog/designs", params={"featured": "true"})
    not_featured = client.get("/api/catalog/designs", params={"featured": "yes"})

    assert sorted(_ids(featured)) == [1, 2]
    assert featured.json()["total"] == 2
    assert not_featured.json()["total"] == 8


def test_invalid_numbers_fall_back_to_defaults(client):
    response = client.get("/api/catalog/designs", params={"pageNumber": "x", "perPage": "y"})

    data = response.json()
    assert data["pageNumber"] == 1
    assert data["perPage"] == 20
    assert len(data["designs"]) == 8


def test_empty_result_is_ok(client):
    response = client.get("/api/catalog/designs", params={"keywords": "nothing-matches"})

    assert response.status_code == 200
    assert response.json()["total"] == 0
    assert response.json()["designs"] == []


def test_invalid_design_type_is_bad_request(client):
    response = client.get("/api/catalog/designs", params={"designType": "Vinyl"})

    assert response.status_code == 400


def test_unknown_similar_to_is_not_found(client):
    response = client.get("/api/catalog/designs", params={"similarTo": "999"})

    assert response.status_code == 404


def test_sort_by_unknown_strategy_uses_design_number(client):
    response = client.get("/api/catalog/designs", params={"sortBy": "rating"})

    assert _ids(response) == [2, 1, 7, 6, 5, 4, 3, 0]


def test_get_design(client):
    response = client.get("/api/catalog/designs/3")

    assert response.status_code == 200
    assert response.json()["name"] == "Tough as Nails"
    assert client.get("/api/catalog/designs/99").status_code == 404


def test_reference_lists(client):
    assert client.get("/api/catalog/colors").json() == ["Black", "Navy"]
    assert client.get("/api/catalog/tags").json() == [{"name": "Union"}]
    assert client.get("/api/catalog/categories").json() == []


def test_unavailable_catalog_is_service_unavailable(tmp_path):
    app.dependency_overrides[get_store] = lambda: DesignStore(tmp_path / "missing.json")
    try:
        response = TestClient(app).get("/api/catalog/designs")
    finally:
        app.dependency_overrides.clear()

    assert response.status_code == 503


@pytest.fixture
def client_with_draft(make_design):
    published = make_design(id=0, tags=["Bold", "Tough", "Gold"])
    draft = make_design(id=1, status="Draft", tags=["Bold", "Tough", "Gold"])
    app.dependency_overrides[get_snapshot] = lambda: CatalogSnapshot(designs=(published, draft))
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


def test_draft_design_is_not_found(client_with_draft):
    assert client_with_draft.get("/api/catalog/designs/0").status_code == 200
    assert client_with_draft.get("/api/catalog/designs/1").status_code == 404


def test_draft_cannot_be_similarity_reference(client_with_draft):
    response = client_with_draft.get("/api/catalog/designs", params={"similarTo": "1"})

    assert response.status_code == 404
