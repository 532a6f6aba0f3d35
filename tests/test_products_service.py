"""Tests for app.services.products against a mocked OCC API."""

import asyncio

import httpx
import pytest

from app.services import products as service

_PRODUCTS = "/occ/v2/electronics/products"


def _product(code: str) -> dict:
    return {
        "code": code,
        "name": f"Product {code}",
        "url": f"/p/{code}",
        "images": [
            {"format": "thumbnail", "url": f"/medias/{code}-thumb.jpg"},
            {"format": "product", "url": f"/medias/{code}.jpg"},
        ],
    }


def _run(coro):
    return asyncio.run(coro)


@pytest.fixture
def occ(make_client):
    requests = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        path = request.url.path
        if path == f"{_PRODUCTS}/search":
            return httpx.Response(
                200,
                json={
                    "products": [_product("100"), _product("200")],
                    "pagination": {"currentPage": 0, "totalPages": 3, "totalResults": 42},
                },
            )
        code = path.rsplit("/", 1)[-1]
        if code == "broken":
            return httpx.Response(502, text="Bad gateway")
        if code == "missing":
            return httpx.Response(400, json={"errors": [{"type": "UnknownIdentifierError"}]})
        return httpx.Response(200, json=_product(code))

    return make_client(handler), requests


class TestProductsGet:
    def test_search_by_keyword_and_category(self, occ):
        client, requests = occ
        result = _run(service.products_get(client, category_id="cameras", keyword="canon", page=2))
        assert [p.id for p in result.items] == ["100", "200"]
        assert result.items[0].thumbnail == "https://media.test/medias/100-thumb.jpg"
        assert result.items[0].image == "https://media.test/medias/100.jpg"
        assert result.total == 42
        assert result.has_next is True

        params = requests[0].url.params
        assert params["query"] == "canon:relevance:category:cameras"
        assert params["currentPage"] == "1"

    def test_search_without_filters(self, occ):
        client, requests = occ
        result = _run(service.products_get(client, page=3))
        assert result.has_next is False
        assert requests[0].url.params["query"] == ":relevance"

    def test_empty_search_result(self, make_client):
        client = make_client(lambda request: httpx.Response(200, json={"products": []}))
        result = _run(service.products_get(client))
        assert result.items == []
        assert result.total == 0
        assert result.has_next is False


class TestProductsByIdsGet:
    def test_failures_are_dropped(self, occ):
        client, _ = occ
        result = _run(service.products_by_ids_get(client, ["300", "broken", "missing", "100"]))
        assert [p.id for p in result.items] == ["300", "100"]
        assert result.total == 2
        assert result.has_next is False

    def test_requests_product_fields(self, occ):
        client, requests = occ
        _run(service.products_by_ids_get(client, ["300"]))
        assert requests[0].url.params["fields"] == "code,name,url,images(format,url)"


class TestProductUrl:
    def test_returns_url(self, occ):
        client, requests = occ
        assert _run(service.get_product_url(client, "100")) == "/p/100"
        assert requests[0].url.params["fields"] == "url"


class TestIrregularPayloads:
    def test_search_tolerates_null_image_fields(self, make_client):
        payload = {
            "products": [
                {
                    "code": "500",
                    "name": "Flash",
                    "url": "/p/500",
                    "images": [{"format": "zoom", "url": None}, {"format": "thumbnail", "url": "/medias/500.jpg"}],
                }
            ],
            "pagination": {"totalPages": 1, "totalResults": 1},
        }
        client = make_client(lambda request: httpx.Response(200, json=payload))
        result = _run(service.products_get(client))
        assert [p.id for p in result.items] == ["500"]
        assert result.items[0].thumbnail == "https://media.test/medias/500.jpg"
        assert result.items[0].image is None
