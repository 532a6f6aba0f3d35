"""Tests for app.services.content_pages against a mocked CMS."""

import asyncio
import json

import httpx
import pytest

from app.models.content_page import ContentPageRequest
from app.services import content_pages as service
from app.services.http_client import RemoteError

_CMS_ITEMS = "/cmswebservices/v1/sites/electronics/cmsitems"

_PAGES = {
    "uuid-faq": {"uuid": "uuid-faq", "uid": "faq", "name": "FAQ", "label": "/faq", "typeCode": "ContentPage"},
    "uuid-about": {"uuid": "uuid-about", "uid": "about", "name": "About us", "label": "/about"},
}


def _run(coro):
    return asyncio.run(coro)


@pytest.fixture
def cms(make_client):
    requests = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        path = request.url.path
        if path == _CMS_ITEMS and request.method == "GET":
            if "itemSearchParams" in request.url.params:
                label = request.url.params["itemSearchParams"].split(":", 1)[1]
                found = [p for p in _PAGES.values() if p["label"] == label]
                return httpx.Response(200, json={"response": found, "pagination": {"totalCount": len(found)}})
            return httpx.Response(
                200,
                json={"response": list(_PAGES.values()), "pagination": {"totalCount": 45, "count": 2}},
            )
        if path == _CMS_ITEMS and request.method == "POST":
            return httpx.Response(201, json={"uuid": "uuid-new", **json.loads(request.content)})
        if path.startswith(f"{_CMS_ITEMS}/"):
            page_id = path.rsplit("/", 1)[-1]
            if request.method == "DELETE":
                return httpx.Response(204)
            if request.method == "PUT":
                return httpx.Response(200, json=json.loads(request.content))
            if page_id in _PAGES:
                return httpx.Response(200, json=_PAGES[page_id])
            return httpx.Response(400, json={"errors": [{"type": "UnknownIdentifierError"}]})
        return httpx.Response(404)

    return make_client(handler), requests


class TestContentPagesGet:
    def test_uses_remote_pagination(self, cms):
        client, requests = cms
        result = _run(service.content_pages_get(client, query="faq", lang="en", page=2))
        assert [p.id for p in result.items] == ["uuid-faq", "uuid-about"]
        assert result.total == 45
        assert result.has_next is True

        params = requests[0].url.params
        assert params["currentPage"] == "1"
        assert params["pageSize"] == "20"
        assert params["typeCode"] == "ContentPage"
        assert params["mask"] == "faq"
        assert params["catalogId"] == "electronicsContentCatalog"
        assert params["catalogVersion"] == "Staged"

    def test_last_page_has_no_next(self, cms):
        client, requests = cms
        result = _run(service.content_pages_get(client, page=3))
        assert result.has_next is False
        assert "mask" not in requests[0].url.params

    def test_missing_pagination_defaults(self, make_client):
        client = make_client(lambda request: httpx.Response(200, json={}))
        result = _run(service.content_pages_get(client))
        assert result.items == []
        assert result.total == 0
        assert result.has_next is False

    def test_search_tolerates_null_title_translation(self, make_client):
        payload = {
            "response": [{"uuid": "uuid-faq", "name": "FAQ", "label": "/faq", "title": {"en": "FAQ", "de": None}}],
            "pagination": {"totalCount": 1},
        }
        client = make_client(lambda request: httpx.Response(200, json=payload))
        result = _run(service.content_pages_get(client))
        assert [p.id for p in result.items] == ["uuid-faq"]


class TestContentPagesByIdsGet:
    def test_fetches_each_page(self, cms):
        client, _ = cms
        result = _run(service.content_pages_by_ids_get(client, ["uuid-about", "uuid-faq"]))
        assert [p.id for p in result.items] == ["uuid-about", "uuid-faq"]
        assert result.items[0].extract == "/about"
        assert result.total == 2
        assert result.has_next is False

    def test_single_failure_fails_the_batch(self, cms):
        client, _ = cms
        with pytest.raises(RemoteError) as exc_info:
            _run(service.content_pages_by_ids_get(client, ["uuid-faq", "unknown", "uuid-about"]))
        assert exc_info.value.status == 400


class TestContentUrls:
    def test_get_content_url(self, cms):
        client, _ = cms
        assert _run(service.get_content_url(client, "uuid-faq", "en")) == "/faq"

    def test_get_content_id_by_url(self, cms):
        client, requests = cms
        assert _run(service.get_content_id_by_url(client, "/about")) == "uuid-about"
        assert requests[0].url.params["pageSize"] == "1"
        assert requests[0].url.params["itemSearchParams"] == "label:/about"

    def test_unknown_url(self, cms):
        client, _ = cms
        assert _run(service.get_content_id_by_url(client, "/nowhere")) is None


class TestContentPageWrites:
    def test_create(self, cms):
        client, requests = cms
        body = ContentPageRequest(template="content", label="spring", pageUid="spring-page")
        result = _run(service.content_pages_create(client, body, "EN"))
        assert result == {"id": "uuid-new"}

        sent = json.loads(requests[0].content)
        assert requests[0].method == "POST"
        assert requests[0].url.path == _CMS_ITEMS
        assert sent["uid"] == "spring-page"
        assert sent["approvalStatus"] == "APPROVED"
        assert sent["pageStatus"] == "ACTIVE"
        assert sent["title"] == {"en": "spring"}
        assert sent["catalogVersion"] == "electronicsContentCatalog/Staged"

    def test_update_hidden_page(self, cms):
        client, requests = cms
        body = ContentPageRequest(template="content", label="spring", visible=False)
        result = _run(service.content_pages_update(client, "uuid-faq", body, "en"))
        assert result == {"id": "uuid-faq"}

        sent = json.loads(requests[0].content)
        assert requests[0].url.path == f"{_CMS_ITEMS}/uuid-faq"
        assert sent["uuid"] == "uuid-faq"
        assert sent["approvalStatus"] == "UNAPPROVED"
        assert sent["pageStatus"] == "DELETED"

    def test_write_without_uuid_returns_raw_reply(self, make_client):
        client = make_client(lambda request: httpx.Response(200, json={"warning": "queued"}))
        body = ContentPageRequest(template="content", label="x")
        assert _run(service.content_pages_create(client, body)) == {"warning": "queued"}

    def test_delete(self, cms):
        client, requests = cms
        _run(service.content_pages_delete(client, "uuid-faq"))
        assert requests[0].method == "DELETE"
        assert requests[0].url.path == f"{_CMS_ITEMS}/uuid-faq"
