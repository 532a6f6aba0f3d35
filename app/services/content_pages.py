"""Content page operations backed by the CMS webservices API."""

import logging
from typing import Any, List, Optional

from app.models.content_page import ContentPage, ContentPageRequest, RemoteContentPage
from app.models.envelope import PageEnvelope
from app.services.bulk import resolve_all
from app.services.http_client import CommerceClient
from app.services.pagination import PAGE_SIZE
from app.services.transformers import to_content_page, to_remote_content_page

logger = logging.getLogger(__name__)

CONTENT_PAGE_TYPE_CODE = "ContentPage"


def _cms_items_path(client: CommerceClient) -> str:
    return f"{client.settings.full_cms_path}/cmsitems"


def _search_params(client: CommerceClient, lang: str, page: int, page_size: int) -> dict:
    s = client.settings
    return {
        "catalogId": s.content_catalog_id,
        "catalogVersion": s.content_catalog_version,
        "currentPage": page - 1,
        "pageSize": page_size,
        "typeCode": CONTENT_PAGE_TYPE_CODE,
        "lang": lang,
    }


async def fetch_content_page_by_id(
    client: CommerceClient, page_id: str, lang: Optional[str] = None
) -> Optional[ContentPage]:
    lang = lang or client.settings.default_lang
    logger.debug("Fetching content page %s (lang=%s)", page_id, lang)
    resp = await client.get(
        f"{_cms_items_path(client)}/{page_id}",
        params={"lang": lang, "pageSize": 500, "currentPage": 0},
    )
    return to_content_page(RemoteContentPage.model_validate(resp.data))


async def content_pages_get(
    client: CommerceClient,
    query: Optional[str] = None,
    lang: Optional[str] = None,
    page: int = 1,
) -> PageEnvelope[ContentPage]:
    """Search content pages; paging is done by the CMS."""
    lang = lang or client.settings.default_lang
    params = _search_params(client, lang, page, PAGE_SIZE)
    if query:
        params["mask"] = query
    logger.debug("Searching content pages with %s", params)

    resp = await client.get(_cms_items_path(client), params=params)
    data = resp.data if isinstance(resp.data, dict) else {}

    pages: List[ContentPage] = []
    for item in data.get("response") or []:
        content_page = to_content_page(RemoteContentPage.model_validate(item))
        if content_page is not None:
            pages.append(content_page)

    total = (data.get("pagination") or {}).get("totalCount") or 0
    return PageEnvelope(items=pages, total=total, has_next=total > page * PAGE_SIZE)


async def content_pages_by_ids_get(
    client: CommerceClient,
    content_ids: List[str],
    lang: Optional[str] = None,
) -> PageEnvelope[ContentPage]:
    """Fetch the given pages; any failing id fails the whole call."""
    pages = await resolve_all(
        content_ids,
        lambda page_id: fetch_content_page_by_id(client, page_id, lang),
        on_item_error="fail",
    )
    return PageEnvelope(items=pages, total=len(pages), has_next=False)


async def get_content_url(
    client: CommerceClient, content_id: str, lang: Optional[str] = None
) -> Optional[str]:
    """Return the label (storefront path) of the page, or *None*."""
    result = await content_pages_by_ids_get(client, [content_id], lang)
    return result.items[0].extract if result.items else None


async def get_content_id_by_url(
    client: CommerceClient, url: str, lang: Optional[str] = None
) -> Optional[str]:
    """Find the uuid of the content page whose label equals *url*."""
    lang = lang or client.settings.default_lang
    params = _search_params(client, lang, page=1, page_size=1)
    params["itemSearchParams"] = f"label:{url}"

    resp = await client.get(_cms_items_path(client), params=params)
    data = resp.data if isinstance(resp.data, dict) else {}
    items = data.get("response") or []
    if not items:
        return None
    return RemoteContentPage.model_validate(items[0]).uuid


def _write_result(data: Any) -> Any:
    if isinstance(data, dict) and data.get("uuid"):
        return {"id": data["uuid"]}
    return data


def _catalog_version(client: CommerceClient) -> str:
    s = client.settings
    return f"{s.content_catalog_id}/{s.content_catalog_version}"


async def content_pages_create(
    client: CommerceClient, body: ContentPageRequest, lang: Optional[str] = None
) -> Any:
    lang = lang or client.settings.default_lang
    item = to_remote_content_page(body, lang, _catalog_version(client))
    logger.info("Creating content page %s", item["uid"])
    resp = await client.post(_cms_items_path(client), item)
    return _write_result(resp.data)


async def content_pages_update(
    client: CommerceClient,
    content_id: str,
    body: ContentPageRequest,
    lang: Optional[str] = None,
) -> Any:
    lang = lang or client.settings.default_lang
    item = to_remote_content_page(body, lang, _catalog_version(client), uuid=content_id)
    logger.info("Updating content page %s", content_id)
    resp = await client.put(f"{_cms_items_path(client)}/{content_id}", item)
    return _write_result(resp.data)


async def content_pages_delete(client: CommerceClient, content_id: str) -> None:
    logger.info("Deleting content page %s", content_id)
    await client.delete(f"{_cms_items_path(client)}/{content_id}")
