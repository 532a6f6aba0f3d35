"""Content page endpoints: search, lookup by id, and CMS write operations."""

import logging
from typing import Any, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request, Response

from app.dependencies import RATE_LIMIT, get_client, limiter, require_bridge_auth, split_ids
from app.models.content_page import ContentPageRequest
from app.models.envelope import ContentPagesResponse, UrlResponse
from app.services import content_pages as service
from app.services.http_client import CommerceClient

logger = logging.getLogger(__name__)

router = APIRouter(tags=["content"], dependencies=[Depends(require_bridge_auth)])


@router.get("/content", response_model=ContentPagesResponse, summary="Search content pages")
@limiter.limit(RATE_LIMIT)
async def content_pages_get(
    request: Request,
    response: Response,
    q: Optional[str] = Query(default=None, description="Search mask applied by the CMS."),
    lang: Optional[str] = Query(default=None),
    page: int = Query(default=1, ge=1),
    client: CommerceClient = Depends(get_client),
) -> ContentPagesResponse:
    logger.info("Content search request received", extra={"q": q, "lang": lang, "page": page})
    result = await service.content_pages_get(client, q, lang, page)
    response.headers["X-Total"] = str(result.total)
    return ContentPagesResponse(contentPages=result.items, total=result.total, hasNext=result.has_next)


@router.get("/content/ids/{contentIds}", response_model=ContentPagesResponse, summary="Content pages by id")
@limiter.limit(RATE_LIMIT)
async def content_pages_by_ids_get(
    request: Request,
    response: Response,
    contentIds: str,
    lang: Optional[str] = Query(default=None),
    client: CommerceClient = Depends(get_client),
) -> ContentPagesResponse:
    logger.info("Content by id request received", extra={"ids": contentIds, "lang": lang})
    result = await service.content_pages_by_ids_get(client, split_ids(contentIds), lang)
    response.headers["X-Total"] = str(result.total)
    return ContentPagesResponse(contentPages=result.items, total=result.total, hasNext=result.has_next)


@router.post("/content", status_code=201, summary="Create a content page")
@limiter.limit(RATE_LIMIT)
async def content_pages_create(
    request: Request,
    body: ContentPageRequest,
    lang: Optional[str] = Query(default=None),
    client: CommerceClient = Depends(get_client),
) -> Any:
    logger.info("Content create request received", extra={"label": body.label, "lang": lang})
    return await service.content_pages_create(client, body, lang)


@router.put("/content/{contentId}", summary="Update a content page")
@limiter.limit(RATE_LIMIT)
async def content_pages_update(
    request: Request,
    contentId: str,
    body: ContentPageRequest,
    lang: Optional[str] = Query(default=None),
    client: CommerceClient = Depends(get_client),
) -> Any:
    logger.info("Content update request received", extra={"content_id": contentId, "lang": lang})
    return await service.content_pages_update(client, contentId, body, lang)


@router.delete("/content/{contentId}", status_code=204, summary="Delete a content page")
@limiter.limit(RATE_LIMIT)
async def content_pages_delete(
    request: Request,
    contentId: str,
    client: CommerceClient = Depends(get_client),
) -> Response:
    logger.info("Content delete request received", extra={"content_id": contentId})
    await service.content_pages_delete(client, contentId)
    return Response(status_code=204)


@router.get("/content/{contentId}/url", response_model=UrlResponse, summary="Content page URL")
@limiter.limit(RATE_LIMIT)
async def content_url_get(
    request: Request,
    contentId: str,
    lang: Optional[str] = Query(default=None),
    client: CommerceClient = Depends(get_client),
) -> UrlResponse:
    url = await service.get_content_url(client, contentId, lang)
    if not url:
        raise HTTPException(status_code=404, detail=f"Unknown content page '{contentId}'.")
    return UrlResponse(url=url)
