import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request, Response

from app.dependencies import RATE_LIMIT, get_cache, get_client, limiter, require_bridge_auth, split_ids
from app.models.envelope import CategoriesResponse, CategoryTreeResponse, UrlResponse
from app.services import categories as service
from app.services.category_tree import CategoryUrlCache
from app.services.http_client import CommerceClient

logger = logging.getLogger(__name__)

router = APIRouter(tags=["categories"], dependencies=[Depends(require_bridge_auth)])


@router.get("/categories", response_model=CategoriesResponse, summary="List categories")
@limiter.limit(RATE_LIMIT)
async def categories_get(
    request: Request,
    response: Response,
    parentId: Optional[str] = Query(default=None, description="Only list categories below this one."),
    keyword: Optional[str] = Query(default=None),
    lang: Optional[str] = Query(default=None),
    page: int = Query(default=1, ge=1),
    client: CommerceClient = Depends(get_client),
    cache: CategoryUrlCache = Depends(get_cache),
) -> CategoriesResponse:
    logger.info(
        "Categories request received",
        extra={"parent_id": parentId, "keyword": keyword, "lang": lang, "page": page},
    )
    result = await service.categories_get(client, cache, parentId, keyword, lang, page)
    response.headers["X-Total"] = str(result.total)
    return CategoriesResponse(categories=result.items, total=result.total, hasNext=result.has_next)


@router.get(
    "/categories/tree",
    response_model=CategoryTreeResponse,
    response_model_exclude_none=True,
    summary="Nested category tree",
)
@limiter.limit(RATE_LIMIT)
async def category_tree_get(
    request: Request,
    response: Response,
    parentId: Optional[str] = Query(default=None),
    lang: Optional[str] = Query(default=None),
    client: CommerceClient = Depends(get_client),
    cache: CategoryUrlCache = Depends(get_cache),
) -> CategoryTreeResponse:
    logger.info("Category tree request received", extra={"parent_id": parentId, "lang": lang})
    result = await service.category_tree_get(client, cache, parentId, lang)
    response.headers["X-Total"] = str(result.total)
    return CategoryTreeResponse(categorytree=result.items, total=result.total)


@router.get("/categories/ids/{categoryIds}", response_model=CategoriesResponse, summary="Categories by id")
@limiter.limit(RATE_LIMIT)
async def categories_by_ids_get(
    request: Request,
    response: Response,
    categoryIds: str,
    lang: Optional[str] = Query(default=None),
    client: CommerceClient = Depends(get_client),
) -> CategoriesResponse:
    logger.info("Categories by id request received", extra={"ids": categoryIds, "lang": lang})
    result = await service.categories_by_ids_get(client, split_ids(categoryIds), lang)
    response.headers["X-Total"] = str(result.total)
    return CategoriesResponse(categories=result.items, total=result.total, hasNext=result.has_next)


@router.get("/categories/{categoryId}/url", response_model=UrlResponse, summary="Category URL")
@limiter.limit(RATE_LIMIT)
async def category_url_get(
    request: Request,
    categoryId: str,
    lang: Optional[str] = Query(default=None),
    client: CommerceClient = Depends(get_client),
    cache: CategoryUrlCache = Depends(get_cache),
) -> UrlResponse:
    url = await service.get_category_url(client, cache, categoryId, lang)
    if url is None:
        raise HTTPException(status_code=404, detail=f"Unknown category '{categoryId}'.")
    return UrlResponse(url=url)
