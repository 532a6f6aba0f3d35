import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request, Response

from app.dependencies import RATE_LIMIT, get_client, limiter, require_bridge_auth, split_ids
from app.models.envelope import ProductsResponse, UrlResponse
from app.services import products as service
from app.services.http_client import CommerceClient

logger = logging.getLogger(__name__)

router = APIRouter(tags=["products"], dependencies=[Depends(require_bridge_auth)])


@router.get(
    "/products",
    response_model=ProductsResponse,
    response_model_exclude_none=True,
    summary="Search products",
)
@limiter.limit(RATE_LIMIT)
async def products_get(
    request: Request,
    response: Response,
    categoryId: Optional[str] = Query(default=None),
    keyword: Optional[str] = Query(default=None),
    lang: Optional[str] = Query(default=None),
    page: int = Query(default=1, ge=1),
    client: CommerceClient = Depends(get_client),
) -> ProductsResponse:
    logger.info(
        "Products request received",
        extra={"category_id": categoryId, "keyword": keyword, "lang": lang, "page": page},
    )
    result = await service.products_get(client, categoryId, keyword, lang, page)
    response.headers["X-Total"] = str(result.total)
    return ProductsResponse(products=result.items, total=result.total, hasNext=result.has_next)


@router.get(
    "/products/ids/{productIds}",
    response_model=ProductsResponse,
    response_model_exclude_none=True,
    summary="Products by id",
)
@limiter.limit(RATE_LIMIT)
async def products_by_ids_get(
    request: Request,
    response: Response,
    productIds: str,
    client: CommerceClient = Depends(get_client),
) -> ProductsResponse:
    logger.info("Products by id request received", extra={"ids": productIds})
    result = await service.products_by_ids_get(client, split_ids(productIds))
    response.headers["X-Total"] = str(result.total)
    return ProductsResponse(products=result.items, total=result.total, hasNext=result.has_next)


@router.get("/products/{productId}/url", response_model=UrlResponse, summary="Product URL")
@limiter.limit(RATE_LIMIT)
async def product_url_get(
    request: Request,
    productId: str,
    client: CommerceClient = Depends(get_client),
) -> UrlResponse:
    url = await service.get_product_url(client, productId)
    if not url:
        raise HTTPException(status_code=404, detail=f"Unknown product '{productId}'.")
    return UrlResponse(url=url)
