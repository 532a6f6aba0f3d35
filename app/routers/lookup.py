from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request

from app.dependencies import RATE_LIMIT, get_cache, get_client, limiter, require_bridge_auth
from app.models.envelope import LookupResponse
from app.services.category_tree import CategoryUrlCache
from app.services.http_client import CommerceClient
from app.services.lookup import lookup_url

router = APIRouter(tags=["lookup"], dependencies=[Depends(require_bridge_auth)])


@router.get("/lookup-url", response_model=LookupResponse, summary="Resolve a storefront URL")
@limiter.limit(RATE_LIMIT)
async def lookup_url_get(
    request: Request,
    url: str = Query(..., min_length=1),
    lang: Optional[str] = Query(default=None),
    client: CommerceClient = Depends(get_client),
    cache: CategoryUrlCache = Depends(get_cache),
) -> LookupResponse:
    result = await lookup_url(client, cache, url, lang)
    if result is None:
        raise HTTPException(status_code=404, detail="No entity found for this URL.")
    return result
