"""Product operations backed by the OCC API."""

import logging
from typing import List, Optional

from app.models.envelope import PageEnvelope
from app.models.product import Product, RemoteProduct
from app.services.bulk import resolve_all
from app.services.http_client import CommerceClient, RemoteError
from app.services.transformers import to_product

logger = logging.getLogger(__name__)

PRODUCT_FIELDS = "code,name,url,images(format,url)"


def _products_path(client: CommerceClient) -> str:
    return f"{client.settings.full_occ_path}/products"


async def fetch_product_by_id(client: CommerceClient, product_id: str) -> Optional[Product]:
    logger.debug("Fetching product %s", product_id)
    try:
        resp = await client.get(
            f"{_products_path(client)}/{product_id}", params={"fields": PRODUCT_FIELDS}
        )
    except RemoteError as exc:
        if exc.is_unknown_identifier:
            logger.warning("Product %s does not exist", product_id)
            return None
        raise
    return to_product(RemoteProduct.model_validate(resp.data), client.settings.media_cdn_url)


async def products_get(
    client: CommerceClient,
    category_id: Optional[str] = None,
    keyword: Optional[str] = None,
    lang: Optional[str] = None,
    page: int = 1,
) -> PageEnvelope[Product]:
    """Search products by keyword and/or category; paging is done remotely."""
    query = f"{keyword or ''}:relevance"
    if category_id:
        query += f":category:{category_id}"
    params = {
        "query": query,
        "fields": f"products({PRODUCT_FIELDS}),pagination",
        "currentPage": page - 1,
    }
    if lang:
        params["lang"] = lang
    logger.debug("Searching products with %s", params)

    resp = await client.get(f"{_products_path(client)}/search", params=params)
    data = resp.data if isinstance(resp.data, dict) else {}
    media = client.settings.media_cdn_url
    products = [to_product(RemoteProduct.model_validate(p), media) for p in data.get("products") or []]

    pagination = data.get("pagination") or {}
    total = pagination.get("totalResults") or 0
    total_pages = pagination.get("totalPages") or 0
    return PageEnvelope(items=products, total=total, has_next=page < total_pages)


async def products_by_ids_get(client: CommerceClient, product_ids: List[str]) -> PageEnvelope[Product]:
    """Resolve *product_ids*; ids that fail to resolve are left out."""
    products = await resolve_all(
        product_ids,
        lambda product_id: fetch_product_by_id(client, product_id),
        on_item_error="drop",
    )
    return PageEnvelope(items=products, total=len(products), has_next=False)


async def get_product_url(client: CommerceClient, product_id: str) -> Optional[str]:
    resp = await client.get(f"{_products_path(client)}/{product_id}", params={"fields": "url"})
    data = resp.data if isinstance(resp.data, dict) else {}
    return data.get("url")
