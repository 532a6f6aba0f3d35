"""Storefront URL -> entity resolution."""

import logging
from typing import Optional

from app.models.envelope import LookupResponse
from app.services.categories import get_category_id_by_url
from app.services.category_tree import CategoryUrlCache
from app.services.content_pages import get_content_id_by_url
from app.services.http_client import CommerceClient

logger = logging.getLogger(__name__)


async def lookup_url(
    client: CommerceClient,
    cache: CategoryUrlCache,
    url: str,
    lang: Optional[str] = None,
) -> Optional[LookupResponse]:
    """Identify the entity behind *url*: categories first, then content pages."""
    category_id = await get_category_id_by_url(client, cache, url, lang)
    if category_id:
        return LookupResponse(type="category", id=category_id)

    content_id = await get_content_id_by_url(client, url, lang)
    if content_id:
        return LookupResponse(type="content", id=content_id)

    logger.info("No entity found for URL %s", url)
    return None
