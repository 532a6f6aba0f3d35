"""Category operations backed by the catalog (OCC) API."""

import logging
from typing import List, Optional

from app.models.category import Category, CategoryNode, RemoteCategory
from app.models.envelope import PageEnvelope
from app.services.bulk import resolve_all
from app.services.category_tree import (
    CategoryShape,
    CategoryUrlCache,
    count_categories,
    drop_unnamed,
    find_subtree,
)
from app.services.http_client import CommerceClient, RemoteError
from app.services.pagination import filter_by_keyword, paginate
from app.services.transformers import to_category

logger = logging.getLogger(__name__)


def _catalog_path(client: CommerceClient) -> str:
    s = client.settings
    return f"{s.full_occ_path}/catalogs/{s.catalog_id}/{s.catalog_version}"


async def fetch_categories(
    client: CommerceClient,
    cache: CategoryUrlCache,
    lang: Optional[str] = None,
    parent_id: Optional[str] = None,
    as_tree: bool = False,
) -> Optional[CategoryShape]:
    """Fetch the full category forest and refresh *cache* from it.

    Returns:
        The categories below *parent_id*, or ``None`` if that category does
        not exist.
    """
    lang = lang or client.settings.default_lang
    path = _catalog_path(client)
    logger.debug("Fetching category forest from %s (lang=%s)", path, lang)

    resp = await client.get(path, params={"lang": lang})
    payload = resp.data if isinstance(resp.data, dict) else {}
    forest = [RemoteCategory.model_validate(c) for c in payload.get("categories") or []]
    forest = drop_unnamed(forest)

    cache.replace(forest)
    return find_subtree(forest, parent_id, as_tree)


async def _ensure_cache(client: CommerceClient, cache: CategoryUrlCache, lang: Optional[str]) -> None:
    if not cache.is_built():
        await fetch_categories(client, cache, lang, as_tree=True)


async def categories_get(
    client: CommerceClient,
    cache: CategoryUrlCache,
    parent_id: Optional[str] = None,
    keyword: Optional[str] = None,
    lang: Optional[str] = None,
    page: int = 1,
) -> PageEnvelope[Category]:
    """Return one page of the flat category list below *parent_id*."""
    categories = await fetch_categories(client, cache, lang, parent_id, as_tree=False)
    if categories is None:
        logger.warning("Unknown parent category %s", parent_id)
        categories = []

    return paginate(filter_by_keyword(keyword, categories), page)


async def category_tree_get(
    client: CommerceClient,
    cache: CategoryUrlCache,
    parent_id: Optional[str] = None,
    lang: Optional[str] = None,
) -> PageEnvelope[CategoryNode]:
    """Return the category tree below *parent_id*; ``total`` counts every node."""
    tree = await fetch_categories(client, cache, lang, parent_id, as_tree=True)
    if tree is None:
        logger.warning("Unknown parent category %s", parent_id)
        tree = []

    return PageEnvelope(items=tree, total=count_categories(tree), has_next=False)


async def fetch_category_by_id(
    client: CommerceClient, category_id: str, lang: Optional[str] = None
) -> Optional[Category]:
    """Fetch a single category.

    An ``UnknownIdentifierError`` from the platform is not a failure: the id
    simply resolves to nothing.  Nameless categories resolve to nothing too.
    """
    lang = lang or client.settings.default_lang
    path = f"{_catalog_path(client)}/categories/{category_id}"
    logger.debug("Fetching category %s (lang=%s)", category_id, lang)

    try:
        resp = await client.get(path, params={"lang": lang})
    except RemoteError as exc:
        if exc.is_unknown_identifier:
            logger.warning("Category %s does not exist", category_id)
            return None
        raise

    category = RemoteCategory.model_validate(resp.data)
    if not category.name:
        logger.warning("Ignoring category %s without a name", category_id)
        return None
    return to_category(category)


async def categories_by_ids_get(
    client: CommerceClient,
    category_ids: List[str],
    lang: Optional[str] = None,
) -> PageEnvelope[Category]:
    """Resolve *category_ids*; ids that fail to resolve are left out."""
    categories = await resolve_all(
        category_ids,
        lambda category_id: fetch_category_by_id(client, category_id, lang),
        on_item_error="drop",
    )
    return PageEnvelope(items=categories, total=len(categories), has_next=False)


async def get_category_url(
    client: CommerceClient,
    cache: CategoryUrlCache,
    category_id: str,
    lang: Optional[str] = None,
) -> Optional[str]:
    """Return the storefront URL of *category_id*, or *None* if unknown.

    The category forest is fetched only when *cache* has not been built yet.
    """
    await _ensure_cache(client, cache, lang)
    url = cache.url_for(category_id)
    if url is None:
        logger.warning("Invalid categoryId passed: %s", category_id)
    return url


async def get_category_id_by_url(
    client: CommerceClient,
    cache: CategoryUrlCache,
    url: str,
    lang: Optional[str] = None,
) -> Optional[str]:
    """Reverse of :func:`get_category_url`."""
    await _ensure_cache(client, cache, lang)
    return cache.id_for(url)
