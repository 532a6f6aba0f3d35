"""Category tree shaping and the id <-> URL cache.

The catalog API returns the whole category forest in one nested payload.  The
helpers here turn that payload into the bridge's tree or flat-list shapes,
locate the subtree below a given parent, and keep a process-wide map between
category ids and their storefront URLs.
"""

import logging
from typing import Dict, List, Optional, Sequence, Union

from app.models.category import Category, CategoryNode, RemoteCategory
from app.services.transformers import to_category, to_category_node

logger = logging.getLogger(__name__)

CategoryShape = Union[List[CategoryNode], List[Category]]


def drop_unnamed(categories: Sequence[RemoteCategory]) -> List[RemoteCategory]:
    """Remove categories without a name, together with everything below them.

    Nameless nodes are non-public placeholders on the platform.
    """
    kept: List[RemoteCategory] = []
    for category in categories:
        if not category.name:
            logger.warning("Ignoring category %s without a name", category.id)
            continue
        kept.append(
            category.model_copy(update={"subcategories": drop_unnamed(category.subcategories)})
        )
    return kept


def build_tree(categories: Sequence[RemoteCategory]) -> List[CategoryNode]:
    """Map the forest to nested :class:`CategoryNode` objects.

    Leaves have ``children=None`` rather than an empty list.
    """
    return [to_category_node(c, build_tree(c.subcategories)) for c in categories]


def build_flat_list(categories: Sequence[RemoteCategory]) -> List[Category]:
    """Flatten the forest in pre-order: each node precedes its descendants."""
    result: List[Category] = []
    for category in categories:
        result.append(to_category(category))
        result.extend(build_flat_list(category.subcategories))
    return result


def _shape(categories: Sequence[RemoteCategory], as_tree: bool) -> CategoryShape:
    return build_tree(categories) if as_tree else build_flat_list(categories)


def _find(categories: Sequence[RemoteCategory], parent_id: str) -> Optional[RemoteCategory]:
    for category in categories:
        if category.id == parent_id:
            return category
        found = _find(category.subcategories, parent_id)
        if found is not None:
            return found
    return None


def find_subtree(
    categories: Sequence[RemoteCategory],
    parent_id: Optional[str] = None,
    as_tree: bool = False,
) -> Optional[CategoryShape]:
    """Return the categories below *parent_id*, shaped as a tree or a flat list.

    Without *parent_id* the whole forest is shaped.  The search is depth-first
    and the first matching node wins.

    Returns:
        ``None`` when no category has id *parent_id*; an empty list when the
        category exists but has no children.
    """
    if not parent_id:
        return _shape(categories, as_tree)

    parent = _find(categories, parent_id)
    if parent is None:
        return None
    return _shape(parent.subcategories, as_tree)


def count_categories(tree: Sequence[CategoryNode]) -> int:
    """Count every node of *tree*, nested children included."""
    return sum(1 + count_categories(node.children or []) for node in tree)


class CategoryUrlCache:
    """Bidirectional map between category ids and category URLs.

    Filled from a full category fetch and replaced as a whole on every
    rebuild; entries are never removed individually.  Categories without a
    URL are not cached, so a built cache may still hold no entries.
    """

    def __init__(self) -> None:
        self._url_by_id: Dict[str, str] = {}
        self._id_by_url: Dict[str, str] = {}
        self._built = False

    def __len__(self) -> int:
        return len(self._url_by_id)

    def is_built(self) -> bool:
        """True once the cache has been filled from a category fetch."""
        return self._built

    def replace(self, categories: Sequence[RemoteCategory]) -> None:
        url_by_id: Dict[str, str] = {}
        id_by_url: Dict[str, str] = {}
        stack = list(categories)
        while stack:
            category = stack.pop()
            if category.url:
                url_by_id[category.id] = category.url
                id_by_url[category.url] = category.id
            stack.extend(category.subcategories)

        self._url_by_id, self._id_by_url = url_by_id, id_by_url
        self._built = True
        logger.debug("Category URL cache rebuilt with %d entries", len(url_by_id))

    def url_for(self, category_id: str) -> Optional[str]:
        return self._url_by_id.get(category_id)

    def id_for(self, url: str) -> Optional[str]:
        return self._id_by_url.get(url)
