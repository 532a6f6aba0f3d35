"""Keyword filtering and offset pagination over in-memory collections."""

from typing import List, Optional, Sequence, TypeVar

from app.models.envelope import PageEnvelope

T = TypeVar("T")

# Fixed page size used by the bridge for every paginated entity
PAGE_SIZE = 20


def filter_by_keyword(keyword: Optional[str], items: Sequence[T]) -> List[T]:
    """Keep items whose ``label`` contains *keyword* (case-insensitive).

    An empty or missing keyword returns all items.
    """
    if not keyword:
        return list(items)
    query = keyword.lower()
    return [item for item in items if query in (getattr(item, "label", None) or "").lower()]


def paginate(items: Sequence[T], page: int = 1, page_size: int = PAGE_SIZE) -> PageEnvelope[T]:
    """Slice *items* into page number *page* (1-based).

    ``has_next`` is computed as ``page * page_size <= total``, so a page that
    ends exactly on the last item still reports a next page.  Bridge clients
    page on this value, keep it.
    """
    total = len(items)
    start = page_size * (page - 1)
    end = start + page_size
    return PageEnvelope(
        items=list(items[start:end]),
        total=total,
        has_next=page * page_size <= total,
    )
