"""Concurrent fetch of entities by identifier.

One remote call is issued per identifier and all of them run concurrently.
Results keep the order of the input identifiers.  What happens when a single
fetch fails depends on *on_item_error*:

* ``"drop"`` – the failing identifier is logged and left out of the result.
* ``"fail"`` – the first failure (in input order) is raised and no partial
  result is returned.
"""

import asyncio
import logging
from typing import Awaitable, Callable, List, Literal, Optional, Sequence, TypeVar

T = TypeVar("T")

OnItemError = Literal["drop", "fail"]

logger = logging.getLogger(__name__)


async def resolve_all(
    ids: Sequence[str],
    fetch: Callable[[str], Awaitable[Optional[T]]],
    on_item_error: OnItemError = "drop",
) -> List[T]:
    """Fetch every id in *ids* with *fetch* and return the resolved entities.

    *fetch* may return ``None`` for an identifier that resolved to nothing; such
    entries are skipped under either policy.
    """
    results = await asyncio.gather(*(fetch(i) for i in ids), return_exceptions=True)

    resolved: List[T] = []
    for entity_id, result in zip(ids, results):
        if isinstance(result, BaseException):
            if not isinstance(result, Exception) or on_item_error == "fail":
                raise result
            logger.warning("Dropping %s after failed fetch: %s", entity_id, result)
            continue
        if result is not None:
            resolved.append(result)
    return resolved
