"""Continuation-token paging over Azure SDK list operations.

SDK list operations return an ``ItemPaged`` whose ``by_page()`` iterator
exposes the next link as ``continuation_token`` after each page. For ARM
list APIs the continuation token is the service's nextLink URL, so a token
from one invocation can resume listing in another.
"""

import logging
from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")
R = TypeVar("R")


@dataclass
class Page(Generic[T]):
    """One page of results and the token for the next page."""

    items: list[T] = field(default_factory=list)
    continuation_token: str | None = None

    @property
    def has_more(self) -> bool:
        return self.continuation_token is not None


def iter_pages(item_paged: Any, continuation_token: str | None = None) -> Iterator[Page[Any]]:
    """Yield pages from an SDK pageable, following next links.

    Args:
        item_paged: azure.core.paging.ItemPaged (or anything with by_page())
        continuation_token: Next link to resume from

    Yields:
        Page objects; the last page has continuation_token None
    """
    pages = item_paged.by_page(continuation_token=continuation_token)
    for page in pages:
        yield Page(items=list(page), continuation_token=pages.continuation_token or None)


def first_page(item_paged: Any, continuation_token: str | None = None) -> Page[Any]:
    """Fetch a single page (empty page if the listing is empty)."""
    for page in iter_pages(item_paged, continuation_token):
        return page
    return Page()


def _log_truncated(limit: int) -> None:
    logger.info(f"Results limited to {limit} item(s). Use --max-count 0 to return all results.")


def collect(
    item_paged: Any,
    transform: Callable[[Any], R] | None = None,
    max_count: int | None = None,
    item_filter: Callable[[Any], bool] | None = None,
    continuation_token: str | None = None,
) -> list[Any]:
    """Collect items across all pages.

    Args:
        item_paged: SDK pageable
        transform: Optional mapping applied to each kept item
        max_count: Stop after this many items (None or 0 = unlimited)
        item_filter: Optional predicate applied before transform
        continuation_token: Next link to resume from

    Returns:
        List of (transformed) items
    """
    results: list[Any] = []
    limit = max_count if max_count and max_count > 0 else None
    page_count = 0

    for page in iter_pages(item_paged, continuation_token):
        page_count += 1
        for index, item in enumerate(page.items):
            if item_filter is not None and not item_filter(item):
                continue
            results.append(transform(item) if transform else item)
            if limit is not None and len(results) >= limit:
                if page.has_more or index < len(page.items) - 1:
                    _log_truncated(limit)
                return results

    logger.debug(f"Collected {len(results)} item(s) from {page_count} page(s)")
    return results


def take(items: Iterable[T], max_count: int | None = None) -> list[T]:
    """Take up to max_count items from an iterable (None or 0 = all).

    For listings that are not continuation-token pageables, such as the
    Batch data-plane iterators. Logs the truncation notice when items remain.
    """
    limit = max_count if max_count and max_count > 0 else None
    results: list[T] = []
    for item in items:
        if limit is not None and len(results) >= limit:
            _log_truncated(limit)
            break
        results.append(item)
    return results


__all__ = ["Page", "collect", "first_page", "iter_pages", "take"]
