"""
Page arithmetic shared by the paged repository queries.

``fetch_page`` expects a query that is already ordered by the paging key.
The OFFSET/LIMIT window is rendered in the same statement as that ORDER BY,
so each materialized page comes back sorted by the key the window was
computed on.
"""
from __future__ import annotations

import logging
from typing import Optional

from boardcore.db.schemas import CollectionPage

logger = logging.getLogger(__name__)


def page_count(total_items: int, items_per_page: int) -> int:
    """Number of pages needed for ``total_items``; an empty set still has one page."""
    if items_per_page <= 0:
        raise ValueError(f"items_per_page must be positive, got {items_per_page}")
    if total_items < 0:
        raise ValueError(f"total_items must not be negative, got {total_items}")
    return max(1, -(-total_items // items_per_page))


def clamp_page(page: int, total_pages: int) -> int:
    """Coerce ``page`` into [1, total_pages] with a single correction."""
    if page > total_pages:
        return total_pages
    if page < 1:
        return 1
    return page


def fetch_page(query, page: int, items_per_page: int, total_items: Optional[int] = None) -> CollectionPage:
    """Return the requested window of an ordered query.

    Out-of-range pages are clamped rather than rejected. When everything fits
    on one page the query is returned whole.
    """
    if total_items is None:
        total_items = query.count()
    total_pages = page_count(total_items, items_per_page)

    served_page = clamp_page(page, total_pages)
    if served_page != page:
        logger.debug("page_clamped: requested=%s served=%s total_pages=%s", page, served_page, total_pages)

    if total_items > items_per_page:
        query = query.offset((served_page - 1) * items_per_page).limit(items_per_page)

    return CollectionPage(
        items=query.all(),
        total_items=total_items,
        total_pages=total_pages,
        page=served_page,
    )
