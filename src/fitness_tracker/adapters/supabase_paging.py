"""Paged reads for selects that may exceed the PostgREST row cap."""

from collections.abc import Callable
from typing import Any

from fitness_tracker.adapters.supabase_errors import storage_errors

# Supabase's default `max-rows`. A page must not be larger than the server cap.
PAGE_SIZE = 1000


def fetch_pages(
    build_query: Callable[[], Any], operation: str, page_size: int = PAGE_SIZE
) -> list[dict[str, Any]]:
    """Run an ordered select page by page until a short page comes back.

    ``build_query`` must return a fresh, deterministically ordered select
    builder on every call.
    """
    rows: list[dict[str, Any]] = []
    offset = 0
    while True:
        with storage_errors(operation):
            response = build_query().range(offset, offset + page_size - 1).execute()
        page = response.data or []
        rows.extend(page)
        if len(page) < page_size:
            return rows
        offset += page_size
