"""Classification of Supabase/PostgREST failures into domain errors."""

import logging
from collections.abc import Iterator
from contextlib import contextmanager

import httpx
from postgrest.exceptions import APIError

from fitness_tracker.domain.errors import (
    ConflictError,
    DomainError,
    InternalError,
    TransientError,
)

logger = logging.getLogger(__name__)

UNIQUE_VIOLATION = "23505"


@contextmanager
def storage_errors(operation: str) -> Iterator[None]:
    """Re-raise storage failures as domain errors."""
    try:
        yield
    except DomainError:
        raise
    except httpx.TimeoutException as exc:
        logger.warning("Storage timeout during %s", operation)
        raise TransientError() from exc
    except httpx.TransportError as exc:
        logger.warning("Storage transport failure during %s: %s", operation, exc)
        raise TransientError() from exc
    except APIError as exc:
        if exc.code == UNIQUE_VIOLATION:
            raise ConflictError() from exc
        logger.exception("Storage API error during %s", operation)
        raise InternalError() from exc
    except Exception as exc:
        logger.exception("Unexpected storage failure during %s", operation)
        raise InternalError() from exc
