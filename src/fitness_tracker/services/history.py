"""Shared rules for per-day ledger history queries."""

from fitness_tracker.domain.errors import ValidationError

MAX_HISTORY_LIMIT = 365


def bounded_history_limit(limit: int) -> int:
    """Validate a history limit and clamp it to the hard ceiling."""
    if isinstance(limit, bool) or not isinstance(limit, int) or limit < 1:
        raise ValidationError("limit must be a positive integer")
    return min(limit, MAX_HISTORY_LIMIT)
