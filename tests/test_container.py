"""Tests for container wiring."""

import asyncio

from fitness_tracker.containers import build_container
from fitness_tracker.services.clock import SystemClock


def test_build_container_creates_services(settings) -> None:
    container = build_container(settings)
    assert container.identity_service is not None
    assert container.meal_ledger_service.clock is container.clock
    assert isinstance(container.clock, SystemClock)
    asyncio.run(container.close_resources())


def test_build_container_falls_back_to_utc(settings) -> None:
    container = build_container(settings.model_copy(update={"timezone": "Mars/Base"}))
    assert container.clock.timezone_name == "UTC"
    asyncio.run(container.close_resources())
