"""Tests for container wiring."""

import asyncio

from meal_logger.containers import build_container


def test_build_container_creates_services(settings) -> None:
    container = build_container(settings)
    assert container.meal_log_service is not None
    assert container.label_service.min_score == 0.7
    assert container.log_path == settings.log_file
    asyncio.run(container.close_resources())


def test_build_container_overrides_log_file(settings, tmp_path) -> None:
    log_file = tmp_path / "other.json"
    container = build_container(settings, log_file=log_file)
    assert container.log_path == log_file
    asyncio.run(container.close_resources())
