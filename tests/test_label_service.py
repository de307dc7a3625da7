"""Tests for label service."""

import asyncio

from meal_logger.services.labels import LabelService, _to_data_url
from tests.conftest import FakeLabelClient, labels_payload


def test_label_service_keeps_confident_labels(image_path: str) -> None:
    client = FakeLabelClient(
        payloads=[
            {
                "labels": [
                    {"description": "Burrito", "score": 0.95},
                    {"description": "Tableware", "score": 0.7},
                    {"description": "Salsa", "score": 0.71},
                ]
            }
        ]
    )
    service = LabelService(client=client)

    labels = asyncio.run(service.extract(image_path))

    assert [label.description for label in labels] == ["Burrito", "Salsa"]
    assert client.calls[0].startswith("data:image/png;base64,")


def test_label_service_returns_empty_on_client_error(image_path: str) -> None:
    client = FakeLabelClient(error=RuntimeError("invalid api key"))
    service = LabelService(client=client)

    assert asyncio.run(service.extract(image_path)) == []


def test_label_service_returns_empty_for_missing_file(tmp_path) -> None:
    client = FakeLabelClient(payloads=[labels_payload("Food")])
    service = LabelService(client=client)

    assert asyncio.run(service.extract(str(tmp_path / "missing.jpg"))) == []
    assert client.calls == []


def test_label_service_returns_empty_for_invalid_payload(image_path: str) -> None:
    client = FakeLabelClient(payloads=[{"labels": [{"description": "Food"}]}])
    service = LabelService(client=client)

    assert asyncio.run(service.extract(image_path)) == []


def test_label_service_uses_configured_threshold(image_path: str) -> None:
    client = FakeLabelClient(payloads=[labels_payload("Food", "Cheese", score=0.6)])
    service = LabelService(client=client, min_score=0.5)

    assert len(asyncio.run(service.extract(image_path))) == 2


def test_to_data_url_uses_png_header() -> None:
    data = b"\x89PNG\r\n\x1a\n" + b"rest"
    url = _to_data_url(data)

    assert url.startswith("data:image/png;base64,")


def test_to_data_url_defaults_to_jpeg() -> None:
    data = b"unknown"
    url = _to_data_url(data)

    assert url.startswith("data:image/jpeg;base64,")
