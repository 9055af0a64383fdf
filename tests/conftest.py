"""Pytest configuration and shared factories for docgate."""

import json
from collections.abc import Callable
from pathlib import Path
from typing import Any
from unittest.mock import MagicMock

import pytest
import requests

from docgate.schemas.documents import Description, Document, Product


class FakeClock:
    """Deterministic monotonic clock whose sleeps advance time instantly.

    Attributes:
        now: Current fake time in seconds.
        sleeps: Every duration passed to sleep(), in call order.
    """

    def __init__(self, start: float = 0.0):
        self.now = start
        self.sleeps: list[float] = []

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds

    async def async_sleep(self, seconds: float) -> None:
        self.sleep(seconds)


@pytest.fixture
def clock() -> FakeClock:
    """Fresh fake clock starting at t=0."""
    return FakeClock()


@pytest.fixture
def document_factory() -> Callable[..., Document]:
    """Factory to create Document instances with one product line.

    Returns:
        A callable that generates Documents.
    """

    def _make_document(doc_id: str = "doc-001", **overrides: Any) -> Document:
        fields: dict[str, Any] = {
            "description": Description(participant_inn="7700000000"),
            "doc_id": doc_id,
            "doc_status": "DRAFT",
            "doc_type": "LP_INTRODUCE_GOODS",
            "import_request": True,
            "owner_inn": "7700000000",
            "participant_inn": "7700000000",
            "producer_inn": "7800000000",
            "production_date": "2024-01-15",
            "production_type": "OWN_PRODUCTION",
            "products": [
                Product(
                    owner_inn="7700000000",
                    producer_inn="7800000000",
                    production_date="2024-01-15",
                    tnved_code="6401100000",
                    uit_code="010463003407001221SxMGorvNuq6Wk91fgr92sdfsdfs",
                )
            ],
            "reg_date": "2024-01-16",
            "reg_number": "R-42",
        }
        fields.update(overrides)
        return Document(**fields)

    return _make_document


@pytest.fixture
def response_factory() -> Callable[..., MagicMock]:
    """Factory to create fake requests.Response objects."""

    def _make_response(
        status_code: int = 200, body: str = '{"value": "accepted"}'
    ) -> MagicMock:
        response = MagicMock(spec=requests.Response)
        response.status_code = status_code
        response.text = body
        response.content = body.encode("utf-8")
        response.json.side_effect = lambda: json.loads(body)
        return response

    return _make_response


@pytest.fixture
def profile_yaml(tmp_path: Path) -> Path:
    """Writes a valid client profile and returns its path."""
    path = tmp_path / "profile.yaml"
    path.write_text(
        """
gate:
  capacity: 100
  window_seconds: 1.0
client:
  api_url: https://example.test/api/v3/lk/documents/create
  auth_token: secret-token-value
  timeout: 5.0
""",
        encoding="utf-8",
    )
    return path
