"""Edamam Nutrition Analysis API client."""

from dataclasses import dataclass
from typing import Protocol

import httpx


class EdamamClient(Protocol):
    """Interface for Edamam nutrition analysis."""

    async def analyze(self, ingredients: list[str]) -> dict[str, object]:
        """Analyze ingredient lines and return raw API data."""


@dataclass
class HttpxEdamamClient(EdamamClient):
    """HTTPX-backed Edamam client."""

    app_id: str
    app_key: str
    base_url: str
    http_client: httpx.AsyncClient

    @classmethod
    def create(cls, app_id: str, app_key: str, base_url: str) -> "HttpxEdamamClient":
        """Create an Edamam client with a managed httpx session."""
        return cls(
            app_id=app_id,
            app_key=app_key,
            base_url=base_url,
            http_client=httpx.AsyncClient(),
        )

    async def analyze(self, ingredients: list[str]) -> dict[str, object]:
        """Post ingredient lines such as ``"1 banana"`` for analysis."""
        url = f"{self.base_url}/nutrition-details"
        response = await self.http_client.post(
            url,
            params={"app_id": self.app_id, "app_key": self.app_key},
            json={"ingr": ingredients},
            timeout=15,
        )
        response.raise_for_status()
        return response.json()

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()
