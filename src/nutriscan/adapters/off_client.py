"""Open Food Facts product API client."""

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Protocol
from urllib.parse import quote

import httpx


class OpenFoodFactsClient(Protocol):
    """Interface for Open Food Facts product lookups."""

    async def get_product(
        self, barcode: str, fields: Sequence[str] = ()
    ) -> dict[str, object]:
        """Fetch a product by barcode and return raw API data."""


@dataclass
class HttpxOpenFoodFactsClient(OpenFoodFactsClient):
    """HTTPX-backed Open Food Facts client."""

    base_url: str
    http_client: httpx.AsyncClient
    timeout: float = 15

    @classmethod
    def create(
        cls, base_url: str, user_agent: str, timeout: float = 15
    ) -> "HttpxOpenFoodFactsClient":
        """Create a client with a managed httpx session."""
        return cls(
            base_url=base_url,
            http_client=httpx.AsyncClient(headers={"User-Agent": user_agent}),
            timeout=timeout,
        )

    async def get_product(
        self, barcode: str, fields: Sequence[str] = ()
    ) -> dict[str, object]:
        """Fetch a product by barcode, limited to the given fields."""
        code = quote(barcode, safe="")
        url = f"{self.base_url.rstrip('/')}/api/v2/product/{code}.json"
        params = {"fields": ",".join(fields)} if fields else None
        response = await self.http_client.get(url, params=params, timeout=self.timeout)
        response.raise_for_status()
        return response.json()

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()
