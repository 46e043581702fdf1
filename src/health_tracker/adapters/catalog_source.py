"""Sources that supply raw nutrition CSV text."""

import asyncio
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

import httpx


class CatalogSource(Protocol):
    """Interface for fetching the raw catalog text."""

    async def read_text(self) -> str:
        """Return the full CSV text."""


@dataclass
class FileCatalogSource(CatalogSource):
    """Reads the CSV from a local file."""

    path: Path

    async def read_text(self) -> str:
        """Read the file in a worker thread."""
        return await asyncio.to_thread(self.path.read_text, encoding="utf-8")

    async def close(self) -> None:
        """Nothing to release for local files."""


@dataclass
class HttpxCatalogSource(CatalogSource):
    """HTTPX-backed source for a CSV served over HTTP."""

    url: str
    http_client: httpx.AsyncClient
    timeout_seconds: float = 30

    @classmethod
    def create(cls, url: str) -> "HttpxCatalogSource":
        """Create a source with a managed httpx session."""
        return cls(url=url, http_client=httpx.AsyncClient())

    async def read_text(self) -> str:
        """Download the CSV text."""
        response = await self.http_client.get(self.url, timeout=self.timeout_seconds)
        response.raise_for_status()
        return response.text

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()
