"""Client for the meal REST backend."""

from dataclasses import asdict, dataclass
from typing import Protocol

import httpx

from health_tracker.domain.meals import MealFoodEntry


class MealApiClient(Protocol):
    """Interface for persisting logged foods in the meal backend."""

    async def create_meal_food(
        self, entry: MealFoodEntry, token: str
    ) -> dict[str, object]:
        """Persist a food item in a meal and return the stored row."""

    async def list_meal_foods(self, meal_id: str, token: str) -> list[dict[str, object]]:
        """Return the food items stored for a meal."""


@dataclass
class HttpxMealApiClient(MealApiClient):
    """HTTPX-backed meal backend client."""

    base_url: str
    http_client: httpx.AsyncClient
    timeout_seconds: float = 15

    @classmethod
    def create(cls, base_url: str, timeout_seconds: float = 15) -> "HttpxMealApiClient":
        """Create a client with a managed httpx session."""
        return cls(
            base_url=base_url.rstrip("/"),
            http_client=httpx.AsyncClient(),
            timeout_seconds=timeout_seconds,
        )

    async def create_meal_food(
        self, entry: MealFoodEntry, token: str
    ) -> dict[str, object]:
        """POST a food item to the meal backend."""
        response = await self.http_client.post(
            f"{self.base_url}/user/mealfoods",
            json=asdict(entry),
            headers=_auth_headers(token),
            timeout=self.timeout_seconds,
        )
        response.raise_for_status()
        return response.json()

    async def list_meal_foods(self, meal_id: str, token: str) -> list[dict[str, object]]:
        """GET the food items of a meal."""
        response = await self.http_client.get(
            f"{self.base_url}/user/mealfoods/{meal_id}",
            headers=_auth_headers(token),
            timeout=self.timeout_seconds,
        )
        response.raise_for_status()
        return response.json() or []

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()


def _auth_headers(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}
