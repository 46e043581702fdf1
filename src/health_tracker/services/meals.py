"""Logging catalog foods into meals."""

import logging
import math
from dataclasses import dataclass

from health_tracker.adapters.meal_api_client import MealApiClient
from health_tracker.domain.errors import FoodNotFoundError, InvalidQuantityError
from health_tracker.domain.meals import MealFoodEntry
from health_tracker.services.calculator import calculate_nutrition
from health_tracker.services.catalog import CatalogService

_logger = logging.getLogger(__name__)


@dataclass
class MealFoodService:
    """Builds meal food entries from the catalog and sends them to the backend."""

    catalog_service: CatalogService
    client: MealApiClient

    async def log_food(  # noqa: PLR0913
        self,
        token: str,
        meal_id: str,
        food_id: int,
        quantity: float,
        unit: str = "g",
    ) -> dict[str, object]:
        """Scale a catalog food to ``quantity`` and store it in a meal."""
        if not math.isfinite(quantity) or quantity <= 0:
            raise InvalidQuantityError("Quantity must be a positive number")
        food = await self.catalog_service.get_food(food_id)
        if food is None:
            raise FoodNotFoundError(food_id)
        snapshot = calculate_nutrition(food, quantity, unit)
        entry = MealFoodEntry.from_snapshot(meal_id, food, quantity, unit, snapshot)
        stored = await self.client.create_meal_food(entry, token)
        _logger.info(
            "Logged food into meal: meal_id=%s food_id=%s calories=%s",
            meal_id,
            food_id,
            entry.calories,
        )
        return stored

    async def list_foods(self, token: str, meal_id: str) -> list[dict[str, object]]:
        """Return the foods already logged in a meal."""
        return await self.client.list_meal_foods(meal_id, token)
