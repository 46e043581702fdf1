"""Shared test fixtures."""

import asyncio
from dataclasses import dataclass, field

import httpx
import pytest

from health_tracker.adapters.catalog_source import CatalogSource
from health_tracker.adapters.meal_api_client import MealApiClient
from health_tracker.config import Settings
from health_tracker.containers import AppContainer
from health_tracker.domain.catalog import HEADER_LAYOUT
from health_tracker.domain.meals import MealFoodEntry
from health_tracker.services.catalog import CatalogService
from health_tracker.services.meals import MealFoodService

SAMPLE_CSV = (
    "id,name,serving_size,calories,protein,carbohydrate,total_fat,fiber,sugar,sodium\n"
    "1,Grilled Chicken Breast,100 g,165,31,0,3.6,0,0,74\n"
    "2,Chocolate Chip Cookies,100 g,500,5,65,25,2,40,300\n"
    "3,Broccoli,100 g,34,2.8,7,0.4,2.6,1.5,33\n"
    "4,White Rice,100 g,130,2.7,28,0.3,0.4,0.1,1\n"
)


def wide_row(values: dict[int, str], width: int = 77) -> str:
    """Build a CSV line of ``width`` columns with the given cells filled."""
    cells = [values.get(index, "") for index in range(width)]
    return ",".join(cells)


@dataclass
class InMemoryCatalogSource(CatalogSource):
    """Catalog source serving fixed text and counting reads."""

    text: str = SAMPLE_CSV
    delay_seconds: float = 0.0
    calls: int = 0

    async def read_text(self) -> str:
        self.calls += 1
        if self.delay_seconds:
            await asyncio.sleep(self.delay_seconds)
        return self.text

    async def close(self) -> None:
        return None


@dataclass
class FailingCatalogSource(CatalogSource):
    """Catalog source that is always unreachable."""

    calls: int = 0

    async def read_text(self) -> str:
        self.calls += 1
        raise OSError("nutrition.csv not found")

    async def close(self) -> None:
        return None


@dataclass
class FakeMealApiClient(MealApiClient):
    """Meal backend fake that stores entries in memory."""

    entries: list[tuple[MealFoodEntry, str]] = field(default_factory=list)
    fail: bool = False

    async def create_meal_food(
        self, entry: MealFoodEntry, token: str
    ) -> dict[str, object]:
        if self.fail:
            raise httpx.ConnectError("backend down")
        self.entries.append((entry, token))
        return {"id": f"row-{len(self.entries)}", "food_name": entry.food_name}

    async def list_meal_foods(self, meal_id: str, token: str) -> list[dict[str, object]]:
        return [
            {"meal_id": entry.meal_id, "food_name": entry.food_name}
            for entry, _ in self.entries
            if entry.meal_id == meal_id
        ]


@pytest.fixture
def settings() -> Settings:
    return Settings(admin_token="admin-token")


@pytest.fixture
def catalog_source() -> InMemoryCatalogSource:
    return InMemoryCatalogSource()


@pytest.fixture
def catalog_service(catalog_source: InMemoryCatalogSource) -> CatalogService:
    return CatalogService(source=catalog_source, layout=HEADER_LAYOUT)


@pytest.fixture
def meal_api_client() -> FakeMealApiClient:
    return FakeMealApiClient()


@pytest.fixture
def container(
    settings: Settings,
    catalog_source: InMemoryCatalogSource,
    catalog_service: CatalogService,
    meal_api_client: FakeMealApiClient,
) -> AppContainer:
    meal_food_service = MealFoodService(
        catalog_service=catalog_service,
        client=meal_api_client,
    )

    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        catalog_source=catalog_source,
        catalog_service=catalog_service,
        meal_api_client=meal_api_client,
        meal_food_service=meal_food_service,
        close_resources=close_resources,
    )
