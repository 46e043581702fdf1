"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from pathlib import Path

from health_tracker.adapters.catalog_source import (
    CatalogSource,
    FileCatalogSource,
    HttpxCatalogSource,
)
from health_tracker.adapters.meal_api_client import HttpxMealApiClient, MealApiClient
from health_tracker.config import Settings, resolve_layout
from health_tracker.services.catalog import CatalogService
from health_tracker.services.meals import MealFoodService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    catalog_source: CatalogSource
    catalog_service: CatalogService
    meal_api_client: MealApiClient
    meal_food_service: MealFoodService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    if resolved_settings.nutrition_csv_url:
        catalog_source: FileCatalogSource | HttpxCatalogSource = (
            HttpxCatalogSource.create(resolved_settings.nutrition_csv_url)
        )
    else:
        catalog_source = FileCatalogSource(Path(resolved_settings.nutrition_csv_path))
    catalog_service = CatalogService(
        source=catalog_source,
        layout=resolve_layout(resolved_settings),
    )
    meal_api_client = HttpxMealApiClient.create(
        base_url=resolved_settings.meal_api_base_url,
        timeout_seconds=resolved_settings.meal_api_timeout_seconds,
    )
    meal_food_service = MealFoodService(
        catalog_service=catalog_service,
        client=meal_api_client,
    )

    async def close_resources() -> None:
        await catalog_source.close()
        await meal_api_client.close()

    return AppContainer(
        settings=resolved_settings,
        catalog_source=catalog_source,
        catalog_service=catalog_service,
        meal_api_client=meal_api_client,
        meal_food_service=meal_food_service,
        close_resources=close_resources,
    )
