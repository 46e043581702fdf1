"""Application configuration."""

import os
from dataclasses import replace

from pydantic_settings import BaseSettings, SettingsConfigDict

from health_tracker.domain.catalog import NAMED_LAYOUTS, CatalogLayout

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    admin_token: str
    nutrition_csv_path: str = "nutrition.csv"
    nutrition_csv_url: str | None = None
    catalog_layout: str = "usda_wide"
    catalog_min_columns: int | None = None
    catalog_max_rows: int | None = None
    meal_api_base_url: str = "http://localhost:8080"
    meal_api_timeout_seconds: float = 15
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )


def resolve_layout(settings: Settings) -> CatalogLayout:
    """Return the catalog layout selected by settings, with overrides applied."""
    layout = NAMED_LAYOUTS.get(settings.catalog_layout.strip().lower())
    if layout is None:
        raise ValueError(f"Unknown catalog layout: {settings.catalog_layout}")
    if settings.catalog_min_columns is not None:
        layout = replace(layout, min_columns=settings.catalog_min_columns)
    if settings.catalog_max_rows is not None:
        layout = replace(layout, max_rows=settings.catalog_max_rows)
    return layout
