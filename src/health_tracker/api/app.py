"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import asdict

import httpx
from fastapi import FastAPI, Header, HTTPException, Query, Request, status

from health_tracker.api.admin import router as admin_router
from health_tracker.api.models import LogFoodRequest
from health_tracker.app_logging import configure_logging
from health_tracker.containers import AppContainer
from health_tracker.domain.errors import FoodNotFoundError, InvalidQuantityError
from health_tracker.domain.health import HealthLevel, HealthReport
from health_tracker.services.calculator import COMMON_UNITS, calculate_nutrition
from health_tracker.services.catalog import food_to_dict
from health_tracker.services.health import analyze_food, healthier_alternatives


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        try:
            await app.state.container.catalog_service.ensure_loaded()
        except Exception:
            logger.exception("Failed to warm the food catalog")
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    app.include_router(admin_router)

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/foods")
    async def search_foods(
        request: Request,
        query: str | None = None,
        limit: int = Query(default=10, ge=1, le=100),
    ) -> dict[str, object]:
        """Search the catalog by food name."""
        state_container: AppContainer = request.app.state.container
        foods = await state_container.catalog_service.search(query, limit)
        return {"foods": [food_to_dict(food) for food in foods]}

    @app.get("/foods/stats")
    async def catalog_stats(request: Request) -> dict[str, object]:
        """Return catalog size and category counts."""
        state_container: AppContainer = request.app.state.container
        return await state_container.catalog_service.stats()

    @app.get("/foods/units")
    async def common_units() -> dict[str, object]:
        """Return the unit labels offered for quantities."""
        return {
            "units": [{"value": value, "label": label} for value, label in COMMON_UNITS]
        }

    @app.get("/foods/{food_id}")
    async def get_food(food_id: int, request: Request) -> dict[str, object]:
        """Return a single catalog food."""
        state_container: AppContainer = request.app.state.container
        food = await state_container.catalog_service.get_food(food_id)
        if food is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
        return food_to_dict(food)

    @app.get("/foods/{food_id}/nutrition")
    async def food_nutrition(
        food_id: int,
        request: Request,
        quantity: float = Query(default=100, gt=0, allow_inf_nan=False),
        unit: str = "g",
    ) -> dict[str, object]:
        """Scale a food to a quantity and attach its health report."""
        state_container: AppContainer = request.app.state.container
        food = await state_container.catalog_service.get_food(food_id)
        if food is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
        snapshot = calculate_nutrition(food, quantity, unit)
        report = analyze_food(food, snapshot)
        alternatives: list[str] = []
        if report and report.level in {HealthLevel.FAIR, HealthLevel.POOR}:
            alternatives = healthier_alternatives(food.name)
        return {
            "food": food_to_dict(food),
            "quantity": quantity,
            "unit": unit,
            "nutrition": asdict(snapshot),
            "health": _report_payload(report),
            "healthier_alternatives": alternatives,
        }

    @app.post("/meals/{meal_id}/foods", status_code=status.HTTP_201_CREATED)
    async def log_meal_food(
        meal_id: str,
        body: LogFoodRequest,
        request: Request,
        authorization: str | None = Header(default=None),
    ) -> dict[str, object]:
        """Log a catalog food into a meal on the meal backend."""
        state_container: AppContainer = request.app.state.container
        token = _bearer_token(authorization)
        if token is None:
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)
        try:
            stored = await state_container.meal_food_service.log_food(
                token=token,
                meal_id=meal_id,
                food_id=body.food_id,
                quantity=body.quantity,
                unit=body.unit,
            )
        except FoodNotFoundError as exc:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)
            ) from exc
        except InvalidQuantityError as exc:
            raise HTTPException(
                status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc)
            ) from exc
        except httpx.HTTPError as exc:
            logger.warning("Meal backend request failed: %s", exc)
            raise HTTPException(
                status_code=status.HTTP_502_BAD_GATEWAY,
                detail="Meal service unavailable",
            ) from exc
        return {"meal_food": stored}

    return app


def _bearer_token(authorization: str | None) -> str | None:
    """Extract the credential from an ``Authorization: Bearer`` header."""
    if not authorization:
        return None
    scheme, _, credential = authorization.partition(" ")
    if scheme.lower() != "bearer" or not credential.strip():
        return None
    return credential.strip()


def _report_payload(report: HealthReport | None) -> dict[str, object] | None:
    """Serialize a health report with display hints for its level."""
    if report is None:
        return None
    return {
        "score": report.score,
        "level": report.level.value,
        "label": report.level.label,
        "color": report.level.color,
        "warnings": list(report.warnings),
        "highlights": list(report.highlights),
        "recommendations": list(report.recommendations),
        "alternatives": list(report.alternatives),
    }
