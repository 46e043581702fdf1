"""Pydantic models for API request bodies."""

from pydantic import BaseModel, Field


class LogFoodRequest(BaseModel):
    """Body for logging a catalog food into a meal."""

    food_id: int
    quantity: float = Field(gt=0, allow_inf_nan=False)
    unit: str = "g"
