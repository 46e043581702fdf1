"""Domain errors raised by the service layer."""


class HealthTrackerError(Exception):
    """Base error for service-level failures."""


class FoodNotFoundError(HealthTrackerError):
    """Raised when a food id is not present in the catalog."""

    def __init__(self, food_id: int) -> None:
        super().__init__(f"Food {food_id} not found")
        self.food_id = food_id


class InvalidQuantityError(HealthTrackerError):
    """Raised when a logged quantity is not a positive finite number."""
