"""Food catalog domain models."""

from collections.abc import Mapping
from dataclasses import dataclass, field

from health_tracker.domain.nutrition import FoodCategory, FoodRecord


@dataclass(frozen=True)
class CatalogLayout:
    """Column mapping for one shape of nutrition CSV.

    ``columns`` maps a ``FoodRecord`` field name to its column index. Fields
    missing from the map keep their defaults. ``min_columns`` of ``None`` means
    a row must be at least as wide as the header. With ``columns_from_header``
    the map is built from the header names at parse time.
    """

    name: str
    columns: Mapping[str, int]
    min_columns: int | None = None
    require_calories: bool = False
    max_rows: int | None = None
    columns_from_header: bool = False


USDA_WIDE_LAYOUT = CatalogLayout(
    name="usda_wide",
    columns={
        "id": 0,
        "name": 1,
        "serving_size": 2,
        "calories": 3,
        "total_fat": 4,
        "saturated_fat": 5,
        "cholesterol": 6,
        "sodium": 7,
        "vitamin_a": 14,
        "vitamin_b12": 15,
        "vitamin_b6": 16,
        "vitamin_c": 17,
        "calcium": 28,
        "iron": 30,
        "magnesium": 31,
        "phosphorus": 33,
        "potassium": 34,
        "zinc": 36,
        "protein": 37,
        "carbohydrate": 61,
        "fiber": 62,
        "sugar": 63,
        "water": 76,
    },
    min_columns=77,
)

ABBREVIATED_LAYOUT = CatalogLayout(
    name="abbreviated",
    columns={
        "id": 0,
        "name": 1,
        "serving_size": 2,
        "calories": 3,
        "total_fat": 4,
        "saturated_fat": 5,
        "cholesterol": 6,
        "sodium": 7,
        "calcium": 29,
        "iron": 31,
        "potassium": 35,
        "protein": 37,
        "carbohydrate": 52,
        "fiber": 53,
        "sugar": 54,
    },
    min_columns=None,
    require_calories=True,
    max_rows=1000,
)

HEADER_LAYOUT = CatalogLayout(name="header", columns={}, columns_from_header=True)

NAMED_LAYOUTS: dict[str, CatalogLayout] = {
    HEADER_LAYOUT.name: HEADER_LAYOUT,
    USDA_WIDE_LAYOUT.name: USDA_WIDE_LAYOUT,
    ABBREVIATED_LAYOUT.name: ABBREVIATED_LAYOUT,
}


@dataclass(frozen=True)
class Catalog:
    """Ordered, read-only collection of parsed foods."""

    foods: tuple[FoodRecord, ...]
    source: str = "csv"
    _by_id: dict[int, FoodRecord] = field(
        default_factory=dict, init=False, repr=False, compare=False
    )

    def __post_init__(self) -> None:
        index: dict[int, FoodRecord] = {}
        for food in self.foods:
            index.setdefault(food.id, food)
        object.__setattr__(self, "_by_id", index)

    def __len__(self) -> int:
        return len(self.foods)

    def get(self, food_id: int) -> FoodRecord | None:
        """Return a food by id, if present."""
        return self._by_id.get(food_id)

    def list_foods(self, limit: int = 50) -> list[FoodRecord]:
        """Return the first ``limit`` foods."""
        return list(self.foods[: max(limit, 0)])

    def search(self, query: str | None, limit: int = 10) -> list[FoodRecord]:
        """Substring search: whole-query matches first, then single-word hits."""
        if not query or not query.strip():
            return self.list_foods(limit)
        limit = max(limit, 0)
        term = query.lower().strip()
        exact = [food for food in self.foods if term in food.name.lower()]
        matched_ids = {id(food) for food in exact}
        words = [word for word in term.split() if word]
        partial = [
            food
            for food in self.foods
            if id(food) not in matched_ids
            and any(word in food.name.lower() for word in words)
        ]
        results = exact[:limit]
        if len(results) < limit:
            results.extend(partial[: limit - len(results)])
        return results

    def stats(self) -> dict[str, object]:
        """Return total count and per-category counts."""
        categories = {category.value: 0 for category in FoodCategory}
        for food in self.foods:
            categories[food.category.value] += 1
        return {"total_foods": len(self.foods), "categories": categories}
