"""Food catalog loading, parsing and lookup."""

import asyncio
import json
import logging
import re
from dataclasses import asdict, dataclass, field, replace
from pathlib import Path

from health_tracker.adapters.catalog_source import CatalogSource
from health_tracker.domain.catalog import Catalog, CatalogLayout, USDA_WIDE_LAYOUT
from health_tracker.domain.nutrition import (
    DEFAULT_SERVING_SIZE,
    NUTRIENT_FIELDS,
    FoodCategory,
    FoodRecord,
    categorize_food,
)

_logger = logging.getLogger(__name__)

_NON_NUMERIC = re.compile(r"[^0-9.\-]")
_FLOAT_PREFIX = re.compile(r"-?(?:[0-9]+\.?[0-9]*|\.[0-9]+)")
_INT_PREFIX = re.compile(r"\s*[-+]?[0-9]+")
_PLACEHOLDER_NAME = "unknown food"

_HEADER_ALIASES = {
    "food": "name",
    "food_name": "name",
    "description": "name",
    "serving": "serving_size",
    "kcal": "calories",
    "energy": "calories",
    "fat": "total_fat",
    "carbs": "carbohydrate",
    "carbohydrates": "carbohydrate",
    "sugars": "sugar",
    "fibre": "fiber",
}


def split_csv_line(line: str) -> list[str]:
    """Split one CSV line into trimmed fields.

    A quote directly after a comma (or at the start of the line) opens a
    quoted span, and a quote directly before a comma (or at the end of the
    line) closes it. Commas inside a span do not split. Any other quote is
    kept as a literal character.
    """
    fields: list[str] = []
    current: list[str] = []
    in_quotes = False
    last = len(line) - 1
    for index, char in enumerate(line):
        if char == '"' and (index == 0 or line[index - 1] == ","):
            in_quotes = True
        elif char == '"' and in_quotes and (index == last or line[index + 1] == ","):
            in_quotes = False
        elif char == "," and not in_quotes:
            fields.append("".join(current).strip())
            current = []
        else:
            current.append(char)
    fields.append("".join(current).strip())
    return fields


def numeric_field(text: str | None) -> float:
    """Parse a nutrient value, ignoring unit suffixes. Never raises."""
    if not text:
        return 0.0
    match = _FLOAT_PREFIX.match(_NON_NUMERIC.sub("", text))
    if match is None:
        return 0.0
    value = float(match.group())
    return value if value > 0 else 0.0


def _parse_id(text: str, position: int) -> int:
    match = _INT_PREFIX.match(text)
    if match is None:
        return position
    return int(match.group())


def layout_from_header(header_line: str) -> CatalogLayout:
    """Build a layout by matching header names to record fields."""
    known = {"id", "name", "serving_size", *NUTRIENT_FIELDS}
    columns: dict[str, int] = {}
    for index, raw_name in enumerate(split_csv_line(header_line)):
        key = raw_name.replace('"', "").strip().lower().replace(" ", "_")
        key = _HEADER_ALIASES.get(key, key)
        if key in known and key not in columns:
            columns[key] = index
    return CatalogLayout(name="header", columns=columns)


def _parse_row(
    values: list[str], position: int, layout: CatalogLayout
) -> FoodRecord | None:
    """Map one tokenized row to a record, or None when it must be discarded."""
    columns = layout.columns

    def text(field_name: str) -> str:
        index = columns.get(field_name)
        if index is None or index >= len(values):
            return ""
        return values[index]

    name = text("name").replace('"', "").strip()
    if not name or name.lower().startswith(_PLACEHOLDER_NAME):
        return None
    nutrients = {
        field_name: numeric_field(text(field_name))
        for field_name in NUTRIENT_FIELDS
        if field_name in columns
    }
    if layout.require_calories and nutrients.get("calories", 0.0) <= 0:
        return None
    serving_size = text("serving_size").replace('"', "").strip()
    return FoodRecord(
        id=_parse_id(text("id"), position),
        name=name,
        serving_size=serving_size or DEFAULT_SERVING_SIZE,
        category=categorize_food(name),
        **nutrients,
    )


def parse_catalog(raw_text: str, layout: CatalogLayout = USDA_WIDE_LAYOUT) -> Catalog:
    """Parse CSV text into a catalog. Malformed rows are dropped."""
    lines = raw_text.strip().splitlines()
    if not lines:
        return Catalog(foods=())
    if layout.columns_from_header:
        layout = replace(layout, columns=layout_from_header(lines[0]).columns)
    min_columns = layout.min_columns
    if min_columns is None:
        min_columns = len(split_csv_line(lines[0]))
    rows = lines[1:]
    if layout.max_rows is not None:
        rows = rows[: layout.max_rows]

    foods: list[FoodRecord] = []
    used_ids: set[int] = set()
    dropped = 0
    for position, line in enumerate(rows, start=1):
        values = split_csv_line(line)
        if len(values) < min_columns:
            dropped += 1
            continue
        food = _parse_row(values, position, layout)
        if food is None:
            dropped += 1
            continue
        if food.id in used_ids:
            unique_id = max(used_ids) + 1
            _logger.debug(
                "Duplicate food id %s for %r, using %s", food.id, food.name, unique_id
            )
            food = replace(food, id=unique_id)
        used_ids.add(food.id)
        foods.append(food)
    if dropped:
        _logger.debug("Dropped %s catalog rows (layout=%s)", dropped, layout.name)
    return Catalog(foods=tuple(foods))


def load_catalog(
    raw_text: str | bytes | None, layout: CatalogLayout = USDA_WIDE_LAYOUT
) -> Catalog:
    """Parse CSV text, falling back to built-in foods when nothing usable remains."""
    if raw_text is None:
        return fallback_catalog()
    if isinstance(raw_text, bytes):
        raw_text = raw_text.decode("utf-8", errors="replace")
    try:
        catalog = parse_catalog(raw_text, layout)
    except Exception:
        _logger.exception("Failed to parse nutrition catalog")
        return fallback_catalog()
    if not catalog.foods:
        _logger.warning("Nutrition catalog had no usable rows, using fallback data")
        return fallback_catalog()
    return catalog


def fallback_catalog() -> Catalog:
    """Small built-in catalog used when the source is unavailable."""
    return Catalog(
        foods=(
            FoodRecord(
                id=1,
                name="Chicken Breast, cooked",
                calories=165,
                protein=31,
                total_fat=3.6,
                sodium=74,
                calcium=15,
                iron=0.9,
                potassium=256,
                category=FoodCategory.MEAT,
            ),
            FoodRecord(
                id=2,
                name="Broccoli, raw",
                calories=34,
                protein=2.8,
                carbohydrate=7,
                total_fat=0.4,
                fiber=2.6,
                sugar=1.5,
                sodium=33,
                calcium=47,
                iron=0.7,
                potassium=316,
                category=FoodCategory.VEGETABLE,
            ),
        ),
        source="fallback",
    )


def food_to_dict(food: FoodRecord) -> dict[str, object]:
    """Return a JSON-ready dict for a food record."""
    payload = asdict(food)
    payload["category"] = food.category.value
    return payload


def export_catalog_json(catalog: Catalog, path: Path) -> int:
    """Write the catalog as a JSON array and return the record count."""
    path.parent.mkdir(parents=True, exist_ok=True)
    records = [food_to_dict(food) for food in catalog.foods]
    path.write_text(json.dumps(records, indent=2), encoding="utf-8")
    return len(records)


@dataclass
class CatalogService:
    """Owns the in-memory catalog and loads it once on demand."""

    source: CatalogSource
    layout: CatalogLayout = USDA_WIDE_LAYOUT
    _catalog: Catalog | None = field(default=None, init=False, repr=False)
    _pending: "asyncio.Future[Catalog] | None" = field(
        default=None, init=False, repr=False
    )

    @property
    def is_loaded(self) -> bool:
        return self._catalog is not None

    async def ensure_loaded(self) -> Catalog:
        """Return the cached catalog, loading it if needed.

        Concurrent first calls share a single in-flight load.
        """
        if self._catalog is not None:
            return self._catalog
        if self._pending is None:
            self._pending = asyncio.ensure_future(self._load())
        pending = self._pending
        catalog = await asyncio.shield(pending)
        if self._pending is pending:
            self._catalog = catalog
            self._pending = None
        return self._catalog if self._catalog is not None else catalog

    async def reload(self) -> Catalog:
        """Replace the cached catalog with a fresh load."""
        catalog = await self._load()
        # An earlier first load still in flight must not overwrite this result.
        self._pending = None
        self._catalog = catalog
        return catalog

    async def search(self, query: str | None, limit: int = 10) -> list[FoodRecord]:
        """Search foods by name."""
        catalog = await self.ensure_loaded()
        return catalog.search(query, limit)

    async def list_foods(self, limit: int = 50) -> list[FoodRecord]:
        """Return the first foods of the catalog."""
        catalog = await self.ensure_loaded()
        return catalog.list_foods(limit)

    async def get_food(self, food_id: int) -> FoodRecord | None:
        """Return a food by id, if present."""
        catalog = await self.ensure_loaded()
        return catalog.get(food_id)

    async def stats(self) -> dict[str, object]:
        """Return catalog counts and the source it came from."""
        catalog = await self.ensure_loaded()
        return {**catalog.stats(), "source": catalog.source}

    async def _load(self) -> Catalog:
        try:
            raw_text = await self.source.read_text()
        except Exception:
            _logger.exception("Failed to read nutrition catalog source")
            return fallback_catalog()
        catalog = await asyncio.to_thread(load_catalog, raw_text, self.layout)
        _logger.info(
            "Loaded %s foods into catalog (layout=%s, source=%s)",
            len(catalog),
            self.layout.name,
            catalog.source,
        )
        return catalog
