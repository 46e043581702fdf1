"""Tests for nutrition CSV parsing."""

from dataclasses import replace

import pytest

from health_tracker.domain.catalog import (
    ABBREVIATED_LAYOUT,
    HEADER_LAYOUT,
    USDA_WIDE_LAYOUT,
    CatalogLayout,
)
from health_tracker.domain.nutrition import FoodCategory
from health_tracker.services.catalog import (
    layout_from_header,
    load_catalog,
    numeric_field,
    parse_catalog,
    split_csv_line,
)
from tests.conftest import SAMPLE_CSV, wide_row

NARROW_LAYOUT = CatalogLayout(
    name="narrow", columns={"name": 0, "calories": 1, "protein": 2}
)


def test_basic_load_with_narrow_layout() -> None:
    catalog = load_catalog(
        "name,calories,protein\nApple,95,0.5\nBanana,105,1.3\n", NARROW_LAYOUT
    )

    assert catalog.source == "csv"
    assert len(catalog) == 2
    apple, banana = catalog.foods
    assert (apple.name, apple.calories, apple.protein) == ("Apple", 95, 0.5)
    assert (banana.name, banana.calories, banana.protein) == ("Banana", 105, 1.3)
    assert apple.serving_size == "100 g"
    assert apple.fiber == 0
    assert apple.category == FoodCategory.FRUIT


def test_missing_id_falls_back_to_row_position() -> None:
    catalog = load_catalog(
        "name,calories,protein\nApple,95,0.5\nBanana,105,1.3\n", NARROW_LAYOUT
    )

    assert [food.id for food in catalog.foods] == [1, 2]


def test_missing_id_does_not_collide_with_explicit_id() -> None:
    layout = CatalogLayout(name="ids", columns={"id": 0, "name": 1, "calories": 2})
    catalog = load_catalog("id,name,calories\n,Apple,52\n1,Banana,89\n", layout)

    assert [food.id for food in catalog.foods] == [1, 2]
    assert catalog.get(1).name == "Apple"
    assert catalog.get(2).name == "Banana"


def test_split_csv_line_keeps_quoted_commas() -> None:
    assert split_csv_line('1,"Cheese, cheddar",100 g') == [
        "1",
        "Cheese, cheddar",
        "100 g",
    ]


def test_split_csv_line_only_treats_delimiter_adjacent_quotes_as_quoting() -> None:
    assert split_csv_line('1,12" pizza,3') == ["1", '12" pizza', "3"]
    assert split_csv_line(" a , b ,") == ["a", "b", ""]


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("33 g", 33.0),
        ("621 mg", 621.0),
        ("0.5", 0.5),
        ("", 0.0),
        ("n/a", 0.0),
        ("-4", 0.0),
        ("1.2.3", 1.2),
        (None, 0.0),
    ],
)
def test_numeric_field(raw: str | None, expected: float) -> None:
    assert numeric_field(raw) == expected


def _usda_text(*rows: str) -> str:
    header = wide_row({index: f"col{index}" for index in range(77)})
    return "\n".join([header, *rows]) + "\n"


def test_usda_wide_layout_maps_columns_and_strips_units() -> None:
    row = wide_row(
        {
            0: "7",
            1: '"Cheese, cheddar"',
            2: "100 g",
            3: "403",
            4: "33 g",
            5: "21 g",
            6: "99 mg",
            7: "621 mg",
            28: "721 mg",
            30: "0.68 mg",
            34: "98 mg",
            37: "24.9 g",
            61: "1.3 g",
            62: "0.0 g",
            63: "0.5 g",
            76: "36.75 g",
        }
    )

    catalog = load_catalog(_usda_text(row), USDA_WIDE_LAYOUT)

    food = catalog.foods[0]
    assert food.id == 7
    assert food.name == "Cheese, cheddar"
    assert food.calories == 403
    assert food.total_fat == 33
    assert food.cholesterol == 99
    assert food.sodium == 621
    assert food.calcium == 721
    assert food.iron == 0.68
    assert food.protein == 24.9
    assert food.carbohydrate == 1.3
    assert food.sugar == 0.5
    assert food.water == 36.75
    assert food.category == FoodCategory.DAIRY


def test_usda_wide_layout_drops_short_rows() -> None:
    good = wide_row({0: "1", 1: "Apple", 3: "52"})
    short = "2,Banana,100 g,89"

    catalog = parse_catalog(_usda_text(good, short), USDA_WIDE_LAYOUT)

    assert [food.name for food in catalog.foods] == ["Apple"]


def test_rows_without_names_or_with_placeholders_are_dropped() -> None:
    rows = [
        wide_row({0: "1", 1: "", 3: "10"}),
        wide_row({0: "2", 1: "Unknown Food 2", 3: "10"}),
        wide_row({0: "3", 1: "Carrot", 3: "41"}),
    ]

    catalog = parse_catalog(_usda_text(*rows), USDA_WIDE_LAYOUT)

    assert [food.name for food in catalog.foods] == ["Carrot"]


def test_abbreviated_layout_requires_header_width_and_calories() -> None:
    header = wide_row({index: f"col{index}" for index in range(56)}, width=56)
    rows = [
        wide_row({0: "1", 1: "Salmon", 3: "208", 37: "20", 52: "0"}, width=56),
        wide_row({0: "2", 1: "Water", 3: "0"}, width=56),
        "3,Too short,100 g,50",
    ]
    text = "\n".join([header, *rows])

    catalog = parse_catalog(text, ABBREVIATED_LAYOUT)

    assert [food.name for food in catalog.foods] == ["Salmon"]
    assert catalog.foods[0].protein == 20
    assert catalog.foods[0].category == FoodCategory.SEAFOOD


def test_max_rows_caps_ingestion() -> None:
    layout = replace(NARROW_LAYOUT, max_rows=1)

    catalog = parse_catalog("name,calories,protein\nApple,95,0.5\nBanana,105,1.3\n", layout)

    assert [food.name for food in catalog.foods] == ["Apple"]


def test_header_layout_matches_column_names() -> None:
    layout = layout_from_header("Food,Carbs,kcal,Protein,Unused")

    assert dict(layout.columns) == {
        "name": 0,
        "carbohydrate": 1,
        "calories": 2,
        "protein": 3,
    }


def test_header_layout_parses_sample() -> None:
    catalog = load_catalog(SAMPLE_CSV, HEADER_LAYOUT)

    assert len(catalog) == 4
    chicken = catalog.get(1)
    assert chicken is not None
    assert chicken.total_fat == 3.6
    assert chicken.category == FoodCategory.MEAT
    assert catalog.get(4).category == FoodCategory.GRAIN


def test_windows_line_endings_are_accepted() -> None:
    catalog = load_catalog(
        "name,calories,protein\r\nApple,95,0.5\r\nBanana,105,1.3\r\n", NARROW_LAYOUT
    )

    assert [food.name for food in catalog.foods] == ["Apple", "Banana"]


def test_load_is_idempotent() -> None:
    first = load_catalog(SAMPLE_CSV, HEADER_LAYOUT)
    second = load_catalog(SAMPLE_CSV, HEADER_LAYOUT)

    assert first == second


@pytest.mark.parametrize(
    "raw",
    [
        None,
        "",
        "name,calories,protein",
        "\x00\x01\xff garbage\n,,,\"\"\"\n\"",
        b"\x89PNG\r\n\x1a\n\x00\x00\x00\rIHDR",
    ],
)
def test_load_never_raises_and_falls_back(raw: str | bytes | None) -> None:
    catalog = load_catalog(raw, USDA_WIDE_LAYOUT)

    assert catalog.source == "fallback"
    assert len(catalog) >= 2
    assert catalog.foods[0].name == "Chicken Breast, cooked"
