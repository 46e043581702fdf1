"""Heuristic health scoring for a food portion."""

from collections.abc import Callable
from dataclasses import dataclass

from health_tracker.domain.health import HealthLevel, HealthReport
from health_tracker.domain.nutrition import FoodRecord, NutritionSnapshot

BASE_SCORE = 50
MIN_SCORE = 0
MAX_SCORE = 100
LOW_SCORE_THRESHOLD = 40

LOW_SCORE_RECOMMENDATIONS = (
    "Consider this as an occasional treat rather than a regular choice",
    "Balance your day with nutrient-dense vegetables and lean proteins",
)


@dataclass(frozen=True)
class FoodFacts:
    """Inputs a health rule can inspect."""

    name: str
    calories: float
    protein: float
    carbs: float
    total_fat: float
    fiber: float
    sugar: float
    sodium: float

    @classmethod
    def from_snapshot(
        cls, food: FoodRecord, snapshot: NutritionSnapshot
    ) -> "FoodFacts":
        return cls(
            name=food.name.lower(),
            calories=snapshot.calories,
            protein=snapshot.protein,
            carbs=snapshot.carbs,
            total_fat=snapshot.total_fat,
            fiber=snapshot.fiber,
            sugar=snapshot.sugar,
            sodium=snapshot.sodium,
        )

    @property
    def _calorie_basis(self) -> float:
        return max(self.calories, 1)

    @property
    def protein_density(self) -> float:
        return self.protein / self._calorie_basis

    @property
    def fiber_density(self) -> float:
        return self.fiber / self._calorie_basis

    @property
    def sugar_density(self) -> float:
        return self.sugar / self._calorie_basis

    @property
    def sodium_density(self) -> float:
        return self.sodium / self._calorie_basis

    def name_has(self, *keywords: str) -> bool:
        return any(keyword in self.name for keyword in keywords)


@dataclass(frozen=True)
class HealthRule:
    """One scoring adjustment and the messages it contributes when it fires."""

    name: str
    predicate: Callable[[FoodFacts], bool]
    score_delta: int
    highlight: str | None = None
    warning: str | None = None
    recommendation: str | None = None
    alternative: str | None = None


PROCESSED_KEYWORDS = ("cookies", "candy", "cake", "soda")
FRIED_KEYWORDS = ("fried", "chips")
WHOLE_FOOD_KEYWORDS = ("broccoli", "spinach", "kale", "quinoa")
LEAN_PROTEIN_KEYWORDS = ("chicken breast", "salmon", "tofu", "lentils")
NUT_KEYWORDS = ("nuts", "seeds", "almond", "walnut")

HEALTH_RULES: tuple[HealthRule, ...] = (
    HealthRule(
        name="high_protein_density",
        predicate=lambda facts: facts.protein_density > 0.15,
        score_delta=15,
        highlight="High in protein - great for muscle building and satiety",
    ),
    HealthRule(
        name="high_fiber_density",
        predicate=lambda facts: facts.fiber_density > 0.08,
        score_delta=15,
        highlight=(
            "High in fiber - supports digestive health and helps you feel full"
        ),
    ),
    HealthRule(
        name="nutrient_dense_low_calorie",
        predicate=lambda facts: (
            facts.calories < 100 and (facts.protein > 5 or facts.fiber > 3)
        ),
        score_delta=10,
        highlight="Nutrient-dense with relatively few calories",
    ),
    HealthRule(
        name="empty_calories",
        predicate=lambda facts: (
            facts.calories > 400
            and facts.protein_density < 0.05
            and facts.fiber_density < 0.02
        ),
        score_delta=-20,
        warning=(
            "High in calories but low in beneficial nutrients like protein and fiber"
        ),
        recommendation=(
            "Consider pairing with protein-rich foods or reducing portion size"
        ),
    ),
    HealthRule(
        name="high_sugar_density",
        predicate=lambda facts: facts.sugar_density > 0.25,
        score_delta=-15,
        warning="High in sugar - may cause energy spikes and crashes",
        recommendation=(
            "Try to balance with protein or healthy fats to slow sugar absorption"
        ),
    ),
    HealthRule(
        name="high_sodium_density",
        predicate=lambda facts: facts.sodium_density > 2,
        score_delta=-10,
        warning="High in sodium - may contribute to high blood pressure",
        recommendation="Drink plenty of water and balance with potassium-rich foods",
    ),
    HealthRule(
        name="high_fat_and_calories",
        predicate=lambda facts: facts.total_fat > 20 and facts.calories > 300,
        score_delta=-10,
        warning="High in calories and fat - consider a smaller portion",
    ),
    HealthRule(
        name="refined_carbs",
        predicate=lambda facts: facts.carbs > 50 and facts.fiber < 3,
        score_delta=-8,
        warning="High in refined carbs with little fiber",
        recommendation="Look for whole grain alternatives for sustained energy",
    ),
    HealthRule(
        name="processed_food",
        predicate=lambda facts: facts.name_has(*PROCESSED_KEYWORDS),
        score_delta=-15,
        warning="Highly processed food - limited nutritional value",
        alternative="Try fresh fruits, nuts, or dark chocolate for a healthier treat",
    ),
    HealthRule(
        name="fried_food",
        predicate=lambda facts: facts.name_has(*FRIED_KEYWORDS),
        score_delta=-12,
        warning="Fried food - high in unhealthy fats",
        alternative="Consider baked, grilled, or air-fried alternatives",
    ),
    HealthRule(
        name="whole_food",
        predicate=lambda facts: facts.name_has(*WHOLE_FOOD_KEYWORDS),
        score_delta=20,
        highlight="Excellent choice! This is a nutrient-dense whole food",
    ),
    HealthRule(
        name="lean_protein",
        predicate=lambda facts: facts.name_has(*LEAN_PROTEIN_KEYWORDS),
        score_delta=15,
        highlight="Great protein source for muscle building and repair",
    ),
    HealthRule(
        name="nuts_and_seeds",
        predicate=lambda facts: facts.name_has(*NUT_KEYWORDS),
        score_delta=10,
        highlight="Good source of healthy fats and protein",
    ),
    HealthRule(
        name="calorie_dense_nuts",
        predicate=lambda facts: facts.name_has(*NUT_KEYWORDS) and facts.calories > 500,
        score_delta=0,
        recommendation="Nuts are calorie-dense - a small handful is usually enough",
    ),
)

# First matching keyword group wins.
_ALTERNATIVES: tuple[tuple[tuple[str, ...], str], ...] = (
    (("white rice",), "Brown rice, quinoa, or cauliflower rice"),
    (("white bread",), "Whole grain bread, sourdough, or lettuce wraps"),
    (("pasta",), "Whole wheat pasta, zucchini noodles, or shirataki noodles"),
    (("soda", "cola"), "Sparkling water with fruit, herbal tea, or infused water"),
    (("chips",), "Baked vegetable chips, air-popped popcorn, or mixed nuts"),
    (("ice cream",), "Frozen yogurt, nice cream (frozen bananas), or sorbet"),
    (("candy",), "Fresh berries, dates, or dark chocolate (70%+ cacao)"),
    (("cookies",), "Oat cookies with nuts, energy balls, or fruit with nut butter"),
    (("fried",), "Baked, grilled, or air-fried versions of the same food"),
)


def analyze_food(
    food: FoodRecord | None,
    snapshot: NutritionSnapshot | None,
    rules: tuple[HealthRule, ...] = HEALTH_RULES,
) -> HealthReport | None:
    """Score a food portion and collect the messages of every rule that fires."""
    if food is None or snapshot is None:
        return None

    facts = FoodFacts.from_snapshot(food, snapshot)
    score = BASE_SCORE
    warnings: list[str] = []
    highlights: list[str] = []
    recommendations: list[str] = []
    alternatives: list[str] = []
    for rule in rules:
        if not rule.predicate(facts):
            continue
        score += rule.score_delta
        if rule.highlight:
            highlights.append(rule.highlight)
        if rule.warning:
            warnings.append(rule.warning)
        if rule.recommendation:
            recommendations.append(rule.recommendation)
        if rule.alternative:
            alternatives.append(rule.alternative)

    score = max(MIN_SCORE, min(MAX_SCORE, score))
    if score < LOW_SCORE_THRESHOLD:
        recommendations.extend(LOW_SCORE_RECOMMENDATIONS)

    return HealthReport(
        score=score,
        level=HealthLevel.from_score(score),
        warnings=tuple(warnings),
        highlights=tuple(highlights),
        recommendations=tuple(recommendations),
        alternatives=tuple(alternatives),
    )


def healthier_alternatives(food_name: str) -> list[str]:
    """Return swap suggestions for a food name, or an empty list."""
    name = food_name.lower()
    for keywords, suggestion in _ALTERNATIVES:
        if any(keyword in name for keyword in keywords):
            return [suggestion]
    return []
