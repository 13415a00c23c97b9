import locale
import logging
import math
import unicodedata
from typing import Callable, Iterable, List, Sequence, Tuple

from ..config.settings import settings
from ..database.catalog import load_catalog
from ..models.filter_model import FilterSpec, SortOption
from ..models.recipe_model import Recipe

logger = logging.getLogger(__name__)

Predicate = Callable[[Recipe], bool]

def default_spec() -> FilterSpec:
    """A filter spec with every field at its default"""
    return FilterSpec(**settings.get_filter_defaults())

def reset_filters(spec: FilterSpec) -> FilterSpec:
    """Return a fresh default spec; `spec` itself is left untouched"""
    return default_spec()

def clear_filters(spec: FilterSpec) -> FilterSpec:
    """Reset `spec` in place and return it"""
    defaults = default_spec()
    for name in FilterSpec.model_fields:
        setattr(spec, name, getattr(defaults, name))
    return spec

def build_predicates(spec: FilterSpec) -> List[Predicate]:
    """
    Translate a spec into the list of predicates a recipe must satisfy.

    Filters sitting at their neutral value contribute nothing. The numeric
    bounds always apply; fractional maxima are floored before comparing.
    """
    predicates: List[Predicate] = []

    search = spec.search_text.strip().casefold()
    if search:
        predicates.append(
            lambda recipe: search in recipe.title.casefold()
            or any(search in ingredient.casefold() for ingredient in recipe.ingredients)
        )

    cuisines = frozenset(spec.cuisines)
    if cuisines:
        predicates.append(lambda recipe: recipe.cuisine in cuisines)

    difficulties = frozenset(spec.difficulties)
    if difficulties:
        predicates.append(lambda recipe: recipe.difficulty in difficulties)

    requirements = frozenset(spec.dietary_requirements)
    if requirements:
        predicates.append(lambda recipe: recipe.dietary_tags >= requirements)

    max_cook_time = _floor_bound(spec.max_cook_time_minutes)
    predicates.append(lambda recipe: recipe.cook_time_minutes <= max_cook_time)

    min_rating = spec.min_rating
    predicates.append(lambda recipe: recipe.rating >= min_rating)

    max_servings = _floor_bound(spec.max_servings)
    predicates.append(lambda recipe: recipe.servings <= max_servings)

    include = frozenset(spec.include_ingredients)
    if include:
        predicates.append(lambda recipe: include <= recipe.ingredient_set)

    exclude = frozenset(spec.exclude_ingredients)
    if exclude:
        predicates.append(lambda recipe: exclude.isdisjoint(recipe.ingredient_set))

    return predicates

def _floor_bound(value: float) -> float:
    # An infinite bound has no integer floor and already admits every value
    return value if math.isinf(value) else math.floor(value)

def _fold_accents(text: str) -> str:
    decomposed = unicodedata.normalize("NFKD", text)
    return "".join(char for char in decomposed if not unicodedata.combining(char))

def title_sort_key(recipe: Recipe) -> Tuple[str, str]:
    """
    Case-insensitive, locale-aware ordering key for titles.

    Accents are folded away for the primary key so "Éclair" files under E
    even when the process still runs in the C locale; the full title breaks
    ties.
    """
    title = recipe.title.casefold()
    return locale.strxfrm(_fold_accents(title)), locale.strxfrm(title)

_SORT_KEYS = {
    SortOption.ALPHABETICAL: title_sort_key,
    SortOption.COOK_TIME: lambda recipe: recipe.cook_time_minutes,
    SortOption.RATING: lambda recipe: recipe.rating,
}

def sort_recipes(recipes: Iterable[Recipe], sort_key: SortOption, ascending: bool = True) -> List[Recipe]:
    """
    Stable sort. `reverse=True` inverts each comparison instead of
    reversing the output, so equal keys keep their input order both ways.
    """
    return sorted(recipes, key=_SORT_KEYS[sort_key], reverse=not ascending)

def query(recipes: Iterable[Recipe], spec: FilterSpec) -> List[Recipe]:
    """Recipes matching every active filter in `spec`, in the requested order"""
    predicates = build_predicates(spec)
    matched = [recipe for recipe in recipes if all(predicate(recipe) for predicate in predicates)]
    result = sort_recipes(matched, spec.sort_key, spec.sort_ascending)
    logger.debug(
        f"Query matched {len(result)} recipes "
        f"(sort={spec.sort_key.value}, ascending={spec.sort_ascending})"
    )
    return result

class RecipeQueryService:
    """Filter-and-sort over a fixed, read-only recipe catalog"""

    def __init__(self, recipes: Sequence[Recipe]):
        self._catalog: Tuple[Recipe, ...] = tuple(recipes)

    @property
    def catalog(self) -> Tuple[Recipe, ...]:
        return self._catalog

    def search(self, spec: FilterSpec) -> List[Recipe]:
        return query(self._catalog, spec)

    def count(self, spec: FilterSpec) -> int:
        return len(self.search(spec))

# Global service instance over the seed catalog
query_service = RecipeQueryService(load_catalog())
