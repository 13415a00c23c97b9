import logging
import math
from enum import Enum
from typing import Any, Optional, Set

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

from .recipe_model import Cuisine, DietaryTag, Difficulty
from ..config.settings import settings
from ..utils.helpers import normalize_ingredient_set, sanitize_input

logger = logging.getLogger(__name__)

class SortOption(str, Enum):
    ALPHABETICAL = "alphabetical"
    COOK_TIME = "cookTime"
    RATING = "rating"

    @property
    def display_name(self) -> str:
        return {
            SortOption.ALPHABETICAL: "Alphabetical",
            SortOption.COOK_TIME: "Cook Time",
            SortOption.RATING: "Rating",
        }[self]

class FilterSpec(BaseModel):
    """
    Caller-owned filter and sort criteria.

    Empty selection sets mean "match all". Numeric bounds are clamped on
    construction and on assignment rather than rejected.
    """
    model_config = ConfigDict(validate_assignment=True)

    search_text: str = Field("", description="Matched against title or any ingredient")
    cuisines: Set[Cuisine] = Field(default_factory=set, description="Any of these cuisines")
    difficulties: Set[Difficulty] = Field(default_factory=set, description="Any of these difficulties")
    dietary_requirements: Set[DietaryTag] = Field(default_factory=set, description="All of these tags")
    max_cook_time_minutes: float = Field(
        default_factory=lambda: settings.DEFAULT_MAX_COOK_TIME,
        description="Inclusive upper bound on cook time",
    )
    min_rating: float = Field(0.0, description="Inclusive lower bound on rating")
    max_servings: float = Field(
        default_factory=lambda: settings.DEFAULT_MAX_SERVINGS,
        description="Inclusive upper bound on servings",
    )
    include_ingredients: Set[str] = Field(default_factory=set, description="Every one must be present")
    exclude_ingredients: Set[str] = Field(default_factory=set, description="None may be present")
    sort_key: SortOption = SortOption.ALPHABETICAL
    sort_ascending: bool = True

    @field_validator("search_text", mode="before")
    @classmethod
    def clean_search_text(cls, value: Any) -> str:
        return sanitize_input(value, max_length=settings.MAX_SEARCH_LENGTH)

    @field_validator("cuisines", mode="before")
    @classmethod
    def parse_cuisines(cls, value: Any) -> Set[Cuisine]:
        return {Cuisine.parse(item) for item in _as_iterable(value)}

    @field_validator("difficulties", mode="before")
    @classmethod
    def parse_difficulties(cls, value: Any) -> Set[Difficulty]:
        return {Difficulty.parse(item) for item in _as_iterable(value)}

    @field_validator("dietary_requirements", mode="before")
    @classmethod
    def parse_dietary_requirements(cls, value: Any) -> Set[DietaryTag]:
        return {DietaryTag.parse(item) for item in _as_iterable(value)}

    @field_validator("include_ingredients", "exclude_ingredients", mode="before")
    @classmethod
    def parse_ingredients(cls, value: Any) -> Set[str]:
        return normalize_ingredient_set(value)

    @field_validator("max_cook_time_minutes", "max_servings")
    @classmethod
    def clamp_upper_bound(cls, value: float, info: ValidationInfo) -> float:
        if math.isnan(value):
            default = settings.get_filter_defaults()[info.field_name]
            logger.debug(f"{info.field_name} is NaN, using default {default}")
            return default
        if value < 0:
            logger.debug(f"Clamping {info.field_name} from {value} to 0")
            return 0.0
        if math.isinf(value):
            logger.debug(f"{info.field_name} is unbounded, no upper limit applies")
        return value

    @field_validator("min_rating")
    @classmethod
    def clamp_rating(cls, value: float) -> float:
        if math.isnan(value):
            logger.debug("min_rating is NaN, using 0")
            return settings.RATING_MIN
        clamped = min(max(value, settings.RATING_MIN), settings.RATING_MAX)
        if clamped != value:
            logger.debug(f"Clamping min_rating from {value} to {clamped}")
        return clamped

    # Single-select sugar: None means "all"

    @property
    def selected_cuisine(self) -> Optional[Cuisine]:
        return next(iter(self.cuisines)) if len(self.cuisines) == 1 else None

    @selected_cuisine.setter
    def selected_cuisine(self, cuisine: Optional[Any]) -> None:
        self.select_cuisine(cuisine)

    def select_cuisine(self, cuisine: Optional[Any]) -> None:
        self.cuisines = set() if cuisine is None else {cuisine}

    @property
    def selected_difficulty(self) -> Optional[Difficulty]:
        return next(iter(self.difficulties)) if len(self.difficulties) == 1 else None

    @selected_difficulty.setter
    def selected_difficulty(self, difficulty: Optional[Any]) -> None:
        self.select_difficulty(difficulty)

    def select_difficulty(self, difficulty: Optional[Any]) -> None:
        self.difficulties = set() if difficulty is None else {difficulty}

    # Boolean dietary sugar

    def set_requirement(self, tag: Any, required: bool) -> None:
        tag = DietaryTag.parse(tag)
        requirements = set(self.dietary_requirements)
        if required:
            requirements.add(tag)
        else:
            requirements.discard(tag)
        self.dietary_requirements = requirements

    @property
    def require_vegan(self) -> bool:
        return DietaryTag.VEGAN in self.dietary_requirements

    @require_vegan.setter
    def require_vegan(self, required: bool) -> None:
        self.set_requirement(DietaryTag.VEGAN, required)

    @property
    def require_vegetarian(self) -> bool:
        return DietaryTag.VEGETARIAN in self.dietary_requirements

    @require_vegetarian.setter
    def require_vegetarian(self, required: bool) -> None:
        self.set_requirement(DietaryTag.VEGETARIAN, required)

    @property
    def require_gluten_free(self) -> bool:
        return DietaryTag.GLUTEN_FREE in self.dietary_requirements

    @require_gluten_free.setter
    def require_gluten_free(self, required: bool) -> None:
        self.set_requirement(DietaryTag.GLUTEN_FREE, required)

    # CSV sugar for the ingredient text fields

    @property
    def include_ingredients_csv(self) -> str:
        return ", ".join(sorted(self.include_ingredients))

    @include_ingredients_csv.setter
    def include_ingredients_csv(self, raw: str) -> None:
        self.include_ingredients = raw

    @property
    def exclude_ingredients_csv(self) -> str:
        return ", ".join(sorted(self.exclude_ingredients))

    @exclude_ingredients_csv.setter
    def exclude_ingredients_csv(self, raw: str) -> None:
        self.exclude_ingredients = raw

    def snapshot(self) -> "FilterSpec":
        """Independent copy, safe to hand to another thread"""
        return self.model_copy(deep=True)

    def active_filter_count(self) -> int:
        """How many filters differ from their neutral default"""
        defaults = settings.get_filter_defaults()
        active = [
            bool(self.search_text.strip()),
            bool(self.cuisines),
            bool(self.difficulties),
            bool(self.dietary_requirements),
            self.max_cook_time_minutes != defaults["max_cook_time_minutes"],
            self.min_rating != defaults["min_rating"],
            self.max_servings != defaults["max_servings"],
            bool(self.include_ingredients),
            bool(self.exclude_ingredients),
        ]
        return sum(active)

def _as_iterable(value: Any) -> Any:
    if value is None:
        return ()
    if isinstance(value, (str, Enum)):
        return (value,)
    return value
