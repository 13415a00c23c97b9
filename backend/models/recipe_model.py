from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Any, FrozenSet, Optional, Tuple
from enum import Enum
import uuid

from ..utils.helpers import format_ingredients_list, normalize_ingredient

class LabeledEnum(str, Enum):
    """String enum with a human label and lenient parsing"""

    @property
    def display_name(self) -> str:
        return self.value.capitalize()

    @classmethod
    def parse(cls, value: Any) -> "LabeledEnum":
        """Look up a member by value, name or display name, ignoring case"""
        if isinstance(value, cls):
            return value

        wanted = str(value).strip().lower()
        for member in cls:
            if wanted in (member.value.lower(), member.name.lower(), member.display_name.lower()):
                return member
        raise ValueError(f"Unknown {cls.__name__} value: {value!r}")

class Cuisine(LabeledEnum):
    ITALIAN = "italian"
    MEXICAN = "mexican"
    INDIAN = "indian"
    CHINESE = "chinese"
    AMERICAN = "american"
    FRENCH = "french"
    JAPANESE = "japanese"
    MEDITERRANEAN = "mediterranean"
    THAI = "thai"
    KOREAN = "korean"
    OTHER = "other"

class Difficulty(LabeledEnum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"

_DIETARY_LABELS = {
    "vegetarian": "Vegetarian",
    "vegan": "Vegan",
    "glutenFree": "Gluten-Free",
    "dairyFree": "Dairy-Free",
    "keto": "Keto",
    "paleo": "Paleo",
    "lowCarb": "Low-Carb",
    "lowSodium": "Low-Sodium",
}

class DietaryTag(LabeledEnum):
    VEGETARIAN = "vegetarian"
    VEGAN = "vegan"
    GLUTEN_FREE = "glutenFree"
    DAIRY_FREE = "dairyFree"
    KETO = "keto"
    PALEO = "paleo"
    LOW_CARB = "lowCarb"
    LOW_SODIUM = "lowSodium"

    @property
    def display_name(self) -> str:
        return _DIETARY_LABELS[self.value]

class Recipe(BaseModel):
    """Immutable recipe record with its filterable attributes"""
    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=lambda: uuid.uuid4().hex, description="Opaque unique identifier")
    title: str = Field(..., min_length=1, description="Name of the recipe")
    cuisine: Cuisine = Field(..., description="Cuisine the dish belongs to")
    difficulty: Difficulty = Field(..., description="Difficulty level")
    cook_time_minutes: int = Field(..., gt=0, description="Total cooking time in minutes")
    servings: int = Field(4, gt=0, description="Number of people served")
    ingredients: Tuple[str, ...] = Field(default=(), description="Ordered ingredient names")
    dietary_tags: FrozenSet[DietaryTag] = Field(default=frozenset(), description="Dietary classifications")
    rating: float = Field(0.0, ge=0.0, le=5.0, description="Average rating out of five")
    description: str = Field("", description="Short description for display")
    image_url: Optional[str] = Field(None, description="Optional image location")

    @field_validator("title")
    @classmethod
    def title_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("title must not be blank")
        return value

    @field_validator("cuisine", mode="before")
    @classmethod
    def parse_cuisine(cls, value: Any) -> Cuisine:
        return Cuisine.parse(value)

    @field_validator("difficulty", mode="before")
    @classmethod
    def parse_difficulty(cls, value: Any) -> Difficulty:
        return Difficulty.parse(value)

    @field_validator("dietary_tags", mode="before")
    @classmethod
    def parse_dietary_tags(cls, value: Any) -> FrozenSet[DietaryTag]:
        if value is None:
            return frozenset()
        if isinstance(value, (str, DietaryTag)):
            value = [value]
        return frozenset(DietaryTag.parse(tag) for tag in value)

    @classmethod
    def from_flags(
        cls,
        *,
        is_vegan: bool = False,
        is_vegetarian: bool = False,
        is_gluten_free: bool = False,
        dietary_tags: Any = (),
        **fields: Any,
    ) -> "Recipe":
        """Build a recipe from the boolean dietary flag representation"""
        tags = {DietaryTag.parse(tag) for tag in dietary_tags}
        if is_vegan:
            tags.add(DietaryTag.VEGAN)
        if is_vegetarian:
            tags.add(DietaryTag.VEGETARIAN)
        if is_gluten_free:
            tags.add(DietaryTag.GLUTEN_FREE)
        return cls(dietary_tags=frozenset(tags), **fields)

    @property
    def is_vegan(self) -> bool:
        return DietaryTag.VEGAN in self.dietary_tags

    @property
    def is_vegetarian(self) -> bool:
        return DietaryTag.VEGETARIAN in self.dietary_tags

    @property
    def is_gluten_free(self) -> bool:
        return DietaryTag.GLUTEN_FREE in self.dietary_tags

    @property
    def ingredient_set(self) -> FrozenSet[str]:
        """Lowercased ingredient tokens used by include/exclude filters"""
        return frozenset(normalize_ingredient(ingredient) for ingredient in self.ingredients)

    def ingredient_preview(self, limit: int = 3) -> str:
        return format_ingredients_list(self.ingredients, limit=limit)
