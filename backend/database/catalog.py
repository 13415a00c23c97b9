import logging
from typing import Iterable, Optional, Tuple

from ..models.recipe_model import Cuisine, DietaryTag, Difficulty, Recipe

logger = logging.getLogger(__name__)

SAMPLE_RECIPES: Tuple[Recipe, ...] = (
    Recipe(
        id="spaghetti-carbonara",
        title="Spaghetti Carbonara",
        cuisine=Cuisine.ITALIAN,
        difficulty=Difficulty.MEDIUM,
        cook_time_minutes=30,
        servings=4,
        ingredients=("Spaghetti", "Eggs", "Parmesan cheese", "Pancetta", "Black pepper"),
        dietary_tags={DietaryTag.VEGETARIAN},
        rating=4.8,
        description="Classic Italian pasta dish with eggs, cheese, and pancetta.",
    ),
    Recipe(
        id="chicken-tikka-masala",
        title="Chicken Tikka Masala",
        cuisine=Cuisine.INDIAN,
        difficulty=Difficulty.MEDIUM,
        cook_time_minutes=45,
        servings=6,
        ingredients=("Chicken", "Yogurt", "Tomatoes", "Cream", "Spices"),
        dietary_tags={DietaryTag.GLUTEN_FREE},
        rating=4.6,
        description="Creamy and flavorful Indian curry with tender chicken.",
    ),
    Recipe(
        id="vegetable-stir-fry",
        title="Vegetable Stir Fry",
        cuisine=Cuisine.CHINESE,
        difficulty=Difficulty.EASY,
        cook_time_minutes=15,
        servings=3,
        ingredients=("Mixed vegetables", "Soy sauce", "Garlic", "Ginger", "Sesame oil"),
        dietary_tags={DietaryTag.VEGETARIAN, DietaryTag.VEGAN, DietaryTag.GLUTEN_FREE},
        rating=4.2,
        description="Quick and healthy vegetable stir fry with Asian flavors.",
    ),
    Recipe(
        id="beef-tacos",
        title="Beef Tacos",
        cuisine=Cuisine.MEXICAN,
        difficulty=Difficulty.EASY,
        cook_time_minutes=25,
        servings=4,
        ingredients=("Ground beef", "Taco shells", "Cheese", "Lettuce", "Tomatoes"),
        dietary_tags={DietaryTag.GLUTEN_FREE},
        rating=4.5,
        description="Delicious and easy beef tacos with fresh toppings.",
    ),
    Recipe(
        id="caesar-salad",
        title="Caesar Salad",
        cuisine=Cuisine.AMERICAN,
        difficulty=Difficulty.EASY,
        cook_time_minutes=10,
        servings=2,
        ingredients=("Romaine lettuce", "Parmesan cheese", "Croutons", "Caesar dressing"),
        dietary_tags={DietaryTag.VEGETARIAN},
        rating=4.0,
        description="Fresh and crispy Caesar salad with homemade dressing.",
    ),
    Recipe(
        id="ratatouille",
        title="Ratatouille",
        cuisine=Cuisine.FRENCH,
        difficulty=Difficulty.MEDIUM,
        cook_time_minutes=60,
        servings=6,
        ingredients=("Eggplant", "Zucchini", "Tomatoes", "Bell peppers", "Herbs"),
        dietary_tags={DietaryTag.VEGETARIAN, DietaryTag.VEGAN, DietaryTag.GLUTEN_FREE},
        rating=4.3,
        description="Traditional French vegetable stew with Mediterranean flavors.",
    ),
    Recipe(
        id="salmon-teriyaki",
        title="Salmon Teriyaki",
        cuisine=Cuisine.JAPANESE,
        difficulty=Difficulty.MEDIUM,
        cook_time_minutes=20,
        servings=2,
        ingredients=("Salmon", "Teriyaki sauce", "Rice", "Broccoli", "Sesame seeds"),
        dietary_tags={DietaryTag.GLUTEN_FREE, DietaryTag.DAIRY_FREE},
        rating=4.7,
        description="Glazed salmon with teriyaki sauce served over rice.",
    ),
    Recipe(
        id="pad-thai",
        title="Pad Thai",
        cuisine=Cuisine.THAI,
        difficulty=Difficulty.HARD,
        cook_time_minutes=35,
        servings=4,
        ingredients=("Rice noodles", "Shrimp", "Bean sprouts", "Peanuts", "Lime"),
        dietary_tags={DietaryTag.GLUTEN_FREE},
        rating=4.4,
        description="Authentic Thai stir-fried noodles with shrimp and vegetables.",
    ),
    Recipe(
        id="greek-salad",
        title="Greek Salad",
        cuisine=Cuisine.MEDITERRANEAN,
        difficulty=Difficulty.EASY,
        cook_time_minutes=15,
        servings=4,
        ingredients=("Tomatoes", "Cucumber", "Feta cheese", "Olives", "Olive oil"),
        dietary_tags={DietaryTag.VEGETARIAN, DietaryTag.GLUTEN_FREE},
        rating=4.1,
        description="Fresh Mediterranean salad with feta cheese and olives.",
    ),
    Recipe(
        id="bibimbap",
        title="Bibimbap",
        cuisine=Cuisine.KOREAN,
        difficulty=Difficulty.MEDIUM,
        cook_time_minutes=40,
        servings=2,
        ingredients=("Rice", "Mixed vegetables", "Beef", "Egg", "Gochujang"),
        dietary_tags={DietaryTag.GLUTEN_FREE},
        rating=4.6,
        description="Korean rice bowl with seasoned vegetables and meat.",
    ),
    # Flag-style entries; servings were not recorded for these
    Recipe.from_flags(
        id="margherita-pizza",
        title="Margherita Pizza",
        cuisine=Cuisine.ITALIAN,
        difficulty=Difficulty.MEDIUM,
        cook_time_minutes=30,
        ingredients=("flour", "tomato", "mozzarella", "basil", "olive oil"),
        is_vegetarian=True,
        rating=4.5,
    ),
    Recipe.from_flags(
        id="chicken-tacos",
        title="Chicken Tacos",
        cuisine=Cuisine.MEXICAN,
        difficulty=Difficulty.EASY,
        cook_time_minutes=20,
        ingredients=("chicken", "tortilla", "onion", "cilantro", "lime"),
        rating=4.2,
    ),
    Recipe.from_flags(
        id="chana-masala",
        title="Chana Masala",
        cuisine=Cuisine.INDIAN,
        difficulty=Difficulty.MEDIUM,
        cook_time_minutes=40,
        ingredients=("chickpeas", "tomato", "onion", "garlic", "garam masala"),
        is_vegan=True,
        is_vegetarian=True,
        rating=4.7,
    ),
    Recipe.from_flags(
        id="sushi-rolls",
        title="Sushi Rolls",
        cuisine=Cuisine.JAPANESE,
        difficulty=Difficulty.HARD,
        cook_time_minutes=60,
        ingredients=("rice", "nori", "salmon", "avocado", "cucumber"),
        rating=4.8,
    ),
    Recipe.from_flags(
        id="beef-bourguignon",
        title="Beef Bourguignon",
        cuisine=Cuisine.FRENCH,
        difficulty=Difficulty.HARD,
        cook_time_minutes=180,
        ingredients=("beef", "red wine", "carrot", "onion", "mushroom"),
        rating=4.9,
    ),
    Recipe.from_flags(
        id="general-tsos-cauliflower",
        title="General Tso's Cauliflower",
        cuisine=Cuisine.CHINESE,
        difficulty=Difficulty.MEDIUM,
        cook_time_minutes=35,
        ingredients=("cauliflower", "soy sauce", "garlic", "ginger", "rice"),
        is_vegan=True,
        is_vegetarian=True,
        rating=4.4,
    ),
    Recipe.from_flags(
        id="gluten-free-pancakes",
        title="Gluten-Free Pancakes",
        cuisine=Cuisine.AMERICAN,
        difficulty=Difficulty.EASY,
        cook_time_minutes=15,
        ingredients=("gluten-free flour", "milk", "egg", "baking powder", "syrup"),
        is_gluten_free=True,
        rating=4.1,
    ),
    Recipe.from_flags(
        id="quinoa-buddha-bowl",
        title="Quinoa Buddha Bowl",
        cuisine=Cuisine.OTHER,
        difficulty=Difficulty.EASY,
        cook_time_minutes=25,
        ingredients=("quinoa", "chickpeas", "spinach", "avocado", "tahini"),
        is_vegan=True,
        is_vegetarian=True,
        is_gluten_free=True,
        rating=4.5,
    ),
)

def load_catalog(recipes: Optional[Iterable[Recipe]] = None) -> Tuple[Recipe, ...]:
    """
    Freeze a recipe collection for querying.

    Falls back to the built-in sample recipes. Recipe ids must be unique.
    """
    catalog = tuple(SAMPLE_RECIPES if recipes is None else recipes)

    seen = set()
    for recipe in catalog:
        if recipe.id in seen:
            logger.error(f"Duplicate recipe id in catalog: {recipe.id}")
            raise ValueError(f"Duplicate recipe id: {recipe.id}")
        seen.add(recipe.id)

    logger.info(f"Loaded recipe catalog with {len(catalog)} recipes")
    return catalog

def get_recipe(catalog: Iterable[Recipe], recipe_id: str) -> Optional[Recipe]:
    """Find a recipe by id"""
    for recipe in catalog:
        if recipe.id == recipe_id:
            return recipe
    return None
