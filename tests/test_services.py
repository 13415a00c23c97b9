import logging
import pytest
from unittest.mock import patch

from backend.config.settings import settings
from backend.models.filter_model import FilterSpec, SortOption
from backend.models.recipe_model import Cuisine, DietaryTag, Difficulty, Recipe
from backend.services.query_service import (
    RecipeQueryService,
    clear_filters,
    default_spec,
    query,
    reset_filters,
    sort_recipes,
)

def make_recipe(title, **overrides):
    """Build a recipe with sensible defaults for the fields a test ignores"""
    fields = {
        "id": title.lower().replace(" ", "-"),
        "title": title,
        "cuisine": Cuisine.OTHER,
        "difficulty": Difficulty.EASY,
        "cook_time_minutes": 30,
        "servings": 4,
        "ingredients": ("salt",),
        "rating": 4.0,
    }
    fields.update(overrides)
    return Recipe(**fields)

@pytest.fixture
def pad_thai():
    return make_recipe(
        "Pad Thai",
        cuisine=Cuisine.THAI,
        difficulty=Difficulty.HARD,
        cook_time_minutes=35,
        ingredients=("Rice noodles", "Shrimp", "Peanuts", "Lime"),
        dietary_tags={DietaryTag.GLUTEN_FREE},
        rating=4.4,
    )

@pytest.fixture
def greek_salad():
    return make_recipe(
        "Greek Salad",
        cuisine=Cuisine.MEDITERRANEAN,
        cook_time_minutes=15,
        ingredients=("Tomato", "Cucumber", "Feta cheese", "Olives"),
        dietary_tags={DietaryTag.VEGETARIAN, DietaryTag.GLUTEN_FREE},
        rating=4.1,
    )

@pytest.fixture
def catalog(pad_thai, greek_salad):
    return [
        pad_thai,
        greek_salad,
        make_recipe(
            "Chana Masala",
            cuisine=Cuisine.INDIAN,
            difficulty=Difficulty.MEDIUM,
            cook_time_minutes=40,
            servings=6,
            ingredients=("Chickpeas", "Tomatoes", "Onion", "Garlic"),
            dietary_tags={DietaryTag.VEGAN, DietaryTag.VEGETARIAN},
            rating=4.7,
        ),
        make_recipe(
            "Beef Tacos",
            cuisine=Cuisine.MEXICAN,
            cook_time_minutes=25,
            servings=2,
            ingredients=("Ground beef", "Taco shells", "Onion", "Lettuce"),
            rating=4.5,
        ),
    ]

def titles(recipes):
    return [recipe.title for recipe in recipes]

def test_cook_time_example(pad_thai, greek_salad):
    """Only the quick salad fits under 20 minutes"""
    spec = default_spec()
    spec.max_cook_time_minutes = 20

    assert query([pad_thai, greek_salad], spec) == [greek_salad]

def test_search_matches_title(pad_thai, greek_salad):
    spec = FilterSpec(search_text="thai")
    assert query([pad_thai, greek_salad], spec) == [pad_thai]

def test_search_matches_ingredient_and_ignores_case(catalog):
    spec = FilterSpec(search_text="  GARLIC ")
    assert titles(query(catalog, spec)) == ["Chana Masala"]

def test_search_is_substring_on_ingredients(catalog):
    spec = FilterSpec(search_text="noodle")
    assert titles(query(catalog, spec)) == ["Pad Thai"]

def test_include_ingredient_example(pad_thai, greek_salad):
    spec = FilterSpec(include_ingredients={"tomato"})
    assert query([pad_thai, greek_salad], spec) == [greek_salad]

def test_include_ingredients_is_exact_token_match(catalog):
    """'tomato' must not match 'Tomatoes'"""
    spec = FilterSpec(include_ingredients={"tomato"})
    assert titles(query(catalog, spec)) == ["Greek Salad"]

def test_include_ingredients_requires_all(catalog):
    spec = FilterSpec(include_ingredients={"onion", "garlic"})
    assert titles(query(catalog, spec)) == ["Chana Masala"]

def test_exclude_ingredients(catalog):
    spec = FilterSpec(exclude_ingredients={"onion"})
    assert titles(query(catalog, spec)) == ["Greek Salad", "Pad Thai"]

def test_exclude_wins_over_include(catalog):
    spec = FilterSpec(include_ingredients={"tomato"}, exclude_ingredients={"tomato"})
    assert query(catalog, spec) == []

def test_cuisine_multi_select_is_or(catalog):
    spec = FilterSpec(cuisines={Cuisine.THAI, Cuisine.INDIAN})
    assert titles(query(catalog, spec)) == ["Chana Masala", "Pad Thai"]

def test_single_cuisine_selection(catalog):
    spec = FilterSpec()
    spec.select_cuisine(Cuisine.MEXICAN)
    assert titles(query(catalog, spec)) == ["Beef Tacos"]

    spec.select_cuisine(None)
    assert len(query(catalog, spec)) == len(catalog)

def test_difficulty_filter(catalog):
    spec = FilterSpec(difficulties={"hard", "medium"})
    assert titles(query(catalog, spec)) == ["Chana Masala", "Pad Thai"]

def test_dietary_requirements_need_every_tag(catalog):
    spec = FilterSpec(dietary_requirements={DietaryTag.VEGETARIAN, DietaryTag.GLUTEN_FREE})
    assert titles(query(catalog, spec)) == ["Greek Salad"]

def test_boolean_dietary_flags(catalog):
    spec = FilterSpec()
    spec.set_requirement(DietaryTag.VEGAN, True)
    assert titles(query(catalog, spec)) == ["Chana Masala"]

    spec.set_requirement(DietaryTag.VEGAN, False)
    assert len(query(catalog, spec)) == len(catalog)

def test_min_rating_is_inclusive(catalog):
    spec = FilterSpec(min_rating=4.5)
    assert titles(query(catalog, spec)) == ["Beef Tacos", "Chana Masala"]

def test_max_cook_time_is_floored(catalog):
    spec = FilterSpec(max_cook_time_minutes=35.9)
    assert "Pad Thai" in titles(query(catalog, spec))

    spec.max_cook_time_minutes = 34.9
    assert "Pad Thai" not in titles(query(catalog, spec))

def test_max_servings_is_floored(catalog):
    spec = FilterSpec(max_servings=5.99)
    assert "Chana Masala" not in titles(query(catalog, spec))

    spec.max_servings = 2
    assert titles(query(catalog, spec)) == ["Beef Tacos"]

def test_negative_bounds_do_not_fail(catalog):
    spec = FilterSpec(max_cook_time_minutes=-5, min_rating=-3)
    assert query(catalog, spec) == []

def test_infinite_bounds_do_not_fail(catalog):
    spec = FilterSpec(max_cook_time_minutes=float("inf"), max_servings=float("inf"))
    assert titles(query(catalog, spec)) == ["Beef Tacos", "Chana Masala", "Greek Salad", "Pad Thai"]

    spec = FilterSpec(max_cook_time_minutes=float("-inf"))
    assert spec.max_cook_time_minutes == 0
    assert query(catalog, spec) == []

def test_result_is_subset_of_input(catalog):
    specs = [
        FilterSpec(),
        FilterSpec(search_text="a"),
        FilterSpec(cuisines={Cuisine.THAI}, min_rating=1),
        FilterSpec(exclude_ingredients={"onion"}, sort_key=SortOption.RATING),
    ]
    for spec in specs:
        assert all(recipe in catalog for recipe in query(catalog, spec))

def test_reset_then_query_returns_everything_alphabetically(catalog):
    spec = FilterSpec(search_text="x", cuisines={Cuisine.THAI}, sort_key=SortOption.RATING)
    result = query(catalog, reset_filters(spec))
    assert titles(result) == ["Beef Tacos", "Chana Masala", "Greek Salad", "Pad Thai"]

@pytest.mark.parametrize(
    "narrowed",
    [
        {"cuisines": {Cuisine.MEDITERRANEAN}},
        {"difficulties": {Difficulty.EASY}},
        {"dietary_requirements": {DietaryTag.GLUTEN_FREE}},
        {"max_cook_time_minutes": 30},
        {"min_rating": 4.4},
        {"max_servings": 4},
        {"include_ingredients": {"onion"}},
        {"exclude_ingredients": {"onion"}},
        {"search_text": "ta"},
    ],
)
def test_adding_a_constraint_never_grows_the_result(catalog, narrowed):
    base = query(catalog, FilterSpec())
    result = query(catalog, FilterSpec(**narrowed))
    assert len(result) <= len(base)
    assert set(result) <= set(base)

def test_empty_catalog_returns_empty_list():
    spec = FilterSpec(search_text="anything", cuisines={Cuisine.THAI})
    assert query([], spec) == []
    assert query([], FilterSpec()) == []

def test_query_does_not_mutate_inputs(catalog):
    spec = FilterSpec(cuisines={Cuisine.THAI}, sort_key=SortOption.COOK_TIME, sort_ascending=False)
    before = spec.model_dump()
    original = list(catalog)

    query(catalog, spec)

    assert spec.model_dump() == before
    assert catalog == original

def test_sort_by_cook_time_descending(catalog):
    spec = FilterSpec(sort_key=SortOption.COOK_TIME, sort_ascending=False)
    assert titles(query(catalog, spec)) == ["Chana Masala", "Pad Thai", "Beef Tacos", "Greek Salad"]

def test_sort_by_rating_ascending(catalog):
    spec = FilterSpec(sort_key=SortOption.RATING)
    assert titles(query(catalog, spec)) == ["Greek Salad", "Pad Thai", "Beef Tacos", "Chana Masala"]

def test_title_sort_ignores_case():
    recipes = [make_recipe("banana bread"), make_recipe("Apple Pie"), make_recipe("apricot tart")]
    result = sort_recipes(recipes, SortOption.ALPHABETICAL)
    assert titles(result) == ["Apple Pie", "apricot tart", "banana bread"]

def test_title_sort_files_accented_titles_by_base_letter():
    recipes = [
        make_recipe("Zucchini Bread"),
        make_recipe("Éclair"),
        make_recipe("Apple Pie"),
        make_recipe("eggs Benedict"),
    ]
    result = sort_recipes(recipes, SortOption.ALPHABETICAL)
    assert titles(result) == ["Apple Pie", "Éclair", "eggs Benedict", "Zucchini Bread"]

    result = sort_recipes(recipes, SortOption.ALPHABETICAL, ascending=False)
    assert titles(result) == ["Zucchini Bread", "eggs Benedict", "Éclair", "Apple Pie"]

@pytest.mark.parametrize("ascending", [True, False])
def test_equal_keys_keep_input_order_in_both_directions(ascending):
    first = make_recipe("Zucchini Fritters", id="first", cook_time_minutes=20)
    second = make_recipe("Avocado Toast", id="second", cook_time_minutes=20)
    third = make_recipe("Mushroom Risotto", id="third", cook_time_minutes=45)
    fourth = make_recipe("Lentil Soup", id="fourth", cook_time_minutes=20)

    result = sort_recipes([first, second, third, fourth], SortOption.COOK_TIME, ascending)
    ties = [recipe.id for recipe in result if recipe.cook_time_minutes == 20]

    assert ties == ["first", "second", "fourth"]
    if ascending:
        assert result[-1] is third
    else:
        assert result[0] is third

def test_equal_ratings_keep_input_order_descending():
    a = make_recipe("B", id="a", rating=4.5)
    b = make_recipe("A", id="b", rating=4.5)
    result = sort_recipes([a, b], SortOption.RATING, ascending=False)
    assert [recipe.id for recipe in result] == ["a", "b"]

def test_default_spec_uses_settings():
    spec = default_spec()
    assert spec.max_cook_time_minutes == settings.DEFAULT_MAX_COOK_TIME
    assert spec.max_servings == settings.DEFAULT_MAX_SERVINGS
    assert spec.min_rating == 0
    assert spec.sort_key == SortOption.ALPHABETICAL
    assert spec.sort_ascending is True

def test_default_spec_follows_configured_cook_time():
    with patch.object(settings, "DEFAULT_MAX_COOK_TIME", 240.0):
        assert default_spec().max_cook_time_minutes == 240.0

def test_reset_filters_leaves_argument_untouched():
    spec = FilterSpec(search_text="soup", min_rating=3)
    fresh = reset_filters(spec)

    assert fresh is not spec
    assert spec.search_text == "soup"
    assert fresh.search_text == ""
    assert fresh.min_rating == 0

def test_clear_filters_resets_in_place():
    spec = FilterSpec(
        search_text="soup",
        cuisines={Cuisine.FRENCH},
        max_cook_time_minutes=30,
        include_ingredients={"leek"},
        sort_key=SortOption.RATING,
        sort_ascending=False,
    )
    result = clear_filters(spec)

    assert result is spec
    assert spec == default_spec()

def test_query_logs_result_count(catalog, caplog):
    caplog.set_level(logging.DEBUG, logger="backend.services.query_service")
    query(catalog, FilterSpec(cuisines={Cuisine.THAI}))
    assert "Query matched 1 recipes" in caplog.text

def test_query_service_over_catalog(catalog):
    service = RecipeQueryService(catalog)

    assert service.catalog == tuple(catalog)
    assert titles(service.search(FilterSpec(search_text="salad"))) == ["Greek Salad"]
    assert service.count(FilterSpec(cuisines={Cuisine.KOREAN})) == 0
