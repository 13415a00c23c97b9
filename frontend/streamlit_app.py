import streamlit as st

from backend.app import create_browser
from backend.config.settings import settings
from backend.models.filter_model import SortOption
from backend.models.recipe_model import Cuisine, DietaryTag, Difficulty
from backend.services.query_service import default_spec
from backend.utils.helpers import format_rating

# Configure page
st.set_page_config(
    page_title="Recipe Filters",
    page_icon="🍳",
    layout="wide"
)

def get_browser():
    """One browser per user session"""
    if "browser" not in st.session_state:
        st.session_state.browser = create_browser()
    return st.session_state.browser

def widget_defaults():
    """Widget values matching a freshly reset filter"""
    defaults = default_spec()
    return {
        "search_text": "",
        "cuisines": [],
        "difficulties": [],
        "dietary": [],
        "max_cook_time": int(defaults.max_cook_time_minutes),
        "min_rating": float(defaults.min_rating),
        "max_servings": int(defaults.max_servings),
        "include_csv": "",
        "exclude_csv": "",
        "sort_key": defaults.sort_key,
        "sort_ascending": defaults.sort_ascending,
    }

def init_widget_state():
    for key, value in widget_defaults().items():
        st.session_state.setdefault(key, value)

def reset_widgets():
    """Clear All Filters callback"""
    for key, value in widget_defaults().items():
        st.session_state[key] = value

def display_recipe(recipe):
    """Display one result card"""
    with st.container(border=True):
        st.subheader(recipe.title)
        if recipe.description:
            st.write(recipe.description)

        col1, col2, col3, col4 = st.columns(4)
        col1.write(f"**Cuisine:** {recipe.cuisine.display_name}")
        col2.write(f"**Difficulty:** {recipe.difficulty.display_name}")
        col3.write(f"**Time:** {recipe.cook_time_minutes} min")
        col4.write(f"**Serves:** {recipe.servings}")

        st.write(format_rating(recipe.rating))
        if recipe.dietary_tags:
            tags = sorted(tag.display_name for tag in recipe.dietary_tags)
            st.caption(" · ".join(tags))
        st.caption(recipe.ingredient_preview())

def main():
    """Main Streamlit application"""
    browser = get_browser()
    init_widget_state()

    st.title("🍳 Recipe Filters")
    st.markdown("Narrow down the recipe collection with the filters on the left.")

    with st.sidebar:
        st.header("🔎 Filters")

        search_text = st.text_input(
            "Search",
            key="search_text",
            placeholder="Search by name or ingredient..."
        )

        cuisines = st.multiselect(
            "Cuisine",
            list(Cuisine),
            key="cuisines",
            format_func=lambda cuisine: cuisine.display_name
        )

        difficulties = st.multiselect(
            "Difficulty",
            list(Difficulty),
            key="difficulties",
            format_func=lambda difficulty: difficulty.display_name
        )

        dietary = st.multiselect(
            "Dietary Restrictions",
            list(DietaryTag),
            key="dietary",
            format_func=lambda tag: tag.display_name
        )

        max_cook_time = st.slider(
            "Max Cooking Time (minutes):",
            min_value=settings.COOK_TIME_MIN,
            max_value=settings.COOK_TIME_MAX,
            step=settings.COOK_TIME_STEP,
            key="max_cook_time"
        )

        min_rating = st.slider(
            "Minimum Rating:",
            min_value=settings.RATING_MIN,
            max_value=settings.RATING_MAX,
            step=settings.RATING_STEP,
            key="min_rating"
        )

        max_servings = st.slider(
            "Max Servings:",
            min_value=settings.SERVINGS_MIN,
            max_value=settings.SERVINGS_MAX,
            key="max_servings"
        )

        include_csv = st.text_input(
            "Include ingredients (comma-separated):",
            key="include_csv",
            placeholder="e.g., tomato, basil"
        )
        exclude_csv = st.text_input(
            "Exclude ingredients (comma-separated):",
            key="exclude_csv",
            placeholder="e.g., peanuts"
        )

        sort_key = st.selectbox(
            "Sort by",
            list(SortOption),
            key="sort_key",
            format_func=lambda option: option.display_name
        )
        sort_ascending = st.toggle("Ascending", key="sort_ascending")

        st.button("Clear All Filters", on_click=reset_widgets)

    # Query once per rerun with the current widget values
    browser.update(
        search_text=search_text,
        cuisines=cuisines,
        difficulties=difficulties,
        dietary_requirements=dietary,
        max_cook_time_minutes=max_cook_time,
        min_rating=min_rating,
        max_servings=max_servings,
        include_ingredients=include_csv,
        exclude_ingredients=exclude_csv,
        sort_key=sort_key,
        sort_ascending=sort_ascending,
    )

    st.caption(browser.result_summary)

    if browser.is_empty:
        st.info("🍽️ No recipes found")
        st.write("Try adjusting your filters to find more recipes")
        st.button("Clear Filters", key="clear_empty", on_click=reset_widgets)
        return

    for recipe in browser.results:
        display_recipe(recipe)

if __name__ == "__main__":
    main()
