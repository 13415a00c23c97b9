import re
import logging
from typing import Iterable, List, Optional, Set

logger = logging.getLogger(__name__)

def sanitize_input(text: Optional[str], max_length: int = 500) -> str:
    """
    Sanitize free-text filter input: trim the ends, blank out non-whitespace
    control characters and cap the length. Inner spacing is kept as typed.
    """
    if not text:
        return ""

    sanitized = re.sub(r'[\x00-\x08\x0e-\x1f\x7f]', ' ', str(text)).strip()
    if len(sanitized) > max_length:
        logger.debug(f"Truncating input from {len(sanitized)} to {max_length} characters")
        sanitized = sanitized[:max_length]
    return sanitized

def normalize_ingredient(name: str) -> str:
    """Ingredient token used for include/exclude matching"""
    return name.strip().lower()

def parse_ingredient_csv(raw: Optional[str]) -> List[str]:
    """Split comma-separated ingredient text into normalized tokens"""
    if not raw:
        return []

    return [token for token in (normalize_ingredient(part) for part in raw.split(',')) if token]

def normalize_ingredient_set(values: Optional[Iterable[str]]) -> Set[str]:
    """Accept CSV text or any iterable of names and return normalized tokens"""
    if values is None:
        return set()
    if isinstance(values, str):
        return set(parse_ingredient_csv(values))

    return {token for token in (normalize_ingredient(str(value)) for value in values) if token}

def format_ingredients_list(ingredients: Iterable[str], limit: Optional[int] = None) -> str:
    """Join ingredients for display, truncating with '...' past `limit`"""
    items = [ingredient.strip() for ingredient in ingredients if ingredient.strip()]
    if not items:
        return "No ingredients specified"

    if limit is not None and len(items) > limit:
        return ", ".join(items[:limit]) + "..."
    return ", ".join(items)

def pluralize(count: int, singular: str, plural: Optional[str] = None) -> str:
    """'1 recipe' / '3 recipes'"""
    word = singular if count == 1 else (plural or f"{singular}s")
    return f"{count} {word}"

def format_rating(rating: float) -> str:
    """Five-star text rendering with half stars, e.g. '★★★★⯪ 4.5'"""
    stars = ""
    for position in range(1, 6):
        if rating >= position:
            stars += "★"
        elif rating >= position - 0.5:
            stars += "⯪"
        else:
            stars += "☆"
    return f"{stars} {rating:.1f}"
