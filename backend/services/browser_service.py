import logging
from typing import Any, List, Optional, Sequence

from ..models.filter_model import FilterSpec
from ..models.recipe_model import Cuisine, DietaryTag, Difficulty, Recipe
from ..utils.helpers import pluralize
from .query_service import RecipeQueryService, clear_filters, default_spec, query_service

logger = logging.getLogger(__name__)

class RecipeBrowser:
    """
    Filter state for one browsing session.

    Owns a FilterSpec and re-runs the query explicitly after every batch of
    changes. Reading `results` never triggers work.
    """

    def __init__(
        self,
        service: Optional[RecipeQueryService] = None,
        spec: Optional[FilterSpec] = None,
    ):
        self.service = service or query_service
        self.spec = spec if spec is not None else default_spec()
        self.results: List[Recipe] = []
        self.refresh()

    def refresh(self) -> List[Recipe]:
        self.results = self.service.search(self.spec)
        return self.results

    def update(self, **changes: Any) -> List[Recipe]:
        """
        Apply several field changes, then query once.

        The whole batch is validated before any field is written, so a bad
        value leaves both the spec and the current results untouched.
        """
        unknown = sorted(name for name in changes if name not in FilterSpec.model_fields)
        if unknown:
            raise ValueError(f"Unknown filter field: {', '.join(unknown)}")

        candidate = FilterSpec.model_validate({**self.spec.model_dump(), **changes})
        for name in changes:
            setattr(self.spec, name, getattr(candidate, name))
        logger.debug(f"Applied filter changes: {sorted(changes)}")
        return self.refresh()

    def clear_filters(self) -> List[Recipe]:
        clear_filters(self.spec)
        logger.info("Filters cleared")
        return self.refresh()

    def toggle_cuisine(self, cuisine: Any) -> List[Recipe]:
        return self.update(cuisines=_toggled(self.spec.cuisines, Cuisine.parse(cuisine)))

    def toggle_difficulty(self, difficulty: Any) -> List[Recipe]:
        return self.update(difficulties=_toggled(self.spec.difficulties, Difficulty.parse(difficulty)))

    def toggle_dietary_requirement(self, tag: Any) -> List[Recipe]:
        return self.update(
            dietary_requirements=_toggled(self.spec.dietary_requirements, DietaryTag.parse(tag))
        )

    @property
    def catalog(self) -> Sequence[Recipe]:
        return self.service.catalog

    @property
    def result_count(self) -> int:
        return len(self.results)

    @property
    def result_summary(self) -> str:
        return pluralize(self.result_count, "recipe")

    @property
    def is_empty(self) -> bool:
        return not self.results

def _toggled(selection: set, item: Any) -> set:
    updated = set(selection)
    if item in updated:
        updated.remove(item)
    else:
        updated.add(item)
    return updated
