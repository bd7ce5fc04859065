"""RecipeBook aggregate: recipes keyed by name, with keyword search and an alphabetical view."""
import logging
from typing import Dict, Iterator, List, Union

from larder.domain.Recipe import Recipe
from larder.domain.errors import (
    AlreadyExistsError, InvalidArgumentError, NotFoundError, require_present, require_text
)

logger = logging.getLogger(__name__)

RECIPE_NOT_FOUND_ERROR = "Recipe was not found"
RECIPE_ALREADY_EXISTS_ERROR = "Recipe already exists"


class SortedRecipeView:
    """Lazy, restartable alphabetical view over a RecipeBook. Each iteration re-sorts."""

    def __init__(self, book: "RecipeBook"):
        self._book = book

    def __iter__(self) -> Iterator[Recipe]:
        return iter(sorted(self._book._recipes.values(), key=lambda r: r.name))

    def __len__(self) -> int:
        return len(self._book)


class RecipeBook:
    def __init__(self):
        self._recipes: Dict[str, Recipe] = {}

    def __len__(self) -> int:
        return len(self._recipes)

    def __iter__(self) -> Iterator[Recipe]:
        return iter(list(self._recipes.values()))

    def __contains__(self, name: object) -> bool:
        return name in self._recipes

    @property
    def recipes(self) -> List[Recipe]:
        return list(self._recipes.values())

    def get_by_name(self, name: str) -> Recipe:
        require_text(name, "Name")
        if name not in self._recipes:
            raise NotFoundError(f"{RECIPE_NOT_FOUND_ERROR} ({name})")
        return self._recipes[name]

    def search(self, keyword: str) -> List[Recipe]:
        '''Recipes whose name contains keyword, case-insensitively. May be empty.'''
        require_text(keyword, "Keyword")
        needle = keyword.strip().lower()
        return [r for r in self._recipes.values() if needle in r.name.lower()]

    def add_recipe(self, recipe: Recipe):
        require_present(recipe, "Recipe")
        if not isinstance(recipe, Recipe):
            raise InvalidArgumentError(f"Expected a Recipe, got {type(recipe).__name__}")
        if recipe.name in self._recipes:
            raise AlreadyExistsError(f"{RECIPE_ALREADY_EXISTS_ERROR} ({recipe.name})")
        self._recipes[recipe.name] = recipe
        logger.debug("Added recipe %s", recipe.name)

    def remove_recipe(self, recipe: Union[Recipe, str]):
        require_present(recipe, "Recipe")
        name = recipe if isinstance(recipe, str) else recipe.name
        current = self._recipes.get(name)
        if current is None or (isinstance(recipe, Recipe) and current is not recipe):
            raise NotFoundError(f"{RECIPE_NOT_FOUND_ERROR} ({name})")
        del self._recipes[name]

    def update_recipe(self, name: str, recipe: Recipe):
        '''Replaces the recipe stored under name, keeping its position.'''
        require_text(name, "Name")
        require_present(recipe, "Recipe")
        if name not in self._recipes:
            raise NotFoundError(f"{RECIPE_NOT_FOUND_ERROR} ({name})")
        if recipe.name != name and recipe.name in self._recipes:
            raise AlreadyExistsError(f"{RECIPE_ALREADY_EXISTS_ERROR} ({recipe.name})")
        self._recipes = {
            (recipe.name if key == name else key): (recipe if key == name else value)
            for key, value in self._recipes.items()
        }

    def remove_all_recipes(self):
        self._recipes.clear()

    def sorted_by_name(self) -> SortedRecipeView:
        return SortedRecipeView(self)

    def sort(self):
        '''Reorders the stored recipes alphabetically by name.'''
        self._recipes = {r.name: r for r in sorted(self._recipes.values(), key=lambda r: r.name)}

    def __str__(self) -> str:
        return "Recipes:\n\t" + ",\n\t".join(str(r) for r in self._recipes.values())

    __repr__ = __str__

    def to_dict(self):
        return [r.to_dict() for r in self._recipes.values()]


def new_recipe_book() -> RecipeBook:
    return RecipeBook()
