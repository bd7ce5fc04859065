"""Recipe domain entity: name, description, instructions, servings and required ingredients."""
from typing import Any, Dict, List, Optional, Union

from larder.domain.Ingredient import Ingredient
from larder.domain.errors import InvalidArgumentError, NotFoundError, require_present, require_text

INGREDIENT_NOT_FOUND_ERROR = "Ingredient was not found"


def _require_servings(servings: Any) -> int:
    if isinstance(servings, bool) or not isinstance(servings, int) or servings <= 0:
        raise InvalidArgumentError("Servings must be a positive number")
    return servings


class Recipe:
    def __init__(self, name: str, description: str, instructions: str, servings: int,
                 ingredients: Optional[List[Ingredient]] = None):
        self._name = require_text(name, "Name")
        self._description = require_text(description, "Description")
        self._instructions = require_text(instructions, "Instructions")
        self._servings = _require_servings(servings)
        self._ingredients: Dict[str, Ingredient] = {}
        for ingredient in ingredients or []:
            self.add_ingredient(ingredient)

    @property
    def name(self) -> str:
        return self._name

    @property
    def description(self) -> str:
        return self._description

    @description.setter
    def description(self, value: str):
        self._description = require_text(value, "Description")

    @property
    def instructions(self) -> str:
        return self._instructions

    @instructions.setter
    def instructions(self, value: str):
        self._instructions = require_text(value, "Instructions")

    @property
    def servings(self) -> int:
        return self._servings

    @servings.setter
    def servings(self, value: int):
        self._servings = _require_servings(value)

    @property
    def ingredients(self) -> List[Ingredient]:
        return list(self._ingredients.values())

    def get_ingredient(self, name: str) -> Ingredient:
        require_text(name, "Name")
        if name not in self._ingredients:
            raise NotFoundError(f"{INGREDIENT_NOT_FOUND_ERROR} ({name})")
        return self._ingredients[name]

    def add_ingredient(self, ingredient: Ingredient):
        '''
        Adds an ingredient. A name already present accumulates: the entry is replaced
        by the incoming ingredient carrying the summed amount. Units must match.
        '''
        require_present(ingredient, "Ingredient")
        existing = self._ingredients.get(ingredient.name)
        if existing is None:
            self._ingredients[ingredient.name] = ingredient
            return
        if existing.unit != ingredient.unit:
            raise InvalidArgumentError(
                f"Unit mismatch for {ingredient.name}: {existing.unit} vs {ingredient.unit}")
        self._ingredients[ingredient.name] = ingredient.with_amount(existing.amount + ingredient.amount)

    def remove_ingredient(self, ingredient: Union[Ingredient, str]):
        require_present(ingredient, "Ingredient")
        name = ingredient if isinstance(ingredient, str) else ingredient.name
        if name not in self._ingredients:
            raise NotFoundError(f"{INGREDIENT_NOT_FOUND_ERROR} ({name})")
        del self._ingredients[name]

    def __str__(self) -> str:
        ingredients_str = ", ".join(str(i) for i in self._ingredients.values())
        return f"{self._name} - {self._servings} servings - Ingredients: {ingredients_str}"

    __repr__ = __str__

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> "Recipe":
        d = dict(data) if isinstance(data, dict) else {}
        ingredients = [Ingredient.from_dict(ing) for ing in d.get("ingredients", [])]
        return Recipe(d.get("name"), d.get("description"), d.get("instructions"),
                      d.get("servings", 0), ingredients)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self._name,
            "description": self._description,
            "instructions": self._instructions,
            "servings": self._servings,
            "ingredients": [ing.to_dict() for ing in self._ingredients.values()],
        }
