"""Recipe matching: which recipes can be cooked from a set of stock items.

Provides MatchEngine(recipe_book) with find_possible_recipes, random_feasible_recipe,
times_possible, suggest and cook.
"""
from __future__ import annotations
import logging
import math
import random
from datetime import date
from typing import Dict, Iterable, List, Optional, Tuple

from larder.domain.Inventory import Inventory
from larder.domain.Item import Item
from larder.domain.Recipe import Recipe
from larder.domain.RecipeBook import RecipeBook
from larder.domain.errors import InvalidArgumentError, require_present
from larder.utilities.constants import QUANTITY_TOLERANCE

logger = logging.getLogger(__name__)

__all__ = ["MatchEngine"]


def _first_by_name(items: Iterable[Item]) -> Dict[str, Item]:
    index: Dict[str, Item] = {}
    for item in items:
        index.setdefault(item.name, item)
    return index


class MatchEngine:
    def __init__(self, recipe_book: RecipeBook):
        self._recipe_book = require_present(recipe_book, "Recipe book")

    @property
    def recipe_book(self) -> RecipeBook:
        return self._recipe_book

    @staticmethod
    def is_feasible(recipe: Recipe, candidate_items: List[Item]) -> bool:
        """True if every ingredient has a same-named candidate holding at least the required amount.

        The first candidate with a given name is the one checked. A recipe without
        ingredients is trivially feasible.
        """
        index = _first_by_name(candidate_items)
        for ingredient in recipe.ingredients:
            match = index.get(ingredient.name)
            if match is None or match.total_amount < ingredient.amount:
                return False
        return True

    @staticmethod
    def supporting_items(recipe: Recipe, candidate_items: List[Item]) -> List[Item]:
        """Candidates used by the recipe in sufficient quantity, earliest expiration first, then by name.

        As in is_feasible, only the first candidate with a given name is considered.
        """
        index = _first_by_name(candidate_items)
        matched = []
        for ingredient in recipe.ingredients:
            match = index.get(ingredient.name)
            if match is not None and match.total_amount >= ingredient.amount and match not in matched:
                matched.append(match)
        matched.sort(key=lambda i: (i.earliest_expiration, i.name))
        return matched

    def find_possible_recipes(self, candidate_items: List[Item]) -> Dict[Recipe, List[Item]]:
        """Map every feasible recipe to the items that support it.

        Recipes come out in recipe book order. Recipes left without supporting items
        (those without ingredients) are not included.
        """
        candidates = list(candidate_items or [])
        if not candidates:
            return {}
        result: Dict[Recipe, List[Item]] = {}
        for recipe in self._recipe_book:
            if not self.is_feasible(recipe, candidates):
                continue
            supporting = self.supporting_items(recipe, candidates)
            if supporting:
                result[recipe] = supporting
        logger.debug("%d of %d recipes feasible from %d items",
                     len(result), len(self._recipe_book), len(candidates))
        return result

    def random_feasible_recipe(self, candidate_items: List[Item],
                               rng: Optional[random.Random] = None) -> Optional[Tuple[Recipe, List[Item]]]:
        """Uniformly pick one feasible recipe. Returns None when nothing is feasible."""
        possible = self.find_possible_recipes(candidate_items)
        if not possible:
            return None
        chooser = rng if rng is not None else random
        recipe = chooser.choice(list(possible))
        return recipe, possible[recipe]

    @staticmethod
    def times_possible(recipe: Recipe, candidate_items: List[Item]) -> int:
        """How many times the recipe could be cooked in full from the candidates (0 if not feasible)."""
        index = _first_by_name(candidate_items)
        times: Optional[int] = None
        for ingredient in recipe.ingredients:
            match = index.get(ingredient.name)
            if match is None or match.total_amount < ingredient.amount:
                return 0
            here = math.floor(match.total_amount / ingredient.amount + QUANTITY_TOLERANCE)
            times = here if times is None else min(times, here)
        return times if times is not None else 0

    def suggest(self, inventory: Inventory, expiring_before: Optional[date] = None) -> Dict[Recipe, List[Item]]:
        """Suggestions from the whole inventory, or only from items expiring before a date."""
        require_present(inventory, "Inventory")
        if expiring_before is None:
            candidates = inventory.all_items_alphabetical()
        else:
            candidates = inventory.expiring_before(expiring_before)
        return self.find_possible_recipes(candidates)

    def cook(self, recipe: Recipe, inventory: Inventory) -> Dict[str, float]:
        """Consume every ingredient of recipe from the inventory, earliest batches first.

        Either all ingredients are consumed or, when the recipe is not feasible, nothing is.
        Returns ingredient name -> amount consumed.
        """
        require_present(recipe, "Recipe")
        require_present(inventory, "Inventory")
        if not self.is_feasible(recipe, inventory.all_items()):
            raise InvalidArgumentError(f"Not enough stock to cook {recipe.name}")
        used: Dict[str, float] = {}
        for ingredient in recipe.ingredients:
            inventory.consume_item(ingredient.name, ingredient.amount)
            used[ingredient.name] = ingredient.amount
        logger.info("Cooked %s", recipe.name)
        return used
