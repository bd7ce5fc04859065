"""Shopping list builder.

Provides build_shopping_list(recipes, inventory): the quantities missing from
stock to cook every given recipe once.
"""
from collections import defaultdict
from typing import Dict, List, Any, Iterable

from larder.domain.Inventory import Inventory
from larder.domain.Recipe import Recipe
from larder.utilities.constants import QUANTITY_TOLERANCE


def build_shopping_list(recipes: Iterable[Recipe], inventory: Inventory) -> List[Dict[str, Any]]:
    """Compute missing ingredients for a set of recipes.

    Args:
        recipes: Recipes to cook, each once. Repeating a recipe doubles its needs.
        inventory: Stock to compare against, matched by exact item name.

    Returns:
        Sorted list of dicts: { name, unit, required, have, missing } (only missing > 0).
    """
    required: Dict[str, Dict[str, Any]] = defaultdict(lambda: {"unit": "", "quantity": 0.0})
    for recipe in recipes:
        for ing in recipe.ingredients:
            entry = required[ing.name]
            if entry["unit"] in ("", ing.unit):
                entry["unit"] = ing.unit
            entry["quantity"] += ing.amount

    shopping_list: List[Dict[str, Any]] = []
    for name, data in required.items():
        have = inventory.get_by_name(name).total_amount if name in inventory else 0.0
        missing = data["quantity"] - have
        if missing > QUANTITY_TOLERANCE:
            shopping_list.append({
                'name': name,
                'unit': data['unit'],
                'required': data['quantity'],
                'have': have,
                'missing': missing
            })

    shopping_list.sort(key=lambda x: x['name'].lower())
    return shopping_list


__all__ = ['build_shopping_list']
