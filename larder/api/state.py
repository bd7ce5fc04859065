"""Process-local application state served by the API (in-memory only)."""
from larder.domain.Inventory import Inventory, new_inventory
from larder.domain.RecipeBook import RecipeBook, new_recipe_book
from larder.logic.suggestions.matching import MatchEngine

_inventory: Inventory = new_inventory()
_recipe_book: RecipeBook = new_recipe_book()
_engine: MatchEngine = MatchEngine(_recipe_book)


def get_inventory() -> Inventory:
    return _inventory


def get_recipe_book() -> RecipeBook:
    return _recipe_book


def get_engine() -> MatchEngine:
    return _engine


def reset():
    """Replace the inventory and recipe book with empty ones."""
    global _inventory, _recipe_book, _engine
    _inventory = new_inventory()
    _recipe_book = new_recipe_book()
    _engine = MatchEngine(_recipe_book)


__all__ = ['get_inventory', 'get_recipe_book', 'get_engine', 'reset']
