from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from larder.api.state import get_engine, get_inventory, get_recipe_book
from larder.domain.Inventory import Inventory
from larder.domain.RecipeBook import RecipeBook
from larder.logic.inventory.analysis import expired_value, scan_and_notify, total_value
from larder.logic.shopping.list_builder import build_shopping_list
from larder.logic.suggestions.matching import MatchEngine

router = APIRouter(prefix="/api", tags=["suggestions"])


def _suggestion(recipe, items, engine: MatchEngine):
    return {
        "name": recipe.name,
        "servings": recipe.servings,
        "times_possible": engine.times_possible(recipe, items),
        "items": [
            {
                "name": item.name,
                "need": recipe.get_ingredient(item.name).amount,
                "have": item.total_amount,
                "unit": item.unit,
                "earliest_expiration": item.earliest_expiration.isoformat(),
            }
            for item in items
        ],
    }


@router.get("/suggestions")
def suggestions(expiring_before: Optional[date] = Query(default=None),
                inventory: Inventory = Depends(get_inventory),
                engine: MatchEngine = Depends(get_engine)):
    """Recipes that can be cooked from stock, optionally only from items expiring before a date."""
    possible = engine.suggest(inventory, expiring_before=expiring_before)
    recipes = [_suggestion(recipe, items, engine) for recipe, items in possible.items()]
    return {"count": len(recipes), "total": len(engine.recipe_book), "recipes": recipes}


@router.get("/suggestions/random")
def random_suggestion(inventory: Inventory = Depends(get_inventory),
                      engine: MatchEngine = Depends(get_engine)):
    picked = engine.random_feasible_recipe(inventory.all_items_alphabetical())
    if picked is None:
        return {"recipe": None}
    recipe, items = picked
    return {"recipe": _suggestion(recipe, items, engine)}


@router.get("/shopping-list")
def shopping_list(recipe: List[str] = Query(default=[]),
                  book: RecipeBook = Depends(get_recipe_book),
                  inventory: Inventory = Depends(get_inventory)):
    """Missing quantities to cook each listed recipe once (repeat a name to cook it again)."""
    recipes = [book.get_by_name(name) for name in recipe]
    items = build_shopping_list(recipes, inventory)
    return {"count": len(items), "items": items}


@router.get("/inventory/value")
def inventory_value(today: Optional[date] = Query(default=None),
                    inventory: Inventory = Depends(get_inventory)):
    day = today or date.today()
    return {
        "total": round(total_value(inventory), 2),
        "expired": round(expired_value(inventory, day), 2),
        "date": day.isoformat(),
    }


@router.get("/inventory/alerts")
def inventory_alerts(today: Optional[date] = Query(default=None),
                     window: Optional[int] = Query(default=None, ge=0),
                     inventory: Inventory = Depends(get_inventory)):
    """Expiring-soon and low-stock snapshots. Matching alert events are published too."""
    day = today or date.today()
    expiring, low_stock = scan_and_notify(inventory, day, window=window)
    return {"date": day.isoformat(), "expiring": expiring, "low_stock": low_stock}
