from fastapi import APIRouter, Depends, Query

from larder.api.state import get_engine, get_inventory, get_recipe_book
from larder.domain.Inventory import Inventory
from larder.domain.Recipe import Recipe
from larder.domain.RecipeBook import RecipeBook
from larder.logic.suggestions.matching import MatchEngine
from larder.utilities.validators import RecipeInput

router = APIRouter(prefix="/api/recipes", tags=["recipes"])


@router.get("")
def list_recipes(book: RecipeBook = Depends(get_recipe_book)):
    """All recipes, alphabetical by name."""
    recipes = [r.to_dict() for r in book.sorted_by_name()]
    return {"count": len(recipes), "recipes": recipes}


@router.get("/search")
def search_recipes(q: str = Query(..., min_length=1), book: RecipeBook = Depends(get_recipe_book)):
    recipes = [r.to_dict() for r in sorted(book.search(q), key=lambda r: r.name)]
    return {"count": len(recipes), "recipes": recipes}


@router.get("/{name}")
def get_recipe(name: str, book: RecipeBook = Depends(get_recipe_book)):
    return book.get_by_name(name).to_dict()


@router.post("", status_code=201)
def add_recipe(payload: RecipeInput, book: RecipeBook = Depends(get_recipe_book)):
    recipe = Recipe.from_dict(payload.model_dump())
    book.add_recipe(recipe)
    return recipe.to_dict()


@router.delete("/{name}")
def delete_recipe(name: str, book: RecipeBook = Depends(get_recipe_book)):
    book.remove_recipe(name)
    return {"status": "deleted", "name": name}


@router.delete("")
def delete_all_recipes(book: RecipeBook = Depends(get_recipe_book)):
    removed = len(book)
    book.remove_all_recipes()
    return {"status": "deleted", "count": removed}


@router.post("/{name}/cook")
def cook_recipe(name: str, book: RecipeBook = Depends(get_recipe_book),
                inventory: Inventory = Depends(get_inventory),
                engine: MatchEngine = Depends(get_engine)):
    """Consume the recipe's ingredients from stock, earliest batches first."""
    recipe = book.get_by_name(name)
    used = engine.cook(recipe, inventory)
    return {"status": "cooked", "name": recipe.name, "used": used}
