"""FoodItem base: the {name, category, unit} capability shared by stock items and recipe ingredients."""
from larder.domain.errors import require_text


class FoodItem:
    def __init__(self, name: str, category: str, unit: str):
        self._name = require_text(name, "Name")
        self._category = require_text(category, "Category")
        self._unit = require_text(unit, "Unit")

    @property
    def name(self) -> str:
        return self._name

    @property
    def category(self) -> str:
        return self._category

    @property
    def unit(self) -> str:
        return self._unit
