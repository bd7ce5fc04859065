"""Ingredient domain entity: how much of a named item a recipe needs."""
from typing import Any, Dict

from larder.domain.FoodItem import FoodItem
from larder.domain.errors import InvalidArgumentError, is_number


class Ingredient(FoodItem):
    def __init__(self, name: str, category: str, unit: str, amount: float):
        super().__init__(name, category, unit)
        if not (is_number(amount) and amount > 0):
            raise InvalidArgumentError("Amount cannot be negative or zero")
        self._amount = float(amount)

    @property
    def amount(self) -> float:
        return self._amount

    def with_amount(self, amount: float) -> "Ingredient":
        '''Returns a copy of this ingredient requiring amount instead.'''
        return Ingredient(self.name, self.category, self.unit, amount)

    def __str__(self) -> str:
        return f"{self.name} ({self.category}): {self._amount:.2f} {self.unit}"

    __repr__ = __str__

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> "Ingredient":
        '''Creates an Ingredient from a dictionary. Ignores unknown keys.'''
        d = dict(data) if isinstance(data, dict) else {}
        return Ingredient(d.get("name"), d.get("category"), d.get("unit"), d.get("amount", 0))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "category": self.category,
            "unit": self.unit,
            "amount": self._amount,
        }
