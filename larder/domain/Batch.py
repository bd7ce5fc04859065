"""Batch domain entity: a dated lot of a single item with its own amount and unit price."""
from datetime import date, datetime
from typing import Any, Dict

from larder.domain.errors import InvalidArgumentError, is_number, require_date
from larder.utilities.constants import DATE_FORMAT


class Batch:
    def __init__(self, amount: float, unit_price: float, expiration_date: date):
        if not (is_number(amount) and amount > 0):
            raise InvalidArgumentError("Amount cannot be zero or a negative number.")
        if not (is_number(unit_price) and unit_price >= 0):
            raise InvalidArgumentError("Unit price cannot be a negative number.")
        if expiration_date is None:
            raise InvalidArgumentError("Expiration date cannot be None.")
        self._amount = float(amount)
        self._unit_price = float(unit_price)
        self._expiration_date = require_date(expiration_date, "Expiration date")
        # Insertion order within the owning Item, assigned by Item.add_batch
        self._sequence = 0

    @property
    def amount(self) -> float:
        return self._amount

    @property
    def unit_price(self) -> float:
        return self._unit_price

    @property
    def expiration_date(self) -> date:
        return self._expiration_date

    @property
    def value(self) -> float:
        return self._amount * self._unit_price

    def is_expired(self, today: date) -> bool:
        return self._expiration_date < require_date(today, "Today")

    def reduce(self, delta: float) -> float:
        '''
        Reduces the batch by delta and returns the new amount.
        A result of exactly zero is allowed; the owning Item drops such batches.
        '''
        if not (is_number(delta) and delta > 0):
            raise InvalidArgumentError("Amount to reduce must be a positive number.")
        if not delta <= self._amount:
            raise InvalidArgumentError(
                f"Cannot reduce by {delta}: batch only holds {self._amount}.")
        self._amount -= delta
        return self._amount

    def __str__(self) -> str:
        return (f"{self._amount:.2f} @ {self._unit_price:.2f}/unit - "
                f"Exp: {self._expiration_date.strftime(DATE_FORMAT)}")

    __repr__ = __str__

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> "Batch":
        '''Creates a Batch from a dictionary. Accepts date objects or DATE_FORMAT strings.'''
        exp = data.get("expiration_date")
        if isinstance(exp, str):
            try:
                exp = datetime.strptime(exp, DATE_FORMAT).date()
            except ValueError as e:
                raise InvalidArgumentError(f"Invalid expiration date: {exp!r}") from e
        return Batch(data.get("amount", 0), data.get("unit_price", 0), exp)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "amount": self._amount,
            "unit_price": self._unit_price,
            "expiration_date": self._expiration_date.strftime(DATE_FORMAT),
            "value": round(self.value, 2),
        }
