"""Item aggregate: a named stock entry owning its batches, consumed first-expired-first-out."""
import copy
import logging
import math
from datetime import date
from typing import Any, Callable, Dict, List, Optional, Tuple

from larder.domain.Batch import Batch
from larder.domain.FoodItem import FoodItem
from larder.domain.errors import InvalidArgumentError, is_number, require_date
from larder.utilities.constants import DATE_FORMAT, QUANTITY_TOLERANCE

logger = logging.getLogger(__name__)


class Item(FoodItem):
    def __init__(self, name: str, category: str, unit: str, batch: Batch):
        super().__init__(name, category, unit)
        if batch is None:
            raise InvalidArgumentError("Batch cannot be None")
        self._batches: List[Batch] = []
        self._total_amount = 0.0
        self._next_sequence = 0
        self._depleted_listeners: List[Callable[["Item"], None]] = []
        self.add_batch(batch)

    # --- Read-only views ---------------------------------------------------
    @property
    def total_amount(self) -> float:
        return self._total_amount

    @property
    def batches(self) -> Tuple[Batch, ...]:
        '''Copies of the batches, earliest expiration first.'''
        return tuple(copy.copy(b) for b in self._batches)

    @property
    def batch_count(self) -> int:
        return len(self._batches)

    @property
    def earliest_batch(self) -> Optional[Batch]:
        return copy.copy(self._batches[0]) if self._batches else None

    @property
    def earliest_expiration(self) -> Optional[date]:
        return self._batches[0].expiration_date if self._batches else None

    @property
    def value(self) -> float:
        return math.fsum(b.value for b in self._batches)

    def expired_value(self, today: date) -> float:
        today = require_date(today, "Today")
        return math.fsum(b.value for b in self._batches if b.is_expired(today))

    def is_empty(self) -> bool:
        return not self._batches

    # --- Depletion listeners -----------------------------------------------
    def on_depleted(self, callback: Callable[["Item"], None]):
        if callback not in self._depleted_listeners:
            self._depleted_listeners.append(callback)

    def remove_depleted_listener(self, callback: Callable[["Item"], None]):
        try:
            self._depleted_listeners.remove(callback)
        except ValueError:
            pass

    # --- Mutations -----------------------------------------------------------
    def add_batch(self, batch: Batch):
        '''
        Adds a copy of batch, keeps batches sorted by expiration date and updates the total.
        Batches sharing an expiration date stay in insertion order. The caller's
        batch is left untouched.
        '''
        if batch is None:
            raise InvalidArgumentError("Batch cannot be None")
        if not isinstance(batch, Batch):
            raise InvalidArgumentError(f"Expected a Batch, got {type(batch).__name__}")
        owned = copy.copy(batch)
        owned._sequence = self._next_sequence
        self._next_sequence += 1
        self._batches.append(owned)
        self.sort_batches()
        self._recompute_total()
        logger.debug("Added batch %s to %s (total %.3f %s)", batch, self.name, self._total_amount, self.unit)

    def sort_batches(self):
        self._batches.sort(key=lambda b: (b.expiration_date, b._sequence))

    def consume(self, amount: float) -> List[Tuple[Batch, float]]:
        '''
        Consumes amount from the batches that expire first.

        Returns (batch, consumed) pairs for every batch touched, in consumption order.
        The batch objects are snapshots taken before the batch was reduced or removed.
        When the item ends up without batches the depletion listeners are notified.
        '''
        if not (is_number(amount) and amount > 0):
            raise InvalidArgumentError("Amount must be a positive number.")
        if not amount <= self._total_amount:
            raise InvalidArgumentError(
                f"Amount to consume is greater than the total amount of {self.name}. "
                f"Total amount: {self._total_amount} {self.unit}")

        consumed: List[Tuple[Batch, float]] = []
        remaining = float(amount)
        while self._batches:
            batch = self._batches[0]
            if math.isclose(batch.amount, remaining, rel_tol=0.0, abs_tol=QUANTITY_TOLERANCE):
                consumed.append((copy.copy(batch), batch.amount))
                self._batches.pop(0)
                break
            if batch.amount < remaining:
                consumed.append((copy.copy(batch), batch.amount))
                remaining -= batch.amount
                self._batches.pop(0)
                continue
            consumed.append((copy.copy(batch), remaining))
            batch.reduce(remaining)
            break

        self._recompute_total()
        logger.debug("Consumed %s %s of %s, %.3f left", amount, self.unit, self.name, self._total_amount)
        if not self._batches:
            for cb in list(self._depleted_listeners):
                cb(self)
        return consumed

    def _recompute_total(self):
        self._total_amount = math.fsum(b.amount for b in self._batches)

    # --- Presentation / conversion -----------------------------------------
    def __str__(self) -> str:
        exp = self.earliest_expiration
        exp_str = exp.strftime(DATE_FORMAT) if exp else "-"
        return (f"{self.name} ({self.category}) - {self._total_amount:.2f} {self.unit} "
                f"in {len(self._batches)} batch(es) - Next exp: {exp_str}")

    __repr__ = __str__

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> "Item":
        '''Creates an Item from a dictionary holding either "batch" or a non-empty "batches" list.'''
        d = dict(data) if isinstance(data, dict) else {}
        batches = list(d.get("batches") or [])
        if d.get("batch") is not None:
            batches.insert(0, d["batch"])
        if not batches:
            raise InvalidArgumentError("Item needs at least one batch")
        parsed = [b if isinstance(b, Batch) else Batch.from_dict(b) for b in batches]
        item = Item(d.get("name"), d.get("category"), d.get("unit"), parsed[0])
        for b in parsed[1:]:
            item.add_batch(b)
        return item

    def to_dict(self) -> Dict[str, Any]:
        exp = self.earliest_expiration
        return {
            "name": self.name,
            "category": self.category,
            "unit": self.unit,
            "total_amount": self._total_amount,
            "earliest_expiration": exp.strftime(DATE_FORMAT) if exp else "",
            "value": round(self.value, 2),
            "batches": [b.to_dict() for b in self._batches],
        }
