"""Inventory aggregate: Items keyed by name, with category and expiration queries."""
import logging
from datetime import date
from typing import Dict, Iterator, List, Tuple, Union

from larder.domain.Batch import Batch
from larder.domain.Item import Item
from larder.domain.errors import (
    AlreadyExistsError, InvalidArgumentError, NotFoundError,
    require_date, require_present, require_text
)
from larder.events.Event_Bus import GLOBAL_EVENT_BUS, INVENTORY_BATCH_DISCARDED, INVENTORY_ITEM_DEPLETED

logger = logging.getLogger(__name__)

NO_ITEM_FOUND_ERROR = "Item not found."
NULL_ITEM_ERROR = "Item cannot be None."
ITEM_EXISTS_ERROR = "Item already exists in inventory."


class Inventory:
    def __init__(self, event_bus=None):
        self._items: Dict[str, Item] = {}
        self._event_bus = event_bus if event_bus is not None else GLOBAL_EVENT_BUS

    # --- Observer helpers -------------------------------------------------
    def set_event_bus(self, bus):
        self._event_bus = bus
        return self

    def _on_item_depleted(self, item: Item):
        # Items are pruned the moment their last batch is consumed
        if self._items.get(item.name) is item:
            self._detach(item)
            logger.info("Removed %s from inventory: no batches left", item.name)
            self._event_bus.publish(INVENTORY_ITEM_DEPLETED, {"item": item})

    def _detach(self, item: Item):
        item.remove_depleted_listener(self._on_item_depleted)
        del self._items[item.name]

    # --- Collection protocol ------------------------------------------------
    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[Item]:
        return iter(list(self._items.values()))

    def __contains__(self, name: object) -> bool:
        return name in self._items

    # --- Queries ------------------------------------------------------------
    def all_items(self) -> List[Item]:
        return list(self._items.values())

    def all_items_alphabetical(self) -> List[Item]:
        return sorted(self._items.values(), key=lambda i: i.name)

    def all_items_by_expiration(self) -> List[Item]:
        return sorted(self._items.values(), key=lambda i: (i.earliest_expiration, i.name))

    def get_by_name(self, name: str, ignore_case: bool = False) -> Item:
        '''
        Returns the item stored under name.

        An exact match always wins. With ignore_case, names differing only in case
        (e.g. "Milk" and "milk") can both be stored; the one added first is returned.
        '''
        require_text(name, "Name")
        if name in self._items:
            return self._items[name]
        if ignore_case:
            wanted = name.strip().lower()
            for key, item in self._items.items():
                if key.lower() == wanted:
                    return item
        raise NotFoundError(f"{NO_ITEM_FOUND_ERROR} ({name})")

    def by_category(self, category: str) -> List[Item]:
        require_text(category, "Category")
        wanted = category.strip().lower()
        return [i for i in self._items.values() if i.category.lower() == wanted]

    def expiring_before(self, day: date) -> List[Item]:
        '''Items whose earliest batch expires strictly before day. May be empty.'''
        day = require_date(day, "Date")
        return [i for i in self._items.values() if i.earliest_expiration < day]

    def expiring_on(self, day: date) -> List[Item]:
        '''Items whose earliest batch expires on day. May be empty.'''
        day = require_date(day, "Date")
        return [i for i in self._items.values() if i.earliest_expiration == day]

    # --- Mutations ----------------------------------------------------------
    def add(self, item: Item):
        require_present(item, "Item")
        if not isinstance(item, Item):
            raise InvalidArgumentError(f"Expected an Item, got {type(item).__name__}")
        if item.is_empty():
            raise InvalidArgumentError(f"{item.name} has no batches")
        if item.name in self._items:
            raise AlreadyExistsError(f"{ITEM_EXISTS_ERROR} ({item.name})")
        self._items[item.name] = item
        item.on_depleted(self._on_item_depleted)

    def remove(self, item: Union[Item, str]):
        require_present(item, "Item")
        name = item if isinstance(item, str) else item.name
        current = self._items.get(name)
        if current is None or (isinstance(item, Item) and current is not item):
            raise NotFoundError(f"{NO_ITEM_FOUND_ERROR} ({name})")
        self._detach(current)

    def remove_all_items(self):
        for item in list(self._items.values()):
            self._detach(item)

    def add_batch_to_item(self, name: str, batch: Batch) -> Item:
        item = self.get_by_name(name)
        item.add_batch(batch)
        return item

    def consume_item(self, item: Union[Item, str], amount: float):
        '''Consumes amount of a resident item (FEFO); prunes it once empty.'''
        require_present(item, "Item")
        name = item if isinstance(item, str) else item.name
        target = self.get_by_name(name)
        if isinstance(item, Item) and target is not item:
            raise NotFoundError(f"{NO_ITEM_FOUND_ERROR} ({name})")
        return target.consume(amount)

    def remove_expired_before(self, day: date) -> List[Tuple[str, Batch]]:
        '''
        Discards every batch expiring before day.

        A single-batch item is removed as a whole; otherwise the expired batch is
        consumed, which takes it first because batches are kept in expiration order.
        Returns (item name, discarded batch) records.
        '''
        day = require_date(day, "Date")
        discarded: List[Tuple[str, Batch]] = []
        for item in list(self.expiring_before(day)):
            for batch in item.batches:
                if not batch.is_expired(day):
                    break
                if item.batch_count == 1:
                    self.remove(item)
                    discarded.append((item.name, batch))
                    logger.info("Removed %s, expired on %s", item.name, batch.expiration_date)
                    break
                item.consume(batch.amount)
                discarded.append((item.name, batch))
                logger.info("Removed batch from %s, expired on %s", item.name, batch.expiration_date)
        for name, batch in discarded:
            self._event_bus.publish(INVENTORY_BATCH_DISCARDED, {"name": name, "batch": batch})
        return discarded

    def __str__(self) -> str:
        items_str = ",\n\t".join(str(item) for item in self.all_items_alphabetical())
        return f"Items:\n\t{items_str}"

    def __repr__(self) -> str:
        return self.__str__()

    def to_dict(self):
        return [item.to_dict() for item in self.all_items_alphabetical()]


def new_inventory(event_bus=None) -> Inventory:
    return Inventory(event_bus)
