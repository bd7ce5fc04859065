"""Simple Event Bus / Observer implementation for inventory alerts.

Event names used so far:
  inventory.low_stock -> payload {"item": Item, "remaining": float, "threshold": float}
  inventory.near_expiry -> payload {"item": Item, "days_left": int, "threshold": int}
  inventory.expiring_snapshot -> payload {"count": int, "items": [dict, ...]}
  inventory.item_depleted -> payload {"item": Item}
  inventory.batch_discarded -> payload {"name": str, "batch": Batch}

Subscribers are callables taking (event_name, payload).
"""
from __future__ import annotations
import logging
from collections import defaultdict
from typing import Callable, Any, Dict, List

logger = logging.getLogger(__name__)

# --- Event name constants (used across modules) ---
INVENTORY_LOW_STOCK = "inventory.low_stock"
INVENTORY_NEAR_EXPIRY = "inventory.near_expiry"
INVENTORY_EXPIRING_SNAPSHOT = "inventory.expiring_snapshot"
INVENTORY_ITEM_DEPLETED = "inventory.item_depleted"
INVENTORY_BATCH_DISCARDED = "inventory.batch_discarded"


class EventBus:
	def __init__(self):
		self._subscribers: Dict[str, List[Callable[[str, Any], None]]] = defaultdict(list)

	def subscribe(self, event_name: str, callback: Callable[[str, Any], None]):
		if callback not in self._subscribers[event_name]:
			self._subscribers[event_name].append(callback)

	def unsubscribe(self, event_name: str, callback: Callable[[str, Any], None]):
		try:
			self._subscribers[event_name].remove(callback)
		except (ValueError, KeyError):
			pass

	def publish(self, event_name: str, payload: Any):
		for cb in list(self._subscribers.get(event_name, [])):
			try:
				cb(event_name, payload)
			except Exception:
				logger.exception("Error delivering %s to %r", event_name, cb)


# A singleton-like instance (can be imported)
GLOBAL_EVENT_BUS = EventBus()


__all__ = [
	'EventBus', 'GLOBAL_EVENT_BUS',
	'INVENTORY_LOW_STOCK', 'INVENTORY_NEAR_EXPIRY', 'INVENTORY_EXPIRING_SNAPSHOT',
	'INVENTORY_ITEM_DEPLETED', 'INVENTORY_BATCH_DISCARDED'
]
