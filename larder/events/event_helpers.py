"""Event helper utilities.

Helpers for publishing inventory alert events, on the global bus unless
another bus is passed in.

Quick import:
    from larder.events.event_helpers import (
        publish_low_stock, publish_near_expiry, publish_expiring_snapshot
    )
"""
from __future__ import annotations
from typing import Iterable, Any, Optional
from .Event_Bus import (
    EventBus, GLOBAL_EVENT_BUS,
    INVENTORY_LOW_STOCK, INVENTORY_NEAR_EXPIRY, INVENTORY_EXPIRING_SNAPSHOT
)

__all__ = ['publish_low_stock', 'publish_near_expiry', 'publish_expiring_snapshot']


def _bus(bus: Optional[EventBus]) -> EventBus:
    return bus if bus is not None else GLOBAL_EVENT_BUS


def publish_low_stock(item: Any, remaining: float, threshold: float, bus: Optional[EventBus] = None):
    """Publish an inventory.low_stock event."""
    _bus(bus).publish(INVENTORY_LOW_STOCK, {
        'item': item,
        'remaining': remaining,
        'threshold': threshold
    })


def publish_near_expiry(item: Any, days_left: int, threshold: int, bus: Optional[EventBus] = None):
    """Publish an inventory.near_expiry event."""
    _bus(bus).publish(INVENTORY_NEAR_EXPIRY, {
        'item': item,
        'days_left': days_left,
        'threshold': threshold
    })


def publish_expiring_snapshot(items: Iterable[dict], bus: Optional[EventBus] = None):
    """Publish a snapshot of items that will expire soon.

    Payload structure:
        {
          'count': <int>,
          'items': [ { name, quantity, unit, exp, days_left, category }, ... ]
        }
    """
    items_list = list(items) if not isinstance(items, list) else items
    _bus(bus).publish(INVENTORY_EXPIRING_SNAPSHOT, {
        'count': len(items_list),
        'items': items_list
    })
