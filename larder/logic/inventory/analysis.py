"""Inventory analysis helpers.

Value totals plus expiring-soon and low-stock snapshots. The current date is
always passed in by the caller.
"""
from __future__ import annotations
import math
from datetime import date
from typing import List, Dict, Any, Optional

from larder.domain.Inventory import Inventory
from larder.domain.errors import require_date
from larder.events.Event_Bus import EventBus
from larder.events.event_helpers import publish_expiring_snapshot, publish_low_stock, publish_near_expiry
from larder.utilities.config import DATE_FORMAT, DAYS_BEFORE_EXPIRY, LOW_STOCK_THRESHOLD

__all__ = [
    "total_value", "expired_value", "compute_expiring_soon", "compute_low_stock",
    "compute_inventory_snapshots", "scan_and_notify"
]


def total_value(inventory: Inventory) -> float:
    """Sum of amount * unit price over every batch in the inventory."""
    return math.fsum(item.value for item in inventory)


def expired_value(inventory: Inventory, today: date) -> float:
    """Value of the batches that expired before today."""
    today = require_date(today, "Today")
    return math.fsum(item.expired_value(today) for item in inventory.expiring_before(today))


def compute_expiring_soon(inventory: Inventory, today: date, *, window: int | None = None) -> List[Dict[str, Any]]:
    """Return batches expiring in <= window days (including already expired), soonest first."""
    today = require_date(today, "Today")
    expiring_window = window if window is not None else DAYS_BEFORE_EXPIRY
    result: List[Dict[str, Any]] = []
    for item in inventory:
        for batch in item.batches:
            days_left = (batch.expiration_date - today).days
            if days_left > expiring_window:
                break
            result.append({
                'name': item.name,
                'quantity': batch.amount,
                'unit': item.unit,
                'exp': batch.expiration_date.strftime(DATE_FORMAT),
                'days_left': days_left,
                'category': item.category
            })
    result.sort(key=lambda x: (x['days_left'], x['name']))
    return result


def compute_low_stock(inventory: Inventory, thresholds: Optional[Dict[str, float]] = None) -> List[Dict[str, Any]]:
    """Return items whose total amount is at or below the threshold for their unit."""
    limits = thresholds if thresholds is not None else LOW_STOCK_THRESHOLD
    low: List[Dict[str, Any]] = []
    for item in inventory:
        th = limits.get(item.unit.lower(), 0)
        if th > 0 and item.total_amount <= th:
            low.append({
                'name': item.name,
                'quantity': item.total_amount,
                'unit': item.unit,
                'threshold': th,
                'category': item.category
            })
    low.sort(key=lambda x: (x['quantity'], x['name']))
    return low


def compute_inventory_snapshots(inventory: Inventory, today: date, *, window: int | None = None):
    exp = compute_expiring_soon(inventory, today, window=window)
    low = compute_low_stock(inventory)
    return exp, low


def scan_and_notify(inventory: Inventory, today: date, *, window: int | None = None,
                    bus: Optional[EventBus] = None):
    """Publish low-stock, near-expiry and snapshot events for the current inventory state."""
    expiring_window = window if window is not None else DAYS_BEFORE_EXPIRY
    exp, low = compute_inventory_snapshots(inventory, today, window=expiring_window)
    for entry in low:
        publish_low_stock(inventory.get_by_name(entry['name']), entry['quantity'], entry['threshold'], bus=bus)
    notified = set()
    for entry in exp:
        if entry['name'] in notified:
            continue
        notified.add(entry['name'])
        publish_near_expiry(inventory.get_by_name(entry['name']), entry['days_left'], expiring_window, bus=bus)
    publish_expiring_snapshot(exp, bus=bus)
    return exp, low
