"""Web-facing observers for inventory events.

Subscribes to the GLOBAL_EVENT_BUS for every inventory event and keeps a
lightweight in-memory ring buffer of recent events that the API can serve
to polling clients.

Design:
  * Each event stored with an auto-increment integer id (cursor) so clients
    can request only newer events (since=<last_id_seen>).
  * A Lock guards the buffer; uvicorn may serve requests from a thread pool.
  * MAX_EVENTS caps memory use.
"""
from __future__ import annotations
import logging
from typing import List, Dict, Any
from threading import Lock
from datetime import datetime, timezone

from larder.utilities.config import MAX_EVENTS
from .Event_Bus import (
    GLOBAL_EVENT_BUS, INVENTORY_LOW_STOCK, INVENTORY_NEAR_EXPIRY,
    INVENTORY_ITEM_DEPLETED, INVENTORY_BATCH_DISCARDED
)

logger = logging.getLogger(__name__)

_lock = Lock()
_events: List[Dict[str, Any]] = []
_next_id = 1
_started = False

_WATCHED = (INVENTORY_LOW_STOCK, INVENTORY_NEAR_EXPIRY, INVENTORY_ITEM_DEPLETED, INVENTORY_BATCH_DISCARDED)


def _record(event_name: str, payload: Any):  # signature expected by EventBus
    global _next_id
    with _lock:
        evt = {
            'id': _next_id,
            'type': event_name,
            'ts': datetime.now(timezone.utc).isoformat()
        }
        if isinstance(payload, dict):
            item = payload.get('item')
            if item is not None and hasattr(item, 'name'):
                evt['name'] = item.name
                evt['unit'] = item.unit
                evt['quantity'] = item.total_amount
            if 'name' in payload and 'name' not in evt:
                evt['name'] = payload['name']
            batch = payload.get('batch')
            if batch is not None:
                evt['quantity'] = batch.amount
                evt['expiration_date'] = batch.expiration_date.isoformat()
            for k in ('remaining', 'threshold', 'days_left'):
                if k in payload:
                    evt[k] = payload[k]
        _events.append(evt)
        _next_id += 1
        # Trim buffer
        if len(_events) > MAX_EVENTS:
            del _events[: len(_events) - MAX_EVENTS]


def start():
    """Idempotent start: subscribe observers once."""
    global _started
    if _started:
        return
    for name in _WATCHED:
        GLOBAL_EVENT_BUS.subscribe(name, _record)
    _started = True
    logger.info("Web observers for inventory events started")


def get_events(since: int | None = None) -> Dict[str, Any]:
    """Return events newer than 'since' (exclusive).

    If since is None, returns the last N (up to MAX_EVENTS) events.
    Response includes next_cursor (largest id) so client can poll with since=next_cursor.
    """
    with _lock:
        if since is None:
            data = list(_events)
        else:
            data = [e for e in _events if e['id'] > since]
        next_cursor = _events[-1]['id'] if _events else since or 0
    return {'events': data, 'next_cursor': next_cursor}


__all__ = ['start', 'get_events']
