from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from larder.api.state import get_inventory
from larder.domain.Batch import Batch
from larder.domain.Inventory import Inventory
from larder.domain.Item import Item
from larder.utilities.validators import BatchInput, ConsumeInput, ItemInput

router = APIRouter(prefix="/api/items", tags=["items"])


def _items_payload(items):
    return {"count": len(items), "items": [i.to_dict() for i in items]}


@router.get("")
def list_items(order: str = Query(default="alpha", pattern="^(alpha|expiration|none)$"),
               category: Optional[str] = Query(default=None),
               inventory: Inventory = Depends(get_inventory)):
    """All items, alphabetical (default), by earliest expiration, or unordered."""
    if category:
        items = sorted(inventory.by_category(category), key=lambda i: i.name)
    elif order == "expiration":
        items = inventory.all_items_by_expiration()
    elif order == "none":
        items = inventory.all_items()
    else:
        items = inventory.all_items_alphabetical()
    return _items_payload(items)


@router.get("/expiring")
def expiring_items(before: Optional[date] = Query(default=None),
                   on: Optional[date] = Query(default=None),
                   inventory: Inventory = Depends(get_inventory)):
    if (before is None) == (on is None):
        raise HTTPException(status_code=400, detail="Pass exactly one of 'before' or 'on'")
    items = inventory.expiring_before(before) if before is not None else inventory.expiring_on(on)
    return _items_payload(sorted(items, key=lambda i: (i.earliest_expiration, i.name)))


@router.post("/expired/remove")
def remove_expired(today: Optional[date] = Query(default=None),
                   inventory: Inventory = Depends(get_inventory)):
    day = today or date.today()
    discarded = inventory.remove_expired_before(day)
    return {
        "date": day.isoformat(),
        "removed": [{"name": name, **batch.to_dict()} for name, batch in discarded],
        "value": round(sum(batch.value for _, batch in discarded), 2),
    }


@router.get("/{name}")
def get_item(name: str, ignore_case: bool = Query(default=False),
             inventory: Inventory = Depends(get_inventory)):
    """A single item by name.

    GET /api/items/expiring is registered first and takes that path, so an item
    literally named "expiring" is only reachable through the listing endpoints.
    """
    return inventory.get_by_name(name, ignore_case=ignore_case).to_dict()


@router.post("", status_code=201)
def add_item(payload: ItemInput, inventory: Inventory = Depends(get_inventory)):
    item = Item.from_dict(payload.model_dump())
    inventory.add(item)
    return item.to_dict()


@router.post("/{name}/batches")
def add_batch(name: str, payload: BatchInput, inventory: Inventory = Depends(get_inventory)):
    item = inventory.add_batch_to_item(name, Batch.from_dict(payload.model_dump()))
    return item.to_dict()


@router.post("/{name}/consume")
def consume_item(name: str, payload: ConsumeInput, inventory: Inventory = Depends(get_inventory)):
    consumed = inventory.consume_item(name, payload.amount)
    return {
        "name": name,
        "consumed": [{"amount": amount, "expiration_date": batch.expiration_date.isoformat()}
                     for batch, amount in consumed],
        "remaining": inventory.get_by_name(name).to_dict() if name in inventory else None,
    }


@router.delete("/{name}")
def delete_item(name: str, inventory: Inventory = Depends(get_inventory)):
    inventory.remove(name)
    return {"status": "deleted", "name": name}


@router.delete("")
def delete_all_items(inventory: Inventory = Depends(get_inventory)):
    removed = len(inventory)
    inventory.remove_all_items()
    return {"status": "deleted", "count": removed}
