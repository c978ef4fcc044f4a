# pos_core/catalog.py
import logging
from dataclasses import replace
from typing import Dict, Iterator, List, Optional, Tuple

from pos_core.errors import ValidationError
from pos_core.models import DBState, Item, Store, new_id

logger = logging.getLogger(__name__)

UNKNOWN_STORE = "unknown"


# =========================
# ITEMS
# =========================

def get_item(state: DBState, item_id: str) -> Optional[Item]:
    for item in state.items:
        if item.id == item_id:
            return item
    return None


def upsert_item(state: DBState, item: Item) -> Tuple[Item, DBState]:
    """
    Insert the item when it has no id, otherwise replace the record with the
    same id. Returns the stored item and the new state.
    """
    if not (item.code or "").strip() or not (item.name or "").strip():
        raise ValidationError("Item code and name are required")

    if not item.id:
        item = replace(item, id=new_id())
        return item, replace(state, items=state.items + (item,))

    if get_item(state, item.id) is None:
        return item, replace(state, items=state.items + (item,))

    items = tuple(item if i.id == item.id else i for i in state.items)
    return item, replace(state, items=items)


def delete_item(state: DBState, item_id: str) -> DBState:
    # Past sales keep their own copy of name and price, nothing to check there.
    items = tuple(i for i in state.items if i.id != item_id)
    if len(items) == len(state.items):
        return state
    return replace(state, items=items)


def low_stock_items(state: DBState) -> Iterator[Item]:
    for item in state.items:
        if item.quantity <= item.low_stock_threshold:
            yield item


def search_items(state: DBState, query: str, limit: int = None) -> List[Item]:
    q = (query or "").strip().lower()
    if not q:
        return []
    found = []
    for item in state.items:
        if q in (item.code or "").lower() or q in (item.name or "").lower():
            found.append(item)
            if limit is not None and len(found) >= limit:
                break
    return found


# =========================
# STORES
# =========================

def get_store(state: DBState, store_id: str) -> Optional[Store]:
    for store in state.stores:
        if store.id == store_id:
            return store
    return None


def upsert_store(state: DBState, store: Store) -> Tuple[Store, DBState]:
    if not (store.name or "").strip():
        raise ValidationError("Store name is required")

    if not store.id:
        store = replace(store, id=new_id())
        return store, replace(state, stores=state.stores + (store,))

    if get_store(state, store.id) is None:
        return store, replace(state, stores=state.stores + (store,))

    stores = tuple(store if s.id == store.id else s for s in state.stores)
    return store, replace(state, stores=stores)


def delete_store(state: DBState, store_id: str) -> DBState:
    """Items that pointed at the store keep the dangling storeId."""
    stores = tuple(s for s in state.stores if s.id != store_id)
    if len(stores) == len(state.stores):
        return state
    orphaned = sum(1 for i in state.items if i.store_id == store_id)
    if orphaned:
        logger.info("Deleted store %s, %d item(s) are now unassigned", store_id, orphaned)
    return replace(state, stores=stores)


def store_name(state: DBState, store_id: str, default: str = UNKNOWN_STORE) -> str:
    store = get_store(state, store_id)
    return store.name if store else default


def items_per_store(state: DBState) -> Dict[str, int]:
    counts = {s.id: 0 for s in state.stores}
    for item in state.items:
        if item.store_id in counts:
            counts[item.store_id] += 1
    return counts


def store_choices(state: DBState, current_store_id: Optional[str] = None) -> List[str]:
    """Store ids to offer for an item. A dangling current id stays selectable so edits keep it."""
    ids = [s.id for s in state.stores]
    if current_store_id and current_store_id not in ids:
        ids.insert(0, current_store_id)
    return ids
