# pos_core/controller.py
"""
PosController owns the one in-memory DBState of the application.

Every mutating method computes the new state with the pure functions of
catalog / customers / pos / settings, saves it through the snapshot store
and only then makes it the current state, all under one lock. Readers use
the `state` property and always see a complete snapshot.
"""
import logging
import threading
from typing import Callable, Optional, Tuple, TypeVar, Union

from pos_core import catalog, customers, pos, settings
from pos_core.db import SnapshotStore
from pos_core.models import Customer, DBState, Item, Sale, Store

logger = logging.getLogger(__name__)

T = TypeVar("T")


class PosController:
    def __init__(self, store: SnapshotStore, state: Optional[DBState] = None):
        self.store = store
        self._lock = threading.RLock()
        self._state = state if state is not None else store.load()

    @property
    def state(self) -> DBState:
        return self._state

    def reload(self) -> DBState:
        with self._lock:
            self._state = self.store.load()
            return self._state

    def _apply(self, mutation: Callable[[DBState], Tuple[T, DBState]]) -> T:
        with self._lock:
            result, new_state = mutation(self._state)
            if new_state is not self._state:
                self.store.save(new_state)
                self._state = new_state
            return result

    # -------- CATALOG --------

    def save_item(self, item: Item) -> Item:
        return self._apply(lambda s: catalog.upsert_item(s, item))

    def delete_item(self, item_id: str) -> None:
        self._apply(lambda s: (None, catalog.delete_item(s, item_id)))

    def save_store(self, store: Store) -> Store:
        return self._apply(lambda s: catalog.upsert_store(s, store))

    def delete_store(self, store_id: str) -> None:
        self._apply(lambda s: (None, catalog.delete_store(s, store_id)))

    # -------- CUSTOMERS --------

    def save_customer(self, customer: Customer) -> Customer:
        return self._apply(lambda s: customers.upsert_customer(s, customer))

    def delete_customer(self, customer_id: str) -> None:
        self._apply(lambda s: (None, customers.delete_customer(s, customer_id)))

    # -------- SALES --------

    def commit_sale(
        self,
        cart: pos.Cart,
        payment_method: Union[pos.PaymentMethod, str],
        paid: float = 0,
        customer_id: Optional[str] = None,
    ) -> Sale:
        return self._apply(lambda s: pos.commit_sale(s, cart, payment_method, paid, customer_id))

    # -------- SETTINGS --------

    def update_settings(self, **fields) -> None:
        self._apply(lambda s: (None, settings.update_settings(s, **fields)))

    def login(self, username: str, password: str) -> bool:
        return settings.authenticate(self._state, username, password)

    # -------- BACKUP / RESTORE --------

    def export(self) -> bytes:
        return self.store.export(self._state)

    def restore(self, blob: Union[bytes, str]) -> DBState:
        """Replace the whole state with a backup. A bad backup leaves everything as it was."""
        restored = self.store.import_(blob)
        with self._lock:
            self.store.save(restored)
            self._state = restored
        logger.info(
            "Restored snapshot: %d item(s), %d customer(s), %d sale(s)",
            len(restored.items),
            len(restored.customers),
            len(restored.sales),
        )
        return restored
