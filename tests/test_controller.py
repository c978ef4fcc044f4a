import json
from dataclasses import replace

import pytest

from pos_core.controller import PosController
from pos_core.db import SnapshotStore
from pos_core.errors import AuthenticationFailure, EmptyCartError, MalformedSnapshot, ValidationError
from pos_core.models import Customer, Item, Store
from pos_core.pos import add_line


@pytest.fixture
def controller(snapshot_store, state):
    snapshot_store.save(state)
    return PosController(snapshot_store)


def test_controller_loads_persisted_state(controller, state):
    assert controller.state == state


def test_controller_starts_from_default_state_on_first_run(snapshot_store):
    controller = PosController(snapshot_store)
    assert len(controller.state.stores) == 1
    controller.login(controller.state.settings.username, controller.state.settings.password)


def test_commit_sale_is_persisted(controller, config):
    cart = add_line(controller.state, (), "A", 2)
    sale = controller.commit_sale(cart, "credit", customer_id="X")

    reopened = SnapshotStore(config=config).load()
    assert reopened == controller.state
    assert reopened.sales == (sale,)
    assert [c.balance for c in reopened.customers] == [50]


def test_failed_commit_changes_nothing(controller, config, state):
    with pytest.raises(EmptyCartError):
        controller.commit_sale((), "cash", paid=10)
    assert controller.state == state
    assert SnapshotStore(config=config).load() == state


def test_failed_save_keeps_previous_state(controller, state, monkeypatch):
    def broken_save(new_state):
        raise OSError("disk full")

    monkeypatch.setattr(controller.store, "save", broken_save)
    cart = add_line(state, (), "A", 1)
    with pytest.raises(OSError):
        controller.commit_sale(cart, "cash", paid=10)
    assert controller.state == state


def test_catalog_and_customer_edits_are_persisted(controller, config):
    item = controller.save_item(
        Item(id="", code="C", name="Coffee", sale_price=40, quantity=3, store_id="S1", low_stock_threshold=1)
    )
    store = controller.save_store(Store(id="", name="Warehouse"))
    customer = controller.save_customer(Customer(id="", name="Mona"))
    controller.delete_item("B")
    controller.update_settings(currency="USD")

    reopened = SnapshotStore(config=config).load()
    assert {i.id for i in reopened.items} == {"A", item.id}
    assert store in reopened.stores
    assert customer in reopened.customers
    assert reopened.settings.currency == "USD"

    controller.delete_store(store.id)
    controller.delete_customer(customer.id)
    reopened = SnapshotStore(config=config).load()
    assert store not in reopened.stores
    assert customer not in reopened.customers


def test_validation_error_leaves_state(controller, state):
    with pytest.raises(ValidationError):
        controller.save_item(replace(state.items[0], name=""))
    assert controller.state == state


def test_restore_replaces_state(controller, config, state):
    backup = controller.export()
    cart = add_line(controller.state, (), "A", 2)
    controller.commit_sale(cart, "cash", paid=20)
    assert controller.state != state

    restored = controller.restore(backup)
    assert restored == state
    assert controller.state == state
    assert SnapshotStore(config=config).load() == state


def test_restore_with_missing_items_key_keeps_prior_state(controller, config, state):
    blob = b'{"customers": [], "stores": [], "sales": [], "settings": {"companyName": "x", "currency": "y", "username": "z"}}'
    with pytest.raises(MalformedSnapshot):
        controller.restore(blob)
    assert controller.state == state
    assert SnapshotStore(config=config).load() == state


def test_login(controller):
    assert controller.login("admin", "secret")
    with pytest.raises(AuthenticationFailure):
        controller.login("admin", "nope")


def test_reload_reads_the_store(controller, snapshot_store, state):
    other = replace(state, stores=state.stores + (Store(id="S2", name="Second"),))
    snapshot_store.save(other)
    assert controller.reload() == other


def test_restore_with_numeric_password_keeps_login_working(controller, state):
    data = state.to_dict()
    data["settings"]["password"] = 123
    with pytest.raises(MalformedSnapshot):
        controller.restore(json.dumps(data).encode("utf-8"))
    assert controller.login("admin", "secret")
