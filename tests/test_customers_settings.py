from dataclasses import replace

import pytest

from pos_core import customers, settings
from pos_core.errors import AuthenticationFailure, ValidationError
from pos_core.models import Customer


def test_upsert_customer_creates_with_opening_balance(state):
    customer, after = customers.upsert_customer(state, Customer(id="", name="Mona", balance=15))
    assert customer.id
    assert customers.get_customer(after, customer.id).balance == 15
    assert len(after.customers) == 2


def test_upsert_customer_replaces_by_id(state):
    _, after = customers.upsert_customer(state, replace(state.customers[0], phone="0111", balance=0))
    assert len(after.customers) == 1
    assert customers.get_customer(after, "X").phone == "0111"
    assert customers.get_customer(after, "X").balance == 0


def test_upsert_customer_requires_name(state):
    with pytest.raises(ValidationError):
        customers.upsert_customer(state, Customer(id="", name=""))


def test_delete_customer_is_idempotent(state):
    after = customers.delete_customer(state, "X")
    assert after.customers == ()
    assert customers.delete_customer(after, "X") is after


def test_customers_with_debt(state):
    _, after = customers.upsert_customer(state, Customer(id="Y", name="Paid Up", balance=0))
    _, after = customers.upsert_customer(after, Customer(id="Z", name="Big", balance=100))
    assert [c.id for c in customers.customers_with_debt(after)] == ["Z", "X"]


def test_update_settings(state):
    after = settings.update_settings(state, company_name="New Name", currency="USD")
    assert after.settings.company_name == "New Name"
    assert after.settings.currency == "USD"
    assert after.settings.password == "secret"


def test_empty_password_keeps_current_one(state):
    after = settings.update_settings(state, password="")
    assert after.settings.password == "secret"


def test_update_settings_validation(state):
    with pytest.raises(ValidationError):
        settings.update_settings(state, username=" ")
    with pytest.raises(ValidationError):
        settings.update_settings(state, theme="dark")


def test_authenticate(state):
    assert settings.authenticate(state, "admin", "secret") is True
    with pytest.raises(AuthenticationFailure):
        settings.authenticate(state, "admin", "wrong")
    with pytest.raises(AuthenticationFailure):
        settings.authenticate(state, "root", "secret")


def test_authenticate_fails_without_stored_password(state):
    no_password = replace(state, settings=replace(state.settings, password=None))
    with pytest.raises(AuthenticationFailure):
        settings.authenticate(no_password, "admin", "")
