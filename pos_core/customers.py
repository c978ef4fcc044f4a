# pos_core/customers.py
from dataclasses import replace
from typing import List, Optional, Tuple

from pos_core.errors import ValidationError
from pos_core.models import Customer, DBState, new_id


def get_customer(state: DBState, customer_id: str) -> Optional[Customer]:
    for customer in state.customers:
        if customer.id == customer_id:
            return customer
    return None


def upsert_customer(state: DBState, customer: Customer) -> Tuple[Customer, DBState]:
    """
    Create or replace a customer. The balance given here is an administrative
    edit (e.g. an opening balance); sales never go through this path.
    """
    if not (customer.name or "").strip():
        raise ValidationError("Customer name is required")

    if not customer.id:
        customer = replace(customer, id=new_id())
        return customer, replace(state, customers=state.customers + (customer,))

    if get_customer(state, customer.id) is None:
        return customer, replace(state, customers=state.customers + (customer,))

    customers = tuple(customer if c.id == customer.id else c for c in state.customers)
    return customer, replace(state, customers=customers)


def delete_customer(state: DBState, customer_id: str) -> DBState:
    customers = tuple(c for c in state.customers if c.id != customer_id)
    if len(customers) == len(state.customers):
        return state
    return replace(state, customers=customers)


def customers_with_debt(state: DBState) -> List[Customer]:
    return sorted((c for c in state.customers if c.balance > 0), key=lambda c: c.balance, reverse=True)
