# pos_core/pos.py
"""
Ledger: carts and committed sales.

A cart is a tuple of SaleItem lines. Cart functions return a new tuple and
never touch the database state; only commit_sale() produces a new DBState,
in which the sale, the stock decrements and the customer balance change
appear together.
"""
import enum
import logging
from dataclasses import replace
from datetime import datetime, timezone
from typing import Optional, Tuple, Union

from pos_core.catalog import get_item
from pos_core.errors import EmptyCartError, ValidationError
from pos_core.models import DBState, Sale, SaleItem, new_id

logger = logging.getLogger(__name__)

Cart = Tuple[SaleItem, ...]


class PaymentMethod(str, enum.Enum):
    CASH = "cash"
    CREDIT = "credit"


def _payment_method(value: Union[PaymentMethod, str]) -> PaymentMethod:
    try:
        return PaymentMethod(value)
    except ValueError:
        raise ValidationError(f"Unknown payment method: {value!r}") from None


# =========================
# CART
# =========================

def add_line(state: DBState, cart: Cart, item_id: Optional[str], quantity: int) -> Cart:
    if not item_id:
        raise ValidationError("Select an item first")
    if quantity is None or quantity <= 0:
        raise ValidationError("Quantity must be greater than zero")

    for index, line in enumerate(cart):
        if line.item_id == item_id:
            new_quantity = line.quantity + quantity
            merged = replace(line, quantity=new_quantity, total=line.price * new_quantity)
            return cart[:index] + (merged,) + cart[index + 1:]

    item = get_item(state, item_id)
    if item is None:
        raise ValidationError(f"Item {item_id} not found")

    line = SaleItem(
        item_id=item.id,
        name=item.name,
        price=item.sale_price,
        quantity=quantity,
        total=item.sale_price * quantity,
    )
    return cart + (line,)


def remove_line(cart: Cart, index: int) -> Cart:
    if index < 0 or index >= len(cart):
        raise IndexError(f"Cart has no line {index}")
    return cart[:index] + cart[index + 1:]


def compute_total(cart: Cart) -> float:
    return sum(line.total for line in cart)


def compute_change(paid: float, total: float) -> float:
    return max(0, paid - total)


# =========================
# COMMIT
# =========================

def commit_sale(
    state: DBState,
    cart: Cart,
    payment_method: Union[PaymentMethod, str],
    paid: float = 0,
    customer_id: Optional[str] = None,
    now: Optional[datetime] = None,
) -> Tuple[Sale, DBState]:
    """
    Turn the cart into a Sale and apply its effects:
      - every sold item's quantity goes down by the sold quantity (it may go negative)
      - credit sale with a customer: customer balance goes up by the total
      - the sale is appended to the sales list

    Cash sales record paid and change as given; an underpayment is accepted
    and simply has no change. Credit sales record paid = change = 0.
    """
    if not cart:
        raise EmptyCartError()
    method = _payment_method(payment_method)

    # Line totals are derived, not trusted.
    lines = tuple(replace(line, total=line.price * line.quantity) for line in cart)
    total = compute_total(lines)

    if method is PaymentMethod.CASH:
        paid_amount = paid or 0
        change = compute_change(paid_amount, total)
    else:
        paid_amount = 0
        change = 0

    sale = Sale(
        id=new_id(),
        date=(now or datetime.now(timezone.utc)).isoformat(),
        items=lines,
        total=total,
        paid=paid_amount,
        change=change,
        payment_method=method.value,
        customer_id=customer_id or None,
    )

    sold = {}
    for line in lines:
        sold[line.item_id] = sold.get(line.item_id, 0) + line.quantity
    items = tuple(
        replace(item, quantity=item.quantity - sold[item.id]) if item.id in sold else item
        for item in state.items
    )
    missing = set(sold) - {i.id for i in state.items}
    if missing:
        logger.warning("Sale %s sold item(s) no longer in the catalog: %s", sale.id, ", ".join(sorted(missing)))

    customers = state.customers
    if method is PaymentMethod.CREDIT and sale.customer_id:
        if any(c.id == sale.customer_id for c in customers):
            customers = tuple(
                replace(c, balance=c.balance + total) if c.id == sale.customer_id else c
                for c in customers
            )
        else:
            logger.warning("Credit sale %s references unknown customer %s", sale.id, sale.customer_id)

    new_state = replace(state, items=items, customers=customers, sales=state.sales + (sale,))
    logger.info("Committed %s sale %s: %d line(s), total %.2f", method.value, sale.id, len(lines), total)
    return sale, new_state
