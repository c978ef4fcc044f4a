# pos_core/models.py
"""
Entities of the point-of-sale database and their mapping to the stored
snapshot format (camelCase keys, plain JSON types).

Every entity is a frozen dataclass and every collection a tuple, so a
DBState value never changes once built. Operations produce new values
with dataclasses.replace().
"""
from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple

from pos_core.errors import MalformedSnapshot


# =========================
# FIELD HELPERS
# =========================

def _require(data: Dict[str, Any], key: str, kind: str) -> Any:
    if not isinstance(data, dict):
        raise MalformedSnapshot(f"Expected an object for {kind}, got {type(data).__name__}")
    if key not in data:
        raise MalformedSnapshot(f"{kind} is missing required field '{key}'")
    return data[key]


def _text(data: Dict[str, Any], key: str, kind: str) -> str:
    value = _require(data, key, kind)
    if isinstance(value, bool) or not isinstance(value, (str, int)):
        raise MalformedSnapshot(f"{kind}.{key} must be text")
    return str(value)


def _number(value: Any, key: str, kind: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise MalformedSnapshot(f"{kind}.{key} must be a number")
    return value


def _required_number(data: Dict[str, Any], key: str, kind: str) -> float:
    return _number(_require(data, key, kind), key, kind)


def _optional(data: Dict[str, Any], key: str) -> Any:
    # Older snapshots may omit optional fields entirely, or store them as null.
    return data.get(key)


def _required_integer(data: Dict[str, Any], key: str, kind: str) -> int:
    value = _require(data, key, kind)
    if isinstance(value, bool) or not isinstance(value, int):
        raise MalformedSnapshot(f"{kind}.{key} must be a whole number")
    return value


def _optional_text(data: Dict[str, Any], key: str, kind: str) -> Optional[str]:
    value = _optional(data, key)
    if value is not None and not isinstance(value, str):
        raise MalformedSnapshot(f"{kind}.{key} must be text")
    return value


def _list(data: Dict[str, Any], key: str, kind: str) -> list:
    value = _require(data, key, kind)
    if not isinstance(value, list):
        raise MalformedSnapshot(f"{kind}.{key} must be a list")
    return value


# =========================
# ENTITIES
# =========================

@dataclass(frozen=True)
class Store:
    id: str
    name: str

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "name": self.name}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Store":
        return cls(id=_text(data, "id", "Store"), name=_text(data, "name", "Store"))


@dataclass(frozen=True)
class Item:
    id: str
    code: str
    name: str
    sale_price: float
    quantity: int
    store_id: str
    low_stock_threshold: int
    purchase_price: Optional[float] = None

    @property
    def is_low_stock(self) -> bool:
        return self.quantity <= self.low_stock_threshold

    def to_dict(self) -> Dict[str, Any]:
        data = {
            "id": self.id,
            "code": self.code,
            "name": self.name,
            "salePrice": self.sale_price,
            "quantity": self.quantity,
            "storeId": self.store_id,
            "lowStockThreshold": self.low_stock_threshold,
        }
        if self.purchase_price is not None:
            data["purchasePrice"] = self.purchase_price
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Item":
        purchase_price = _optional(data, "purchasePrice")
        if purchase_price is not None:
            purchase_price = _number(purchase_price, "purchasePrice", "Item")
        return cls(
            id=_text(data, "id", "Item"),
            code=_text(data, "code", "Item"),
            name=_text(data, "name", "Item"),
            sale_price=_required_number(data, "salePrice", "Item"),
            quantity=_required_integer(data, "quantity", "Item"),
            store_id=_text(data, "storeId", "Item"),
            low_stock_threshold=_required_integer(data, "lowStockThreshold", "Item"),
            purchase_price=purchase_price,
        )


@dataclass(frozen=True)
class Customer:
    id: str
    name: str
    phone: str = ""
    address: str = ""
    balance: float = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "phone": self.phone,
            "address": self.address,
            "balance": self.balance,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Customer":
        return cls(
            id=_text(data, "id", "Customer"),
            name=_text(data, "name", "Customer"),
            phone=_text(data, "phone", "Customer"),
            address=_text(data, "address", "Customer"),
            balance=_required_number(data, "balance", "Customer"),
        )


@dataclass(frozen=True)
class SaleItem:
    """One cart / sale line. name and price are copies taken when the line was added."""

    item_id: str
    name: str
    price: float
    quantity: int
    total: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "itemId": self.item_id,
            "name": self.name,
            "price": self.price,
            "quantity": self.quantity,
            "total": self.total,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SaleItem":
        return cls(
            item_id=_text(data, "itemId", "SaleItem"),
            name=_text(data, "name", "SaleItem"),
            price=_required_number(data, "price", "SaleItem"),
            quantity=_required_integer(data, "quantity", "SaleItem"),
            total=_required_number(data, "total", "SaleItem"),
        )


@dataclass(frozen=True)
class Sale:
    id: str
    date: str
    items: Tuple[SaleItem, ...]
    total: float
    paid: float
    change: float
    payment_method: str
    customer_id: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data = {
            "id": self.id,
            "date": self.date,
            "items": [line.to_dict() for line in self.items],
            "total": self.total,
            "paid": self.paid,
            "change": self.change,
            "paymentMethod": self.payment_method,
        }
        if self.customer_id:
            data["customerId"] = self.customer_id
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Sale":
        payment_method = _text(data, "paymentMethod", "Sale")
        if payment_method not in ("cash", "credit"):
            raise MalformedSnapshot(f"Sale.paymentMethod must be 'cash' or 'credit', got {payment_method!r}")
        customer_id = _optional(data, "customerId")
        return cls(
            id=_text(data, "id", "Sale"),
            date=_text(data, "date", "Sale"),
            items=tuple(SaleItem.from_dict(line) for line in _list(data, "items", "Sale")),
            total=_required_number(data, "total", "Sale"),
            paid=_required_number(data, "paid", "Sale"),
            change=_required_number(data, "change", "Sale"),
            payment_method=payment_method,
            customer_id=str(customer_id) if customer_id not in (None, "") else None,
        )


@dataclass(frozen=True)
class Settings:
    company_name: str
    currency: str
    username: str
    password: Optional[str] = None
    logo: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data = {
            "companyName": self.company_name,
            "currency": self.currency,
            "username": self.username,
        }
        if self.password is not None:
            data["password"] = self.password
        if self.logo is not None:
            data["logo"] = self.logo
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Settings":
        return cls(
            company_name=_text(data, "companyName", "Settings"),
            currency=_text(data, "currency", "Settings"),
            username=_text(data, "username", "Settings"),
            password=_optional_text(data, "password", "Settings"),
            logo=_optional_text(data, "logo", "Settings"),
        )


@dataclass(frozen=True)
class DBState:
    settings: Settings
    items: Tuple[Item, ...] = field(default_factory=tuple)
    customers: Tuple[Customer, ...] = field(default_factory=tuple)
    stores: Tuple[Store, ...] = field(default_factory=tuple)
    sales: Tuple[Sale, ...] = field(default_factory=tuple)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "items": [i.to_dict() for i in self.items],
            "customers": [c.to_dict() for c in self.customers],
            "stores": [s.to_dict() for s in self.stores],
            "sales": [s.to_dict() for s in self.sales],
            "settings": self.settings.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DBState":
        # Check every top-level key before decoding, so the error names the first one missing.
        for key in ("items", "customers", "stores", "sales", "settings"):
            _require(data, key, "Snapshot")
        return cls(
            items=tuple(Item.from_dict(i) for i in _list(data, "items", "Snapshot")),
            customers=tuple(Customer.from_dict(c) for c in _list(data, "customers", "Snapshot")),
            stores=tuple(Store.from_dict(s) for s in _list(data, "stores", "Snapshot")),
            sales=tuple(Sale.from_dict(s) for s in _list(data, "sales", "Snapshot")),
            settings=Settings.from_dict(data["settings"]),
        )


def new_id() -> str:
    return uuid.uuid4().hex
