# pos_core/analytics.py
from datetime import date, datetime, timezone
from typing import Dict, List, Union

import pandas as pd

from pos_core.models import DBState, Sale

DateLike = Union[date, str]


def _day(value: DateLike) -> str:
    if isinstance(value, date):
        return value.isoformat()[:10]
    return str(value)[:10]


def utc_today() -> date:
    """Sale dates are stored in UTC, so report ranges default to the UTC day."""
    return datetime.now(timezone.utc).date()


def sales_between(state: DBState, date_from: DateLike, date_to: DateLike) -> List[Sale]:
    """Sales whose calendar day falls within [date_from, date_to]."""
    start, end = _day(date_from), _day(date_to)
    return [s for s in state.sales if start <= s.date[:10] <= end]


def sales_frame(sales: List[Sale]) -> pd.DataFrame:
    columns = ["id", "day", "total", "paid", "change", "payment_method", "customer_id", "lines"]
    rows = [
        {
            "id": s.id,
            "day": s.date[:10],
            "total": s.total,
            "paid": s.paid,
            "change": s.change,
            "payment_method": s.payment_method,
            "customer_id": s.customer_id,
            "lines": len(s.items),
        }
        for s in sales
    ]
    return pd.DataFrame(rows, columns=columns)


def lines_frame(state: DBState, sales: List[Sale]) -> pd.DataFrame:
    """
    One row per sold line, with the unit cost taken from the item's current
    purchase price (0 when unknown or when the item was deleted).
    """
    costs = {i.id: (i.purchase_price or 0) for i in state.items}
    columns = ["sale_id", "day", "item_id", "name", "price", "quantity", "total", "unit_cost"]
    rows = []
    for s in sales:
        for line in s.items:
            rows.append(
                {
                    "sale_id": s.id,
                    "day": s.date[:10],
                    "item_id": line.item_id,
                    "name": line.name,
                    "price": line.price,
                    "quantity": line.quantity,
                    "total": line.total,
                    "unit_cost": costs.get(line.item_id, 0),
                }
            )
    return pd.DataFrame(rows, columns=columns)


def sales_summary(state: DBState, date_from: DateLike, date_to: DateLike) -> Dict[str, float]:
    sales = sales_between(state, date_from, date_to)
    df = lines_frame(state, sales)
    if df.empty:
        profit = 0.0
    else:
        profit = float(((df["price"] - df["unit_cost"]) * df["quantity"]).sum())
    return {
        "total_sales": float(sum(s.total for s in sales)),
        "estimated_profit": profit,
        "invoice_count": len(sales),
    }


def daily_revenue(state: DBState, date_from: DateLike, date_to: DateLike) -> pd.DataFrame:
    df = sales_frame(sales_between(state, date_from, date_to))
    if df.empty:
        return pd.DataFrame(columns=["day", "total"])
    return df.groupby("day", as_index=False)["total"].sum().sort_values("day").reset_index(drop=True)


def top_items(state: DBState, date_from: DateLike, date_to: DateLike, limit: int = 10) -> pd.DataFrame:
    df = lines_frame(state, sales_between(state, date_from, date_to))
    if df.empty:
        return pd.DataFrame(columns=["name", "quantity", "total"])
    grouped = (
        df.groupby(["item_id", "name"], as_index=False)[["quantity", "total"]]
        .sum()
        .sort_values("total", ascending=False)
        .head(limit)
    )
    return grouped[["name", "quantity", "total"]].reset_index(drop=True)
