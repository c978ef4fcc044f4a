from datetime import date, datetime, timezone

from pos_core import analytics
from pos_core.catalog import delete_item
from pos_core.pos import add_line, commit_sale


def _sell(state, item_id, quantity, day, method="cash"):
    cart = add_line(state, (), item_id, quantity)
    moment = datetime(2024, 5, day, 10, 0, tzinfo=timezone.utc)
    _, after = commit_sale(state, cart, method, paid=1000, customer_id="X", now=moment)
    return after


def _history(state):
    state = _sell(state, "A", 2, 1)            # 20, cost 6 each
    state = _sell(state, "B", 1, 1)            # 25, no purchase price
    state = _sell(state, "A", 1, 3, "credit")  # 10
    state = _sell(state, "B", 2, 9)            # outside the range below
    return state


def test_sales_between_is_inclusive(state):
    state = _history(state)
    assert len(analytics.sales_between(state, "2024-05-01", "2024-05-03")) == 3
    assert len(analytics.sales_between(state, date(2024, 5, 3), date(2024, 5, 3))) == 1
    assert analytics.sales_between(state, "2024-06-01", "2024-06-30") == []


def test_sales_summary(state):
    state = _history(state)
    summary = analytics.sales_summary(state, "2024-05-01", "2024-05-03")
    assert summary["total_sales"] == 55
    assert summary["invoice_count"] == 3
    # (10 - 6) * 3 for tea, (25 - 0) * 1 for sugar
    assert summary["estimated_profit"] == 37


def test_profit_of_deleted_item_uses_zero_cost(state):
    state = _sell(state, "A", 1, 1)
    state = delete_item(state, "A")
    assert analytics.sales_summary(state, "2024-05-01", "2024-05-01")["estimated_profit"] == 10


def test_empty_range(state):
    summary = analytics.sales_summary(state, "2024-05-01", "2024-05-31")
    assert summary == {"total_sales": 0.0, "estimated_profit": 0.0, "invoice_count": 0}
    assert analytics.daily_revenue(state, "2024-05-01", "2024-05-31").empty
    assert analytics.top_items(state, "2024-05-01", "2024-05-31").empty


def test_daily_revenue(state):
    state = _history(state)
    df = analytics.daily_revenue(state, "2024-05-01", "2024-05-31")
    assert df["day"].tolist() == ["2024-05-01", "2024-05-03", "2024-05-09"]
    assert df["total"].tolist() == [45, 10, 50]


def test_top_items(state):
    state = _history(state)
    df = analytics.top_items(state, "2024-05-01", "2024-05-31", limit=1)
    assert df.to_dict("records") == [{"name": "Sugar", "quantity": 3, "total": 75}]


def test_sales_frame_columns(state):
    state = _history(state)
    df = analytics.sales_frame(list(state.sales))
    assert len(df) == 4
    assert set(df["payment_method"]) == {"cash", "credit"}


def test_utc_today_matches_utc_clock():
    before = datetime.now(timezone.utc).date()
    today = analytics.utc_today()
    after = datetime.now(timezone.utc).date()
    assert today in (before, after)
