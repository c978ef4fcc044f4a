# pages/05_Reports.py
import streamlit as st

from pos_core.analytics import daily_revenue, sales_between, sales_frame, sales_summary, top_items, utc_today
from pos_core.session import money, require_login

controller = require_login()
state = controller.state
currency = state.settings.currency

st.title("📊 Reports")

col1, col2 = st.columns(2)
with col1:
    date_from = st.date_input("From", value=utc_today())
with col2:
    date_to = st.date_input("To", value=utc_today())

summary = sales_summary(state, date_from, date_to)
m1, m2, m3 = st.columns(3)
m1.metric("Total sales", money(summary["total_sales"], currency))
m2.metric("Estimated profit", money(summary["estimated_profit"], currency))
m3.metric("Invoices", summary["invoice_count"])

daily = daily_revenue(state, date_from, date_to)
if not daily.empty:
    st.subheader("Daily revenue")
    st.bar_chart(daily.set_index("day")["total"])

top = top_items(state, date_from, date_to)
if not top.empty:
    st.subheader("Top items")
    st.dataframe(top, use_container_width=True, hide_index=True)

st.subheader("Sales")
sales = sales_frame(sales_between(state, date_from, date_to))
if sales.empty:
    st.info("No sales in this period.")
else:
    names = {c.id: c.name for c in state.customers}
    sales["customer"] = sales["customer_id"].map(lambda cid: names.get(cid, "") if cid else "")
    st.dataframe(
        sales[["day", "total", "paid", "change", "payment_method", "customer", "lines"]],
        use_container_width=True,
        hide_index=True,
    )
