# pages/01_Sale.py
import streamlit as st

from pos_core import pos
from pos_core.catalog import search_items
from pos_core.errors import PosError
from pos_core.session import money, require_login

controller = require_login()
state = controller.state
currency = state.settings.currency

if "cart" not in st.session_state:
    st.session_state["cart"] = ()

st.title("🛒 New Sale")

col_cart, col_summary = st.columns([2, 1])

with col_cart:
    search = st.text_input("Search item by code or name", key="sale_search")
    matches = search_items(state, search, limit=5) if search else []

    with st.form("add_line_form", clear_on_submit=True):
        item_id = st.selectbox(
            "Item",
            options=[i.id for i in matches],
            format_func=lambda iid: next(
                f"{i.name} ({i.code}) – {money(i.sale_price, currency)}" for i in matches if i.id == iid
            ),
            index=None,
            placeholder="Search above, then pick an item",
        )
        quantity = st.number_input("Quantity", min_value=0, value=1, step=1)
        add = st.form_submit_button("Add")

    if add:
        try:
            st.session_state["cart"] = pos.add_line(state, st.session_state["cart"], item_id, int(quantity))
        except PosError as e:
            st.error(str(e))

    cart = st.session_state["cart"]
    if not cart:
        st.info("No items in the invoice.")
    for idx, line in enumerate(cart):
        c1, c2, c3, c4, c5 = st.columns([3, 1, 1, 1, 1])
        c1.write(f"**{line.name}**")
        c2.write(money(line.price, currency))
        c3.write(line.quantity)
        c4.write(money(line.total, currency))
        if c5.button("🗑️", key=f"remove_line_{idx}"):
            st.session_state["cart"] = pos.remove_line(cart, idx)
            st.rerun()

with col_summary:
    cart = st.session_state["cart"]
    total = pos.compute_total(cart)
    st.metric("Total", money(total, currency))

    customer_ids = [c.id for c in state.customers]
    names = {c.id: c.name for c in state.customers}
    customer_id = st.selectbox(
        "Customer (optional)",
        options=[""] + customer_ids,
        format_func=lambda cid: names.get(cid, "Walk-in customer"),
    )
    method = st.radio(
        "Payment method",
        options=[pos.PaymentMethod.CASH.value, pos.PaymentMethod.CREDIT.value],
        format_func=lambda m: "Cash" if m == "cash" else "Credit (on account)",
        horizontal=True,
    )
    paid = 0.0
    if method == pos.PaymentMethod.CASH.value:
        paid = st.number_input("Paid", min_value=0.0, value=0.0, step=1.0)
        st.write(f"Change: **{money(pos.compute_change(paid, total), currency)}**")

    if st.button("💾 Save invoice", type="primary"):
        try:
            sale = controller.commit_sale(cart, method, paid=paid, customer_id=customer_id or None)
        except PosError as e:
            st.error(str(e))
        else:
            st.session_state["cart"] = ()
            st.success(f"Invoice saved: {money(sale.total, currency)}")
