# pages/04_Stores.py
import streamlit as st

from pos_core.catalog import items_per_store, low_stock_items
from pos_core.errors import PosError
from pos_core.models import Store
from pos_core.session import require_login

controller = require_login()
state = controller.state

st.title("🏬 Stores")

col_stores, col_alerts = st.columns(2)

with col_stores:
    st.subheader("Add store")
    with st.form("store_form", clear_on_submit=True):
        name = st.text_input("Store name")
        submitted = st.form_submit_button("Add")
    if submitted:
        try:
            controller.save_store(Store(id="", name=name.strip()))
        except PosError as e:
            st.error(str(e))
        else:
            st.rerun()

    counts = items_per_store(state)
    for s in state.stores:
        st.markdown(f"**{s.name}** · {counts.get(s.id, 0)} item(s)")

with col_alerts:
    st.subheader("⚠️ Low-stock alerts")
    alerts = list(low_stock_items(state))
    if not alerts:
        st.info("No alerts right now.")
    for item in alerts:
        st.markdown(f"**{item.name}** – {item.quantity} (alert at {item.low_stock_threshold})")
