# pages/03_Customers.py
import pandas as pd
import streamlit as st

from pos_core.customers import get_customer
from pos_core.errors import PosError
from pos_core.models import Customer
from pos_core.session import money, require_login

controller = require_login()
state = controller.state
currency = state.settings.currency

st.title("👥 Customers")

col_form, col_list = st.columns([1, 2])

with col_form:
    editing = get_customer(state, st.session_state.get("editing_customer_id"))
    st.subheader("Edit customer" if editing else "New customer")

    with st.form("customer_form"):
        name = st.text_input("Name", value=editing.name if editing else "")
        phone = st.text_input("Phone", value=editing.phone if editing else "")
        address = st.text_input("Address", value=editing.address if editing else "")
        balance = st.number_input("Balance (owed to us)", value=float(editing.balance if editing else 0))
        submitted = st.form_submit_button("Update" if editing else "Save")

    if submitted:
        try:
            controller.save_customer(
                Customer(
                    id=editing.id if editing else "",
                    name=name.strip(),
                    phone=phone.strip(),
                    address=address.strip(),
                    balance=balance,
                )
            )
        except PosError as e:
            st.error(str(e))
        else:
            st.session_state.pop("editing_customer_id", None)
            st.rerun()

with col_list:
    if not state.customers:
        st.info("No customers yet.")
    else:
        st.dataframe(
            pd.DataFrame(
                [
                    {"Name": c.name, "Phone": c.phone, "Address": c.address, "Balance": money(c.balance, currency)}
                    for c in state.customers
                ]
            ),
            use_container_width=True,
            hide_index=True,
        )
        selected = st.selectbox(
            "Select customer",
            [c.id for c in state.customers],
            format_func=lambda cid: get_customer(state, cid).name,
        )
        c1, c2 = st.columns(2)
        if c1.button("✏️ Edit"):
            st.session_state["editing_customer_id"] = selected
            st.rerun()
        if c2.button("🗑️ Delete"):
            controller.delete_customer(selected)
            st.rerun()
