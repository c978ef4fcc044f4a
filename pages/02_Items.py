# pages/02_Items.py
import pandas as pd
import streamlit as st

from pos_core.catalog import get_item, search_items, store_choices, store_name
from pos_core.errors import PosError
from pos_core.models import Item
from pos_core.session import require_login

controller = require_login()
state = controller.state

st.title("📦 Items")

col_form, col_list = st.columns([1, 2])

with col_form:
    editing = get_item(state, st.session_state.get("editing_item_id"))
    st.subheader("Edit item" if editing else "New item")

    store_ids = store_choices(state, editing.store_id if editing else None)
    with st.form("item_form"):
        code = st.text_input("Code", value=editing.code if editing else "")
        name = st.text_input("Name", value=editing.name if editing else "")
        purchase_price = st.number_input(
            "Purchase price", min_value=0.0, value=float((editing.purchase_price or 0) if editing else 0)
        )
        sale_price = st.number_input("Sale price", min_value=0.0, value=float(editing.sale_price if editing else 0))
        quantity = st.number_input("Quantity", value=int(editing.quantity if editing else 0), step=1)
        threshold = st.number_input(
            "Low-stock alert at", value=int(editing.low_stock_threshold if editing else 5), step=1
        )
        store_id = st.selectbox(
            "Store",
            options=store_ids,
            index=store_ids.index(editing.store_id) if editing and editing.store_id in store_ids else 0,
            format_func=lambda sid: store_name(state, sid, default="Unassigned"),
        )
        submitted = st.form_submit_button("Update" if editing else "Save")

    if submitted:
        try:
            controller.save_item(
                Item(
                    id=editing.id if editing else "",
                    code=code.strip(),
                    name=name.strip(),
                    sale_price=sale_price,
                    purchase_price=purchase_price,
                    quantity=int(quantity),
                    store_id=store_id or "",
                    low_stock_threshold=int(threshold),
                )
            )
        except PosError as e:
            st.error(str(e))
        else:
            st.session_state.pop("editing_item_id", None)
            st.rerun()

    if editing and st.button("Cancel"):
        st.session_state.pop("editing_item_id", None)
        st.rerun()

with col_list:
    query = st.text_input("Search", key="items_search")
    items = search_items(state, query) if query else list(state.items)

    st.dataframe(
        pd.DataFrame(
            [
                {
                    "Code": i.code,
                    "Name": i.name,
                    "Price": i.sale_price,
                    "Quantity": i.quantity,
                    "Low stock": "⚠️" if i.is_low_stock else "",
                    "Store": store_name(state, i.store_id),
                }
                for i in items
            ]
        ),
        use_container_width=True,
        hide_index=True,
    )

    if items:
        selected = st.selectbox("Select item", [i.id for i in items], format_func=lambda iid: get_item(state, iid).name)
        c1, c2 = st.columns(2)
        if c1.button("✏️ Edit"):
            st.session_state["editing_item_id"] = selected
            st.rerun()
        if c2.button("🗑️ Delete"):
            controller.delete_item(selected)
            st.rerun()
