# app.py
import streamlit as st

from pos_core.catalog import low_stock_items
from pos_core.errors import AuthenticationFailure
from pos_core.session import get_controller

st.set_page_config(page_title="POS", page_icon="🛒", layout="wide")

controller = get_controller()
settings = controller.state.settings



def ui_login():
    st.subheader("🔐 Login")
    with st.form("login_form"):
        username = st.text_input("Username", key="login_username")
        password = st.text_input("Password", type="password", key="login_password")
        submitted = st.form_submit_button("Login")
    if submitted:
        try:
            controller.login(username, password)
        except AuthenticationFailure as e:
            st.error(str(e))
        else:
            st.session_state["authenticated"] = True
            st.rerun()
    st.caption("All data is stored locally on this machine.")


if not st.session_state.get("authenticated"):
    st.title(f"🛒 {settings.company_name}")
    ui_login()
else:
    state = controller.state

    with st.sidebar:
        st.markdown(f"### 👋 {state.settings.username}")
        if st.button("Logout"):
            st.session_state.pop("authenticated")
            st.session_state.pop("cart", None)
            st.rerun()

    st.title(f"🛒 {state.settings.company_name}")
    col1, col2, col3 = st.columns(3)
    col1.metric("Items", len(state.items))
    col2.metric("Customers", len(state.customers))
    col3.metric("Sales", len(state.sales))

    low = list(low_stock_items(state))
    if low:
        st.warning(f"⚠️ {len(low)} item(s) at or below their low-stock threshold. See the Stores page.")

    st.markdown(
        "- 🛒 **Sale** – build a cart and save the invoice\n"
        "- 📦 **Items** – catalog and stock\n"
        "- 👥 **Customers** – accounts and balances\n"
        "- 🏬 **Stores** – stores and low-stock alerts\n"
        "- 📊 **Reports** – sales and estimated profit\n"
        "- ⚙️ **Settings** – company profile, backup and restore"
    )
