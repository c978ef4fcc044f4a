# pos_core/session.py
"""Streamlit glue shared by app.py and the pages."""
import streamlit as st

from pos_core.config import configure_logging, load_config
from pos_core.controller import PosController
from pos_core.db import SnapshotStore


@st.cache_resource
def get_controller() -> PosController:
    config = load_config()
    configure_logging(config.log_level)
    return PosController(SnapshotStore(config=config))


def require_login() -> PosController:
    if not st.session_state.get("authenticated"):
        st.warning("Please login from the main page first.")
        st.stop()
    return get_controller()


def money(amount: float, currency: str) -> str:
    return f"{amount:,.2f} {currency}"
