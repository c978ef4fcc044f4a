# pages/06_Settings.py
import streamlit as st

from pos_core.db import backup_filename
from pos_core.errors import PosError
from pos_core.session import require_login

controller = require_login()
current = controller.state.settings

st.title("⚙️ Settings")

tab_company, tab_backup = st.tabs(["Company", "Backup & Restore"])

with tab_company:
    with st.form("settings_form"):
        company_name = st.text_input("Company name", value=current.company_name)
        currency = st.text_input("Currency", value=current.currency)
        username = st.text_input("Username", value=current.username)
        password = st.text_input("New password (leave empty to keep)", type="password")
        submitted = st.form_submit_button("💾 Save Settings")

    if submitted:
        try:
            controller.update_settings(
                company_name=company_name.strip(),
                currency=currency.strip(),
                username=username.strip(),
                password=password,
            )
        except PosError as e:
            st.error(str(e))
        else:
            st.success("Settings saved.")

with tab_backup:
    st.caption("Keep a copy of your data regularly. The backup is a readable JSON file.")
    st.download_button(
        "⬇️ Download backup (JSON)",
        data=controller.export(),
        file_name=backup_filename(),
        mime="application/json",
    )

    st.markdown("---")
    upload = st.file_uploader("Restore from a backup file", type=["json"])
    if upload is not None and st.button("Restore", type="primary"):
        try:
            controller.restore(upload.getvalue())
        except PosError as e:
            st.error(f"Could not read the backup: {e}")
        else:
            st.success("Data restored.")
