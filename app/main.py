# app/main.py

import streamlit as st
from dotenv import load_dotenv
from ui.login import login_page, logout
from ui.catalog import catalog_page, my_products_page


load_dotenv()


def main_page():
    st.sidebar.markdown(f"## 👋 {st.session_state.get('username', '')}")

    if st.sidebar.button("🛒 Catalog"):
        st.session_state["page"] = "catalog"
    if st.sidebar.button("📦 My products"):
        st.session_state["page"] = "mine"
    if st.sidebar.button("🔓 Log out"):
        logout()
        st.session_state.clear()
        st.rerun()

    page = st.session_state.get("page", "catalog")
    if page == "mine":
        my_products_page()
    else:
        catalog_page()


if "access_token" not in st.session_state:
    login_page()
else:
    main_page()
