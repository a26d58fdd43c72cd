# app/ui/login.py

import os
import streamlit as st
from dotenv import load_dotenv
from jose import jwt, JWTError
from streamlit_cookies_manager import EncryptedCookieManager
from services.api import login_user, logout_user, signup_user

load_dotenv()

COOKIE_PASSWORD = os.getenv("COOKIE_PASSWORD")

cookies = EncryptedCookieManager(password=COOKIE_PASSWORD)
if not cookies.ready():
    st.stop()


def token_user_id(token):
    """
    Reads the userId claim for display purposes only; the server verifies.
    """
    try:
        return jwt.get_unverified_claims(token).get("userId")
    except JWTError:
        return None


def logout():
    logout_user()
    cookies.clear()
    cookies.save()


def _remember(token, username):
    st.session_state["access_token"] = token
    st.session_state["username"] = username
    st.session_state["user_id"] = token_user_id(token)
    cookies["access_token"] = token
    cookies["username"] = username
    cookies.save()


def login_page():
    st.title("🔐 Log in")

    if "access_token" not in st.session_state:
        if cookies.get("access_token"):
            _remember(cookies["access_token"], cookies.get("username", ""))
            st.rerun()

    if "show_register" not in st.session_state:
        st.session_state["show_register"] = False

    if st.session_state["show_register"]:
        show_register_form()
    else:
        show_login_form()


def show_login_form():
    with st.form("login_form"):
        username = st.text_input("Username")
        password = st.text_input("Password", type="password")
        submitted = st.form_submit_button("Log in")

    if submitted:
        with st.spinner("Logging in..."):
            result = login_user(username, password)
            if isinstance(result, dict) and result.get("error"):
                st.error(f"❌ Login failed: {result['error']}")
            else:
                _remember(result["token"], username)
                st.success("✅ Logged in")
                st.rerun()

    if st.button("Sign up"):
        st.session_state["show_register"] = True
        st.rerun()


def show_register_form():
    st.subheader("📝 Sign up")

    new_user = st.text_input("New username", key="new_user")
    new_pass = st.text_input("New password", type="password", key="new_pass")

    if st.button("Create account"):
        with st.spinner("Creating account..."):
            result = signup_user(new_user, new_pass)
            if isinstance(result, dict) and result.get("error"):
                st.error(f"❌ Sign up failed: {result['error']}")
            else:
                st.success("🎉 Account created. Please log in.")
                st.session_state["show_register"] = False
                st.rerun()

    if st.button("← Back to login"):
        st.session_state["show_register"] = False
        st.rerun()
