from __future__ import annotations

import logging

import streamlit as st

from magsday.constants import APP_TITLE
from magsday.data.auth_client import AuthError
from magsday.state.session_slices import clear_widget_keys, get_value, set_value

logger = logging.getLogger(__name__)


def _toggle_mode():
    set_value("auth", "login_view", not get_value("auth", "login_view", True))


def render_auth_screen(runtime):
    login_view = get_value("auth", "login_view", True)

    st.markdown(f"<div class='page-title'>{APP_TITLE}</div>", unsafe_allow_html=True)
    st.markdown("<div class='small-label'>Your personal dashboard.</div>", unsafe_allow_html=True)

    with st.form("auth.form"):
        email = st.text_input("Email", key="auth.email")
        password = st.text_input("Password", type="password", key="auth.password")
        submitted = st.form_submit_button("Sign In" if login_view else "Sign Up", type="primary")

    if submitted:
        try:
            if login_view:
                runtime.session.sign_in(email, password)
            else:
                runtime.session.sign_up(email, password)
        except AuthError as exc:
            st.error(f"Authentication Error: {exc}")
        else:
            st.rerun()

    prompt = "Don't have an account?" if login_view else "Already have an account?"
    st.caption(prompt)
    st.button("Sign up" if login_view else "Sign in", key="auth.toggle", on_click=_toggle_mode)


def enforce_login(runtime):
    session = runtime.session
    if not session.ready:
        st.caption("Connecting…")
        st.stop()
    if not session.signed_in:
        render_auth_screen(runtime)
        st.stop()


def sign_out(runtime):
    runtime.session.sign_out()
    clear_widget_keys("auth.")
    clear_widget_keys("form.")
    clear_widget_keys("note.")
    clear_widget_keys("ui.")
    clear_widget_keys("slice.")
