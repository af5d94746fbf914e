import html
from datetime import date

import streamlit as st

from magsday.auth import sign_out
from magsday.constants import APP_TITLE


def display_name(identity):
    if identity is None or not identity.email:
        return "There"
    return html.escape(identity.email.split("@")[0].replace(".", " ").title())


def render_global_header(ctx):
    runtime = ctx["runtime"]
    today_iso = runtime.sync.today

    title_cols = st.columns([5, 1])
    with title_cols[0]:
        st.markdown(f"<div class='page-title'>{APP_TITLE}</div>", unsafe_allow_html=True)
        try:
            pretty_day = date.fromisoformat(today_iso).strftime("%A, %d %B %Y")
        except ValueError:
            pretty_day = today_iso
        st.markdown(
            f"<div class='small-label'>Hello, <strong>{display_name(runtime.session.identity)}</strong> • {pretty_day}</div>",
            unsafe_allow_html=True,
        )
    with title_cols[1]:
        if st.button("Sign out", key="header.sign_out"):
            sign_out(runtime)
            st.rerun()
