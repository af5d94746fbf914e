from datetime import date

import streamlit as st
from pydantic import ValidationError

from magsday.constants import ACCOMPLISHMENTS
from magsday.data import repositories
from magsday.metrics import sort_accomplishments
from magsday.schemas import AccomplishmentCreate


def _add_accomplishment(runtime):
    try:
        payload = AccomplishmentCreate(
            text=st.session_state.get("form.accomplishment.text", ""),
            date=date.fromisoformat(runtime.sync.today),
        )
    except ValidationError:
        st.session_state["form.accomplishment.error"] = "Describe what you accomplished first."
        return
    st.session_state.pop("form.accomplishment.error", None)
    if runtime.write(repositories.add_entry, ACCOMPLISHMENTS, payload.to_document()):
        st.session_state["form.accomplishment.text"] = ""


def render_accomplishments_tab(ctx):
    runtime = ctx["runtime"]

    st.markdown("<div class='section-title'>Triumphs</div>", unsafe_allow_html=True)

    add_cols = st.columns([5, 1])
    with add_cols[0]:
        st.text_input(
            "Accomplishment",
            key="form.accomplishment.text",
            placeholder="What did you get done?",
            label_visibility="collapsed",
        )
    with add_cols[1]:
        st.button(
            "Add",
            key="form.accomplishment.add",
            type="primary",
            on_click=_add_accomplishment,
            args=(runtime,),
        )
    error = st.session_state.get("form.accomplishment.error")
    if error:
        st.warning(error)

    items = sort_accomplishments(runtime.mirrors.accomplishments)
    if not items:
        st.caption("No triumphs logged yet. Start with something small.")
        return

    for row in items:
        cols = st.columns([5, 1.2, 0.5])
        with cols[0]:
            st.markdown(f"🏆 {row.get('text') or ''}")
        with cols[1]:
            st.caption(row.get("date") or "")
        with cols[2]:
            st.button(
                "✕",
                key=f"form.accomplishment.delete.{row['id']}",
                type="tertiary",
                on_click=runtime.write,
                args=(repositories.delete_entry, ACCOMPLISHMENTS, row["id"]),
            )
