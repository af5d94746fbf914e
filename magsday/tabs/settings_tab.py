import streamlit as st
from pydantic import ValidationError

from magsday.auth import sign_out
from magsday.constants import CURRENCY_SYMBOLS, THEMES
from magsday.data import repositories
from magsday.schemas import UserSettingsPatch


def _save_preferences(runtime):
    try:
        patch = UserSettingsPatch(
            theme=st.session_state.get("form.settings.theme"),
            currency=st.session_state.get("form.settings.currency"),
        )
    except ValidationError as exc:
        st.session_state["form.settings.error"] = "; ".join(error.get("msg", "") for error in exc.errors())
        return
    st.session_state.pop("form.settings.error", None)
    runtime.write(repositories.save_user_settings, patch)


def _save_pin(runtime):
    try:
        patch = UserSettingsPatch(note_pin=st.session_state.get("form.settings.pin", ""))
    except ValidationError:
        st.session_state["form.settings.pin_error"] = "PIN must be 4 to 8 digits."
        return
    st.session_state.pop("form.settings.pin_error", None)
    if patch.note_pin is None:
        st.session_state["form.settings.pin_error"] = "Enter a PIN first."
        return
    if runtime.write(repositories.save_user_settings, patch):
        st.session_state["form.settings.pin"] = ""


def _clear_pin(runtime):
    runtime.write(repositories.save_user_settings, UserSettingsPatch(clear_pin=True))


def render_settings_tab(ctx):
    runtime = ctx["runtime"]
    settings = runtime.mirrors.settings
    identity = runtime.session.identity

    st.markdown("<div class='section-title'>Settings</div>", unsafe_allow_html=True)
    if identity is not None:
        st.caption(f"Signed in as {identity.email}")

    st.session_state["form.settings.theme"] = settings.theme
    st.session_state["form.settings.currency"] = settings.currency
    pref_cols = st.columns(2)
    with pref_cols[0]:
        st.radio(
            "Theme",
            THEMES,
            key="form.settings.theme",
            format_func=str.title,
            horizontal=True,
            on_change=_save_preferences,
            args=(runtime,),
        )
    with pref_cols[1]:
        st.selectbox(
            "Currency",
            list(CURRENCY_SYMBOLS.keys()),
            key="form.settings.currency",
            format_func=lambda code: f"{code} ({CURRENCY_SYMBOLS[code]})",
            on_change=_save_preferences,
            args=(runtime,),
        )
    error = st.session_state.get("form.settings.error")
    if error:
        st.warning(error)

    st.markdown("<div class='section-title'>Note PIN</div>", unsafe_allow_html=True)
    st.caption("A PIN is set." if settings.note_pin else "No PIN set. Locked notes stay visible.")
    pin_cols = st.columns([2, 1, 1])
    with pin_cols[0]:
        st.text_input("New PIN", key="form.settings.pin", type="password", max_chars=8)
    with pin_cols[1]:
        st.button("Save PIN", key="form.settings.pin_save", type="primary", on_click=_save_pin, args=(runtime,))
    with pin_cols[2]:
        st.button(
            "Remove PIN",
            key="form.settings.pin_clear",
            disabled=not settings.note_pin,
            on_click=_clear_pin,
            args=(runtime,),
        )
    pin_error = st.session_state.get("form.settings.pin_error")
    if pin_error:
        st.warning(pin_error)

    st.divider()
    if st.button("Sign out", key="form.settings.sign_out"):
        sign_out(runtime)
        st.rerun()
