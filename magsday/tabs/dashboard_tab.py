import streamlit as st

from magsday.data import repositories
from magsday.lock_gate import lock_flag_for_save
from magsday.metrics import dashboard_summary, format_amount
from magsday.services.assistant import build_day_plan_prompt, build_reflection_prompt, run_assist
from magsday.state.session_slices import get_value, set_value


def _submit_pin(runtime):
    gate = runtime.lock_gate
    gate.pin_input = st.session_state.get("note.pin_input", "")
    gate.submit(gate.pin_input, runtime.mirrors.settings.note_pin)
    st.session_state["note.pin_input"] = gate.pin_input


def _cancel_pin(runtime):
    runtime.lock_gate.pin_input = ""
    st.session_state["note.pin_input"] = ""


@st.dialog("Unlock today's note")
def _pin_dialog(runtime):
    st.text_input("PIN", type="password", key="note.pin_input")
    cols = st.columns(2)
    with cols[0]:
        st.button("Unlock", key="note.pin_submit", type="primary", on_click=_submit_pin, args=(runtime,))
    with cols[1]:
        cancel = st.button("Cancel", key="note.pin_cancel", on_click=_cancel_pin, args=(runtime,))
    if cancel or runtime.sync.note_visible:
        st.rerun()


@st.dialog("Assistant")
def _assist_dialog(runtime):
    assist = runtime.state.assist
    st.markdown(f"**{assist.title}**")
    if assist.loading:
        st.caption("Thinking…")
    elif assist.error:
        st.error(assist.error)
    else:
        st.markdown(assist.response)
    if st.button("Close", key="assist.close"):
        assist.dismiss()
        st.rerun()


def _sync_note_widgets(today_iso, note):
    loaded = (today_iso, note.content, note.is_locked)
    if get_value("note", "loaded") == loaded:
        return
    st.session_state["note.content"] = note.content
    st.session_state["note.locked"] = note.is_locked
    set_value("note", "loaded", loaded)


def _render_note_card(runtime):
    sync = runtime.sync
    note = sync.mirrors.note
    pin = sync.mirrors.settings.note_pin

    st.markdown("<div class='section-title'>Today's note</div>", unsafe_allow_html=True)
    if not sync.note_visible:
        st.markdown("<div class='note-locked'>🔒 This note is locked.</div>", unsafe_allow_html=True)
        if st.button("Unlock", key="note.unlock"):
            _pin_dialog(runtime)
        return

    _sync_note_widgets(sync.today, note)
    st.text_area("Note", key="note.content", height=140, label_visibility="collapsed")
    cols = st.columns([1, 1, 3])
    with cols[0]:
        st.checkbox("Lock", key="note.locked", disabled=not pin)
    with cols[1]:
        save = st.button("Save note", key="note.save", type="primary")
    if not pin:
        with cols[2]:
            st.caption("Set a PIN in Settings to protect locked notes.")
    if save:
        ok = runtime.write(
            repositories.save_daily_note,
            sync.today,
            st.session_state.get("note.content", ""),
            lock_flag_for_save(st.session_state.get("note.locked", False), note.is_locked, pin),
        )
        if not ok:
            st.warning("Could not save the note. Try again.")


def _render_assist_buttons(runtime):
    mirrors = runtime.mirrors
    if runtime.assistant is None:
        return
    cols = st.columns(2)
    with cols[0]:
        plan = st.button("✨ Plan my day", key="assist.plan")
    with cols[1]:
        reflect = st.button("🧠 Reflect on my wins", key="assist.reflect")
    if plan or reflect:
        if plan:
            title = "Plan for today"
            prompt = build_day_plan_prompt(mirrors.schedules, runtime.sync.today)
        else:
            title = "Reflection"
            prompt = build_reflection_prompt(mirrors.accomplishments)
        with st.spinner("Asking the assistant…"):
            run_assist(runtime.state.assist, runtime.assistant, title, prompt)
        _assist_dialog(runtime)


def render_dashboard_tab(ctx):
    runtime = ctx["runtime"]
    mirrors = runtime.mirrors
    symbol = mirrors.settings.currency_symbol
    summary = dashboard_summary(mirrors, runtime.sync.today)

    metric_cols = st.columns(3)
    metric_cols[0].metric("Today's schedules", len(summary["today_schedules"]))
    metric_cols[1].metric(
        "Outstanding payments",
        format_amount(summary["outstanding"], symbol),
        f"{summary['unpaid_count']} unpaid",
        delta_color="off",
    )
    metric_cols[2].metric("Triumphs", summary["accomplishment_count"], f"{summary['accomplished_today']} today")

    left, right = st.columns([1, 1])
    with left:
        st.markdown("<div class='section-title'>Up next today</div>", unsafe_allow_html=True)
        if not summary["today_schedules"]:
            st.caption("Nothing scheduled for today.")
        for row in summary["today_schedules"]:
            st.markdown(f"**{row.get('time') or 'Any time'}** • {row.get('title') or 'Untitled'}")
        _render_assist_buttons(runtime)
    with right:
        _render_note_card(runtime)
