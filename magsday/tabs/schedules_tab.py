from datetime import date, time as dt_time

import streamlit as st
from pydantic import ValidationError

from magsday.constants import SCHEDULES
from magsday.data import repositories
from magsday.metrics import sort_schedules
from magsday.schemas import ScheduleCreate


def _validation_message(exc):
    return "; ".join(error.get("msg", "") for error in exc.errors()) or "Invalid input"


def _parse_time(value):
    if not value:
        return None
    try:
        return dt_time.fromisoformat(str(value))
    except ValueError:
        return None


def _parse_date(value, fallback):
    try:
        return date.fromisoformat(str(value))
    except (TypeError, ValueError):
        return fallback


def _add_schedule(runtime):
    try:
        payload = ScheduleCreate(
            title=st.session_state.get("form.schedule.title", ""),
            date=st.session_state.get("form.schedule.date") or date.today(),
            time=st.session_state.get("form.schedule.time") if st.session_state.get("form.schedule.has_time") else None,
        )
    except ValidationError as exc:
        st.session_state["form.schedule.error"] = _validation_message(exc)
        return
    st.session_state.pop("form.schedule.error", None)
    if runtime.write(repositories.add_entry, SCHEDULES, payload.to_document()):
        st.session_state["form.schedule.title"] = ""


def _save_schedule(runtime, entry_id):
    prefix = f"form.schedule.edit.{entry_id}"
    try:
        payload = ScheduleCreate(
            title=st.session_state.get(f"{prefix}.title", ""),
            date=st.session_state.get(f"{prefix}.date") or date.today(),
            time=st.session_state.get(f"{prefix}.time"),
        )
    except ValidationError as exc:
        st.session_state[f"{prefix}.error"] = _validation_message(exc)
        return
    st.session_state.pop(f"{prefix}.error", None)
    runtime.write(repositories.update_entry, SCHEDULES, entry_id, payload.to_document())


def render_schedules_tab(ctx):
    runtime = ctx["runtime"]
    today = date.fromisoformat(runtime.sync.today)

    st.markdown("<div class='section-title'>Schedules</div>", unsafe_allow_html=True)

    add_cols = st.columns([3, 1.3, 1, 1.2, 0.8])
    with add_cols[0]:
        st.text_input("What", key="form.schedule.title", placeholder="Add a schedule")
    with add_cols[1]:
        st.date_input("Date", key="form.schedule.date", value=today)
    with add_cols[2]:
        st.checkbox("Set time", key="form.schedule.has_time")
    with add_cols[3]:
        st.time_input("Time", key="form.schedule.time", value=dt_time(9, 0))
    with add_cols[4]:
        st.button("Add", key="form.schedule.add", type="primary", on_click=_add_schedule, args=(runtime,))
    error = st.session_state.get("form.schedule.error")
    if error:
        st.warning(error)

    schedules = sort_schedules(runtime.mirrors.schedules)
    if not schedules:
        st.caption("No schedules yet.")
        return

    for row in schedules:
        entry_id = row["id"]
        label = f"{row.get('date') or 'No date'} {row.get('time') or ''} • {row.get('title') or 'Untitled'}"
        with st.expander(label):
            prefix = f"form.schedule.edit.{entry_id}"
            st.text_input("What", key=f"{prefix}.title", value=row.get("title") or "")
            edit_cols = st.columns(2)
            with edit_cols[0]:
                st.date_input("Date", key=f"{prefix}.date", value=_parse_date(row.get("date"), today))
            with edit_cols[1]:
                st.time_input("Time", key=f"{prefix}.time", value=_parse_time(row.get("time")))
            error = st.session_state.get(f"{prefix}.error")
            if error:
                st.warning(error)
            action_cols = st.columns([1, 1, 4])
            with action_cols[0]:
                st.button("Save", key=f"{prefix}.save", on_click=_save_schedule, args=(runtime, entry_id))
            with action_cols[1]:
                st.button(
                    "Delete",
                    key=f"{prefix}.delete",
                    on_click=runtime.write,
                    args=(repositories.delete_entry, SCHEDULES, entry_id),
                )
