import streamlit as st

from magsday.constants import VIEWS, VIEW_LABELS
from magsday.tabs.accomplishments_tab import render_accomplishments_tab
from magsday.tabs.dashboard_tab import render_dashboard_tab
from magsday.tabs.payments_tab import render_payments_tab
from magsday.tabs.schedules_tab import render_schedules_tab
from magsday.tabs.settings_tab import render_settings_tab


RENDERERS = {
    "dashboard": render_dashboard_tab,
    "schedules": render_schedules_tab,
    "payments": render_payments_tab,
    "accomplishments": render_accomplishments_tab,
    "settings": render_settings_tab,
}


def _on_view_change(state):
    selected = st.session_state.get("ui.active_view")
    if selected:
        state.select_view(selected)


def render_router(ctx):
    state = ctx["runtime"].state
    st.segmented_control(
        "View",
        VIEWS,
        format_func=lambda view: VIEW_LABELS[view],
        key="ui.active_view",
        default=state.view,
        on_change=_on_view_change,
        args=(state,),
        label_visibility="collapsed",
    )
    return RENDERERS[state.view](ctx)
