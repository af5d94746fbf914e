import logging

import streamlit as st

from magsday.auth import enforce_login
from magsday.constants import APP_TITLE
from magsday.header import render_global_header
from magsday.logging_config import configure_logging
from magsday.router import render_router
from magsday.runtime import RuntimeHandle, build_backend, build_runtime
from magsday.settings import get_settings
from magsday.state.session_slices import get_runtime, set_runtime
from magsday.theme import inject_theme_css

SNAPSHOT_POLL_SECONDS = 2

logger = logging.getLogger("magsday.app")


@st.cache_resource(show_spinner=False)
def _shared_backend():
    return build_backend(get_settings())


def _init_runtime():
    runtime = get_runtime()
    if runtime is not None:
        return runtime
    try:
        settings = get_settings()
        configure_logging(settings.log_level)
        runtime = build_runtime(settings, _shared_backend())
    except Exception:
        configure_logging()
        logger.exception("Error initializing the backend")
        st.caption("The app is not configured correctly. Check the server logs.")
        st.stop()
    set_runtime(RuntimeHandle(runtime))
    return runtime


@st.fragment(run_every=SNAPSHOT_POLL_SECONDS)
def _watch_snapshots(runtime):
    if runtime.sync.pending() and runtime.sync.pump():
        st.rerun(scope="app")


st.set_page_config(page_title=APP_TITLE, layout="wide")

runtime = _init_runtime()
runtime.sync.pump()
inject_theme_css(runtime.mirrors.settings.theme)

enforce_login(runtime)

_watch_snapshots(runtime)
render_global_header({"runtime": runtime})
render_router({"runtime": runtime})
