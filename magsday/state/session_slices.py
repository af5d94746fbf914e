import streamlit as st


PREFIX = "slice"
RUNTIME_KEY = "magsday.runtime"


def get_runtime():
    handle = st.session_state.get(RUNTIME_KEY)
    return handle.runtime if handle is not None else None


def set_runtime(handle):
    st.session_state[RUNTIME_KEY] = handle


def get_slice(slice_name):
    key = f"{PREFIX}.{slice_name}"
    if key not in st.session_state:
        st.session_state[key] = {}
    return st.session_state[key]


def get_value(slice_name, name, default=None):
    payload = get_slice(slice_name)
    return payload.get(name, default)


def set_value(slice_name, name, value):
    payload = get_slice(slice_name)
    payload[name] = value


def clear_widget_keys(prefix):
    for key in [key for key in st.session_state.keys() if str(key).startswith(prefix)]:
        del st.session_state[key]
