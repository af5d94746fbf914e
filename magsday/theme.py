import streamlit as st

from magsday.constants import DEFAULT_THEME

THEME_PRESETS = {
    "dark": {
        "bg_main": "#121017",
        "bg_glow": "#1f1a2a",
        "bg_card": "#1e1a27",
        "border": "#5b4f70",
        "text_main": "#f3edf9",
        "text_soft": "#c8bbd8",
        "button": "#5f4f79",
        "button_hover": "#725f90",
        "accent": "#60a5fa",
        "plot_grid": "#3d3550",
        "divider": "rgba(255,255,255,0.08)",
    },
    "light": {
        "bg_main": "#f7f3ed",
        "bg_glow": "#eee2d3",
        "bg_card": "#fff9f1",
        "border": "#c4b59f",
        "text_main": "#1b1b1b",
        "text_soft": "#5d5d5d",
        "button": "#b29a7d",
        "button_hover": "#9f876b",
        "accent": "#2563eb",
        "plot_grid": "#d9ccbb",
        "divider": "rgba(0,0,0,0.08)",
    },
}


def get_theme(name):
    if name not in THEME_PRESETS:
        name = DEFAULT_THEME
    return name, THEME_PRESETS[name]


def inject_theme_css(name) -> dict:
    active_name, active_theme = get_theme(name)

    theme_vars_css = f"""
:root {{
    --bg-main: {active_theme['bg_main']};
    --bg-glow: {active_theme['bg_glow']};
    --bg-card: {active_theme['bg_card']};
    --border: {active_theme['border']};
    --text-main: {active_theme['text_main']};
    --text-soft: {active_theme['text_soft']};
    --button: {active_theme['button']};
    --button-hover: {active_theme['button_hover']};
    --accent: {active_theme['accent']};
    --divider: {active_theme['divider']};
}}
"""

    st.markdown(
        "<style>"
        + theme_vars_css
        + """
html, body, [class*="css"] {
    color: var(--text-main);
}

.stApp {
    background: radial-gradient(1400px 900px at 20% 0%, var(--bg-glow) 0%, var(--bg-main) 58%);
    color: var(--text-main);
}

.page-title {
    font-size: 30px;
    font-weight: 700;
}

.section-title {
    font-size: 14px;
    font-weight: 600;
    margin: 0 0 8px 0;
}

.card {
    background: var(--bg-card);
    border: 1px solid var(--border);
    border-radius: 14px;
    padding: 16px 18px;
    margin-bottom: 14px;
}

.small-label {
    color: var(--text-soft);
    font-size: 12px;
    letter-spacing: 0.2px;
}

.note-locked {
    color: var(--text-soft);
    font-style: italic;
}

.stButton>button[kind="primary"] {
    background: var(--button) !important;
    border: 1px solid var(--border) !important;
    border-radius: 10px !important;
}

.stButton>button[kind="primary"]:hover {
    background: var(--button-hover) !important;
}

button:focus-visible,
input:focus-visible,
textarea:focus-visible {
    outline: 2px solid var(--accent);
    outline-offset: 2px;
}
</style>
""",
        unsafe_allow_html=True,
    )

    return {"name": active_name, "theme": active_theme}
