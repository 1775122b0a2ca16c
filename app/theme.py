from __future__ import annotations

import streamlit as st

BASE_FONT = "'Lato', sans-serif"
BRAND_ACCENT = "#DE007B"

DARK_THEME_COLORS = {
    "bg": "#0f141d",
    "surface_1": "#161d29",
    "surface_2": "#1c2431",
    "border": "#2d3a4d",
    "text": "#e6edf5",
    "muted": "#a8b4c6",
    "focus": "#9bc5ff",
    "highlight_bg": "#3a1530",
    "highlight_border": "#ff4fae",
    "warning_bg": "#332416",
    "warning_border": "#efb16f",
    "primary_button_text": "#08111f",
}

LIGHT_THEME_COLORS = {
    "bg": "#f7f9fc",
    "surface_1": "#ffffff",
    "surface_2": "#f1f5fb",
    "border": "#d9e2f0",
    "text": "#1f2a3a",
    "muted": "#5f6f86",
    "focus": "#3b82f6",
    "highlight_bg": "#fde7f3",
    "highlight_border": BRAND_ACCENT,
    "warning_bg": "#fff4e8",
    "warning_border": "#e7a65f",
    "primary_button_text": "#ffffff",
}

DEFAULT_MARKER_RGBA = [46, 120, 218, 200]
SELECTED_MARKER_RGBA = [222, 0, 123, 235]
DEFAULT_MARKER_RADIUS = 60
SELECTED_MARKER_RADIUS = 90


def _theme_type() -> str:
    try:
        theme_info = st.context.theme
        raw = str(theme_info.get("type", "")).strip().lower()
        if raw in {"light", "dark"}:
            return raw
    except Exception:  # noqa: BLE001
        pass
    return "light"


def is_dark_theme() -> bool:
    return _theme_type() == "dark"


def get_theme_colors() -> dict[str, str]:
    return DARK_THEME_COLORS if is_dark_theme() else LIGHT_THEME_COLORS


def map_style() -> str:
    return "dark" if is_dark_theme() else "light"


def _css_variables(colors: dict[str, str]) -> str:
    return "\n".join(
        f"  --{name.replace('_', '-')}: {value};" for name, value in colors.items()
    )


def build_global_css(colors: dict[str, str]) -> str:
    return f"""
<style>
@import url('https://fonts.googleapis.com/css2?family=Lato:wght@300;400;500;700;900&display=swap');

:root {{
{_css_variables(colors)}
}}

html, body, .stApp, [data-testid="stSidebar"], .stMarkdown, .stButton button, .stNumberInput input, label {{
  font-family: {BASE_FONT} !important;
}}

[data-testid="stAppViewBlockContainer"], .block-container {{
  padding-top: 1.2rem;
  padding-bottom: 1.5rem;
}}

.spots-banner {{
  background: {BRAND_ACCENT};
  border-radius: 12px;
  margin-bottom: 1rem;
  padding: 0.9rem 1.2rem;
}}

.spots-banner h1 {{
  color: #ffffff !important;
  font-size: 2rem;
  font-weight: 700;
  margin: 0;
}}

.spot-card {{
  background: var(--surface-1);
  border: 1px solid var(--border);
  border-radius: 10px;
  margin-bottom: 0.35rem;
  padding: 0.6rem 0.8rem;
}}

.spot-card.highlighted-spot {{
  background: var(--highlight-bg);
  border-left: 4px solid var(--highlight-border);
}}

.spot-card h4 {{
  color: var(--text);
  margin: 0;
}}

.spot-card p {{
  color: var(--muted);
  margin: 0.3rem 0 0 0;
}}

.finalisation-title {{
  color: {BRAND_ACCENT};
  margin-top: 0;
}}

@media (max-width: 640px) {{
  .spots-banner h1 {{
    font-size: 1.5rem;
  }}

  [data-testid="stButton"] > button {{
    width: 100%;
  }}
}}
</style>
"""


def apply_global_styles() -> None:
    # Must be emitted on every rerun.
    css = build_global_css(get_theme_colors())
    if hasattr(st, "html"):
        st.html(css)
    else:
        st.markdown(css, unsafe_allow_html=True)


def render_banner(title: str) -> None:
    st.markdown(
        f'<div class="spots-banner"><h1>{title}</h1></div>',
        unsafe_allow_html=True,
    )
