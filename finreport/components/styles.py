from __future__ import annotations

import streamlit as st

from finreport.config import THEME


APP_TITLE = "Financial Reports"

# CSS variable -> THEME key
_VARS = {
    "bg": "bg_primary",
    "surface": "bg_secondary",
    "card": "bg_card",
    "border": "border_color",
    "text": "text_primary",
    "muted": "text_secondary",
    "title": "navy_900",
    "pill-text": "navy_800",
    "shadow": "shadow",
    "ok": "success",
    "warn": "warning",
    "bad": "danger",
}

# Only the classes rendered by components/header.py and components/metrics.py
_RULES = """
#MainMenu, footer { visibility: hidden; }
[data-testid="stAppViewContainer"] { background: var(--bg); color: var(--text); }

.app-header {
  display: flex; align-items: center; justify-content: space-between;
  background: var(--surface); border: 1px solid var(--border);
  border-radius: var(--radius); box-shadow: var(--shadow);
  padding: 10px 14px; margin-bottom: 14px;
}
.app-title { font-size: 20px; font-weight: 700; color: var(--title); }
.app-subtitle { font-size: 14px; color: var(--muted); }

.pill {
  display: inline-flex; align-items: center; gap: 6px;
  border: 1px solid var(--border); border-radius: 999px;
  padding: 4px 10px; font-size: 13px; font-weight: 600; color: var(--pill-text);
}
.pill .dot { width: 8px; height: 8px; border-radius: 50%; }
.pill .dot.online { background: var(--ok); }
.pill .dot.offline { background: var(--warn); }

.metric-card {
  background: var(--card); border: 1px solid var(--border);
  border-radius: var(--radius); box-shadow: var(--shadow); padding: 12px 14px;
}
.metric-label { font-size: 14px; color: var(--muted); margin-bottom: 6px; }
.metric-value { font-size: 24px; font-weight: 700; }
.metric-delta { margin-top: 6px; font-size: 14px; font-weight: 600; }
.metric-delta.positive { color: var(--ok); }
.metric-delta.negative { color: var(--bad); }
"""


def apply_theme() -> None:
    st.set_page_config(page_title=APP_TITLE, layout="wide", initial_sidebar_state="expanded")

    root = "".join(f"--{name}: {THEME[key]};" for name, key in _VARS.items())
    root += f"--radius: {int(THEME['radius_px'])}px;"
    st.markdown(f"<style>:root{{{root}}}{_RULES}</style>", unsafe_allow_html=True)
