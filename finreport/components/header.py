from __future__ import annotations

import html

import streamlit as st


def render_header(app_name: str, subtitle: str, server_available: bool) -> None:
    dot_cls = "online" if server_available else "offline"
    pill = "Server: online" if server_available else "Demo mode: server unavailable"

    st.markdown(
        f"""
<div class="app-header">
  <div>
    <div class="app-title">{html.escape(app_name)}</div>
    <div class="app-subtitle">{html.escape(subtitle)}</div>
  </div>
  <div class="pill"><span class="dot {dot_cls}"></span>{pill}</div>
</div>
        """,
        unsafe_allow_html=True,
    )


def render_offline_banner(context: str = "") -> None:
    """Non-fatal notice shown whenever the last API call fell back to local data."""
    st.warning(
        "The server is unavailable. Demo data is shown and changes are not saved to the server."
        + (f" {context}" if context else "")
    )
