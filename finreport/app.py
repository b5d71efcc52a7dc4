"""
Routing only.

All view logic lives in finreport/views/.
All env reads happen ONLY in config.py.
"""

from __future__ import annotations

import logging
import os
import sys

# Make the repo root importable when running:
#   streamlit run finreport/app.py
APP_DIR = os.path.dirname(__file__)
REPO_ROOT = os.path.abspath(os.path.join(APP_DIR, ".."))
if REPO_ROOT not in sys.path:
    sys.path.insert(0, REPO_ROOT)

import streamlit as st  # noqa: E402

from finreport.auth import ROLE_ADMIN, can_access  # noqa: E402
from finreport.components.header import render_header  # noqa: E402
from finreport.components.sidebar import render_sidebar  # noqa: E402
from finreport.components.styles import apply_theme  # noqa: E402
from finreport.config import AppConfig, get_config  # noqa: E402
from finreport.data.service import ApiClient, get_api_client  # noqa: E402

from finreport.views import admin, login, report  # noqa: E402


def _configure_logging(cfg: AppConfig) -> None:
    logging.basicConfig(
        level=cfg.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    logging.getLogger("urllib3").setLevel(logging.WARNING)


@st.cache_resource
def _client(_cfg: AppConfig) -> ApiClient:
    # One client (cache, status, local store) per process
    return get_api_client(_cfg)


def main() -> None:
    apply_theme()
    cfg = get_config()
    _configure_logging(cfg)
    client = _client(cfg)

    state = render_sidebar(cfg, client, st.session_state.get("user"))

    render_header(
        app_name="Financial Reports",
        subtitle="Organizations and profitability reports",
        server_available=client.get_server_status(),
    )

    # Routing only
    if state.view == "login":
        login.render(cfg)
    elif state.view == "report":
        report.render(cfg, client)
    elif state.view == "admin" and can_access(state.user, ROLE_ADMIN):
        admin.render(cfg, client)
    else:
        st.error("Unknown view")


if __name__ == "__main__":
    main()
