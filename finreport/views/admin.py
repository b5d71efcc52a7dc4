from __future__ import annotations

import logging

import pandas as pd
import streamlit as st

from finreport.components.header import render_offline_banner
from finreport.components.metrics import Kpi, render_kpi_row
from finreport.config import AppConfig
from finreport.data.errors import ApiError
from finreport.data.service import ApiClient

logger = logging.getLogger("finreport.views.admin")


def _organizations_frame(orgs) -> pd.DataFrame:
    return pd.DataFrame(
        [{"UUID": o.id, "Name": o.name or "(unnamed)", "Created": o.created_at, "Updated": o.updated_at} for o in orgs],
        columns=["UUID", "Name", "Created", "Updated"],
    )


def _run(action, ok_message: str) -> None:
    """Run a write call, report the outcome, and rerun so the table reloads."""
    try:
        action()
    except ApiError as e:
        logger.warning(f"Admin action failed: {e}")
        st.error(str(e))
        return
    st.session_state["admin_flash"] = ok_message
    st.rerun()


def render(cfg: AppConfig, client: ApiClient) -> None:
    st.title("Administration")

    flash = st.session_state.pop("admin_flash", None)
    if flash:
        st.success(flash)

    c_refresh, c_check, _ = st.columns([1, 1, 3])
    with c_refresh:
        force = st.button("🔄 Refresh", use_container_width=True)
    with c_check:
        if st.button("📡 Check connection", use_container_width=True):
            st.toast("Server is reachable" if client.check_server_connection() else "Server is not reachable")

    try:
        orgs = client.get_organizations(force_refresh=force)
    except ApiError as e:
        st.error(f"Could not load organizations: {e}")
        orgs = []

    online = client.get_server_status()
    if not online:
        render_offline_banner()

    render_kpi_row(
        [
            Kpi("Organizations", f"{len(orgs):,}"),
            Kpi("Server", "online" if online else "offline", delta="▲ live data" if online else "▼ demo data"),
            Kpi("Cache TTL", f"{cfg.cache_duration_ms / 1000:.0f} s"),
        ]
    )

    st.subheader("Organizations")
    if orgs:
        st.dataframe(_organizations_frame(orgs), use_container_width=True, hide_index=True)
    else:
        st.info("No organizations available")

    tab_add, tab_edit, tab_delete = st.tabs(["Add", "Edit", "Delete"])

    with tab_add:
        with st.form("org_add", clear_on_submit=True):
            name = st.text_input("Organization name")
            org_id = st.text_input("UUID (optional)", help="Leave empty to generate one")
            if st.form_submit_button("Create"):
                if not name.strip():
                    st.warning("Enter an organization name")
                else:
                    payload = {"name": name.strip()}
                    if org_id.strip():
                        payload["id"] = org_id.strip()
                    _run(lambda: client.create_organization(payload), f"Organization “{name.strip()}” created")

    names = {o.id: o.name for o in orgs}

    with tab_edit:
        with st.form("org_edit"):
            target = st.selectbox("Organization", list(names), format_func=lambda i: f"{names[i]} ({i})", index=None)
            new_name = st.text_input("New name")
            if st.form_submit_button("Save"):
                if target is None or not new_name.strip():
                    st.warning("Choose an organization and enter a name")
                else:
                    _run(lambda: client.update_organization(target, {"name": new_name.strip()}), "Organization updated")

    with tab_delete:
        with st.form("org_delete"):
            target = st.selectbox("Organization", list(names), format_func=lambda i: f"{names[i]} ({i})", index=None)
            confirm = st.checkbox("I understand this cannot be undone")
            if st.form_submit_button("Delete"):
                if target is None or not confirm:
                    st.warning("Choose an organization and confirm")
                else:
                    _run(lambda: client.delete_organization(target), "Organization deleted")
