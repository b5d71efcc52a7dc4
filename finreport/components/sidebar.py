from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import streamlit as st

from finreport.auth import ROLE_ADMIN, User, can_access
from finreport.config import AppConfig
from finreport.data.service import ApiClient


@dataclass(frozen=True)
class SidebarState:
    view: str
    user: Optional[User]


# (label, view, required role)
NAV_ITEMS = [
    ("📊 Reports", "report", None),
    ("🛠️ Administration", "admin", ROLE_ADMIN),
]


def render_sidebar(cfg: AppConfig, client: ApiClient, user: Optional[User]) -> SidebarState:
    if user is None:
        return SidebarState(view="login", user=None)

    with st.sidebar:
        st.markdown("### 🧾 Financial Reports")
        st.caption(f"Signed in as **{user.username}** ({user.role})")

        items = [(label, view) for label, view, role in NAV_ITEMS if can_access(user, role)]
        labels = [label for label, _ in items]
        default_label = st.session_state.get("nav_label", labels[0])
        idx = labels.index(default_label) if default_label in labels else 0

        label = st.radio(
            "Nav",
            labels,
            index=idx,
            label_visibility="collapsed",
        )
        st.session_state["nav_label"] = label
        view = dict(items)[label]

        with st.expander("⚙️ Connection", expanded=False):
            st.code(cfg.api_url, language="text")
            if st.button("Check server", use_container_width=True):
                if client.check_server_connection():
                    st.success("Server is reachable")
                else:
                    st.warning("Server is not reachable")
            if st.button("Clear organizations cache", use_container_width=True):
                client.clear_organizations_cache()
                st.toast("Organizations cache cleared")

        if st.button("Log out", use_container_width=True):
            st.session_state.pop("user", None)
            st.session_state.pop("nav_label", None)
            st.rerun()

    return SidebarState(view=view, user=user)
