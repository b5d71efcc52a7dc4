from __future__ import annotations

import logging

import streamlit as st

from finreport.auth import authenticate
from finreport.config import AppConfig

logger = logging.getLogger("finreport.views.login")


def render(cfg: AppConfig) -> None:
    _, mid, _ = st.columns([1, 2, 1])
    with mid:
        st.subheader("Sign in")
        if not (cfg.admin_login or cfg.user_login):
            st.info("No credentials are configured. Set ADMIN_LOGIN/ADMIN_PASSWORD or USER_LOGIN/USER_PASSWORD.")

        with st.form("login", clear_on_submit=False):
            username = st.text_input("Login")
            password = st.text_input("Password", type="password")
            submitted = st.form_submit_button("Sign in", use_container_width=True)

        if submitted:
            user = authenticate(cfg, username, password)
            if user is None:
                logger.info("Rejected login attempt")
                st.error("Wrong login or password")
                return
            logger.info(f"Signed in with role {user.role}")
            st.session_state["user"] = user
            st.rerun()
