from __future__ import annotations

import logging
from datetime import date

import streamlit as st

from finreport.components.header import render_offline_banner
from finreport.components.metrics import (
    fmt_money,
    fmt_pct,
    profit_by_category_chart,
    render_kpi_row,
    report_kpis,
    report_totals,
)
from finreport.config import AppConfig
from finreport.data.errors import ApiError
from finreport.data.export import XLSX_MIME, frame_to_xlsx
from finreport.data.models import Report
from finreport.data.service import ApiClient

logger = logging.getLogger("finreport.views.report")

TABLE_COLUMNS = {
    "name": "Product",
    "category": "Category",
    "quantity": "Quantity",
    "price": "Price",
    "cost": "Cost",
    "profit": "Profit",
    "profitability": "Profitability, %",
    "date": "Date",
}


def _load_organizations(client: ApiClient, force: bool = False):
    try:
        return client.get_organizations(force_refresh=force)
    except ApiError as e:
        logger.error(f"Could not load organizations: {e}")
        st.error(f"Could not load organizations: {e}")
        return []


def render(cfg: AppConfig, client: ApiClient) -> None:
    st.title("Report")

    head_l, head_r = st.columns([4, 1])
    with head_r:
        force = st.button("🔄 Refresh list", use_container_width=True)
    orgs = _load_organizations(client, force=force)

    if not client.get_server_status():
        render_offline_banner("Organizations below are test entries.")

    with head_l:
        st.caption("Choose a period and an organization, then run the calculation.")

    period = st.date_input(
        "Period",
        value=(),
        max_value=date.today(),
        format="DD.MM.YYYY",
    )
    names = {o.id: o.name for o in orgs}
    org_id = st.selectbox(
        "Organization",
        options=list(names),
        format_func=lambda i: names.get(i, i),
        index=None,
        placeholder="Select an organization",
    )

    ready = isinstance(period, (tuple, list)) and len(period) == 2 and org_id is not None
    if st.button("Calculate", type="primary", use_container_width=True, disabled=not ready):
        with st.spinner("Calculating..."):
            try:
                report = client.calculate_report({"startDate": period[0], "endDate": period[1]}, org_id)
            except ApiError as e:
                st.error(str(e))
                return
        st.session_state["report"] = report
        st.session_state["report_org"] = names.get(org_id, org_id)
        st.session_state["report_period"] = (period[0], period[1])

    report = st.session_state.get("report")
    if report is not None:
        _render_report(report, st.session_state.get("report_org", ""), st.session_state.get("report_period"))


def _render_report(report: Report, org_name: str, period) -> None:
    df = report.to_frame()
    if df.empty:
        st.info("No data for the selected period")
        return

    period_txt = f"{period[0]:%d.%m.%Y} – {period[1]:%d.%m.%Y}" if period else ""
    st.subheader(f"Results · {org_name} · {period_txt}")
    if report.source == "mock":
        st.caption("⚠️ Generated automatically for demonstration (server unavailable).")

    render_kpi_row(report_kpis(report.meta, df))

    shown = df[[c for c in TABLE_COLUMNS if c in df.columns]].rename(columns=TABLE_COLUMNS)
    st.dataframe(shown, use_container_width=True, hide_index=True)

    totals = report_totals(df)
    st.markdown(
        f"**Total** · quantity {totals['quantity']:,} · price {fmt_money(totals['price'])}"
        f" · cost {fmt_money(totals['cost'])} · avg. margin {fmt_pct(totals['margin_pct'])}"
    )

    st.download_button(
        "⬇️ Export to Excel",
        data=frame_to_xlsx(shown),
        file_name="report.xlsx",
        mime=XLSX_MIME,
    )

    profit_by_category_chart(df)
