from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import pandas as pd
import plotly.express as px
import plotly.graph_objects as go
import streamlit as st

from finreport.config import THEME


@dataclass(frozen=True)
class Kpi:
    label: str
    value: str
    delta: Optional[str] = None


def render_kpi_row(kpis: list[Kpi]) -> None:
    cols = st.columns(len(kpis))
    for c, k in zip(cols, kpis):
        with c:
            delta_html = ""
            if k.delta:
                cls = "positive" if str(k.delta).strip().startswith(("+", "▲")) else "negative" if str(k.delta).strip().startswith(("-", "▼")) else ""
                delta_html = f'<div class="metric-delta {cls}">{k.delta}</div>'

            st.markdown(
                f"""
<div class="metric-card">
  <div class="metric-label">{k.label}</div>
  <div class="metric-value">{k.value}</div>
  {delta_html}
</div>
                """,
                unsafe_allow_html=True,
            )


def fmt_money(value: float) -> str:
    return f"{value:,.2f}"


def fmt_pct(value: float) -> str:
    return f"{value:,.2f}%"


def report_kpis(meta: dict, df: pd.DataFrame) -> list[Kpi]:
    """KPI cards for a report; falls back to the table itself when the server sent no meta."""
    total_records = meta.get("totalRecords", len(df))
    total_profit = meta.get("totalProfit", float(df["profit"].sum()) if "profit" in df else 0.0)
    avg_profitability = meta.get(
        "averageProfitability",
        float(df["profitability"].mean()) if "profitability" in df and len(df) else 0.0,
    )
    qty = int(df["quantity"].sum()) if "quantity" in df else 0
    return [
        Kpi("Records", f"{int(total_records):,}"),
        Kpi("Units", f"{qty:,}"),
        Kpi("Total profit", fmt_money(float(total_profit)), delta="▲ profit" if total_profit >= 0 else "▼ loss"),
        Kpi("Avg. profitability", fmt_pct(float(avg_profitability))),
    ]


def report_totals(df: pd.DataFrame) -> dict:
    """Footer totals: quantity, price, cost and margin of the whole table."""
    if df.empty:
        return {"quantity": 0, "price": 0.0, "cost": 0.0, "margin_pct": 0.0}
    price = float(df["price"].sum())
    cost = float(df["cost"].sum())
    return {
        "quantity": int(df["quantity"].sum()),
        "price": price,
        "cost": cost,
        "margin_pct": ((price - cost) / price * 100) if price else 0.0,
    }


def create_plotly_theme() -> dict:
    return {
        "font_family": "system-ui, -apple-system, Segoe UI, Roboto, Arial, sans-serif",
        "font_color": THEME["text_primary"],
        "paper_bgcolor": THEME["bg_card"],
        "plot_bgcolor": THEME["bg_card"],
        "colorway": [
            THEME["accent_primary"],
            THEME["navy_900"],
            THEME["accent_secondary"],
            THEME["navy_800"],
            "#6B7280",
            "#9CA3AF",
        ],
        "gridcolor": THEME["grid"],
        "axis_linecolor": THEME["border_color"],
        "title_font": {"color": THEME["navy_900"], "size": 16},
    }


def apply_plotly_theme(fig: go.Figure, x_title: str, y_title: str) -> go.Figure:
    theme = create_plotly_theme()
    fig.update_layout(
        margin=dict(l=10, r=10, t=44, b=10),
        font=dict(family=theme["font_family"], color=theme["font_color"]),
        paper_bgcolor=theme["paper_bgcolor"],
        plot_bgcolor=theme["plot_bgcolor"],
        colorway=theme["colorway"],
        title_font=theme["title_font"],
        showlegend=False,
    )
    fig.update_xaxes(
        title_text=x_title,
        gridcolor=theme["gridcolor"],
        zeroline=False,
        linecolor=theme["axis_linecolor"],
    )
    fig.update_yaxes(
        title_text=y_title,
        gridcolor=theme["gridcolor"],
        zeroline=False,
        linecolor=theme["axis_linecolor"],
    )
    return fig


def profit_by_category_chart(df: pd.DataFrame) -> None:
    if df.empty or "category" not in df or "profit" not in df:
        return
    agg = df.groupby("category", as_index=False)["profit"].sum().sort_values("profit", ascending=False)
    fig = px.bar(agg, x="category", y="profit", title="Profit by category")
    fig = apply_plotly_theme(fig, x_title="Category", y_title="Profit")
    fig.update_yaxes(separatethousands=True)
    st.plotly_chart(fig, use_container_width=True)
