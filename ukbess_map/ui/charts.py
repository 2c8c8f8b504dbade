"""Plotly 기반 시각화 차트."""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

import plotly.express as px
import plotly.graph_objects as go
import streamlit as st

from ukbess_map.ui.components import STATUS_COLORS, status_color, status_label

if TYPE_CHECKING:
    from ukbess_map.data.models import BatteryAsset, Zone


def build_capacity_bar_chart(assets: Sequence[BatteryAsset]) -> go.Figure:
    """자산별 용량 수평 바 차트 (상태 색상).

    이름이 겹치는 자산도 따로 그리도록 막대는 id로 두고 눈금에 이름을 표시한다.
    """
    import pandas as pd

    ordered = sorted(assets, key=lambda a: a.capacity)
    df = pd.DataFrame(
        [
            {
                "ID": a.id,
                "Asset": a.name,
                "Capacity (MW)": a.capacity,
                "Status": status_label(a.status),
            }
            for a in ordered
        ],
        columns=["ID", "Asset", "Capacity (MW)", "Status"],
    )

    fig = px.bar(
        df,
        x="Capacity (MW)",
        y="ID",
        color="Status",
        orientation="h",
        hover_name="Asset",
        color_discrete_map={status_label(s): c for s, c in STATUS_COLORS.items()},
        height=max(300, len(assets) * 32),
    )
    fig.update_yaxes(
        type="category",
        categoryorder="array",
        categoryarray=[a.id for a in ordered],
        tickmode="array",
        tickvals=[a.id for a in ordered],
        ticktext=[a.name for a in ordered],
    )
    fig.update_layout(
        title="Capacity by Asset",
        yaxis_title="",
        margin=dict(l=10, r=10, t=40, b=30),
    )
    return fig


def build_zone_price_chart(zones: Sequence[Zone], selected_zone_id: str | None = None) -> go.Figure:
    """존별 가격 바 차트. 선택한 존은 테두리로 강조."""
    ordered = sorted(zones, key=lambda z: z.price, reverse=True)
    fig = go.Figure(
        go.Bar(
            x=[z.name for z in ordered],
            y=[z.price for z in ordered],
            marker_color=[z.color for z in ordered],
            marker_line_color=["#111827" if z.id == selected_zone_id else z.color for z in ordered],
            marker_line_width=[3 if z.id == selected_zone_id else 0 for z in ordered],
            text=[f"{z.price:g}" for z in ordered],
            textposition="auto",
        )
    )
    fig.update_layout(
        title="Price by Zone",
        yaxis_title="Price (/MWh)",
        height=360,
        margin=dict(l=10, r=10, t=40, b=30),
    )
    return fig


def render_capacity_bar_chart(assets: Sequence[BatteryAsset]) -> None:
    if not assets:
        return
    st.plotly_chart(build_capacity_bar_chart(assets), use_container_width=True)


def render_zone_price_chart(zones: Sequence[Zone], selected_zone_id: str | None = None) -> None:
    if not zones:
        return
    st.plotly_chart(build_zone_price_chart(zones, selected_zone_id), use_container_width=True)


def render_status_breakdown(assets: Sequence[BatteryAsset]) -> None:
    """상태별 용량 도넛 차트."""
    if not assets:
        return
    from ukbess_map.data.stats import capacity_by_status

    totals = capacity_by_status(assets)
    fig = go.Figure(
        go.Pie(
            labels=[status_label(s) for s in totals],
            values=list(totals.values()),
            marker_colors=[status_color(s) for s in totals],
            hole=0.5,
        )
    )
    fig.update_layout(title="Capacity by Status", height=360, margin=dict(l=10, r=10, t=40, b=30))
    st.plotly_chart(fig, use_container_width=True)
