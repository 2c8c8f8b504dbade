"""사이드바 — 범례, 자산 파일 업로드, 지역 요약."""

from __future__ import annotations

from typing import TYPE_CHECKING

import streamlit as st

from ukbess_map.core.config import settings
from ukbess_map.data.models import AssetStatus
from ukbess_map.ui.components import MarkerSize, status_color, status_label

if TYPE_CHECKING:
    from ukbess_map.data.registry import AssetRegistry


def legend_entries() -> tuple[list[tuple[str, str]], list[tuple[str, int]]]:
    """범례 항목: (상태 라벨, 색상) 목록과 (전압 라벨, 마커 px) 목록"""
    statuses = [(status_label(s), status_color(s)) for s in AssetStatus]
    tiers = [
        (f"{settings.voltage_tier_large_kv}kV+", int(MarkerSize.LARGE)),
        (f"{settings.voltage_tier_medium_kv}kV+", int(MarkerSize.MEDIUM)),
        (f"< {settings.voltage_tier_medium_kv}kV", int(MarkerSize.SMALL)),
    ]
    return statuses, tiers


def render_legend() -> None:
    statuses, tiers = legend_entries()

    st.sidebar.header("Legend")
    st.sidebar.markdown("**Asset Status**")
    for label, color in statuses:
        st.sidebar.markdown(
            f"<span style='color:{color};font-size:18px'>●</span> {label}",
            unsafe_allow_html=True,
        )

    st.sidebar.markdown("**Voltage Levels**")
    for label, size in tiers:
        st.sidebar.markdown(
            f"<span style='display:inline-block;width:{size}px;height:{size}px;"
            f"border-radius:50%;background:#9ca3af;vertical-align:middle'></span> {label}",
            unsafe_allow_html=True,
        )


def render_upload_control() -> tuple[bytes, str] | None:
    """자산 파일 업로드. 업로드가 없으면 None."""
    st.sidebar.divider()
    st.sidebar.subheader("📁 Asset file (optional)")
    uploaded_file = st.sidebar.file_uploader(
        "CSV / Excel / JSON",
        type=["csv", "xlsx", "xls", "json"],
        help="Replaces the bundled UK asset list for this session.",
    )
    if uploaded_file is None:
        return None
    return uploaded_file.read(), uploaded_file.name


def render_registry_overview(assets: AssetRegistry) -> None:
    """현재 자산 목록이 걸쳐 있는 지역 요약."""
    regions = assets.regions()
    st.sidebar.divider()
    st.sidebar.caption(f"{len(assets)} assets across {len(regions)} regions")
    with st.sidebar.expander("Regions", expanded=False):
        for region in regions:
            st.markdown(f"- {region or '(unassigned)'}")
