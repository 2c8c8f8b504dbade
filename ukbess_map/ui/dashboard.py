"""메인 대시보드 — 요약 메트릭, 자산 상세 패널, 자산 목록 테이블."""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING, Any

import pandas as pd
import streamlit as st

from ukbess_map.ui.components import (
    format_capacity,
    format_number,
    format_price,
    format_voltage,
    status_label,
)
from ukbess_map.ui.state import reset_widget, widget_key

if TYPE_CHECKING:
    from ukbess_map.core.selection import SelectionController
    from ukbess_map.data.models import BatteryAsset, RegistrySummary


def render_summary_metrics(summary: RegistrySummary) -> None:
    """요약 메트릭 4개 (자산 수, 총 용량, 평균 존 가격, 존 수)."""
    avg = summary.average_zone_price
    col1, col2, col3, col4 = st.columns(4)
    col1.metric("Total Assets", f"{summary.asset_count}")
    col2.metric("Total Capacity", format_capacity(summary.total_capacity))
    avg_text = format_price(round(avg, 1) if avg is not None else None, per_mwh=False)
    col3.metric("Avg Price/MWh", avg_text)
    col4.metric("Pricing Zones", f"{summary.zone_count}")


def asset_detail_rows(asset: BatteryAsset) -> list[tuple[str, str]]:
    """상세 패널에 표시할 (항목, 값) 목록"""
    return [
        ("Region", asset.region),
        ("Voltage", format_voltage(asset.voltage)),
        ("Capacity", format_capacity(asset.capacity)),
        ("Status", status_label(asset.status)),
        ("Zone Price", format_price(asset.zone_price)),
    ]


def render_asset_details(asset: BatteryAsset | None) -> None:
    st.subheader("Asset Details")
    if asset is None:
        st.caption("Click on an asset to view details")
        return

    st.markdown(f"**{asset.name}**")
    for label, value in asset_detail_rows(asset):
        left, right = st.columns([1, 1])
        left.write(f"{label}:")
        right.write(f"**{value}**")


def assets_to_dataframe(assets: Sequence[BatteryAsset]) -> pd.DataFrame:
    """BatteryAsset 리스트를 표시용 DataFrame으로 변환 (레지스트리 순서 유지)."""
    rows = []
    for a in assets:
        rows.append(
            {
                "ID": a.id,
                "Asset": a.name,
                "Region": a.region,
                "Voltage (kV)": a.voltage,
                "Capacity (MW)": a.capacity,
                "Status": status_label(a.status),
                "Zone Price": format_number(a.zone_price),
            }
        )
    return pd.DataFrame(
        rows,
        columns=[
            "ID",
            "Asset",
            "Region",
            "Voltage (kV)",
            "Capacity (MW)",
            "Status",
            "Zone Price",
        ],
    )


def extract_selected_rows(event: Any) -> list[int]:
    """st.dataframe 선택 이벤트에서 행 인덱스만 뽑는다."""
    if event is None:
        return []
    if isinstance(event, dict):
        selection = event.get("selection")
    else:
        selection = getattr(event, "selection", None)
    if selection is None:
        return []
    if isinstance(selection, dict):
        rows = selection.get("rows")
    else:
        rows = getattr(selection, "rows", None)
    return [int(r) for r in rows or []]


def _last_rows_key(key: str) -> str:
    return f"{widget_key(key)}__last_rows"


def sync_asset_table(
    assets: Sequence[BatteryAsset],
    selected_asset_id: str | None,
    key: str = "asset_table",
) -> None:
    """테이블에 남은 행 선택이 현재 선택 자산과 다르면 테이블 선택을 버린다."""
    rows = st.session_state.get(_last_rows_key(key), [])
    if not rows:
        return
    shown = assets[rows[0]].id if rows[0] < len(assets) else None
    if shown != selected_asset_id:
        reset_widget(key)


def render_asset_table(
    assets: Sequence[BatteryAsset],
    controller: SelectionController,
    key: str = "asset_table",
) -> bool:
    """자산 목록 테이블. 행을 선택하면 해당 자산이 선택된다.

    선택이 바뀌었으면 True를 반환한다 (호출 쪽에서 rerun).
    """
    st.subheader("📋 Assets")
    if not assets:
        st.info("No assets loaded.")
        return False

    df = assets_to_dataframe(assets)
    max_capacity = float(df["Capacity (MW)"].max()) if not df.empty else 100.0
    event = st.dataframe(
        df,
        use_container_width=True,
        hide_index=True,
        key=widget_key(key),
        on_select="rerun",
        selection_mode="single-row",
        column_config={
            "Capacity (MW)": st.column_config.ProgressColumn(
                "Capacity (MW)",
                min_value=0,
                max_value=max(max_capacity, 1.0),
                format="%d MW",
            ),
        },
    )

    rows = extract_selected_rows(event)
    last_key = _last_rows_key(key)
    if rows == st.session_state.get(last_key, []):
        return False
    st.session_state[last_key] = rows
    if not rows or rows[0] >= len(assets):
        return False

    controller.on_asset_clicked(assets[rows[0]].id)
    return True
