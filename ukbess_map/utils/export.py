"""CSV/Excel 다운로드 유틸리티."""

from __future__ import annotations

import io
from collections.abc import Sequence
from datetime import datetime
from typing import TYPE_CHECKING

import pandas as pd
import streamlit as st

if TYPE_CHECKING:
    from ukbess_map.data.models import BatteryAsset


def assets_to_export_df(assets: Sequence[BatteryAsset]) -> pd.DataFrame:
    """BatteryAsset 리스트를 내보내기용 DataFrame으로 변환.

    컬럼명은 업로드 로더가 그대로 다시 읽을 수 있는 형식을 쓴다.
    """
    rows = []
    for a in assets:
        rows.append(
            {
                "id": a.id,
                "name": a.name,
                "region": a.region,
                "voltage": a.voltage,
                "capacity": a.capacity,
                "lat": a.lat,
                "lng": a.lng,
                "status": a.status.value,
                "zonePrice": a.zone_price,
            }
        )
    return pd.DataFrame(
        rows,
        columns=["id", "name", "region", "voltage", "capacity", "lat", "lng", "status", "zonePrice"],
    )


def render_download_buttons(assets: Sequence[BatteryAsset]) -> None:
    """CSV/Excel 다운로드 버튼을 렌더링."""
    if not assets:
        return

    df = assets_to_export_df(assets)
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    filename_base = f"battery_assets_{timestamp}"

    col1, col2 = st.columns(2)

    csv_data = df.to_csv(index=False, encoding="utf-8-sig")
    col1.download_button(
        label="📥 Download CSV",
        data=csv_data,
        file_name=f"{filename_base}.csv",
        mime="text/csv",
    )

    buffer = io.BytesIO()
    with pd.ExcelWriter(buffer, engine="openpyxl") as writer:
        df.to_excel(writer, index=False, sheet_name="assets")
    col2.download_button(
        label="📥 Download Excel",
        data=buffer.getvalue(),
        file_name=f"{filename_base}.xlsx",
        mime="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    )
