from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

import streamlit as st

from ukbess_map.core.selection import is_zone_selected
from ukbess_map.ui.components import format_capacity, format_price, format_voltage, status_color

if TYPE_CHECKING:
    from ukbess_map.core.selection import SelectionController
    from ukbess_map.data.models import BatteryAsset, Zone


def assets_in_zone(zone: Zone, assets: Sequence[BatteryAsset]) -> list[BatteryAsset]:
    """존 이름과 region이 정확히 같은 자산만 묶는다."""
    return [a for a in assets if a.region == zone.name]


def render_zone_pricing(
    zones: Sequence[Zone],
    assets: Sequence[BatteryAsset],
    controller: SelectionController,
) -> bool:
    """존 가격 목록. 선택한 존은 강조 표시된다.

    선택이 바뀌었으면 True를 반환한다 (호출 쪽에서 rerun).
    """
    st.subheader("Zonal Pricing")
    if not zones:
        st.info("No pricing zones loaded.")
        return False

    changed = False
    state = controller.state
    for zone in zones:
        selected = is_zone_selected(state, zone)
        cols = st.columns([1, 6, 3])
        with cols[0]:
            st.markdown(
                f"<div style='width:16px;height:16px;margin-top:10px;border-radius:3px;"
                f"background:{zone.color}'></div>",
                unsafe_allow_html=True,
            )
        with cols[1]:
            clicked = st.button(
                zone.name,
                key=f"zone_{zone.id}",
                type="primary" if selected else "secondary",
                use_container_width=True,
            )
        with cols[2]:
            st.markdown(f"**{format_price(zone.price, per_mwh=False)}**")

        if clicked and not selected:
            controller.select_zone(zone.id)
            changed = True

    selected_zone = controller.selected_zone()
    if selected_zone is not None:
        _render_zone_assets(selected_zone, assets)
    return changed


def _render_zone_assets(zone: Zone, assets: Sequence[BatteryAsset]) -> None:
    members = assets_in_zone(zone, assets)
    with st.expander(f"{zone.name} · {len(members)} assets", expanded=True):
        if not members:
            st.caption("No assets registered in this zone.")
            return
        for a in members:
            color = status_color(a.status)
            st.markdown(
                f"<span style='color:{color}'>●</span> {a.name} "
                f"({format_voltage(a.voltage)}, {format_capacity(a.capacity)})",
                unsafe_allow_html=True,
            )
