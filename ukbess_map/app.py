"""UK 배터리 저장 자산 지도 — Streamlit 메인 앱.

자산/존 레지스트리를 한 번 로드하고, 지도·자산 목록·존 목록 세 곳의 클릭을
하나의 SelectionState로 동기화한다.
"""

from __future__ import annotations

import logging

import streamlit as st

from ukbess_map.core.config import settings
from ukbess_map.core.exceptions import DataLoadError, DuplicateRecordError
from ukbess_map.data.registry import AssetRegistry, ZoneRegistry
from ukbess_map.data.stats import summarize
from ukbess_map.ui.charts import (
    render_capacity_bar_chart,
    render_status_breakdown,
    render_zone_price_chart,
)
from ukbess_map.ui.dashboard import (
    render_asset_details,
    render_asset_table,
    render_summary_metrics,
    sync_asset_table,
)
from ukbess_map.ui.map_view import PlotlyMapAdapter, render_asset_map
from ukbess_map.ui.sidebar import render_legend, render_registry_overview, render_upload_control
from ukbess_map.ui.state import SessionSelectionController, reset_widget
from ukbess_map.ui.zone_view import render_zone_pricing
from ukbess_map.utils.cache import get_default_registries, parse_uploaded_assets
from ukbess_map.utils.export import render_download_buttons

logging.basicConfig(
    level=logging.DEBUG if settings.debug else logging.INFO,
    format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
)
logger = logging.getLogger(__name__)


def _load_registries() -> tuple[AssetRegistry, ZoneRegistry]:
    try:
        return get_default_registries()
    except DataLoadError as exc:
        logger.error("기본 레지스트리 로드 실패: %s", exc.message)
        st.error(f"Could not load asset/zone data: {exc.message}")
        return AssetRegistry(()), ZoneRegistry(())


def _apply_upload(default_assets: AssetRegistry) -> tuple[AssetRegistry, str]:
    """업로드 파일이 있으면 그 자산으로 교체. 실패하면 기본 레지스트리 유지."""
    upload = render_upload_control()
    if upload is None:
        return default_assets, "default"

    content, filename = upload
    assets = parse_uploaded_assets(content, filename)
    if not assets:
        st.sidebar.error("No valid assets found in the uploaded file.")
        return default_assets, "default"

    try:
        registry = AssetRegistry(assets)
    except DuplicateRecordError as exc:
        st.sidebar.error(f"Uploaded file rejected: duplicate asset id {exc.record_id!r}")
        return default_assets, "default"

    st.sidebar.success(f"Loaded {len(registry)} assets from {filename}")
    return registry, f"upload:{filename}"


def main() -> None:
    st.set_page_config(
        page_title="UK Battery Assets Map",
        page_icon="🔋",
        layout="wide",
        initial_sidebar_state="expanded",
    )

    st.title("🔋 UK Battery Assets Map")
    st.caption("Voltage capacity & zonal pricing overview")

    render_legend()

    default_assets, zones = _load_registries()
    assets, source = _apply_upload(default_assets)
    render_registry_overview(assets)

    controller = SessionSelectionController(assets, zones)
    selected_asset, selected_zone = controller.current_selection()
    selected_asset_id = selected_asset.id if selected_asset else None

    adapter = PlotlyMapAdapter(
        zones=zones.list(),
        selected_asset_id=selected_asset_id,
        selected_zone_id=selected_zone,
    )
    # 자산 소스가 바뀌면 이전 마커/행 선택 상태를 버린다.
    if st.session_state.get("_asset_source") != source:
        adapter.teardown()
        reset_widget("asset_table")
        st.session_state["_asset_source"] = source
    # 한쪽 뷰에서 선택이 바뀌면 다른 뷰에 남은 선택 표시를 맞춘다.
    adapter.sync_selection()
    sync_asset_table(assets.list(), selected_asset_id)

    render_summary_metrics(summarize(assets, zones))
    st.divider()

    def _on_asset_clicked(asset_id: str) -> None:
        controller.on_asset_clicked(asset_id)
        st.rerun()

    map_col, side_col = st.columns([2, 1])
    with map_col:
        render_asset_map(assets.list(), _on_asset_clicked, adapter)

    with side_col:
        render_asset_details(selected_asset)
        st.divider()
        if render_zone_pricing(zones.list(), assets.list(), controller):
            st.rerun()

    st.divider()
    if render_asset_table(assets.list(), controller):
        st.rerun()

    st.divider()
    tab1, tab2, tab3 = st.tabs(["⚡ Capacity", "💷 Zone prices", "🏗️ Status"])
    with tab1:
        render_capacity_bar_chart(assets.list())
    with tab2:
        render_zone_price_chart(zones.list(), selected_zone)
    with tab3:
        render_status_breakdown(assets.list())

    st.divider()
    render_download_buttons(assets.list())


if __name__ == "__main__":
    main()
