"""지도 시각화 UI.

지도 엔진(Plotly Scattermapbox)은 MapAdapter 인터페이스 뒤에 둔다.
코어(선택/파생 로직)는 render(assets, on_click) / teardown() 두 개만 알면 되고,
마커 생성·뷰포트·클릭 이벤트 해석은 어댑터가 책임진다.

- MAPBOX_TOKEN이 있으면 Mapbox 스타일, 없으면 토큰이 필요 없는 carto-positron
- 마커 크기는 전압, 색상은 상태로 결정 (ui.components)
- bounds가 있는 존은 반투명 폴리곤으로 그린다
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping, Sequence
from typing import TYPE_CHECKING, Any, Protocol

import pandas as pd
import plotly.graph_objects as go
import streamlit as st

from ukbess_map.core.config import settings
from ukbess_map.ui.components import (
    format_capacity,
    format_price,
    format_voltage,
    status_color,
    status_label,
    voltage_marker_size,
)
from ukbess_map.ui.state import reset_widget, widget_key

if TYPE_CHECKING:
    from ukbess_map.data.models import BatteryAsset, Zone

logger = logging.getLogger(__name__)

_HALO_COLOR = "#111827"
_HALO_EXTRA_PX = 10


class MapAdapter(Protocol):
    """지도 엔진 경계. 코어는 이 두 메서드만 사용한다."""

    def render(
        self,
        assets: Sequence[BatteryAsset],
        on_click: Callable[[str], None],
    ) -> None: ...

    def teardown(self) -> None: ...


def build_marker_frame(
    assets: Sequence[BatteryAsset],
    selected_id: str | None = None,
) -> pd.DataFrame:
    """자산 목록을 마커 속성 DataFrame으로 변환.

    Streamlit 렌더링과 분리해서 크기/색상 파생을 테스트 가능하게 유지한다.
    """
    rows = []
    for a in assets:
        rows.append(
            {
                "id": a.id,
                "name": a.name,
                "region": a.region,
                "lat": float(a.lat),
                "lng": float(a.lng),
                "voltage": int(a.voltage),
                "capacity": float(a.capacity),
                "status": a.status.value,
                "color": status_color(a.status),
                "size": int(voltage_marker_size(a.voltage)),
                "label": format_voltage(a.voltage),
                "hover": "<br>".join(
                    [
                        f"<b>{a.name}</b>",
                        f"{a.region}",
                        f"{format_voltage(a.voltage)} · {format_capacity(a.capacity)}",
                        f"{status_label(a.status)}",
                        f"Zone price: {format_price(a.zone_price)}",
                    ]
                ),
                "selected": a.id == selected_id,
            }
        )
    columns = [
        "id",
        "name",
        "region",
        "lat",
        "lng",
        "voltage",
        "capacity",
        "status",
        "color",
        "size",
        "label",
        "hover",
        "selected",
    ]
    return pd.DataFrame(rows, columns=columns)


def _hex_to_rgba(color: str, alpha: float) -> str:
    raw = color.lstrip("#")
    if len(raw) == 3:
        raw = "".join(ch * 2 for ch in raw)
    r, g, b = (int(raw[i : i + 2], 16) for i in (0, 2, 4))
    return f"rgba({r},{g},{b},{alpha})"


def _zone_trace(zone: Zone, highlighted: bool) -> go.Scattermapbox:
    lats = [p.lat for p in zone.bounds]
    lons = [p.lng for p in zone.bounds]
    # 폴리곤 닫기
    lats.append(zone.bounds[0].lat)
    lons.append(zone.bounds[0].lng)
    return go.Scattermapbox(
        lat=lats,
        lon=lons,
        mode="lines",
        fill="toself",
        fillcolor=_hex_to_rgba(zone.color, 0.35 if highlighted else 0.15),
        line=dict(color=zone.color, width=3 if highlighted else 1),
        name=zone.name,
        hoverinfo="text",
        text=f"{zone.name} · {format_price(zone.price)}",
        showlegend=False,
    )


def build_asset_figure(
    assets: Sequence[BatteryAsset],
    zones: Sequence[Zone] = (),
    selected_asset_id: str | None = None,
    selected_zone_id: str | None = None,
    token: str = "",
    style: str = "light",
    center: tuple[float, float] | None = None,
    zoom: float | None = None,
    height: int | None = None,
) -> go.Figure:
    """자산 마커 + 존 폴리곤 Figure 생성.

    트레이스 순서: 존 폴리곤 → 선택 강조(halo) → 자산 마커.
    클릭 식별용 customdata(자산 id)는 자산 마커 트레이스에만 넣는다.
    """
    frame = build_marker_frame(assets, selected_asset_id)
    fig = go.Figure()

    for zone in zones:
        if zone.is_drawable:
            fig.add_trace(_zone_trace(zone, highlighted=zone.id == selected_zone_id))

    selected = frame.loc[frame["selected"].astype(bool)]
    if not selected.empty:
        fig.add_trace(
            go.Scattermapbox(
                lat=selected["lat"].tolist(),
                lon=selected["lng"].tolist(),
                mode="markers",
                marker=dict(
                    size=[s + _HALO_EXTRA_PX for s in selected["size"].tolist()],
                    color=_HALO_COLOR,
                    opacity=0.45,
                ),
                hoverinfo="skip",
                showlegend=False,
                name="selected",
            )
        )

    fig.add_trace(
        go.Scattermapbox(
            lat=frame["lat"].tolist(),
            lon=frame["lng"].tolist(),
            mode="markers+text",
            marker=dict(
                size=frame["size"].tolist(),
                color=frame["color"].tolist(),
                opacity=0.95,
            ),
            text=frame["label"].tolist(),
            textposition="top center",
            hovertext=frame["hover"].tolist(),
            hoverinfo="text",
            customdata=frame["id"].tolist(),
            showlegend=False,
            name="assets",
        )
    )

    lat, lng = center or (settings.map_center_lat, settings.map_center_lng)
    mapbox: dict[str, Any] = dict(
        center=dict(lat=float(lat), lon=float(lng)),
        zoom=float(zoom if zoom is not None else settings.map_zoom),
    )
    if token:
        mapbox["accesstoken"] = token
        mapbox["style"] = style
    else:
        mapbox["style"] = "carto-positron"

    fig.update_layout(
        margin=dict(l=0, r=0, t=10, b=0),
        height=int(height or settings.map_height),
        mapbox=mapbox,
        uirevision="asset-map",
        clickmode="event+select",
    )
    return fig


def _get(obj: Any, key: str) -> Any:
    if isinstance(obj, Mapping):
        return obj.get(key)
    return getattr(obj, key, None)


def extract_clicked_asset_ids(event: Any) -> list[str]:
    """st.plotly_chart 선택 이벤트에서 자산 id(customdata)만 뽑는다.

    customdata가 없는 포인트(존 폴리곤, halo)는 무시한다.
    """
    if event is None:
        return []
    selection = _get(event, "selection")
    if selection is None:
        return []
    points = _get(selection, "points") or []

    ids: list[str] = []
    for point in points:
        custom = _get(point, "customdata")
        if isinstance(custom, (list, tuple)):
            custom = custom[0] if custom else None
        if custom is None or custom == "":
            continue
        asset_id = str(custom)
        if asset_id not in ids:
            ids.append(asset_id)
    return ids


class PlotlyMapAdapter:
    """Plotly + Streamlit 기반 MapAdapter 구현.

    Streamlit은 선택 상태를 rerun 사이에 유지하므로, 같은 선택 이벤트를 두 번
    처리하지 않도록 마지막으로 처리한 id 목록을 세션에 기록한다.
    """

    def __init__(
        self,
        zones: Sequence[Zone] = (),
        selected_asset_id: str | None = None,
        selected_zone_id: str | None = None,
        key: str = "asset_map",
        token: str | None = None,
    ) -> None:
        self.zones = zones
        self.selected_asset_id = selected_asset_id
        self.selected_zone_id = selected_zone_id
        self.key = key
        self.token = settings.mapbox_token if token is None else token

    @property
    def current_key(self) -> str:
        return widget_key(self.key)

    @property
    def _last_key(self) -> str:
        return f"{self.current_key}__last_clicked"

    def last_clicked(self) -> list[str]:
        return list(st.session_state.get(self._last_key, []))

    def sync_selection(self) -> None:
        """다른 뷰에서 자산 선택이 바뀌었으면 지도에 남은 마커 선택을 버린다."""
        clicked = self.last_clicked()
        if clicked and clicked[-1] != self.selected_asset_id:
            logger.debug("지도 선택 초기화: %s -> %s", clicked[-1], self.selected_asset_id)
            self.teardown()

    def render(
        self,
        assets: Sequence[BatteryAsset],
        on_click: Callable[[str], None],
    ) -> None:
        fig = build_asset_figure(
            assets,
            zones=self.zones,
            selected_asset_id=self.selected_asset_id,
            selected_zone_id=self.selected_zone_id,
            token=self.token,
            style=settings.mapbox_style,
        )
        event = st.plotly_chart(
            fig,
            use_container_width=True,
            config={"scrollZoom": True},
            key=self.current_key,
            on_select="rerun",
            selection_mode="points",
        )

        clicked = extract_clicked_asset_ids(event)
        if clicked == self.last_clicked():
            return
        st.session_state[self._last_key] = clicked
        if clicked:
            logger.debug("지도 마커 클릭: %s", clicked[-1])
            on_click(clicked[-1])

    def teardown(self) -> None:
        reset_widget(self.key)


def render_asset_map(
    assets: Sequence[BatteryAsset],
    on_click: Callable[[str], None],
    adapter: MapAdapter,
) -> None:
    st.subheader("🗺️ Interactive Asset Map")
    if not assets:
        st.info("No assets to display.")
        return
    if not settings.mapbox_token:
        st.caption("MAPBOX_TOKEN is not set. Using the token-free carto-positron basemap.")
    adapter.render(assets, on_click)
