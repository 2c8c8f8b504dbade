from __future__ import annotations

from collections.abc import Callable, Sequence

from ukbess_map.core.selection import SelectionController
from ukbess_map.data.models import BatteryAsset, Zone
from ukbess_map.data.registry import AssetRegistry, ZoneRegistry
from ukbess_map.ui.components import MarkerSize
from ukbess_map.ui.map_view import (
    MapAdapter,
    _hex_to_rgba,
    build_asset_figure,
    build_marker_frame,
    extract_clicked_asset_ids,
)


class FakeMapAdapter:
    """지도 엔진 없이 클릭을 흉내 내는 어댑터."""

    def __init__(self, click_ids: Sequence[str]) -> None:
        self.click_ids = list(click_ids)
        self.rendered: list[str] = []
        self.torn_down = False

    def render(self, assets: Sequence[BatteryAsset], on_click: Callable[[str], None]) -> None:
        self.rendered = [a.id for a in assets]
        for asset_id in self.click_ids:
            on_click(asset_id)

    def teardown(self) -> None:
        self.torn_down = True


def test_marker_frame_derives_size_and_color(sample_assets: list[BatteryAsset]) -> None:
    frame = build_marker_frame(sample_assets, selected_id="3")

    assert frame["id"].tolist() == ["1", "2", "3"]
    assert frame["size"].tolist() == [
        int(MarkerSize.LARGE),
        int(MarkerSize.SMALL),
        int(MarkerSize.MEDIUM),
    ]
    assert frame["color"].tolist() == ["#22c55e", "#3b82f6", "#eab308"]
    assert frame["label"].tolist() == ["400kV", "132kV", "275kV"]
    assert frame["selected"].tolist() == [False, False, True]
    assert "London Gateway Battery" in frame.loc[0, "hover"]


def test_marker_frame_empty() -> None:
    frame = build_marker_frame([])
    assert frame.empty
    assert "size" in frame.columns


def test_figure_without_token_uses_carto(sample_assets: list[BatteryAsset]) -> None:
    fig = build_asset_figure(sample_assets, token="")
    assert fig.layout.mapbox.style == "carto-positron"
    assert fig.layout.mapbox.accesstoken is None
    assert len(fig.data) == 1
    assert list(fig.data[0].customdata) == ["1", "2", "3"]


def test_figure_with_token(sample_assets: list[BatteryAsset]) -> None:
    fig = build_asset_figure(sample_assets, token="pk.test", style="light")
    assert fig.layout.mapbox.accesstoken == "pk.test"
    assert fig.layout.mapbox.style == "light"


def test_figure_viewport(sample_assets: list[BatteryAsset]) -> None:
    fig = build_asset_figure(sample_assets, center=(54.5, -2.5), zoom=5.5, height=480)
    assert fig.layout.mapbox.center.lat == 54.5
    assert fig.layout.mapbox.center.lon == -2.5
    assert fig.layout.mapbox.zoom == 5.5
    assert fig.layout.height == 480


def test_figure_selected_halo_and_zones(
    sample_assets: list[BatteryAsset], sample_zones: list[Zone]
) -> None:
    fig = build_asset_figure(
        sample_assets,
        zones=sample_zones,
        selected_asset_id="1",
        selected_zone_id="wm",
    )
    # 폴리곤(wm만 bounds 있음) → halo → 자산 마커
    assert [t.name for t in fig.data] == ["West Midlands", "selected", "assets"]
    polygon = fig.data[0]
    assert polygon.fill == "toself"
    assert polygon.lat[0] == polygon.lat[-1]
    assert polygon.line.width == 3
    assert fig.data[1].customdata is None
    assert fig.data[1].marker.size[0] > MarkerSize.LARGE


def test_hex_to_rgba() -> None:
    assert _hex_to_rgba("#ef4444", 0.5) == "rgba(239,68,68,0.5)"
    assert _hex_to_rgba("#fff", 1) == "rgba(255,255,255,1)"


class TestExtractClickedAssetIds:
    def test_none(self) -> None:
        assert extract_clicked_asset_ids(None) == []

    def test_scalar_customdata(self) -> None:
        event = {"selection": {"points": [{"customdata": "2", "lat": 51.4, "lon": -3.1}]}}
        assert extract_clicked_asset_ids(event) == ["2"]

    def test_list_customdata_and_dedup(self) -> None:
        event = {
            "selection": {
                "points": [
                    {"customdata": ["1"]},
                    {"customdata": ["1"]},
                    {"customdata": ["3"]},
                ]
            }
        }
        assert extract_clicked_asset_ids(event) == ["1", "3"]

    def test_ignores_points_without_customdata(self) -> None:
        event = {"selection": {"points": [{"curve_number": 0}, {"customdata": 10}]}}
        assert extract_clicked_asset_ids(event) == ["10"]

    def test_attribute_style_event(self) -> None:
        class _Selection:
            points = [{"customdata": "5"}]

        class _Event:
            selection = _Selection()

        assert extract_clicked_asset_ids(_Event()) == ["5"]

    def test_empty_selection(self) -> None:
        assert extract_clicked_asset_ids({"selection": {"points": []}}) == []


def test_adapter_click_flows_into_controller(
    asset_registry: AssetRegistry, zone_registry: ZoneRegistry
) -> None:
    controller = SelectionController(asset_registry, zone_registry)
    controller.select_zone("se")
    adapter: MapAdapter = FakeMapAdapter(click_ids=["3"])

    adapter.render(asset_registry.list(), controller.on_asset_clicked)

    asset, zone_id = controller.current_selection()
    assert asset is not None
    assert asset.id == "3"
    assert zone_id == "se"
    adapter.teardown()
