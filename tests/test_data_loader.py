"""data_loader 모듈 단위 테스트."""

from __future__ import annotations

import json
from pathlib import Path

import pandas as pd
import pytest

from ukbess_map.core.exceptions import DataLoadError, DuplicateRecordError
from ukbess_map.data.data_loader import (
    build_registries,
    load_assets,
    load_assets_from_dataframe,
    load_assets_from_uploaded_file,
    load_zones,
)
from ukbess_map.data.models import AssetStatus, BatteryAsset
from ukbess_map.data.stats import average_zone_price, total_capacity

DATA_DIR = Path(__file__).resolve().parent.parent / "data"

SAMPLE_ASSETS = [
    {
        "id": "1",
        "name": "London Gateway Battery",
        "region": "South East",
        "voltage": 400,
        "capacity": 50,
        "lat": 51.5074,
        "lng": -0.1278,
        "status": "operational",
        "zonePrice": 85.5,
    },
    {
        "id": "2",
        "name": "Cardiff Energy Reserve",
        "region": "Wales",
        "voltage": 132,
        "capacity": 30,
        "lat": 51.4816,
        "lng": -3.1791,
        "status": "planned",
        "zonePrice": 70.1,
    },
    {
        "id": "3",
        "name": "Birmingham Battery Hub",
        "region": "West Midlands",
        "voltage": 275,
        "capacity": 60,
        "lat": 52.4862,
        "lng": -1.8904,
        "status": "construction",
        "zonePrice": 78.9,
    },
]

SAMPLE_ZONES = [
    {"id": "se", "name": "South East", "color": "#ef4444", "price": 85.5},
    {"id": "wales", "name": "Wales", "color": "#f59e0b", "price": 70.1},
]


def _write_json(path: Path, payload: object) -> Path:
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


class TestBundledData:
    def test_default_assets(self) -> None:
        assets = load_assets(DATA_DIR / "assets.json")
        assert len(assets) == 10
        assert all(isinstance(a, BatteryAsset) for a in assets)
        assert [a.id for a in assets][:3] == ["1", "2", "3"]
        assert total_capacity(assets) == 457

    def test_default_zones(self) -> None:
        zones = load_zones(DATA_DIR / "zones.json")
        assert len(zones) == 9
        assert {z.id for z in zones} >= {"se", "scotland", "wales"}
        avg = average_zone_price(zones)
        assert avg == pytest.approx(sum(z.price for z in zones) / 9)

    def test_build_registries(self) -> None:
        assets, zones = build_registries(DATA_DIR / "assets.json", DATA_DIR / "zones.json")
        assert len(assets) == 10
        assert len(zones) == 9
        # South East 자산 두 개는 같은 존 이름으로만 연결된다.
        south_east = [a for a in assets if a.region == "South East"]
        assert len(south_east) == 2
        assert zones.find_by_name("South East") is not None


class TestLoadJson:
    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(DataLoadError):
            load_assets(tmp_path / "nope.json")

    def test_invalid_json(self, tmp_path: Path) -> None:
        path = tmp_path / "broken.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(DataLoadError):
            load_zones(path)

    def test_not_a_list(self, tmp_path: Path) -> None:
        path = _write_json(tmp_path / "obj.json", {"id": "1"})
        with pytest.raises(DataLoadError):
            load_assets(path)

    def test_invalid_records_skipped(self, tmp_path: Path) -> None:
        bad = dict(SAMPLE_ASSETS[0], id="bad", status="decommissioned")
        path = _write_json(tmp_path / "assets.json", [*SAMPLE_ASSETS, bad])
        assets = load_assets(path)
        assert [a.id for a in assets] == ["1", "2", "3"]

    def test_duplicate_ids(self, tmp_path: Path) -> None:
        assets_path = _write_json(tmp_path / "assets.json", [*SAMPLE_ASSETS, SAMPLE_ASSETS[0]])
        zones_path = _write_json(tmp_path / "zones.json", SAMPLE_ZONES)
        with pytest.raises(DuplicateRecordError):
            build_registries(assets_path, zones_path)

    def test_empty_zones_file(self, tmp_path: Path) -> None:
        path = _write_json(tmp_path / "zones.json", [])
        assert load_zones(path) == []

    def test_non_finite_zone_price_skipped(self, tmp_path: Path) -> None:
        # json 모듈은 따옴표 없는 NaN/Infinity 리터럴도 읽어 들인다.
        path = tmp_path / "zones.json"
        path.write_text(
            '[{"id": "a", "name": "A", "color": "#fff", "price": NaN},'
            ' {"id": "b", "name": "B", "color": "#fff", "price": Infinity}]',
            encoding="utf-8",
        )
        zones = load_zones(path)
        assert zones == []
        assert average_zone_price(zones) is None


class TestLoadAssetsFromDataframe:
    def test_source_column_names(self) -> None:
        df = pd.DataFrame(SAMPLE_ASSETS)
        assets = load_assets_from_dataframe(df)
        assert [a.id for a in assets] == ["1", "2", "3"]
        assert assets[0].zone_price == 85.5

    def test_human_column_names(self) -> None:
        df = pd.DataFrame(
            [
                {
                    "Asset ID": 11,
                    "Asset Name": "Inverness Storage",
                    "Region": "Scotland",
                    "Voltage (kV)": 275,
                    "Capacity (MW)": 20.5,
                    "Latitude": 57.4778,
                    "Longitude": -4.2247,
                    "Status": "Planned",
                    "Zone Price": 65.2,
                }
            ]
        )
        assets = load_assets_from_dataframe(df)
        assert len(assets) == 1
        assert assets[0].id == "11"
        assert assets[0].voltage == 275
        assert assets[0].status is AssetStatus.PLANNED

    def test_missing_cells_skip_row(self) -> None:
        rows = [dict(SAMPLE_ASSETS[0]), dict(SAMPLE_ASSETS[1], capacity=None)]
        assets = load_assets_from_dataframe(pd.DataFrame(rows))
        assert [a.id for a in assets] == ["1"]

    def test_empty_dataframe(self) -> None:
        assert load_assets_from_dataframe(pd.DataFrame()) == []

    def test_unknown_columns(self) -> None:
        df = pd.DataFrame([{"random_col": "value", "another": "123"}])
        assert load_assets_from_dataframe(df) == []


class TestLoadAssetsFromUploadedFile:
    def test_csv_file(self) -> None:
        csv_content = (
            "id,name,region,voltage,capacity,lat,lng,status,zonePrice\n"
            "1,Cardiff Energy Reserve,Wales,132,30,51.4816,-3.1791,planned,70.1\n"
        )
        assets = load_assets_from_uploaded_file(csv_content.encode("utf-8-sig"), "assets.csv")
        assert len(assets) == 1
        assert assets[0].id == "1"
        assert assets[0].region == "Wales"

    def test_json_file(self) -> None:
        assets = load_assets_from_uploaded_file(json.dumps(SAMPLE_ASSETS).encode(), "a.JSON")
        assert len(assets) == 3

    def test_json_single_object(self) -> None:
        payload = json.dumps(SAMPLE_ASSETS[0]).encode()
        assets = load_assets_from_uploaded_file(payload, "one.json")
        assert [a.id for a in assets] == ["1"]

    def test_excel_file(self) -> None:
        import io

        buffer = io.BytesIO()
        pd.DataFrame(SAMPLE_ASSETS).to_excel(buffer, index=False)
        assets = load_assets_from_uploaded_file(buffer.getvalue(), "assets.xlsx")
        assert [a.id for a in assets] == ["1", "2", "3"]

    def test_unsupported_format(self) -> None:
        assert load_assets_from_uploaded_file(b"some data", "assets.txt") == []

    def test_invalid_csv(self) -> None:
        assert load_assets_from_uploaded_file(b"\xff\xfe", "assets.csv") == []
