import pytest

from ukbess_map.data.models import BatteryAsset, SelectionState, Zone
from ukbess_map.data.registry import AssetRegistry, ZoneRegistry

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
    {"id": "se", "name": "South East", "color": "#ef4444", "price": 85.5, "bounds": []},
    {"id": "wales", "name": "Wales", "color": "#f59e0b", "price": 70.1, "bounds": []},
    {
        "id": "wm",
        "name": "West Midlands",
        "color": "#3b82f6",
        "price": 78.9,
        "bounds": [
            {"lat": 52.0, "lng": -2.5},
            {"lat": 52.9, "lng": -2.5},
            {"lat": 52.9, "lng": -1.3},
            {"lat": 52.0, "lng": -1.3},
        ],
    },
]


@pytest.fixture
def sample_assets() -> list[BatteryAsset]:
    return [BatteryAsset.model_validate(item) for item in SAMPLE_ASSETS]


@pytest.fixture
def sample_zones() -> list[Zone]:
    return [Zone.model_validate(item) for item in SAMPLE_ZONES]


@pytest.fixture
def asset_registry(sample_assets: list[BatteryAsset]) -> AssetRegistry:
    return AssetRegistry(sample_assets)


@pytest.fixture
def zone_registry(sample_zones: list[Zone]) -> ZoneRegistry:
    return ZoneRegistry(sample_zones)


@pytest.fixture
def empty_state() -> SelectionState:
    return SelectionState()
