"""자산/존 레지스트리 — 읽기 전용 인메모리 레코드 목록.

앱 시작 시 한 번 만들어지고 이후 변경되지 않는다. 삽입 순서를 그대로 유지한다.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from ukbess_map.core.exceptions import DuplicateRecordError
from ukbess_map.data.models import BatteryAsset, Zone


class AssetRegistry:
    """배터리 자산 레지스트리"""

    def __init__(self, assets: Iterable[BatteryAsset]) -> None:
        records = tuple(assets)
        index: dict[str, BatteryAsset] = {}
        for asset in records:
            if asset.id in index:
                raise DuplicateRecordError(asset.id, kind="asset")
            index[asset.id] = asset
        self._assets = records
        self._index = index

    def list(self) -> tuple[BatteryAsset, ...]:
        return self._assets

    def get(self, asset_id: str | None) -> BatteryAsset | None:
        if asset_id is None:
            return None
        return self._index.get(asset_id)

    def regions(self) -> tuple[str, ...]:
        """지역명 목록 (처음 등장한 순서, 중복 제거)"""
        return tuple(dict.fromkeys(a.region for a in self._assets))

    def __len__(self) -> int:
        return len(self._assets)

    def __iter__(self) -> Iterator[BatteryAsset]:
        return iter(self._assets)

    def __contains__(self, asset_id: object) -> bool:
        return asset_id in self._index

    def __repr__(self) -> str:
        return f"AssetRegistry({len(self._assets)} assets)"


class ZoneRegistry:
    """가격 존 레지스트리"""

    def __init__(self, zones: Iterable[Zone]) -> None:
        records = tuple(zones)
        index: dict[str, Zone] = {}
        for zone in records:
            if zone.id in index:
                raise DuplicateRecordError(zone.id, kind="zone")
            index[zone.id] = zone
        self._zones = records
        self._index = index

    def list(self) -> tuple[Zone, ...]:
        return self._zones

    def get(self, zone_id: str | None) -> Zone | None:
        if zone_id is None:
            return None
        return self._index.get(zone_id)

    def find_by_name(self, name: str) -> Zone | None:
        """존 이름이 정확히 일치하는 존을 찾는다.

        자산과 존 사이의 유일한 연결 고리는 `asset.region == zone.name`이다.
        가격이 우연히 같은 것은 관계로 보지 않는다.
        """
        for zone in self._zones:
            if zone.name == name:
                return zone
        return None

    def __len__(self) -> int:
        return len(self._zones)

    def __iter__(self) -> Iterator[Zone]:
        return iter(self._zones)

    def __contains__(self, zone_id: object) -> bool:
        return zone_id in self._index

    def __repr__(self) -> str:
        return f"ZoneRegistry({len(self._zones)} zones)"
