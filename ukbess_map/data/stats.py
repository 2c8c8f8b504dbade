"""레지스트리 집계 함수 (순수 함수).

캐시 없이 호출할 때마다 다시 계산한다.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from ukbess_map.core.exceptions import EmptyZoneRegistryError
from ukbess_map.data.models import AssetStatus, BatteryAsset, RegistrySummary, Zone

logger = logging.getLogger(__name__)


def total_capacity(assets: Iterable[BatteryAsset]) -> float:
    """전체 자산 용량 합계 (MW)"""
    return float(sum(a.capacity for a in assets))


def mean_zone_price(zones: Iterable[Zone]) -> float:
    """존 가격의 산술 평균.

    존이 하나도 없으면 EmptyZoneRegistryError를 던진다.
    """
    prices = [z.price for z in zones]
    if not prices:
        raise EmptyZoneRegistryError()
    return sum(prices) / len(prices)


def average_zone_price(zones: Iterable[Zone]) -> float | None:
    """표시용 평균 가격. 존이 없으면 None(sentinel)을 반환한다."""
    try:
        return mean_zone_price(zones)
    except EmptyZoneRegistryError:
        logger.debug("존 레지스트리가 비어 있어 평균 가격 대신 None 반환")
        return None


def capacity_by_status(assets: Iterable[BatteryAsset]) -> dict[AssetStatus, float]:
    """상태별 용량 합계. 자산이 없는 상태도 0.0으로 포함한다."""
    totals: dict[AssetStatus, float] = {status: 0.0 for status in AssetStatus}
    for asset in assets:
        totals[asset.status] += asset.capacity
    return totals


def summarize(assets: Iterable[BatteryAsset], zones: Iterable[Zone]) -> RegistrySummary:
    asset_list = list(assets)
    zone_list = list(zones)
    return RegistrySummary(
        asset_count=len(asset_list),
        total_capacity=total_capacity(asset_list),
        average_zone_price=average_zone_price(zone_list),
        zone_count=len(zone_list),
    )
