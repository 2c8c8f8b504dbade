"""재사용 가능한 UI 컴포넌트 — 상태 색상, 전압별 마커 크기, 표시 포맷."""

from __future__ import annotations

import logging
from enum import IntEnum

from ukbess_map.core.config import settings
from ukbess_map.data.models import AssetStatus

logger = logging.getLogger(__name__)

FALLBACK_STATUS_COLOR = "#6b7280"

# AssetStatus 멤버를 추가하면 이 테이블도 반드시 같이 추가한다 (테스트로 강제).
STATUS_COLORS: dict[AssetStatus, str] = {
    AssetStatus.OPERATIONAL: "#22c55e",
    AssetStatus.CONSTRUCTION: "#eab308",
    AssetStatus.PLANNED: "#3b82f6",
}

STATUS_LABELS: dict[AssetStatus, str] = {
    AssetStatus.OPERATIONAL: "Operational",
    AssetStatus.CONSTRUCTION: "Under Construction",
    AssetStatus.PLANNED: "Planned",
}


class MarkerSize(IntEnum):
    """지도 마커 지름(px)"""

    SMALL = 16
    MEDIUM = 20
    LARGE = 24


def _coerce_status(status: object) -> AssetStatus | None:
    if isinstance(status, AssetStatus):
        return status
    try:
        return AssetStatus(str(status).strip().lower())
    except ValueError:
        logger.debug("알 수 없는 자산 상태: %r", status)
        return None


def status_color(status: object) -> str:
    """자산 상태에 따른 색상 hex 코드 반환.

    - operational  → 초록
    - construction → 노랑
    - planned      → 파랑
    - 그 외        → 회색 (예외를 던지지 않는다)
    """
    coerced = _coerce_status(status)
    if coerced is None:
        return FALLBACK_STATUS_COLOR
    return STATUS_COLORS.get(coerced, FALLBACK_STATUS_COLOR)


def status_label(status: object) -> str:
    coerced = _coerce_status(status)
    if coerced is None:
        return "Unknown"
    return STATUS_LABELS.get(coerced, "Unknown")


def voltage_marker_size(voltage: int) -> MarkerSize:
    """연계 전압(kV)에 따른 마커 크기.

    각 구간의 하한은 포함: 400kV → LARGE, 275kV → MEDIUM, 274kV → SMALL.
    """
    if voltage >= settings.voltage_tier_large_kv:
        return MarkerSize.LARGE
    if voltage >= settings.voltage_tier_medium_kv:
        return MarkerSize.MEDIUM
    return MarkerSize.SMALL


def format_number(value: float) -> str:
    """정수면 소수점 없이, 아니면 필요한 만큼만 표시. 예: 50 → '50', 85.5 → '85.5'"""
    if float(value).is_integer():
        return f"{int(value):,}"
    return f"{value:,.2f}".rstrip("0").rstrip(".")


def format_capacity(capacity_mw: float) -> str:
    return f"{format_number(capacity_mw)} MW"


def format_voltage(voltage_kv: int) -> str:
    return f"{voltage_kv}kV"


def format_price(price: float | None, per_mwh: bool = True) -> str:
    """가격 표시. None이면 'N/A'."""
    if price is None:
        return "N/A"
    text = f"{settings.currency_symbol}{format_number(price)}"
    return f"{text}/MWh" if per_mwh else text
