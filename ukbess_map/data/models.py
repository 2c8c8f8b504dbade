"""Pydantic 데이터 모델 모듈

자산/존 레코드는 모두 frozen 모델이다. 파일에서 읽은 외부 데이터는 이 모듈의
모델로 검증한 뒤 레지스트리에 들어간다.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator


class AssetStatus(str, Enum):
    """배터리 자산 상태 (닫힌 열거형)

    값을 추가하면 ui.components의 색상/라벨 테이블도 같이 확장해야 한다.
    """

    OPERATIONAL = "operational"
    PLANNED = "planned"
    CONSTRUCTION = "construction"


class BatteryAsset(BaseModel):
    """단일 배터리 저장 자산 레코드

    원본 데이터의 camelCase 키(`zonePrice`)와 snake_case 키를 모두 받는다.
    """

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        # CSV/Excel에서 id가 숫자로 읽히는 경우가 있어 문자열로 강제한다.
        coerce_numbers_to_str=True,
    )

    id: str = Field(..., min_length=1, description="자산 고유 id")
    name: str = Field(..., description="자산명")
    region: str = Field(default="", description="지역명")
    voltage: int = Field(..., gt=0, description="연계 전압 (kV)")
    capacity: float = Field(..., ge=0, allow_inf_nan=False, description="용량 (MW)")
    lat: float = Field(..., ge=-90, le=90, allow_inf_nan=False)
    lng: float = Field(..., ge=-180, le=180, allow_inf_nan=False)
    status: AssetStatus
    zone_price: float = Field(
        alias="zonePrice", ge=0, allow_inf_nan=False, description="존 가격 (통화/MWh)"
    )

    @field_validator("status", mode="before")
    @classmethod
    def _normalize_status(cls, value: object) -> object:
        # 업로드 파일에는 "Operational" 처럼 대소문자가 섞여 들어온다.
        if isinstance(value, str):
            return value.strip().lower()
        return value


class GeoPoint(BaseModel):
    model_config = ConfigDict(frozen=True)

    lat: float = Field(..., ge=-90, le=90, allow_inf_nan=False)
    lng: float = Field(..., ge=-180, le=180, allow_inf_nan=False)


class Zone(BaseModel):
    """가격 존 레코드

    bounds가 비어 있으면 지도에 폴리곤을 그리지 않는다.
    """

    model_config = ConfigDict(frozen=True, coerce_numbers_to_str=True)

    id: str = Field(..., min_length=1, description="존 고유 id")
    name: str = Field(..., description="존 이름")
    color: str = Field(..., pattern=r"^#(?:[0-9a-fA-F]{3}){1,2}$", description="표시 색상 hex")
    price: float = Field(..., allow_inf_nan=False, description="존 가격 (통화/MWh)")
    bounds: tuple[GeoPoint, ...] = Field(default=())

    @property
    def is_drawable(self) -> bool:
        """폴리곤을 만들 수 있을 만큼 점이 있는지 여부"""
        return len(self.bounds) >= 3


class SelectionState(BaseModel):
    """현재 선택 상태 (값 객체)

    자산 축과 존 축은 서로 독립이다. 갱신은 core.selection의 순수 함수가
    새 인스턴스를 반환하는 방식으로만 한다.
    """

    model_config = ConfigDict(frozen=True)

    selected_asset: BatteryAsset | None = None
    selected_zone: str | None = None


class RegistrySummary(BaseModel):
    """상단 요약 메트릭

    average_zone_price가 None이면 존이 없다는 뜻이다 (화면에는 N/A).
    """

    model_config = ConfigDict(frozen=True)

    asset_count: int = 0
    total_capacity: float = 0.0
    average_zone_price: float | None = None
    zone_count: int = 0
