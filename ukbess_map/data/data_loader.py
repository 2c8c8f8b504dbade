"""데이터 로더 모듈 — 자산/존 JSON 로드 및 업로드 파일 파싱.

기본 레지스트리는 프로젝트의 `data/assets.json`, `data/zones.json`에서 읽는다.
사용자가 사이드바에서 CSV/Excel/JSON 자산 파일을 올리면 컬럼명을 유연하게
매핑해서 BatteryAsset 리스트로 변환한다.
"""

from __future__ import annotations

import io
import json
import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError

from ukbess_map.core.config import settings
from ukbess_map.core.exceptions import DataLoadError
from ukbess_map.data.models import BatteryAsset, Zone
from ukbess_map.data.registry import AssetRegistry, ZoneRegistry

if TYPE_CHECKING:
    import pandas as pd

logger = logging.getLogger(__name__)

# 업로드 파일 컬럼 매핑: (BatteryAsset 필드명) → (허용 컬럼명 후보)
_COLUMN_ALIASES: dict[str, list[str]] = {
    "id": ["id", "ID", "asset_id", "Asset ID"],
    "name": ["name", "Name", "asset_name", "Asset Name", "Asset"],
    "region": ["region", "Region"],
    "voltage": ["voltage", "Voltage", "voltage_kv", "Voltage (kV)", "kV"],
    "capacity": ["capacity", "Capacity", "capacity_mw", "Capacity (MW)", "MW"],
    "lat": ["lat", "Lat", "latitude", "Latitude"],
    "lng": ["lng", "Lng", "lon", "Lon", "longitude", "Longitude"],
    "status": ["status", "Status"],
    "zonePrice": ["zonePrice", "zone_price", "Zone Price", "Zone Price (£/MWh)", "price"],
}


def _read_json_list(path: Path) -> list[Any]:
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError as exc:
        raise DataLoadError(f"데이터 파일 없음: {path}") from exc
    except (OSError, json.JSONDecodeError) as exc:
        raise DataLoadError(f"데이터 파일 읽기 실패 ({path}): {exc}") from exc

    if not isinstance(raw, list):
        raise DataLoadError(f"데이터 파일은 JSON 배열이어야 합니다: {path}")
    return raw


def _parse_assets(items: list[Any]) -> list[BatteryAsset]:
    assets: list[BatteryAsset] = []
    for item in items:
        try:
            assets.append(BatteryAsset.model_validate(item))
        except ValidationError as e:
            logger.warning("자산 레코드 파싱 실패 (skip): %s — %s", item, e)
    return assets


def load_assets(path: Path | None = None) -> list[BatteryAsset]:
    """자산 JSON 파일을 BatteryAsset 리스트로 로드.

    파일 자체를 읽을 수 없으면 DataLoadError, 개별 레코드 오류는 skip.
    """
    target = path or settings.assets_path
    assets = _parse_assets(_read_json_list(target))
    logger.info("자산 데이터 로드 완료: %d건 (%s)", len(assets), target.name)
    return assets


def load_zones(path: Path | None = None) -> list[Zone]:
    """존 JSON 파일을 Zone 리스트로 로드."""
    target = path or settings.zones_path
    zones: list[Zone] = []
    for item in _read_json_list(target):
        try:
            zones.append(Zone.model_validate(item))
        except ValidationError as e:
            logger.warning("존 레코드 파싱 실패 (skip): %s — %s", item, e)
    logger.info("존 데이터 로드 완료: %d건 (%s)", len(zones), target.name)
    return zones


def build_registries(
    assets_path: Path | None = None,
    zones_path: Path | None = None,
) -> tuple[AssetRegistry, ZoneRegistry]:
    """파일에서 두 레지스트리를 만든다. 중복 id는 DuplicateRecordError."""
    return AssetRegistry(load_assets(assets_path)), ZoneRegistry(load_zones(zones_path))


def _resolve_column(df_columns: list[str], target_key: str) -> str | None:
    """DataFrame 컬럼 중 target_key에 매핑되는 실제 컬럼명을 찾아 반환."""
    aliases = _COLUMN_ALIASES.get(target_key, [target_key])
    for alias in aliases:
        if alias in df_columns:
            return alias
    return None


def _cell_value(val: Any) -> Any:
    import pandas as pd

    if val is None:
        return None
    if not isinstance(val, (list, dict)) and pd.isna(val):
        return None
    # numpy 스칼라 → 파이썬 기본 타입
    if hasattr(val, "item"):
        return val.item()
    if isinstance(val, str):
        return val.strip()
    return val


def load_assets_from_dataframe(df: pd.DataFrame) -> list[BatteryAsset]:
    """pandas DataFrame을 BatteryAsset 리스트로 변환.

    컬럼명이 camelCase, snake_case, 사람이 읽는 헤더 등 다양해도
    _COLUMN_ALIASES로 매핑한다. 빈 셀은 누락 필드로 취급한다.
    """
    columns = [str(c) for c in df.columns.tolist()]
    column_map: dict[str, str] = {}

    for target_key in _COLUMN_ALIASES:
        resolved = _resolve_column(columns, target_key)
        if resolved:
            column_map[target_key] = resolved

    if not column_map:
        logger.error("업로드 파일에서 인식 가능한 컬럼이 없습니다: %s", columns)
        return []

    items: list[dict[str, Any]] = []
    for _, row in df.iterrows():
        item: dict[str, Any] = {}
        for target_key, src_col in column_map.items():
            val = _cell_value(row.get(src_col))
            if val is not None:
                item[target_key] = val
        items.append(item)

    assets = _parse_assets(items)
    logger.info("파일 데이터 로드 완료: %d건", len(assets))
    return assets


def load_assets_from_uploaded_file(file_content: bytes, filename: str) -> list[BatteryAsset]:
    """업로드된 파일(CSV/Excel/JSON)을 BatteryAsset 리스트로 변환.

    읽기 실패나 지원하지 않는 형식이면 빈 리스트를 반환한다.
    """
    import pandas as pd

    lower_name = filename.lower()
    try:
        if lower_name.endswith(".csv"):
            text = file_content.decode("utf-8-sig")
            df = pd.read_csv(io.StringIO(text))
        elif lower_name.endswith((".xlsx", ".xls")):
            df = pd.read_excel(io.BytesIO(file_content))
        elif lower_name.endswith(".json"):
            raw = json.loads(file_content.decode("utf-8"))
            if isinstance(raw, list):
                return _parse_assets(raw)
            return _parse_assets([raw])
        else:
            logger.error("지원하지 않는 파일 형식: %s", filename)
            return []
    except Exception as e:
        logger.error("파일 읽기 실패 (%s): %s", filename, e)
        return []

    # DataFrame 컬럼의 공백 제거
    df.columns = [str(c).strip() for c in df.columns]
    return load_assets_from_dataframe(df)
