"""Streamlit 캐싱 유틸리티.

- 기본 레지스트리: 프로세스당 한 번 생성 (st.cache_resource, 읽기 전용 공유)
- 업로드 파일 파싱 결과: 파일 내용 기준 캐시 (st.cache_data)
"""

from __future__ import annotations

from pathlib import Path

import streamlit as st

from ukbess_map.core.config import settings
from ukbess_map.data.data_loader import build_registries, load_assets_from_uploaded_file
from ukbess_map.data.models import BatteryAsset
from ukbess_map.data.registry import AssetRegistry, ZoneRegistry


@st.cache_resource(show_spinner=False)
def _cached_registries(assets_path: str, zones_path: str) -> tuple[AssetRegistry, ZoneRegistry]:
    return build_registries(Path(assets_path), Path(zones_path))


def get_default_registries() -> tuple[AssetRegistry, ZoneRegistry]:
    """설정된 경로의 자산/존 레지스트리를 반환 (예외는 호출 쪽에서 처리)."""
    return _cached_registries(str(settings.assets_path), str(settings.zones_path))


@st.cache_data(show_spinner=False)
def _cached_upload(file_content: bytes, filename: str) -> list[dict]:
    return [a.model_dump() for a in load_assets_from_uploaded_file(file_content, filename)]


def parse_uploaded_assets(file_content: bytes, filename: str) -> list[BatteryAsset]:
    """업로드 파일을 BatteryAsset 리스트로 (같은 파일은 다시 파싱하지 않음)."""
    raw = _cached_upload(file_content, filename)
    return [BatteryAsset.model_validate(d) for d in raw]
