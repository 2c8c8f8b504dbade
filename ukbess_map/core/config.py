"""앱 설정 관리 모듈 — 환경변수/Secrets 로드 및 전역 설정 제공.

Streamlit Community Cloud에서는 `.env` 대신 Secrets(`.streamlit/secrets.toml`)로
Mapbox 토큰 등을 주입하는 경우가 많다. 이 모듈은 다음 우선순위로 값을 로드한다.

1) OS 환경변수 (os.environ)
2) Streamlit secrets.toml (프로젝트/.streamlit 또는 사용자 홈)
"""

from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

_PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
load_dotenv(_PROJECT_ROOT / ".env")


def _load_secrets() -> dict[str, Any]:
    candidates = [
        _PROJECT_ROOT / ".streamlit" / "secrets.toml",
        Path.home() / ".streamlit" / "secrets.toml",
    ]
    for path in candidates:
        try:
            content = path.read_text(encoding="utf-8")
        except OSError:
            continue

        try:
            data = tomllib.loads(content)
        except tomllib.TOMLDecodeError:
            continue

        if isinstance(data, dict):
            return data
    return {}


_SECRETS = _load_secrets()


def _get_raw(key: str) -> str | None:
    value = os.getenv(key)
    if value is not None:
        return value

    secret = _SECRETS.get(key)
    if secret is None:
        return None
    if isinstance(secret, (str, int, float, bool)):
        return str(secret)
    return None


def _get_str(key: str, default: str) -> str:
    value = _get_raw(key)
    if value is None:
        return default
    return str(value).strip()


def _get_bool(key: str, default: bool) -> bool:
    value = _get_raw(key)
    if value is None:
        return default
    return str(value).strip().lower() == "true"


def _get_float(key: str, default: float) -> float:
    value = _get_raw(key)
    if value is None:
        return default
    try:
        return float(str(value).strip())
    except ValueError:
        return default


def _get_path(key: str, default: Path) -> Path:
    value = _get_raw(key)
    if value is None or not str(value).strip():
        return default
    path = Path(str(value).strip()).expanduser()
    if not path.is_absolute():
        path = _PROJECT_ROOT / path
    return path


@dataclass(frozen=True)
class Settings:
    """앱 전역 설정. 환경변수에서 값을 읽으며 frozen=True로 런타임 변경을 방지."""

    debug: bool = field(default_factory=lambda: _get_bool("DEBUG", False))

    # 비어 있으면 토큰이 필요 없는 carto-positron 베이스맵을 쓴다.
    mapbox_token: str = field(default_factory=lambda: _get_str("MAPBOX_TOKEN", ""))
    mapbox_style: str = field(default_factory=lambda: _get_str("MAPBOX_STYLE", "light"))

    # 영국 중심
    map_center_lat: float = field(default_factory=lambda: _get_float("MAP_CENTER_LAT", 54.5))
    map_center_lng: float = field(default_factory=lambda: _get_float("MAP_CENTER_LNG", -2.5))
    map_zoom: float = field(default_factory=lambda: _get_float("MAP_ZOOM", 5.0))
    map_height: int = 600

    assets_path: Path = field(
        default_factory=lambda: _get_path("ASSETS_PATH", _PROJECT_ROOT / "data" / "assets.json")
    )
    zones_path: Path = field(
        default_factory=lambda: _get_path("ZONES_PATH", _PROJECT_ROOT / "data" / "zones.json")
    )

    currency_symbol: str = field(default_factory=lambda: _get_str("CURRENCY_SYMBOL", "£"))

    voltage_tier_large_kv: int = 400
    voltage_tier_medium_kv: int = 275


settings = Settings()
