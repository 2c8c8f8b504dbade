"""선택 상태 갱신 로직.

SelectionState는 불변 값 객체이고, 갱신은 새 상태를 반환하는 순수 함수로만 한다.
Streamlit 세션 바인딩은 ui.state가 담당한다. 여기서는 렌더링 환경 없이
테스트할 수 있도록 상태 전이만 다룬다.

자산 축과 존 축은 서로 독립이다. 한쪽을 선택해도 다른 쪽은 그대로 유지된다.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ukbess_map.data.models import BatteryAsset, SelectionState

if TYPE_CHECKING:
    from ukbess_map.data.models import Zone
    from ukbess_map.data.registry import AssetRegistry, ZoneRegistry

logger = logging.getLogger(__name__)


def select_asset(state: SelectionState, asset: BatteryAsset | None) -> SelectionState:
    """선택 자산을 통째로 교체한다 (병합 아님). selected_zone은 유지."""
    return state.model_copy(update={"selected_asset": asset})


def select_zone(state: SelectionState, zone_id: str | None) -> SelectionState:
    """선택 존을 id로 지정한다. 같은 id를 다시 선택해도 결과는 동일."""
    if state.selected_zone == zone_id:
        return state
    return state.model_copy(update={"selected_zone": zone_id})


def current_selection(state: SelectionState) -> tuple[BatteryAsset | None, str | None]:
    return state.selected_asset, state.selected_zone


def is_zone_selected(state: SelectionState, zone: Zone) -> bool:
    return state.selected_zone is not None and state.selected_zone == zone.id


def resolve_selection(
    state: SelectionState,
    assets: AssetRegistry,
    zones: ZoneRegistry,
) -> SelectionState:
    """레지스트리에 더 이상 없는 선택(dangling)을 '선택 없음'으로 되돌린다.

    자산은 id로 다시 찾아서 레지스트리의 현재 레코드로 맞춘다.
    """
    asset = state.selected_asset
    if asset is not None:
        current = assets.get(asset.id)
        if current is None:
            logger.debug("선택된 자산 %r이 레지스트리에 없어 선택 해제", asset.id)
        asset = current

    zone_id = state.selected_zone
    if zone_id is not None and zone_id not in zones:
        logger.debug("선택된 존 %r이 레지스트리에 없어 선택 해제", zone_id)
        zone_id = None

    if asset == state.selected_asset and zone_id == state.selected_zone:
        return state
    return SelectionState(selected_asset=asset, selected_zone=zone_id)


class SelectionController:
    """레지스트리 두 개와 현재 SelectionState를 묶은 컨트롤러.

    지도 어댑터/리스트 뷰에 넘기는 콜백(on_asset_clicked)을 제공한다.
    """

    def __init__(
        self,
        assets: AssetRegistry,
        zones: ZoneRegistry,
        state: SelectionState | None = None,
    ) -> None:
        self.assets = assets
        self.zones = zones
        self._state = resolve_selection(state or SelectionState(), assets, zones)

    @property
    def state(self) -> SelectionState:
        return self._state

    def select_asset(self, asset: BatteryAsset | None) -> SelectionState:
        self._state = select_asset(self._state, asset)
        return self._state

    def select_zone(self, zone_id: str | None) -> SelectionState:
        self._state = select_zone(self._state, zone_id)
        return self._state

    def current_selection(self) -> tuple[BatteryAsset | None, str | None]:
        return current_selection(self._state)

    def on_asset_clicked(self, asset_id: str | None) -> None:
        """마커/행 클릭 콜백. 모르는 id면 자산 선택을 해제한다."""
        asset = self.assets.get(asset_id)
        if asset is None and asset_id is not None:
            logger.debug("알 수 없는 자산 id 클릭: %r", asset_id)
        self.select_asset(asset)

    def selected_zone(self) -> Zone | None:
        return self.zones.get(self._state.selected_zone)

    def clear(self) -> SelectionState:
        self._state = SelectionState()
        return self._state
