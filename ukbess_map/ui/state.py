"""SelectionState의 Streamlit 세션 바인딩.

선택 상태는 브라우저 세션마다 st.session_state에 값 객체 그대로 저장한다.
새로고침하면 빈 상태로 초기화된다.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import streamlit as st

from ukbess_map.core.selection import SelectionController
from ukbess_map.data.models import SelectionState

if TYPE_CHECKING:
    from ukbess_map.data.models import BatteryAsset
    from ukbess_map.data.registry import AssetRegistry, ZoneRegistry

_STATE_KEY = "_selection_state"


def load_selection_state() -> SelectionState:
    state = st.session_state.get(_STATE_KEY)
    if isinstance(state, SelectionState):
        return state
    return SelectionState()


def store_selection_state(state: SelectionState) -> None:
    st.session_state[_STATE_KEY] = state


def reset_selection_state() -> None:
    st.session_state.pop(_STATE_KEY, None)


class SessionSelectionController(SelectionController):
    """변경될 때마다 st.session_state에 다시 쓰는 컨트롤러."""

    def __init__(self, assets: AssetRegistry, zones: ZoneRegistry) -> None:
        super().__init__(assets, zones, state=load_selection_state())
        store_selection_state(self.state)

    def select_asset(self, asset: BatteryAsset | None) -> SelectionState:
        state = super().select_asset(asset)
        store_selection_state(state)
        return state

    def select_zone(self, zone_id: str | None) -> SelectionState:
        state = super().select_zone(zone_id)
        store_selection_state(state)
        return state

    def clear(self) -> SelectionState:
        state = super().clear()
        store_selection_state(state)
        return state


def widget_key(base: str) -> str:
    """선택 위젯의 현재 key. 세대 번호가 붙는다."""
    return f"{base}_{st.session_state.get(f'{base}__generation', 0)}"


def reset_widget(base: str) -> None:
    """위젯 세대를 올려 프론트엔드에 남은 선택 표시까지 버린다.

    Streamlit은 같은 key의 위젯 선택을 rerun 사이에 유지하므로, 다른 뷰에서
    선택이 바뀌면 key 자체를 바꿔야 이전 하이라이트가 사라진다.
    """
    old = widget_key(base)
    stale = [k for k in st.session_state if k == old or str(k).startswith(f"{old}__")]
    for key in stale:
        st.session_state.pop(key, None)
    generation_key = f"{base}__generation"
    st.session_state[generation_key] = st.session_state.get(generation_key, 0) + 1
