"""커스텀 예외 클래스 모듈

앱에서 발생하는 모든 예외의 계층 구조를 정의한다.
대부분은 UI 레이어에서 흡수되어 기본 표시(N/A, 선택 없음 등)로 대체된다.
"""

from __future__ import annotations


class BessMapError(Exception):
    """앱 전체 기본 예외

    모든 커스텀 예외의 부모 클래스.
    """

    def __init__(self, message: str = "알 수 없는 오류가 발생했습니다.") -> None:
        self.message = message
        super().__init__(self.message)


class DataLoadError(BessMapError):
    """데이터 로드 관련 에러

    자산/존 JSON 파일 파싱 실패, 업로드 파일 읽기 실패 등.
    """

    def __init__(
        self,
        message: str = "데이터 로드 중 오류가 발생했습니다.",
    ) -> None:
        super().__init__(message)


class DuplicateRecordError(DataLoadError):
    """레지스트리에 같은 id가 두 번 들어온 경우."""

    def __init__(self, record_id: str, kind: str = "record") -> None:
        self.record_id = record_id
        self.kind = kind
        super().__init__(f"중복된 {kind} id: {record_id!r}")


class EmptyZoneRegistryError(BessMapError):
    """존이 하나도 없는 상태에서 평균 가격을 계산하려 한 경우."""

    def __init__(
        self,
        message: str = "가격 존이 없어 평균 가격을 계산할 수 없습니다.",
    ) -> None:
        super().__init__(message)
