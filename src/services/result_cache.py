"""최근 탐지 결과 캐시 (단일 슬롯)

렌더링 상태와 분리된 저장소. 쓰기는 Orchestrator만, 박스 계산용 읽기는 Reconciler만.
set()은 박스 재계산을 일으키지 않는다 (재계산은 이미지 로드 시에만).
"""

from dataclasses import dataclass

from src.schemas.face import ValidationResult


@dataclass(frozen=True)
class CachedResult:
    generation: int  # 결과를 만든 제출 세대
    image_url: str
    result: ValidationResult


class ResultCache:
    def __init__(self) -> None:
        self._slot: CachedResult | None = None

    def set(self, entry: CachedResult) -> None:
        self._slot = entry

    def get(self) -> CachedResult | None:
        return self._slot

    def clear(self) -> None:
        self._slot = None
