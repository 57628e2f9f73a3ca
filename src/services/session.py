"""얼굴 탐지 세션 상태

SubmissionState, FaceBox 목록, 결과 캐시, 제출 세대(generation)를 한곳에 보관.
단일 이벤트 루프에서만 접근 (락 없음).
"""

from typing import Any

from src.schemas.base import BaseSchema
from src.schemas.face import FaceBox, SubmissionState, UserProfile
from src.services.result_cache import ResultCache
from src.services.status import StatusView, project_status


class FaceSession:
    def __init__(self) -> None:
        self.state = SubmissionState()
        self.boxes: list[FaceBox] = []
        self.cache = ResultCache()
        self.user = UserProfile()
        self.generation = 0
        self.revision = 0  # 화면에 보이는 값이 바뀔 때마다 증가
        self.entries_generation = 0  # entries에 마지막으로 반영된 제출 세대

    def next_generation(self) -> int:
        self.generation += 1
        return self.generation

    def is_current(self, generation: int) -> bool:
        return generation == self.generation

    def update_state(self, **changes: Any) -> bool:
        """값이 실제로 바뀐 필드만 반영. 변경이 있으면 True"""
        changed = {k: v for k, v in changes.items() if getattr(self.state, k) != v}
        if not changed:
            return False
        self.state = self.state.model_copy(update=changed)
        self.revision += 1
        return True

    def publish_boxes(self, boxes: list[FaceBox]) -> None:
        if boxes != self.boxes:
            self.boxes = boxes
            self.revision += 1

    def set_input(self, value: str) -> None:
        self.update_state(input_url=value.strip())

    def set_entries(self, entries: int, generation: int) -> bool:
        """entries 반영. 이미 더 최신 제출의 값이 반영됐으면 무시하고 False"""
        if generation < self.entries_generation:
            return False
        self.entries_generation = generation
        if entries != self.user.entries:
            self.user = self.user.model_copy(update={"entries": entries})
            self.revision += 1
        return True

    def has_stale_ui(self) -> bool:
        return bool(self.state.status_message or self.state.image_url or self.boxes)

    def clear_ui_state(self) -> None:
        """메시지/이미지/박스/busy 초기화 (이미 기본값인 필드는 건드리지 않음)"""
        self.update_state(status_message="", image_url="", is_busy=False)
        self.publish_boxes([])

    def clear(self) -> None:
        """명시적 초기화: 진행 중인 제출도 무효화"""
        self.next_generation()
        self.cache.clear()
        self.clear_ui_state()

    def sign_in(self, user: UserProfile) -> None:
        self.user = user
        self.entries_generation = 0
        self.revision += 1

    def sign_out(self) -> None:
        self.clear()
        self.user = UserProfile()
        self.update_state(input_url="")
        self.revision += 1


class SessionResponse(BaseSchema):
    state: SubmissionState
    status: StatusView
    boxes: list[FaceBox]
    user: UserProfile
    generation: int
    revision: int


def to_response(session: FaceSession) -> SessionResponse:
    return SessionResponse(
        state=session.state,
        status=project_status(session.state),
        boxes=session.boxes,
        user=session.user,
        generation=session.generation,
        revision=session.revision,
    )


class _SessionHolder:
    instance: FaceSession | None = None


def get_session() -> FaceSession:
    if _SessionHolder.instance is None:
        _SessionHolder.instance = FaceSession()
    return _SessionHolder.instance


def set_session(session: FaceSession | None) -> None:
    _SessionHolder.instance = session
