"""이미지 제출 오케스트레이션

UI 초기화 → busy → Detection → 검증 → 캐시 → 이미지 표시 → entries 증가 순서로 실행.
각 제출은 generation을 받고, await 이후 최신 제출이 아니면 상태를 건드리지 않고 종료.
"""

import asyncio
import logging
from collections.abc import Coroutine
from typing import Any, Literal

from src.config import get_settings
from src.constants import StatusMessage
from src.schemas.face import ImageLoad
from src.services.detection import DetectionServiceError, Detector, get_detection
from src.services.entries import EntryCounter, EntryCountError, get_entry_counter
from src.services.image_loader import ImageLoader, ImageLoadError, get_image_loader
from src.services.reconciler import LoadCompletionReconciler
from src.services.result_cache import CachedResult
from src.services.session import FaceSession, get_session
from src.services.validation import validate_face_detection

logger = logging.getLogger(__name__)

SubmissionOutcome = Literal["detected", "no_faces", "failed", "stale"]


class SubmissionOrchestrator:
    def __init__(
        self,
        session: FaceSession,
        detector: Detector,
        entry_counter: EntryCounter,
        reconciler: LoadCompletionReconciler,
        image_loader: ImageLoader | None = None,
        detection_timeout: float | None = None,
    ) -> None:
        self._session = session
        self._detector = detector
        self._entry_counter = entry_counter
        self._reconciler = reconciler
        self._image_loader = image_loader
        self._detection_timeout = detection_timeout
        self._tasks: set[asyncio.Task[None]] = set()

    @property
    def session(self) -> FaceSession:
        return self._session

    @property
    def reconciler(self) -> LoadCompletionReconciler:
        return self._reconciler

    async def submit(self, url: str) -> SubmissionOutcome:
        """이미지 URL 제출

        Detection 실패는 상태 메시지로만 반영하고 예외를 밖으로 내보내지 않는다.
        """
        session = self._session
        generation = session.next_generation()

        if session.has_stale_ui():
            session.clear_ui_state()
        session.update_state(is_busy=True, status_message=StatusMessage.ANALYZING)

        try:
            payload = await self._detect(url)
        except DetectionServiceError as e:
            if not session.is_current(generation):
                logger.warning(f"오래된 Detection 실패 무시: {url} - {e}")
                return "stale"
            logger.error(f"Detection 실패: {url} - {e}")
            session.update_state(status_message=StatusMessage.ERROR, is_busy=False)
            return "failed"

        if not session.is_current(generation):
            logger.warning(f"오래된 Detection 응답 무시: {url} (generation={generation})")
            return "stale"

        result = validate_face_detection(payload)
        if result is None:
            logger.info(f"얼굴 없음: {url}")
            session.update_state(status_message=StatusMessage.NO_FACES, is_busy=False)
            return "no_faces"

        # 캐시와 image_url은 await 없이 함께 갱신 (이미지 로드는 이 이후에만 시작)
        session.cache.set(CachedResult(generation=generation, image_url=url, result=result))
        session.update_state(
            status_message=StatusMessage.DETECTED.format(count=result.face_count),
            image_url=url,
            input_url="",
            is_busy=False,
        )
        logger.info(f"Detection 완료: {result.face_count}개 얼굴 ({url})")

        self._spawn(self._update_entries(generation, result.face_count))
        if self._image_loader is not None:
            self._spawn(self._load_image(self._image_loader, generation, url))

        return "detected"

    async def drain(self) -> None:
        """백그라운드 작업(entries 갱신, 이미지 로드) 완료 대기"""
        while self._tasks:
            await asyncio.gather(*self._tasks, return_exceptions=True)

    async def aclose(self) -> None:
        for task in self._tasks:
            task.cancel()
        await asyncio.gather(*self._tasks, return_exceptions=True)
        self._tasks.clear()

    async def _detect(self, url: str) -> Any:
        try:
            async with asyncio.timeout(self._detection_timeout):
                return await self._detector.detect(url)
        except TimeoutError as e:
            raise DetectionServiceError(f"Detection 타임아웃: {url}") from e

    async def _update_entries(self, generation: int, face_count: int) -> None:
        user_id = self._session.user.id
        if not user_id:
            logger.debug("로그인 사용자 없음: entries 갱신 생략")
            return

        try:
            entries = await self._entry_counter.increment_entries(user_id, face_count)
        except EntryCountError as e:
            logger.warning(f"entries 갱신 실패 (표시값 유지): {e}")
            return

        if self._session.user.id != user_id:
            logger.warning(f"entries 응답 도착 전 사용자 변경: {user_id}")
            return
        # 응답 순서가 뒤바뀌면 더 최신 제출의 값을 유지
        if not self._session.set_entries(entries, generation):
            logger.warning(f"오래된 entries 응답 무시: {entries} (generation={generation})")

    async def _load_image(self, loader: ImageLoader, generation: int, url: str) -> None:
        try:
            size = await loader.load(url)
        except ImageLoadError as e:
            # 로드 실패 시 박스는 그대로 비어 있음
            logger.warning(f"이미지 로드 실패: {url} - {e}")
            return

        self._reconciler.on_image_load(ImageLoad(image_url=url, size=size, generation=generation))

    def _spawn(self, coro: Coroutine[Any, Any, None]) -> None:
        task = asyncio.create_task(coro)
        self._tasks.add(task)
        task.add_done_callback(self._on_task_done)

    def _on_task_done(self, task: asyncio.Task[None]) -> None:
        self._tasks.discard(task)
        if not task.cancelled() and task.exception() is not None:
            logger.error(f"백그라운드 작업 실패: {task.exception()!r}")


class _OrchestratorHolder:
    instance: SubmissionOrchestrator | None = None


def get_orchestrator() -> SubmissionOrchestrator:
    if _OrchestratorHolder.instance is None:
        settings = get_settings()
        session = get_session()
        _OrchestratorHolder.instance = SubmissionOrchestrator(
            session=session,
            detector=get_detection(),
            entry_counter=get_entry_counter(),
            reconciler=LoadCompletionReconciler(session, strict=settings.strict_geometry),
            image_loader=get_image_loader(),
            detection_timeout=settings.submission_timeout,
        )
    return _OrchestratorHolder.instance


def set_orchestrator(orchestrator: SubmissionOrchestrator | None) -> None:
    _OrchestratorHolder.instance = orchestrator
