"""이미지 로드 완료 처리

이미지가 실제로 로드되어 렌더링 크기를 알게 된 뒤에만 FaceBox를 계산한다.
로드 신호가 현재 캐시/표시 이미지와 다르면(도중에 교체됨) 무시.
"""

import logging

from src.schemas.face import FaceBox, ImageLoad
from src.services.geometry import InvalidDimensionsError, calculate_face_boxes
from src.services.result_cache import CachedResult
from src.services.session import FaceSession

logger = logging.getLogger(__name__)


class LoadCompletionReconciler:
    def __init__(self, session: FaceSession, strict: bool = False) -> None:
        self._session = session
        self._strict = strict

    def on_image_load(self, load: ImageLoad) -> list[FaceBox] | None:
        """로드 완료 신호 처리

        Returns:
            계산된 FaceBox 리스트. 캐시 없음/오래된 신호/크기 없음이면 None

        Raises:
            InvalidDimensionsError: strict 모드에서 크기가 유효하지 않은 경우
        """
        cached = self._session.cache.get()
        if cached is None:
            return None

        if not self._is_current(load, cached):
            logger.warning(
                f"오래된 이미지 로드 무시: {load.image_url} (generation={load.generation})"
            )
            return None

        if load.size is None:
            return None

        try:
            boxes = calculate_face_boxes(cached.result.regions, load.size.width, load.size.height)
        except InvalidDimensionsError as e:
            if self._strict:
                raise
            logger.warning(f"FaceBox 계산 건너뜀: {e}")
            return None

        # 빈 결과면 기존 박스 유지
        if boxes:
            self._session.publish_boxes(boxes)
            logger.info(f"FaceBox {len(boxes)}개 계산 완료: {load.image_url}")
        return boxes

    def _is_current(self, load: ImageLoad, cached: CachedResult) -> bool:
        if load.image_url != cached.image_url or load.image_url != self._session.state.image_url:
            return False
        return load.generation is None or load.generation == cached.generation
