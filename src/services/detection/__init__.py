"""Detection 모듈

사용법:
    from src.services.detection import get_detection

    detector = get_detection()
    payload = await detector.detect(image_url)

백엔드 선택 (.env DETECTION_PROVIDER):
    - "backend": 백엔드 /clarifaiAPI 프록시 (기본값)
"""

from src.config import get_settings
from src.services.detection.backend import BackendDetection
from src.services.detection.base import DetectionServiceError, Detector

__all__ = ["Detector", "DetectionServiceError", "get_detection", "set_detection"]

_detector: Detector | None = None


def get_detection() -> Detector:
    """설정에 따라 detection 백엔드 반환"""
    global _detector
    if _detector is None:
        settings = get_settings()
        if settings.detection_provider == "backend":
            _detector = BackendDetection(
                backend_url=settings.backend_url,
                timeout=settings.detection_timeout,
                max_retries=settings.detection_max_retries,
            )
        else:
            raise ValueError(f"Unknown detection provider: {settings.detection_provider!r}")
    return _detector


def set_detection(detector: Detector | None) -> None:
    """detection 백엔드 설정 (테스트용)"""
    global _detector
    _detector = detector
