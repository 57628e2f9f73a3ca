"""Detection Protocol

교체 가능한 얼굴 탐지 서비스 호출을 위한 인터페이스 정의.
응답은 검증 전 raw payload (스키마는 src.services.validation에서 방어적으로 확인).
"""

from typing import Any, Protocol


class DetectionServiceError(Exception):
    """탐지 서비스 호출 실패 (네트워크, HTTP 에러, 타임아웃, 응답 파싱 실패)"""


class Detector(Protocol):
    """얼굴 탐지 서비스 인터페이스

    구현체:
    - BackendDetection: 백엔드 /clarifaiAPI 프록시
    """

    async def detect(self, url: str) -> Any:
        """이미지 URL의 얼굴 탐지

        Args:
            url: 분석할 이미지 URL

        Returns:
            raw payload (JSON 디코딩 결과)

        Raises:
            DetectionServiceError: 호출 실패 시
        """
        ...
