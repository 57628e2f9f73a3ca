"""백엔드 프록시 Detection 구현체 (Clarifai)"""

import asyncio
import logging
from typing import Any

import httpx

from src.constants import BackendPath
from src.services.detection.base import DetectionServiceError

logger = logging.getLogger(__name__)


class BackendDetection:
    """백엔드 /clarifaiAPI 엔드포인트를 통한 얼굴 탐지

    네트워크 오류/타임아웃만 재시도. HTTP 에러 응답은 재시도 없이 즉시 실패.
    """

    def __init__(
        self,
        backend_url: str,
        timeout: float = 30.0,
        max_retries: int = 1,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        if max_retries < 0:
            raise ValueError(f"max_retries는 0 이상이어야 합니다: {max_retries}")
        self._backend_url = backend_url.rstrip("/")
        self._timeout = timeout
        self._max_retries = max_retries
        self._transport = transport

    async def detect(self, url: str) -> Any:
        """얼굴 탐지 (재시도 포함)

        Raises:
            DetectionServiceError: 반복 실패, HTTP 에러, JSON 파싱 실패 시
        """
        response = await self._post_with_retry(url)

        if response.is_error:
            raise DetectionServiceError(
                f"Backend error: {response.status_code} - {response.text}"
            )

        try:
            return response.json()
        except ValueError as e:
            raise DetectionServiceError(f"Detection 응답 JSON 파싱 실패: {e}") from e

    async def _post_with_retry(self, url: str) -> httpx.Response:
        last_error: httpx.TransportError | None = None
        for attempt in range(1 + self._max_retries):
            try:
                async with httpx.AsyncClient(
                    timeout=self._timeout, transport=self._transport
                ) as client:
                    return await client.post(
                        f"{self._backend_url}{BackendPath.DETECT}", json={"url": url}
                    )
            except httpx.TransportError as e:
                last_error = e
                logger.warning(f"Detection API 호출 실패 (시도 {attempt + 1}): {e!r}")
                if attempt < self._max_retries:
                    await asyncio.sleep(2**attempt)

        if isinstance(last_error, httpx.TimeoutException):
            raise DetectionServiceError(f"Detection API 타임아웃: {last_error!r}") from last_error
        raise DetectionServiceError(f"Detection API 호출 실패: {last_error!r}") from last_error
