"""백엔드 Entries 구현체"""

import httpx

from src.constants import BackendPath
from src.services.entries.base import EntryCountError


class BackendEntryCounter:
    """백엔드 PUT /image 엔드포인트로 entries 증가"""

    def __init__(
        self,
        backend_url: str,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._backend_url = backend_url.rstrip("/")
        self._timeout = timeout
        self._transport = transport

    async def increment_entries(self, user_id: str, face_count: int) -> int:
        try:
            async with httpx.AsyncClient(
                timeout=self._timeout, transport=self._transport
            ) as client:
                resp = await client.put(
                    f"{self._backend_url}{BackendPath.ENTRIES}",
                    json={"id": user_id, "faceCount": face_count},
                )
                resp.raise_for_status()
        except httpx.TimeoutException as e:
            raise EntryCountError(f"Entries API 타임아웃: {e!r}") from e
        except httpx.HTTPStatusError as e:
            raise EntryCountError(f"Entries API HTTP 에러: {e.response.status_code}") from e
        except httpx.HTTPError as e:
            raise EntryCountError(f"Entries API 호출 실패: {e!r}") from e

        try:
            count = resp.json()
        except ValueError as e:
            raise EntryCountError(f"Entries 응답 JSON 파싱 실패: {e}") from e

        if isinstance(count, bool) or not isinstance(count, int):
            raise EntryCountError(f"Entries 응답이 정수가 아님: {count!r}")
        return count
