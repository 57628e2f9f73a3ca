"""BackendEntryCounter 구현체 테스트"""

import json
from collections.abc import Callable

import httpx
import pytest

from src.services.entries.backend import BackendEntryCounter
from src.services.entries.base import EntryCountError


def _counter(handler: Callable[[httpx.Request], httpx.Response]) -> BackendEntryCounter:
    return BackendEntryCounter(
        backend_url="http://backend", timeout=5, transport=httpx.MockTransport(handler)
    )


class TestBackendEntryCounter:
    async def test_puts_user_and_face_count(self) -> None:
        requests: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return httpx.Response(200, json=12)

        assert await _counter(handler).increment_entries("42", 3) == 12
        assert requests[0].method == "PUT"
        assert str(requests[0].url) == "http://backend/image"
        assert json.loads(requests[0].content) == {"id": "42", "faceCount": 3}

    async def test_http_error(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(404, json="user not found")

        with pytest.raises(EntryCountError, match="404"):
            await _counter(handler).increment_entries("42", 1)

    async def test_connection_error(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused")

        with pytest.raises(EntryCountError, match="호출 실패"):
            await _counter(handler).increment_entries("42", 1)

    async def test_timeout(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("slow")

        with pytest.raises(EntryCountError, match="타임아웃"):
            await _counter(handler).increment_entries("42", 1)

    @pytest.mark.parametrize("body", ["abc", True, 1.5, {"entries": 3}])
    async def test_non_integer_response(self, body: object) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json=body)

        with pytest.raises(EntryCountError, match="정수가 아님"):
            await _counter(handler).increment_entries("42", 1)

    async def test_invalid_json(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, content=b"oops")

        with pytest.raises(EntryCountError, match="JSON"):
            await _counter(handler).increment_entries("42", 1)
