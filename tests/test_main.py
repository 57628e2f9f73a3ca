import httpx

from src.main import check_backend


class TestCheckBackend:
    async def test_reachable(self) -> None:
        requests: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return httpx.Response(200, text="success")

        assert await check_backend("http://backend/", transport=httpx.MockTransport(handler))
        assert str(requests[0].url) == "http://backend/"

    async def test_http_error_is_not_raised(self) -> None:
        transport = httpx.MockTransport(lambda request: httpx.Response(503))

        assert await check_backend("http://backend", transport=transport) is False

    async def test_connection_error_is_not_raised(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused")

        assert await check_backend("http://backend", transport=httpx.MockTransport(handler)) is False
