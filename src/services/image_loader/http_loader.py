"""httpx + Pillow 기반 ImageLoader 구현체"""

import io
import ipaddress

import httpx
from PIL import Image, UnidentifiedImageError

from src.constants import Display, ImageLimits
from src.schemas.face import RenderedSize
from src.services.image_loader.base import ImageLoadError


class HttpImageLoader:
    """이미지를 내려받아 표시 너비 기준 렌더링 크기 계산

    <img width="500px" height="auto">와 동일: 너비 고정, 높이는 원본 비율 유지.
    사용자가 입력한 URL을 서버가 직접 요청하므로:
    - 본문은 max_bytes까지만 읽음 (초과 시 중단)
    - 리다이렉트 포함 모든 요청에서 loopback/사설 IP 리터럴 호스트 차단
    """

    def __init__(
        self,
        display_width: int = Display.WIDTH,
        timeout: float = 30.0,
        max_bytes: int = ImageLimits.MAX_BYTES,
        allow_private_hosts: bool = False,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        if display_width <= 0:
            raise ValueError(f"display_width는 양수여야 합니다: {display_width}")
        if max_bytes <= 0:
            raise ValueError(f"max_bytes는 양수여야 합니다: {max_bytes}")
        self._display_width = display_width
        self._timeout = timeout
        self._max_bytes = max_bytes
        self._allow_private_hosts = allow_private_hosts
        self._transport = transport

    async def load(self, url: str) -> RenderedSize:
        content = await self._download(url)
        natural_width, natural_height = self._read_size(content)
        return self.rendered_size(natural_width, natural_height)

    def rendered_size(self, natural_width: int, natural_height: int) -> RenderedSize:
        if natural_width <= 0 or natural_height <= 0:
            raise ImageLoadError(f"이미지 크기가 0: {natural_width}x{natural_height}")
        height = round(natural_height * self._display_width / natural_width)
        return RenderedSize(width=self._display_width, height=height)

    async def _download(self, url: str) -> bytes:
        try:
            async with httpx.AsyncClient(
                timeout=self._timeout,
                follow_redirects=True,
                transport=self._transport,
                event_hooks={"request": [self._check_host]},
            ) as client:
                async with client.stream("GET", url) as resp:
                    resp.raise_for_status()
                    return await self._read_capped(resp)
        except httpx.TimeoutException as e:
            raise ImageLoadError(f"이미지 로드 타임아웃: {url}") from e
        except httpx.HTTPStatusError as e:
            raise ImageLoadError(f"이미지 로드 HTTP 에러: {e.response.status_code}") from e
        except httpx.HTTPError as e:
            raise ImageLoadError(f"이미지 로드 실패: {e!r}") from e

    async def _check_host(self, request: httpx.Request) -> None:
        if self._allow_private_hosts:
            return

        host = request.url.host
        if host == "localhost" or host.endswith(".localhost"):
            raise ImageLoadError(f"내부 주소 이미지는 불러올 수 없음: {host}")

        try:
            address = ipaddress.ip_address(host)
        except ValueError:
            return
        if not address.is_global:
            raise ImageLoadError(f"내부 주소 이미지는 불러올 수 없음: {host}")

    async def _read_capped(self, resp: httpx.Response) -> bytes:
        declared = resp.headers.get("Content-Length", "")
        if declared.isdigit() and int(declared) > self._max_bytes:
            raise ImageLoadError(f"이미지가 너무 큼: {declared} bytes (최대 {self._max_bytes})")

        buffer = bytearray()
        async for chunk in resp.aiter_bytes():
            buffer.extend(chunk)
            if len(buffer) > self._max_bytes:
                raise ImageLoadError(f"이미지가 너무 큼: {self._max_bytes} bytes 초과")
        return bytes(buffer)

    def _read_size(self, content: bytes) -> tuple[int, int]:
        try:
            with Image.open(io.BytesIO(content)) as image:
                return image.size
        except Image.DecompressionBombError as e:
            raise ImageLoadError(f"이미지 픽셀 수가 너무 많음: {e}") from e
        except (UnidentifiedImageError, OSError) as e:
            raise ImageLoadError(f"이미지를 읽을 수 없음: {e}") from e
