"""ImageLoader Protocol

브라우저 <img> 요소의 서버측 대역. 이미지를 로드하고 렌더링 크기를 알려준다.
"""

from typing import Protocol

from src.schemas.face import RenderedSize


class ImageLoadError(Exception):
    pass


class ImageLoader(Protocol):
    """이미지 로드 인터페이스

    구현체:
    - HttpImageLoader: httpx로 다운로드 후 Pillow로 크기 확인
    """

    async def load(self, url: str) -> RenderedSize:
        """이미지 로드 후 렌더링 크기 반환

        Raises:
            ImageLoadError: 다운로드 실패 또는 이미지가 아닌 경우
        """
        ...
