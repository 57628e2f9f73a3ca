"""ImageLoader 모듈

사용법:
    from src.services.image_loader import get_image_loader

    loader = get_image_loader()
    if loader is not None:
        size = await loader.load(image_url)

백엔드 선택 (.env IMAGE_LOADER_PROVIDER):
    - "http": 서버에서 이미지를 받아 크기 계산 (기본값)
    - "client": 서버 로더 없음. 브라우저가 POST /session/image-load로 로드 완료를 보고
"""

from src.config import get_settings
from src.services.image_loader.base import ImageLoader, ImageLoadError
from src.services.image_loader.http_loader import HttpImageLoader

__all__ = ["ImageLoader", "ImageLoadError", "get_image_loader", "set_image_loader"]

_loader: ImageLoader | None = None
_resolved = False


def get_image_loader() -> ImageLoader | None:
    """설정에 따라 image loader 반환 ("client"면 None)"""
    global _loader, _resolved
    if not _resolved:
        settings = get_settings()
        if settings.image_loader_provider == "http":
            _loader = HttpImageLoader(
                display_width=settings.display_width,
                timeout=settings.image_load_timeout,
                max_bytes=settings.image_max_bytes,
                allow_private_hosts=settings.image_allow_private_hosts,
            )
        elif settings.image_loader_provider == "client":
            _loader = None
        else:
            raise ValueError(f"Unknown image loader provider: {settings.image_loader_provider!r}")
        _resolved = True
    return _loader


def set_image_loader(loader: ImageLoader | None) -> None:
    """image loader 설정 (테스트용). None이면 다음 호출 때 설정에서 다시 생성"""
    global _loader, _resolved
    _loader = loader
    _resolved = loader is not None
