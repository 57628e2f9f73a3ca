from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict

from src.constants import Display, ImageLimits


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    # Backend (detection + entries API)
    backend_url: str = "http://localhost:3000"
    backend_health_check: bool = True

    # CORS
    cors_origins: list[str] = ["http://localhost:5173"]

    # Detection
    detection_provider: str = "backend"  # "backend"
    detection_timeout: float = 30.0
    detection_max_retries: int = 1
    submission_timeout: float = 90.0  # 재시도 포함 전체 탐지 대기 상한

    # Entries
    entries_provider: str = "backend"  # "backend"
    entries_timeout: float = 10.0

    # Image loading
    image_loader_provider: str = "http"  # "http" | "client"
    image_load_timeout: float = 30.0
    display_width: int = Display.WIDTH
    image_max_bytes: int = ImageLimits.MAX_BYTES
    image_allow_private_hosts: bool = False  # True: localhost/사설 IP 이미지 허용 (로컬 개발용)

    # Geometry
    strict_geometry: bool = False  # True: InvalidDimensionsError 전파 (개발용)


@lru_cache
def get_settings() -> Settings:
    return Settings()
