"""Entries 모듈

사용법:
    from src.services.entries import get_entry_counter

    counter = get_entry_counter()
    entries = await counter.increment_entries(user_id, face_count)

백엔드 선택 (.env ENTRIES_PROVIDER):
    - "backend": 백엔드 PUT /image (기본값)
"""

from src.config import get_settings
from src.services.entries.backend import BackendEntryCounter
from src.services.entries.base import EntryCounter, EntryCountError

__all__ = ["EntryCounter", "EntryCountError", "get_entry_counter", "set_entry_counter"]

_counter: EntryCounter | None = None


def get_entry_counter() -> EntryCounter:
    """설정에 따라 entries 백엔드 반환"""
    global _counter
    if _counter is None:
        settings = get_settings()
        if settings.entries_provider == "backend":
            _counter = BackendEntryCounter(
                backend_url=settings.backend_url,
                timeout=settings.entries_timeout,
            )
        else:
            raise ValueError(f"Unknown entries provider: {settings.entries_provider!r}")
    return _counter


def set_entry_counter(counter: EntryCounter | None) -> None:
    """entries 백엔드 설정 (테스트용)"""
    global _counter
    _counter = counter
