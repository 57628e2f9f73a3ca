"""Entries Protocol

사용자 탐지 횟수(entries) 증가를 위한 인터페이스 정의.
"""

from typing import Protocol


class EntryCountError(Exception):
    pass


class EntryCounter(Protocol):
    """탐지 횟수 갱신 인터페이스

    구현체:
    - BackendEntryCounter: 백엔드 PUT /image
    """

    async def increment_entries(self, user_id: str, face_count: int) -> int:
        """탐지한 얼굴 수만큼 entries 증가

        Returns:
            갱신된 entries 값

        Raises:
            EntryCountError: 호출 실패 또는 응답이 정수가 아닌 경우
        """
        ...
