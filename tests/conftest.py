import asyncio
from collections.abc import Generator
from io import BytesIO
from typing import Any
from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient
from PIL import Image

from src.schemas.face import RenderedSize
from src.services.entries import EntryCountError
from src.services.image_loader import ImageLoadError
from src.services.orchestrator import SubmissionOrchestrator, set_orchestrator
from src.services.reconciler import LoadCompletionReconciler
from src.services.session import FaceSession, set_session

IMAGE_URL = "http://x/img.jpg"


def make_test_image(width: int = 800, height: int = 1200, fmt: str = "JPEG") -> BytesIO:
    """테스트용 실제 이미지 바이트 생성"""
    img = Image.new("RGB", (width, height), color="red")
    buf = BytesIO()
    img.save(buf, format=fmt)
    buf.seek(0)
    return buf


def clarifai_payload(*boxes: tuple[float, float, float, float]) -> dict[str, Any]:
    """Clarifai 형식 응답 (left_col, top_row, right_col, bottom_row)"""
    regions = [
        {
            "region_info": {
                "bounding_box": {
                    "left_col": left,
                    "top_row": top,
                    "right_col": right,
                    "bottom_row": bottom,
                }
            }
        }
        for left, top, right, bottom in boxes
    ]
    return {"outputs": [{"data": {"regions": regions}}]}


class FakeDetector:
    """URL별 응답/예외 지정. gate가 있으면 set()될 때까지 응답 지연"""

    def __init__(self) -> None:
        self.responses: dict[str, Any] = {}
        self.gates: dict[str, asyncio.Event] = {}
        self.calls: list[str] = []

    async def detect(self, url: str) -> Any:
        self.calls.append(url)
        if url in self.gates:
            await self.gates[url].wait()
        response = self.responses[url]
        if isinstance(response, Exception):
            raise response
        return response


class FakeEntryCounter:
    def __init__(self, result: int | EntryCountError = 1) -> None:
        self.result = result
        self.calls: list[tuple[str, int]] = []

    async def increment_entries(self, user_id: str, face_count: int) -> int:
        self.calls.append((user_id, face_count))
        if isinstance(self.result, EntryCountError):
            raise self.result
        return self.result


class FakeImageLoader:
    def __init__(self, size: RenderedSize | ImageLoadError) -> None:
        self.size = size
        self.calls: list[str] = []

    async def load(self, url: str) -> RenderedSize:
        self.calls.append(url)
        if isinstance(self.size, ImageLoadError):
            raise self.size
        return self.size


@pytest.fixture
def session() -> Generator[FaceSession, None, None]:
    s = FaceSession()
    set_session(s)
    yield s
    set_session(None)


@pytest.fixture
def detector() -> FakeDetector:
    return FakeDetector()


@pytest.fixture
def entry_counter() -> FakeEntryCounter:
    return FakeEntryCounter(result=5)


@pytest.fixture
def orchestrator(
    session: FaceSession, detector: FakeDetector, entry_counter: FakeEntryCounter
) -> Generator[SubmissionOrchestrator, None, None]:
    """이미지 로더 없음 (클라이언트가 로드 완료를 보고하는 구성)"""
    orch = SubmissionOrchestrator(
        session=session,
        detector=detector,
        entry_counter=entry_counter,
        reconciler=LoadCompletionReconciler(session),
    )
    set_orchestrator(orch)
    yield orch
    set_orchestrator(None)


@pytest.fixture
def client(
    orchestrator: SubmissionOrchestrator, monkeypatch: pytest.MonkeyPatch
) -> Generator[TestClient, None, None]:
    monkeypatch.setattr("src.main.check_backend", AsyncMock(return_value=True))
    from src.main import app

    with TestClient(app) as c:
        yield c
