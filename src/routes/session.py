"""Session API 라우트

얼굴 탐지 세션의 상태 조회/제출/이미지 로드 보고 엔드포인트.
로그인/로그아웃은 외부 인증 흐름이 호출하는 연결 지점만 제공.
"""

from fastapi import APIRouter, HTTPException, status

from src.schemas.base import BaseSchema
from src.schemas.face import ImageLoad, RenderedSize, UserProfile
from src.services.orchestrator import SubmissionOutcome, get_orchestrator
from src.services.session import FaceSession, SessionResponse, to_response

router = APIRouter(prefix="/session", tags=["session"])


class InputRequest(BaseSchema):
    url: str


class SubmitRequest(BaseSchema):
    url: str | None = None  # 없으면 현재 입력값 사용


class SubmitResponse(SessionResponse):
    outcome: SubmissionOutcome


class ImageLoadRequest(BaseSchema):
    """브라우저가 보고하는 로드 완료 (width/height는 렌더링된 크기)"""

    image_url: str
    width: float | None = None
    height: float | None = None
    generation: int | None = None


def _current_session() -> FaceSession:
    # 모든 라우트는 오케스트레이터와 같은 세션을 사용
    return get_orchestrator().session


@router.get("", response_model=SessionResponse)
async def read_session() -> SessionResponse:
    return to_response(_current_session())


@router.put("/input", response_model=SessionResponse)
async def update_input(request: InputRequest) -> SessionResponse:
    session = _current_session()
    session.set_input(request.url)
    return to_response(session)


@router.post("/submit", response_model=SubmitResponse)
async def submit_image(request: SubmitRequest) -> SubmitResponse:
    orchestrator = get_orchestrator()
    url = request.url if request.url is not None else orchestrator.session.state.input_url
    url = url.strip()
    if not url:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"code": "EMPTY_URL", "message": "이미지 URL을 입력해주세요"},
        )

    outcome = await orchestrator.submit(url)
    response = to_response(orchestrator.session)
    return SubmitResponse(**response.model_dump(), outcome=outcome)


@router.post("/image-load", response_model=SessionResponse)
async def report_image_load(request: ImageLoadRequest) -> SessionResponse:
    orchestrator = get_orchestrator()
    size = None
    if request.width is not None and request.height is not None:
        size = RenderedSize(width=request.width, height=request.height)

    orchestrator.reconciler.on_image_load(
        ImageLoad(image_url=request.image_url, size=size, generation=request.generation)
    )
    return to_response(orchestrator.session)


@router.post("/clear", response_model=SessionResponse)
async def clear_session() -> SessionResponse:
    session = _current_session()
    session.clear()
    return to_response(session)


@router.post("/sign-in", response_model=SessionResponse)
async def sign_in(user: UserProfile) -> SessionResponse:
    session = _current_session()
    session.sign_in(user)
    return to_response(session)


@router.post("/sign-out", response_model=SessionResponse)
async def sign_out() -> SessionResponse:
    session = _current_session()
    session.sign_out()
    return to_response(session)
