"""얼굴 탐지 데이터 모델

Detection → Validation → Cache → Image load → Geometry 전체에서 사용하는 공통 스키마
"""

from typing import Self

from pydantic import ConfigDict, Field, model_validator

from src.schemas.base import BaseSchema


class DetectionRegion(BaseSchema):
    """탐지된 얼굴 1개 (이미지 크기 대비 비율, 0~1)

    right_col / bottom_row는 반대쪽 가장자리(오른쪽/아래)로부터의 거리.
    """

    model_config = ConfigDict(frozen=True)

    left_col: float
    top_row: float
    right_col: float
    bottom_row: float


class ValidationResult(BaseSchema):
    """검증된 탐지 결과 (제출 1회당 1개, 불변)"""

    model_config = ConfigDict(frozen=True)

    regions: tuple[DetectionRegion, ...] = Field(min_length=1)
    face_count: int = Field(ge=1)

    @model_validator(mode="after")
    def check_face_count(self) -> Self:
        if self.face_count != len(self.regions):
            raise ValueError(
                f"face_count({self.face_count})가 regions 개수({len(self.regions)})와 다름"
            )
        return self


class FaceBox(BaseSchema):
    """오버레이용 픽셀 박스

    각 값은 해당 가장자리로부터의 오프셋(px). CSS top/right/bottom/left와 동일.
    """

    id: int  # regions 인덱스
    left_col: float
    top_row: float
    right_col: float
    bottom_row: float


class RenderedSize(BaseSchema):
    """이미지가 실제로 렌더링된 크기(px)"""

    width: float
    height: float


class ImageLoad(BaseSchema):
    """이미지 로드 완료 신호

    size가 None이면 로드 전에 이미지가 사라진 경우 (치수 없음).
    generation이 None이면 클라이언트가 세대 정보를 보내지 않은 경우.
    """

    image_url: str
    size: RenderedSize | None = None
    generation: int | None = None


class SubmissionState(BaseSchema):
    input_url: str = ""
    image_url: str = ""
    status_message: str = ""
    is_busy: bool = False


class UserProfile(BaseSchema):
    """외부 로그인 흐름이 설정하는 사용자 정보 (entries만 이 모듈에서 갱신)"""

    id: str = ""
    name: str = ""
    entries: int = 0
