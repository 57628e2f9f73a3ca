"""상대 좌표 → 픽셀 박스 변환

Detection 결과(이미지 대비 비율)를 렌더링된 이미지 크기 기준의 가장자리 오프셋으로 변환.
클램핑하지 않음: 업스트림 데이터가 이상하면 음수나 이미지 밖 값이 그대로 나온다.
"""

import math
from collections.abc import Sequence

from src.schemas.face import DetectionRegion, FaceBox


class InvalidDimensionsError(ValueError):
    def __init__(self, width: object, height: object):
        self.width = width
        self.height = height
        super().__init__(f"유효하지 않은 이미지 크기: {width}x{height}")


def _is_positive_finite(value: object) -> bool:
    if isinstance(value, bool) or not isinstance(value, int | float):
        return False
    return math.isfinite(value) and value > 0


def calculate_face_boxes(
    regions: Sequence[DetectionRegion], width: float, height: float
) -> list[FaceBox]:
    """regions → FaceBox 리스트 (인덱스 유지, id = regions 내 위치)

    left/top은 왼쪽/위 가장자리 기준, right/bottom은 오른쪽/아래 가장자리 기준.

    Raises:
        InvalidDimensionsError: width/height가 양의 유한수가 아닌 경우 (로드 전 호출)
    """
    if not _is_positive_finite(width) or not _is_positive_finite(height):
        raise InvalidDimensionsError(width, height)

    return [
        FaceBox(
            id=i,
            left_col=region.left_col * width,
            top_row=region.top_row * height,
            right_col=width - region.right_col * width,
            bottom_row=height - region.bottom_row * height,
        )
        for i, region in enumerate(regions)
    ]
