"""Detection 응답 검증

백엔드가 전달하는 Clarifai 응답은 스키마 보장이 없으므로 방어적으로 읽는다.
어느 단계든 필드가 없거나 비어 있으면 None ("얼굴 없음"과 동일하게 취급, 에러 아님).
"""

import logging
from collections.abc import Mapping, Sequence
from typing import Any

from pydantic import ValidationError

from src.schemas.face import DetectionRegion, ValidationResult

logger = logging.getLogger(__name__)


def _first_non_empty_list(value: Any) -> list[Any] | None:
    if isinstance(value, Sequence) and not isinstance(value, str | bytes) and value:
        return list(value)
    return None


def get_regions_from_data(data: Any) -> list[Any] | None:
    """payload["outputs"][0]["data"]["regions"] 추출 (없거나 비면 None)"""
    if not isinstance(data, Mapping):
        return None

    outputs = _first_non_empty_list(data.get("outputs"))
    if outputs is None:
        return None

    first = outputs[0]
    if not isinstance(first, Mapping) or not isinstance(first.get("data"), Mapping):
        return None

    return _first_non_empty_list(first["data"].get("regions"))


def parse_region(raw: Any) -> DetectionRegion:
    """region 1개 파싱

    Clarifai 형식(region_info.bounding_box)을 우선 읽고, 없으면 평평한 매핑으로 읽는다.

    Raises:
        ValidationError: 좌표 필드 누락/타입 불일치
    """
    if isinstance(raw, Mapping):
        region_info = raw.get("region_info")
        if isinstance(region_info, Mapping) and "bounding_box" in region_info:
            raw = region_info["bounding_box"]
    return DetectionRegion.model_validate(raw)


def validate_face_detection(data: Any) -> ValidationResult | None:
    """raw payload → ValidationResult (얼굴 없음/형식 오류 시 None)"""
    raw_regions = get_regions_from_data(data)
    if raw_regions is None:
        return None

    try:
        regions = tuple(parse_region(raw) for raw in raw_regions)
    except ValidationError as e:
        logger.warning(f"Detection region 파싱 실패 ({len(raw_regions)}개 중): {e}")
        return None

    return ValidationResult(regions=regions, face_count=len(regions))
