"""SubmissionState → 화면 표시 값"""

from typing import Literal

from src.constants import ButtonLabel
from src.schemas.base import BaseSchema
from src.schemas.face import SubmissionState

StatusTone = Literal["info", "alert"]


class StatusView(BaseSchema):
    message: str | None  # 빈 메시지는 표시하지 않음
    tone: StatusTone
    color: str
    button_label: str
    input_disabled: bool


def project_status(state: SubmissionState) -> StatusView:
    if state.is_busy:
        tone: StatusTone = "info"
        color = "blue"
        button_label = ButtonLabel.BUSY
    else:
        tone = "alert"
        color = "red"
        button_label = ButtonLabel.IDLE

    return StatusView(
        message=state.status_message or None,
        tone=tone,
        color=color,
        button_label=button_label,
        input_disabled=state.is_busy,
    )
