from src.constants import ButtonLabel
from src.schemas.face import SubmissionState
from src.services.status import project_status


class TestProjectStatus:
    def test_busy_is_info_blue(self) -> None:
        view = project_status(SubmissionState(status_message="🔍 Analyzing image...", is_busy=True))

        assert view.tone == "info"
        assert view.color == "blue"
        assert view.button_label == ButtonLabel.BUSY
        assert view.input_disabled is True
        assert view.message == "🔍 Analyzing image..."

    def test_idle_is_alert_red(self) -> None:
        view = project_status(SubmissionState(status_message="Error processing the image."))

        assert view.tone == "alert"
        assert view.color == "red"
        assert view.button_label == ButtonLabel.IDLE
        assert view.input_disabled is False

    def test_empty_message_hidden(self) -> None:
        assert project_status(SubmissionState()).message is None

    def test_serializes_camel_case(self) -> None:
        data = project_status(SubmissionState(is_busy=True)).model_dump(by_alias=True)

        assert data["buttonLabel"] == ButtonLabel.BUSY
        assert data["inputDisabled"] is True
