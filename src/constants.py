class StatusMessage:
    ANALYZING = "🔍 Analyzing image..."
    NO_FACES = "No faces detected. Verify the URL and try again."
    ERROR = "Error processing the image."
    DETECTED = "Number of faces detected: {count}"


class ButtonLabel:
    IDLE = "Detect"
    BUSY = "⏳ Loading..."


class Display:
    WIDTH = 500  # <img width="500px" height="auto"> 기준


class BackendPath:
    HEALTH = "/"
    DETECT = "/clarifaiAPI"
    ENTRIES = "/image"


class ImageLimits:
    MAX_BYTES = 20 * 1024 * 1024  # 20MB
