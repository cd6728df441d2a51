import re


class InternalURIs:
    API = "/api"
    V1 = API + "/v1"
    UPLOAD_PHOTO = V1 + "/upload"
    HEALTHZ = "/healthz"


ALLOWED_EXTENSIONS = frozenset({"jpg", "jpeg", "png", "webp"})
FILENAME_WIDTH = 3
MAX_NUMBER = 999  # largest number that fits FILENAME_WIDTH
INDEX_SEPARATOR = "|"

FILENAME_PATTERN = re.compile(r"^(\d{3})\.(jpe?g|png|webp)$", re.IGNORECASE)
INDEX_NUMBER_PATTERN = re.compile(r"^(\d{3})\.")
DATA_URL_PREFIX = re.compile(r"^data:[^;]+;base64,")
