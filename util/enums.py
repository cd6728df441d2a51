# util/enums.py
from enum import Enum
from typing import NamedTuple
from fastapi import status


class Color(str, Enum):
    RESET = "\033[0m"
    RED = "\033[31m"
    GREEN = "\033[32m"
    BLUE = "\033[34m"

    def __str__(self):
        return self.value


class Environment(str, Enum):
    DEV = "dev"
    PROD = "prod"


class StoreBackend(str, Enum):
    GITHUB = "github"
    MEMORY = "memory"


class AllocationStrategy(str, Enum):
    SCAN = "scan"  # list the photos directory
    INDEX = "index"  # parse photos.txt


class ErrorInfo(NamedTuple):
    kind: str
    message: str
    http_status: int


class ErrorMessage(Enum):
    UNAUTHORIZED = ErrorInfo(
        "unauthorized", "unauthorized", status.HTTP_401_UNAUTHORIZED
    )
    MISSING_FILE = ErrorInfo(
        "bad_request", "missing file or ext", status.HTTP_400_BAD_REQUEST
    )
    BAD_EXTENSION = ErrorInfo("bad_request", "bad ext", status.HTTP_400_BAD_REQUEST)
    BAD_CONTENT = ErrorInfo(
        "bad_request", "content is not valid base64", status.HTTP_400_BAD_REQUEST
    )
    MISSING_TOKEN = ErrorInfo(
        "bad_request", "idempotency token required", status.HTTP_400_BAD_REQUEST
    )
    PAYLOAD_TOO_LARGE = ErrorInfo(
        "payload_too_large",
        "file too large",
        status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
    )
    DUPLICATE_SUBMISSION = ErrorInfo(
        "duplicate_submission", "duplicate submit", status.HTTP_409_CONFLICT
    )
    ALLOCATION_EXHAUSTED = ErrorInfo(
        "allocation_exhausted",
        "failed to allocate filename",
        status.HTTP_500_INTERNAL_SERVER_ERROR,
    )
    INDEX_APPEND_FAILED = ErrorInfo(
        "index_append_failed",
        "image stored but photos.txt could not be updated",
        status.HTTP_500_INTERNAL_SERVER_ERROR,
    )
    UPSTREAM_ERROR = ErrorInfo(
        "upstream_error", "object store request failed", status.HTTP_502_BAD_GATEWAY
    )
    INTERNAL_ERROR = ErrorInfo(
        "internal_error", "Internal Error", status.HTTP_500_INTERNAL_SERVER_ERROR
    )
