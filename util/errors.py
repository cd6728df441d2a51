# util/errors.py
from typing import Optional
from fastapi import HTTPException
from util.enums import ErrorInfo, ErrorMessage


class AppError(HTTPException):
    # Flow: raise AppError to short-circuit with a typed kind, status & message.
    def __init__(self, info: ErrorInfo, message: Optional[str] = None) -> None:
        super().__init__(status_code=info.http_status, detail=message or info.message)
        self.kind = info.kind

    @property
    def message(self) -> str:
        return str(self.detail)


class Unauthorized(AppError):
    def __init__(self) -> None:
        super().__init__(ErrorMessage.UNAUTHORIZED.value)


class BadRequest(AppError):
    def __init__(self, info: ErrorInfo = ErrorMessage.MISSING_FILE.value) -> None:
        super().__init__(info)


class UnsupportedExtension(BadRequest):
    def __init__(self, extension: str) -> None:
        super().__init__(ErrorMessage.BAD_EXTENSION.value)
        self.extension = extension


class PayloadTooLarge(AppError):
    def __init__(self, max_mb: int) -> None:
        info = ErrorMessage.PAYLOAD_TOO_LARGE.value
        super().__init__(info, f"{info.message} (max {max_mb} MB)")


class DuplicateSubmission(AppError):
    def __init__(self) -> None:
        super().__init__(ErrorMessage.DUPLICATE_SUBMISSION.value)


class AllocationExhausted(AppError):
    def __init__(self, attempts: int) -> None:
        super().__init__(ErrorMessage.ALLOCATION_EXHAUSTED.value)
        self.attempts = attempts


class IndexAppendFailed(AppError):
    """The image object is committed; only the photos.txt line is missing."""

    def __init__(self, filename: str, attempts: int) -> None:
        super().__init__(ErrorMessage.INDEX_APPEND_FAILED.value)
        self.filename = filename
        self.attempts = attempts


class UpstreamError(AppError):
    def __init__(self, message: Optional[str] = None) -> None:
        super().__init__(ErrorMessage.UPSTREAM_ERROR.value, message)
