import base64
import binascii
import hmac
import logging
from typing import Optional
from config.settings import settings
from core.sequence import append_line
from model.api import UploadPhotoRequest
from model.entry import Entry, UploadResult
from repository import namespaces
from repository.object_store import ObjectStore, StoreConflictError
from service.idempotency_guard import IdempotencyGuard
from service.sequence_allocator import SequenceAllocator
from util.constants import ALLOWED_EXTENSIONS, MAX_NUMBER
from util.enums import ErrorMessage
from util.errors import (
    AllocationExhausted,
    BadRequest,
    DuplicateSubmission,
    IndexAppendFailed,
    PayloadTooLarge,
    Unauthorized,
    UnsupportedExtension,
)
from util.functions import clean_extension, clean_title, strip_data_url
from util.timing import timed

logger = logging.getLogger(__name__)


class UploadService:
    def __init__(
        self,
        store: ObjectStore,
        allocator: SequenceAllocator,
        guard: IdempotencyGuard,
        *,
        upload_key: str = settings.UPLOAD_KEY,
        max_allocation_attempts: int = settings.MAX_ALLOCATION_ATTEMPTS,
        max_index_attempts: int = settings.MAX_INDEX_APPEND_ATTEMPTS,
        max_file_mb: int = settings.MAX_FILE_MB,
        require_token: bool = settings.REQUIRE_IDEMPOTENCY_TOKEN,
    ) -> None:
        self._store = store
        self._allocator = allocator
        self._guard = guard
        self._upload_key = upload_key
        self._max_allocation_attempts = max_allocation_attempts
        self._max_index_attempts = max_index_attempts
        self._max_file_mb = max_file_mb
        self._require_token = require_token

    # ---------------- Request handling ----------------

    async def handle(self, payload: UploadPhotoRequest) -> UploadResult:
        """
        Validate an upload request, then run submit().
        Nothing touches the store until auth and payload checks pass.
        """
        self.authenticate(payload.key)

        if not payload.content or not payload.extension:
            raise BadRequest(ErrorMessage.MISSING_FILE.value)

        token = (payload.idempotencyToken or "").strip() or None
        if token is None and self._require_token:
            raise BadRequest(ErrorMessage.MISSING_TOKEN.value)

        image = self.decode_content(payload.content)
        return await self.submit(image, payload.extension, payload.title or "", token)

    def authenticate(self, key: Optional[str]) -> None:
        if not key or not hmac.compare_digest(
            key.encode("utf-8"), self._upload_key.encode("utf-8")
        ):
            logger.warning("upload.unauthorized")
            raise Unauthorized()

    def decode_content(self, content: str) -> bytes:
        raw = "".join(strip_data_url(content.strip()).split())
        try:
            data = base64.b64decode(raw, validate=True)
        except (binascii.Error, ValueError):
            raise BadRequest(ErrorMessage.BAD_CONTENT.value)
        if not data:
            raise BadRequest(ErrorMessage.MISSING_FILE.value)
        if len(data) > self._max_file_mb * 1024 * 1024:
            raise PayloadTooLarge(self._max_file_mb)
        return data

    # ---------------- Orchestration ----------------

    async def submit(
        self,
        image: bytes,
        extension: str,
        title: str,
        token: Optional[str] = None,
    ) -> UploadResult:
        """
        1) claim the idempotency token (when given)
        2) take a number hint from the allocator
        3) create-only write of the image, bumping the number on collision
        4) compare-and-swap append to photos.txt
        A failure in 4) leaves the image without an index line; there is no
        compensating delete.
        """
        ext = clean_extension(extension)
        if ext not in ALLOWED_EXTENSIONS:
            logger.warning("upload.bad_ext ext=%r", extension)
            raise UnsupportedExtension(extension)
        title = clean_title(title)

        if token and not await self._guard.claim(token):
            raise DuplicateSubmission()

        with timed(logger, "upload.submit", ext=ext, bytes=len(image)):
            start = await self._allocator.next_number()
            entry = await self._write_image(image, ext, title, start)
            await self._append_index(entry)

        logger.info("upload.ok file=%s hint=%d bytes=%d", entry.filename, start, len(image))
        path = namespaces.photo_path(entry.filename)
        return UploadResult(filename=entry.filename, rawLocator=self._store.locator(path))

    async def _write_image(self, image: bytes, ext: str, title: str, start: int) -> Entry:
        number = start
        for attempt in range(1, self._max_allocation_attempts + 1):
            if number > MAX_NUMBER:
                logger.error(
                    "upload.numbers_exhausted start=%d attempt=%d", start, attempt
                )
                raise AllocationExhausted(attempt - 1)
            entry = Entry(number=number, extension=ext, title=title)
            try:
                await self._store.put(
                    namespaces.photo_path(entry.filename),
                    image,
                    expected_version=None,
                    message=f"upload {entry.filename}",
                )
            except StoreConflictError:
                logger.info(
                    "upload.collision file=%s attempt=%d", entry.filename, attempt
                )
                number += 1
                continue
            return entry

        logger.error(
            "upload.allocation_exhausted start=%d attempts=%d",
            start,
            self._max_allocation_attempts,
        )
        raise AllocationExhausted(self._max_allocation_attempts)

    async def _append_index(self, entry: Entry) -> None:
        line = entry.index_line()
        for attempt in range(1, self._max_index_attempts + 1):
            current = await self._store.get(namespaces.INDEX)
            text = current.content.decode("utf-8") if current is not None else ""
            version = current.version if current is not None else None
            try:
                await self._store.put(
                    namespaces.INDEX,
                    append_line(text, line).encode("utf-8"),
                    expected_version=version,
                    message=f"append {entry.filename} to photos.txt",
                )
                return
            except StoreConflictError:
                logger.info(
                    "index.append.conflict file=%s attempt=%d", entry.filename, attempt
                )

        # Image is committed; a reconciliation pass must add the missing line.
        logger.error(
            "index.append.failed file=%s attempts=%d orphan=%s",
            entry.filename,
            self._max_index_attempts,
            namespaces.photo_path(entry.filename),
        )
        raise IndexAppendFailed(entry.filename, self._max_index_attempts)
