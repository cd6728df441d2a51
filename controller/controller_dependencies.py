from functools import lru_cache
from fastapi import Depends, Request
from config.settings import settings
from repository.github_store import GitHubContentsStore
from repository.memory_store import InMemoryObjectStore
from repository.object_store import ObjectStore
from service.idempotency_guard import IdempotencyGuard
from service.sequence_allocator import SequenceAllocator
from service.upload_service import UploadService
from util.enums import StoreBackend
from util.errors import PayloadTooLarge

# base64 inflates by 4/3; leave room for the JSON envelope and title
_ENVELOPE_SLACK_BYTES = 64 * 1024


@lru_cache(maxsize=1)
def get_object_store() -> ObjectStore:
    if settings.STORE_BACKEND == StoreBackend.MEMORY:
        return InMemoryObjectStore()
    return GitHubContentsStore()


def get_upload_service(store: ObjectStore = Depends(get_object_store)) -> UploadService:
    _allocator = SequenceAllocator(store)
    _guard = IdempotencyGuard(store)
    _service = UploadService(store, _allocator, _guard)
    return _service


async def enforce_max_body_size(request: Request) -> None:
    # Fast pre-check via Content-Length; decoded size is checked again in the service
    max_bytes = settings.MAX_FILE_MB * 1024 * 1024 * 4 // 3 + _ENVELOPE_SLACK_BYTES
    cl = request.headers.get("content-length")
    if cl and cl.isdigit() and int(cl) > max_bytes:
        raise PayloadTooLarge(settings.MAX_FILE_MB)
