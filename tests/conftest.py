import os

# Settings are read at import time; pin them before any app module loads.
os.environ["APP_ENV"] = "test"
os.environ["REDIS_URL"] = "redis://localhost:6379/15"
os.environ["UPLOAD_KEY"] = "test-upload-key"
os.environ["STORE_BACKEND"] = "memory"
os.environ["GITHUB_OWNER"] = "acme"
os.environ["GITHUB_REPO"] = "gallery"
os.environ["GITHUB_BRANCH"] = "main"
os.environ["GITHUB_TOKEN"] = "ghp_test"

import base64  # noqa: E402
from typing import List, Optional  # noqa: E402
import pytest  # noqa: E402
from repository import namespaces  # noqa: E402
from repository.memory_store import InMemoryObjectStore  # noqa: E402
from service.idempotency_guard import IdempotencyGuard  # noqa: E402
from service.sequence_allocator import SequenceAllocator  # noqa: E402
from service.upload_service import UploadService  # noqa: E402
from util.enums import AllocationStrategy  # noqa: E402

UPLOAD_KEY = "test-upload-key"
JPEG_BYTES = b"\xff\xd8\xff\xe0fake-jpeg"
JPEG_B64 = base64.b64encode(JPEG_BYTES).decode("ascii")


class RacingIndexStore(InMemoryObjectStore):
    """
    Lands a competing writer's line on photos.txt right before each of our
    next index puts, so the version we read is stale.
    """

    def __init__(self, competing_lines: List[str]) -> None:
        super().__init__()
        self._pending = list(competing_lines)
        self.index_put_attempts = 0

    async def put(
        self,
        path: str,
        content: bytes,
        expected_version: Optional[str] = None,
        message: Optional[str] = None,
    ) -> str:
        if path == namespaces.INDEX:
            self.index_put_attempts += 1
            if self._pending:
                line = self._pending.pop(0)
                current = await self.get(path)
                text = current.content.decode("utf-8") if current else ""
                await super().put(
                    path,
                    (text + line).encode("utf-8"),
                    current.version if current else None,
                    "competing append",
                )
        return await super().put(path, content, expected_version, message)


def make_service(
    store: InMemoryObjectStore,
    strategy: AllocationStrategy = AllocationStrategy.SCAN,
    **policy,
) -> UploadService:
    policy.setdefault("upload_key", UPLOAD_KEY)
    return UploadService(
        store,
        SequenceAllocator(store, strategy),
        IdempotencyGuard(store),
        **policy,
    )


@pytest.fixture()
def store() -> InMemoryObjectStore:
    return InMemoryObjectStore(base_url="https://raw.example/acme/gallery/main/")


@pytest.fixture()
def seeded_store(store: InMemoryObjectStore) -> InMemoryObjectStore:
    store.seed("photos/001.jpg", JPEG_BYTES)
    store.seed("photos/002.jpg", JPEG_BYTES)
    store.seed("photos/photos.txt", b"001.jpg|Sunset\n002.jpg|Dawn\n")
    return store


@pytest.fixture()
def service(store: InMemoryObjectStore) -> UploadService:
    return make_service(store)
