# repository/memory_store.py
import asyncio
import hashlib
from typing import Dict, List, Optional
from repository.object_store import StoreConflictError, StoredObject


class InMemoryObjectStore:
    """
    Process-local ObjectStore for dev runs and tests.

    The lock only emulates the remote store's per-request atomicity; the
    upload flow itself never relies on it.
    """

    def __init__(self, base_url: str = "memory://") -> None:
        self._objects: Dict[str, StoredObject] = {}
        self._lock = asyncio.Lock()
        self._base_url = base_url
        self.commits: List[str] = []

    @staticmethod
    def _version(path: str, content: bytes, seq: int) -> str:
        h = hashlib.sha1(f"{path}:{seq}:".encode("utf-8") + content)
        return h.hexdigest()

    async def get(self, path: str) -> Optional[StoredObject]:
        await asyncio.sleep(0)  # suspension point, like a network round-trip
        async with self._lock:
            return self._objects.get(path)

    async def put(
        self,
        path: str,
        content: bytes,
        expected_version: Optional[str] = None,
        message: Optional[str] = None,
    ) -> str:
        await asyncio.sleep(0)  # suspension point, like a network round-trip
        async with self._lock:
            current = self._objects.get(path)
            if expected_version is None and current is not None:
                raise StoreConflictError(f"{path} already exists", status=422)
            if expected_version is not None and (
                current is None or current.version != expected_version
            ):
                raise StoreConflictError(f"{path} does not match", status=409)
            version = self._version(path, content, len(self.commits))
            self._objects[path] = StoredObject(content=content, version=version)
            self.commits.append(message or f"put {path}")
            return version

    async def list(self, directory: str) -> List[str]:
        prefix = directory.rstrip("/") + "/"
        await asyncio.sleep(0)  # suspension point, like a network round-trip
        async with self._lock:
            return sorted(
                p[len(prefix) :]
                for p in self._objects
                if p.startswith(prefix) and "/" not in p[len(prefix) :]
            )

    def locator(self, path: str) -> str:
        return f"{self._base_url}{path}"

    # ---------------- Test/dev helpers ----------------

    def seed(self, path: str, content: bytes) -> str:
        version = self._version(path, content, len(self.commits))
        self._objects[path] = StoredObject(content=content, version=version)
        self.commits.append(f"seed {path}")
        return version

    def read_text(self, path: str) -> Optional[str]:
        obj = self._objects.get(path)
        return obj.content.decode("utf-8") if obj is not None else None

    def paths(self) -> List[str]:
        return sorted(self._objects)
