# repository/object_store.py
from dataclasses import dataclass
from typing import List, Optional, Protocol, runtime_checkable


class StoreError(Exception):
    """Transport or upstream failure talking to the object store."""

    def __init__(self, message: str, status: Optional[int] = None) -> None:
        super().__init__(message)
        self.status = status


class StoreConflictError(StoreError):
    """
    The store refused a put because of its precondition:
    - create-only put and the path already exists, or
    - expected version no longer matches the current one.
    """


@dataclass(frozen=True)
class StoredObject:
    content: bytes
    version: str


@runtime_checkable
class ObjectStore(Protocol):
    """
    Versioned blob store addressed by path.

    put() contract:
      - expected_version is None  -> create only; raises StoreConflictError if the path exists
      - expected_version is given -> compare-and-swap; raises StoreConflictError on mismatch
    get() returns None when the object does not exist.
    list() returns entry names; a missing directory is an empty list.
    """

    async def get(self, path: str) -> Optional[StoredObject]: ...

    async def put(
        self,
        path: str,
        content: bytes,
        expected_version: Optional[str] = None,
        message: Optional[str] = None,
    ) -> str: ...

    async def list(self, directory: str) -> List[str]: ...

    def locator(self, path: str) -> str: ...
