# repository/namespaces.py
from typing import Final

PHOTOS: Final[str] = "photos"
INDEX: Final[str] = f"{PHOTOS}/photos.txt"
LOCKS: Final[str] = ".locks"  # one marker object per used idempotency token


def photo_path(filename: str) -> str:
    return f"{PHOTOS}/{filename}"


def lock_path(digest: str) -> str:
    return f"{LOCKS}/{digest}.json"
