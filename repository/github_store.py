# repository/github_store.py
import base64
import logging
from typing import Any, Dict, List, Optional
from urllib.parse import quote
import httpx
from fastapi import status
from config.settings import settings
from repository.object_store import StoreConflictError, StoreError, StoredObject
from util.timing import timed
from util.types import ContentsEntry, ContentsFile, PutContentsBody

logger = logging.getLogger(__name__)

# create-only put on an existing path -> 422; stale sha -> 409 or 422.
# A 409 on a create-only put is a ref race on the branch, not an occupied path.
_CREATE_CONFLICT_STATUSES = (status.HTTP_422_UNPROCESSABLE_ENTITY,)
_CAS_CONFLICT_STATUSES = (status.HTTP_409_CONFLICT, status.HTTP_422_UNPROCESSABLE_ENTITY)


class GitHubContentsStore:
    """
    ObjectStore backed by the GitHub repository contents API.

    Every put is one commit on `branch`. The blob sha returned by GET is the
    version token; omitting it on PUT makes the write create-only.
    """

    def __init__(
        self,
        owner: str = settings.GITHUB_OWNER,
        repo: str = settings.GITHUB_REPO,
        branch: str = settings.GITHUB_BRANCH,
        token: str = settings.GITHUB_TOKEN,
        api_url: str = settings.GITHUB_API_URL,
        raw_url: str = settings.GITHUB_RAW_URL,
        timeout: float = settings.STORE_TIMEOUT_SECONDS,
    ) -> None:
        self._owner = owner
        self._repo = repo
        self._branch = branch
        self._token = token
        self._api_url = api_url.rstrip("/")
        self._raw_url = raw_url.rstrip("/")
        self._timeout = httpx.Timeout(timeout, connect=5.0)

    def _contents_url(self, path: str) -> str:
        return (
            f"{self._api_url}/repos/{self._owner}/{self._repo}"
            f"/contents/{quote(path, safe='/')}"
        )

    def _headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {self._token}",
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": settings.GITHUB_API_VERSION,
        }

    async def _request(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        try:
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                with timed(logger, f"store.{method.lower()}", path=path):
                    return await client.request(
                        method, self._contents_url(path), headers=self._headers(), **kwargs
                    )
        except httpx.RequestError as e:
            logger.error("store.request_error path=%s err=%s", path, type(e).__name__)
            raise StoreError(f"GitHub request failed: {type(e).__name__}") from e

    @staticmethod
    def _error_message(res: httpx.Response) -> str:
        try:
            data = res.json()
        except ValueError:
            data = {}
        msg = data.get("message") if isinstance(data, dict) else None
        return msg or f"GitHub error {res.status_code}"

    async def get(self, path: str) -> Optional[StoredObject]:
        res = await self._request("GET", path, params={"ref": self._branch})
        if res.status_code == status.HTTP_404_NOT_FOUND:
            return None
        if res.status_code // 100 != 2:
            logger.error("store.get.bad_status path=%s status=%d", path, res.status_code)
            raise StoreError(self._error_message(res), status=res.status_code)

        data: ContentsFile = res.json()
        if not isinstance(data, dict) or data.get("type", "file") != "file":
            raise StoreError(f"{path} is not a file")
        # GitHub wraps base64 at 60 columns; b64decode drops the newlines
        content = base64.b64decode(data.get("content") or "")
        return StoredObject(content=content, version=data["sha"])

    async def put(
        self,
        path: str,
        content: bytes,
        expected_version: Optional[str] = None,
        message: Optional[str] = None,
    ) -> str:
        body: PutContentsBody = {
            "message": message or f"update {path}",
            "content": base64.b64encode(content).decode("ascii"),
            "branch": self._branch,
        }
        if expected_version is not None:
            body["sha"] = expected_version

        res = await self._request("PUT", path, json=body)
        conflicts = (
            _CREATE_CONFLICT_STATUSES
            if expected_version is None
            else _CAS_CONFLICT_STATUSES
        )
        if res.status_code in conflicts:
            logger.info("store.put.conflict path=%s status=%d", path, res.status_code)
            raise StoreConflictError(self._error_message(res), status=res.status_code)
        if res.status_code // 100 != 2:
            logger.error("store.put.bad_status path=%s status=%d", path, res.status_code)
            raise StoreError(self._error_message(res), status=res.status_code)

        data = res.json()
        return str((data.get("content") or {}).get("sha", ""))

    async def list(self, directory: str) -> List[str]:
        res = await self._request("GET", directory, params={"ref": self._branch})
        if res.status_code == status.HTTP_404_NOT_FOUND:
            return []
        if res.status_code // 100 != 2:
            logger.error(
                "store.list.bad_status dir=%s status=%d", directory, res.status_code
            )
            raise StoreError(self._error_message(res), status=res.status_code)

        entries: List[ContentsEntry] = res.json()
        if not isinstance(entries, list):
            raise StoreError(f"{directory} is not a directory")
        return [e["name"] for e in entries if e.get("name")]

    def locator(self, path: str) -> str:
        return f"{self._raw_url}/{self._owner}/{self._repo}/{self._branch}/{path}"
