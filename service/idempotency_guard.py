import hashlib
import logging
import time
from model.entry import IdempotencyClaim
from repository import namespaces
from repository.object_store import ObjectStore, StoreConflictError

logger = logging.getLogger(__name__)


class IdempotencyGuard:
    """
    Turns a client token into a one-time claim.

    The claim is a marker object written with a create-only put; the store
    rejecting the second create is the only atomicity we rely on. Tokens are
    hashed into the marker name so any string maps to a safe path.
    """

    def __init__(self, store: ObjectStore) -> None:
        self._store = store

    @staticmethod
    def claim_path(token: str) -> str:
        digest = hashlib.sha256(token.encode("utf-8")).hexdigest()
        return namespaces.lock_path(digest)

    async def claim(self, token: str) -> bool:
        marker = IdempotencyClaim(token=token, createdAt=int(time.time() * 1000))
        path = self.claim_path(token)
        try:
            await self._store.put(
                path,
                marker.model_dump_json().encode("utf-8"),
                expected_version=None,
                message=f"lock {token}",
            )
        except StoreConflictError:
            logger.info("idempotency.duplicate path=%s", path)
            return False
        logger.info("idempotency.claimed path=%s", path)
        return True
