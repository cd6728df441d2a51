import logging
from config.settings import settings
from core.sequence import derive_next_from_index, derive_next_from_listing
from repository import namespaces
from repository.object_store import ObjectStore
from util.enums import AllocationStrategy

logger = logging.getLogger(__name__)


class SequenceAllocator:
    """
    Suggests the next photo number.

    The value is a hint, not a reservation: two concurrent callers may get the
    same number. UploadService's create-only write loop resolves the race.
    """

    def __init__(
        self,
        store: ObjectStore,
        strategy: AllocationStrategy = settings.ALLOCATION_STRATEGY,
    ) -> None:
        self._store = store
        self._strategy = AllocationStrategy(strategy)

    async def next_number(self) -> int:
        if self._strategy == AllocationStrategy.INDEX:
            obj = await self._store.get(namespaces.INDEX)
            text = obj.content.decode("utf-8") if obj is not None else None
            n = derive_next_from_index(text)
        else:
            names = await self._store.list(namespaces.PHOTOS)
            n = derive_next_from_listing(names)
        logger.debug("allocator.hint strategy=%s next=%d", self._strategy.value, n)
        return n
