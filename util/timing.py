import time
from contextlib import contextmanager
from typing import Any, Iterator
import logging


@contextmanager
def timed(logger: logging.Logger, name: str, **kv: Any) -> Iterator[None]:
    """
    Usage:
      with timed(logger, "store.put", path="photos/003.jpg"):
          ...
    Emits one DEBUG on exit: "<name>.done ms=<int> ok=<bool> key=val ..."
    """
    t0 = time.perf_counter()
    ok = False
    try:
        yield
        ok = True
    finally:
        dt_ms = int((time.perf_counter() - t0) * 1000)
        suffix = "".join(f" {k}={v}" for k, v in kv.items())
        logger.debug("%s.done ms=%d ok=%s%s", name, dt_ms, ok, suffix)
