# main.py
import logging
from fastapi_limiter import FastAPILimiter
import routes
from contextlib import asynccontextmanager
from util.enums import Environment, Color, ErrorMessage
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from starlette.middleware.cors import CORSMiddleware
from config.settings import settings
from config.cache import close_redis, get_redis
from fastapi.responses import JSONResponse
from repository.object_store import StoreError
from util.constants import InternalURIs
from util.errors import AppError, UpstreamError
from util.logger import init_logger

logger = logging.getLogger(__name__)


async def _real_ip(request: Request) -> str:
    if settings.TRUST_PROXY:
        fwd = request.headers.get("x-forwarded-for")
        if fwd:
            return fwd.split(",")[0].strip()
    return request.client.host if request.client else "unknown"


@asynccontextmanager
async def lifespan(fastApi: FastAPI):
    try:
        init_logger()
        print(f"{Color.GREEN}Initializing...{Color.RESET}")
        redis = await get_redis()
        await FastAPILimiter.init(redis, identifier=_real_ip)
        print(
            f"{Color.BLUE}Server Started{Color.RESET} store={settings.STORE_BACKEND.value}"
        )
    except Exception as e:
        print("Failed to connect to Redis:", e)
        raise

    try:
        yield
    finally:
        try:
            await close_redis()
        except Exception as e:
            print("Error closing Redis:", e)

        print(f"{Color.RED}Server Shutdown{Color.RESET}")


app: FastAPI = FastAPI(lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[settings.ALLOWED_ORIGIN],
    allow_methods=["POST", "OPTIONS"],
    allow_headers=["Content-Type"],
)


@app.get(InternalURIs.HEALTHZ)
async def healthz():
    return {"ok": True}


def _error_response(kind: str, message: str, status_code: int, headers=None):
    return JSONResponse(
        status_code=status_code,
        content={"ok": False, "error": kind, "message": message},
        headers=headers,
    )


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
    return _error_response(exc.kind, exc.message, exc.status_code)


@app.exception_handler(StoreError)
async def store_error_handler(request: Request, exc: StoreError):
    # Transient store failures are surfaced, not retried
    logger.error("store.error status=%s err=%s", exc.status, exc)
    err = UpstreamError(str(exc) or None)
    return _error_response(err.kind, err.message, err.status_code)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    info = ErrorMessage.MISSING_FILE.value
    return _error_response(info.kind, "malformed payload", info.http_status)


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception("request.unhandled path=%s", request.url.path)
    info = ErrorMessage.INTERNAL_ERROR.value
    return _error_response(info.kind, info.message, info.http_status)


@app.exception_handler(429)
async def ratelimit_handler(request: Request, exc):
    wait = settings.RATE_LIMIT_SECONDS
    return _error_response(
        "rate_limited",
        f"Too many requests. Try again in {wait}s.",
        429,
        headers={"Retry-After": str(wait)},
    )


routes.register_routes(app)

if __name__ == "__main__":
    import uvicorn

    reload = settings.APP_ENV == Environment.DEV
    uvicorn.run("main:app", host="127.0.0.1", port=8000, reload=reload)
