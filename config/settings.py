import os
import sys
from dotenv import load_dotenv
from pydantic import ValidationError, Field
from pydantic_settings import BaseSettings
from util.enums import AllocationStrategy, Environment, StoreBackend

if os.getenv("APP_ENV", Environment.DEV) == Environment.DEV:
    load_dotenv()


class Settings(BaseSettings):
    # App
    APP_ENV: str = Field(..., validation_alias="APP_ENV")
    REDIS_URL: str = Field(..., validation_alias="REDIS_URL")

    # CORS & Limits
    ALLOWED_ORIGIN: str = Field(default="*", validation_alias="ALLOWED_ORIGIN")
    RATE_LIMIT_TIMES: int = Field(default=20, validation_alias="RATE_LIMIT_TIMES")
    RATE_LIMIT_SECONDS: int = Field(default=60, validation_alias="RATE_LIMIT_SECONDS")
    MAX_FILE_MB: int = Field(default=10, validation_alias="MAX_FILE_MB")
    TRUST_PROXY: bool = Field(default=False, validation_alias="TRUST_PROXY")

    # Upload auth
    UPLOAD_KEY: str = Field(..., validation_alias="UPLOAD_KEY")
    REQUIRE_IDEMPOTENCY_TOKEN: bool = Field(
        default=False, validation_alias="REQUIRE_IDEMPOTENCY_TOKEN"
    )

    # Object store
    STORE_BACKEND: StoreBackend = Field(
        default=StoreBackend.GITHUB, validation_alias="STORE_BACKEND"
    )
    STORE_TIMEOUT_SECONDS: float = Field(
        default=15.0, validation_alias="STORE_TIMEOUT_SECONDS"
    )
    GITHUB_OWNER: str = Field(default="", validation_alias="GITHUB_OWNER")
    GITHUB_REPO: str = Field(default="", validation_alias="GITHUB_REPO")
    GITHUB_BRANCH: str = Field(default="main", validation_alias="GITHUB_BRANCH")
    GITHUB_TOKEN: str = Field(default="", validation_alias="GITHUB_TOKEN")
    GITHUB_API_URL: str = "https://api.github.com"
    GITHUB_RAW_URL: str = "https://raw.githubusercontent.com"
    GITHUB_API_VERSION: str = "2022-11-28"

    # Numbering & retry policy
    ALLOCATION_STRATEGY: AllocationStrategy = Field(
        default=AllocationStrategy.SCAN, validation_alias="ALLOCATION_STRATEGY"
    )
    MAX_ALLOCATION_ATTEMPTS: int = Field(
        default=20, validation_alias="MAX_ALLOCATION_ATTEMPTS"
    )
    MAX_INDEX_APPEND_ATTEMPTS: int = Field(
        default=5, validation_alias="MAX_INDEX_APPEND_ATTEMPTS"
    )

    # Logging knobs
    LOGGER_NAME: str = "photo-drop"
    LOG_LEVEL: str = Field(default="INFO", validation_alias="LOG_LEVEL")
    LOG_TO_FILE: bool = Field(default=False, validation_alias="LOG_TO_FILE")
    LOG_DIR: str = Field(default="logs", validation_alias="LOG_DIR")
    LOG_FILE_NAME: str = Field(default="app.log", validation_alias="LOG_FILE_NAME")
    LOG_MAX_BYTES: int = Field(
        default=50 * 1024 * 1024, validation_alias="LOG_MAX_BYTES"
    )
    LOG_BACKUP_COUNT: int = Field(default=5, validation_alias="LOG_BACKUP_COUNT")


try:
    settings = Settings()
except ValidationError as e:
    print("❌ Missing/invalid environment variables:", file=sys.stderr)
    for err in e.errors():
        loc = ".".join(str(x) for x in err.get("loc", []))
        msg = err.get("msg", "")
        print(f" - {loc}: {msg}", file=sys.stderr)
    sys.exit(1)
except Exception as e:
    print(f"❌ Settings initialization failed: {e}", file=sys.stderr)
    sys.exit(1)
