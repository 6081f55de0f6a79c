import os
from typing import Literal

from dotenv import load_dotenv
from pydantic import BaseModel, Field

load_dotenv()

# Env vars: BATCH_CONCURRENCY_RATE, BATCH_LOG_TRACEBACKS, LOG_LEVEL
_TRUTHY = {"1", "true", "yes", "on"}

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class BatchSettings(BaseModel):
    """Validated view of the environment-backed batch settings."""

    concurrency_rate: int = Field(default=5, ge=1, description="Tasks started together in one batch")
    log_tracebacks: bool = Field(default=False, description="Attach tracebacks to swallowed task failures")
    log_level: LogLevel = Field(default="INFO", description="Root log level for the demo runner")


def load_settings() -> BatchSettings:
    """Build settings from the current environment."""
    return BatchSettings(
        concurrency_rate=os.getenv("BATCH_CONCURRENCY_RATE", "5"),
        log_tracebacks=os.getenv("BATCH_LOG_TRACEBACKS", "false"),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
    )


def log_tracebacks_enabled() -> bool:
    """Read only the traceback flag; never fails on unrelated settings."""
    return os.getenv("BATCH_LOG_TRACEBACKS", "false").strip().lower() in _TRUTHY


DEFAULT_CONCURRENCY_RATE = load_settings().concurrency_rate
