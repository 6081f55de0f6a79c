"""Runnable example: batched URL status checks over httpx."""

from .status_check import UrlStatus, build_status_tasks, check_urls

__all__ = [
    "UrlStatus",
    "build_status_tasks",
    "check_urls",
]
