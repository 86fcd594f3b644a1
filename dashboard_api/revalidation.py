"""
Signals to the dashboard front end that a rendered page is stale.

The front end keeps rendered pages in its own cache; after a mutation the
affected path is posted to its revalidation webhook so the next visit
renders fresh data. This layer keeps no cache of its own.
"""

from abc import ABC, abstractmethod
from typing import Optional

import requests

from .config import Settings
from .errors import RevalidationError
from .logs import logger

log = logger(__name__)


class ViewRevalidator(ABC):

    @abstractmethod
    def revalidate_path(self, path: str) -> None:
        """Mark the view rendered at ``path`` as stale"""


class HttpViewRevalidator(ViewRevalidator):

    def __init__(self, url: str, token: Optional[str] = None, timeout: float = 5.0):
        self.url = url
        self.token = token
        self.timeout = timeout

    def revalidate_path(self, path: str) -> None:
        headers = {"Content-Type": "application/json"}
        if self.token:
            headers["x-revalidate-token"] = self.token
        try:
            r = requests.post(self.url, headers=headers, json={"path": path}, timeout=self.timeout)
            r.raise_for_status()
        except requests.RequestException as e:
            raise RevalidationError(f"Failed to revalidate {path}: {e}") from e
        log.debug("Revalidated %s", path)


class LoggingViewRevalidator(ViewRevalidator):
    """Used when no revalidation webhook is configured"""

    def revalidate_path(self, path: str) -> None:
        log.info("No revalidation webhook configured; %s not refreshed", path)


def revalidator_from_settings(settings: Settings) -> ViewRevalidator:
    if settings.revalidate_url:
        return HttpViewRevalidator(settings.revalidate_url, settings.revalidate_token)
    return LoggingViewRevalidator()
