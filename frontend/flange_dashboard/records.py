"""Flange record loading.

Loaders fetch the full record collection; ``RecordStore`` holds the last
good result and the loading and error state the pages display.
"""

import threading
import time
from collections.abc import Callable
from datetime import datetime
from typing import Any, Optional, Protocol

import requests
from pydantic import ValidationError as PydanticValidationError

from backend.flange_log.generator import demo_flange_records
from shared.config.settings import settings
from shared.logging.config import get_logger, log_performance

from .exceptions import DataSourceError
from .models import FlangeLogResponse

logger = get_logger(__name__)

FETCH_ERROR_MESSAGE = "Failed to fetch flange data"
UNKNOWN_ERROR_MESSAGE = "An unknown error occurred"


class RecordLoader(Protocol):
    """Source of the full flange record collection."""

    def load(self) -> list[dict[str, Any]]: ...


class FlangeLogClient:
    """Loads records from the flange log HTTP API."""

    def __init__(
        self,
        base_url: str,
        limit: Optional[int] = None,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ):
        """Initialize client.

        Args:
            base_url: API root, e.g. ``http://localhost:8000``
            limit: Records to request (dashboard fetch limit if omitted)
            timeout: Request timeout in seconds
            session: HTTP session to reuse
        """
        self.url = base_url.rstrip("/") + settings.flange_log_path
        self.limit = limit or settings.dashboard_fetch_limit
        self.timeout = timeout or settings.api_timeout_seconds
        self.session = session or requests.Session()

    def load(self) -> list[dict[str, Any]]:
        """Fetch records.

        Raises:
            DataSourceError: On transport errors, non-2xx responses, or bad payloads
        """
        try:
            response = self.session.get(
                self.url, params={"limit": self.limit}, timeout=self.timeout
            )
        except requests.RequestException as e:
            raise DataSourceError(
                FETCH_ERROR_MESSAGE, source_type="http", url=self.url, details={"reason": str(e)}
            ) from e

        if not response.ok:
            raise DataSourceError(
                FETCH_ERROR_MESSAGE,
                source_type="http",
                url=self.url,
                status_code=response.status_code,
            )

        try:
            payload = FlangeLogResponse.model_validate(response.json())
        except (ValueError, PydanticValidationError) as e:
            raise DataSourceError(
                "Malformed flange log response",
                source_type="http",
                url=self.url,
                status_code=response.status_code,
            ) from e

        if not payload.success:
            raise DataSourceError(
                payload.error or FETCH_ERROR_MESSAGE, source_type="http", url=self.url
            )

        return [record.model_dump() for record in payload.data]


class MockFlangeLoader:
    """Built-in demo records served after an artificial delay."""

    def __init__(
        self,
        delay: Optional[float] = None,
        records_factory: Callable[[], list[dict[str, Any]]] = demo_flange_records,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.delay = settings.mock_loader_delay_seconds if delay is None else delay
        self.records_factory = records_factory
        self.sleep = sleep
        self._records: Optional[list[dict[str, Any]]] = None

    def load(self) -> list[dict[str, Any]]:
        if self.delay > 0:
            self.sleep(self.delay)
        # The demo set is generated once so refreshes return the same records
        if self._records is None:
            self._records = self.records_factory()
        return [dict(record) for record in self._records]


def default_loader() -> RecordLoader:
    """HTTP client when an API URL is configured, otherwise the demo loader."""
    if settings.flange_api_url:
        return FlangeLogClient(settings.flange_api_url)
    return MockFlangeLoader()


class RecordStore:
    """Current flange records with loading and error state.

    A refresh requested while another is running is ignored. A failed
    refresh keeps the previous records and sets ``error``; a successful one
    clears it.
    """

    def __init__(self, loader: Optional[RecordLoader] = None):
        self.loader = loader or default_loader()
        self.records: list[dict[str, Any]] = []
        self.error: Optional[str] = None
        self.last_loaded_at: Optional[datetime] = None
        self._lock = threading.Lock()

    @property
    def is_loading(self) -> bool:
        return self._lock.locked()

    def refresh(self) -> bool:
        """Reload records from the loader.

        Returns:
            True if a load ran (successfully or not), False if one was already running
        """
        if not self._lock.acquire(blocking=False):
            logger.info("Refresh already in progress, ignoring request")
            return False

        start = time.perf_counter()
        try:
            records = self.loader.load()
        except DataSourceError as e:
            self.error = e.message
            logger.error(
                "Failed to load flange records",
                error=e.message,
                url=e.url,
                status_code=e.status_code,
            )
            log_performance("flange_records_load", time.perf_counter() - start, success=False)
        except Exception as e:
            self.error = str(e) or UNKNOWN_ERROR_MESSAGE
            logger.error("Unexpected error loading flange records", error=str(e), exc_info=True)
            log_performance("flange_records_load", time.perf_counter() - start, success=False)
        else:
            self.records = records
            self.error = None
            self.last_loaded_at = datetime.now()
            log_performance(
                "flange_records_load", time.perf_counter() - start, count=len(records)
            )
        finally:
            self._lock.release()

        return True
