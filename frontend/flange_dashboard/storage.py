"""Dashboard and layout persistence.

Dashboards and the flange page layout are stored as JSON blobs under fixed
keys in a key-value store. Loading never fails: a missing or unreadable blob
is replaced by the built-in defaults. Saving is fire-and-forget; a failed
write is logged and reported through the return value.
"""

import json
from pathlib import Path
from typing import Callable, Optional, Protocol

from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from shared.logging.config import get_logger

from .exceptions import StorageError
from .models import WIDGET_LIST_ADAPTER, Dashboard
from .templates import default_column_settings, default_widgets, sample_dashboards

logger = get_logger(__name__)

DASHBOARDS_KEY = "flange-dashboards"
LAYOUT_KEY = "flange-dashboard-layout"
COLUMNS_KEY = "flange-dashboard-columns"

DASHBOARD_LIST_ADAPTER: TypeAdapter = TypeAdapter(list[Dashboard])
COLUMN_SETTINGS_ADAPTER: TypeAdapter = TypeAdapter(dict[str, bool])


class KeyValueStore(Protocol):
    """String blobs under string keys."""

    def get(self, key: str) -> Optional[str]: ...

    def set(self, key: str, value: str) -> None: ...

    def delete(self, key: str) -> None: ...


class InMemoryKeyValueStore:
    """Process-local store, used for tests and a single Streamlit session."""

    def __init__(self, initial: Optional[dict[str, str]] = None):
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def delete(self, key: str) -> None:
        self._data.pop(key, None)


class JsonFileKeyValueStore:
    """One ``<key>.json`` file per key inside a storage directory."""

    def __init__(self, storage_path: Optional[Path] = None):
        """Initialize file store.

        Args:
            storage_path: Directory holding the blobs (created on demand)
        """
        self.storage_path = Path(storage_path or "./dashboard_data")
        self.storage_path.mkdir(parents=True, exist_ok=True)

    def _path(self, key: str) -> Path:
        return self.storage_path / f"{key}.json"

    def get(self, key: str) -> Optional[str]:
        path = self._path(key)
        if not path.exists():
            return None
        try:
            return path.read_text(encoding="utf-8")
        except OSError as e:
            raise StorageError(
                f"Failed to read {path}: {e}", storage_type="file", operation="get"
            ) from e

    def set(self, key: str, value: str) -> None:
        path = self._path(key)
        try:
            path.write_text(value, encoding="utf-8")
        except OSError as e:
            raise StorageError(
                f"Failed to write {path}: {e}", storage_type="file", operation="set"
            ) from e

    def delete(self, key: str) -> None:
        path = self._path(key)
        try:
            path.unlink(missing_ok=True)
        except OSError as e:
            raise StorageError(
                f"Failed to delete {path}: {e}", storage_type="file", operation="delete"
            ) from e


def _read(store: KeyValueStore, key: str) -> Optional[str]:
    try:
        return store.get(key)
    except StorageError as e:
        logger.error("Failed to read stored blob", key=key, error=e.message)
        return None


def _write(store: KeyValueStore, key: str, value: str) -> bool:
    try:
        store.set(key, value)
    except StorageError as e:
        logger.error("Failed to persist blob", key=key, error=e.message)
        return False
    return True


class DashboardRepository:
    """Saved dashboards, stored together as one list."""

    def __init__(
        self,
        store: KeyValueStore,
        defaults: Callable[[], list[Dashboard]] = sample_dashboards,
    ):
        self.store = store
        self.defaults = defaults

    def load(self) -> list[Dashboard]:
        """Stored dashboards, or the sample dashboards if none are stored or the blob is bad."""
        raw = _read(self.store, DASHBOARDS_KEY)
        if raw is None:
            return self.defaults()

        try:
            return DASHBOARD_LIST_ADAPTER.validate_json(raw)
        except PydanticValidationError as e:
            logger.error(
                "Failed to parse saved dashboards, using defaults",
                key=DASHBOARDS_KEY,
                error_count=e.error_count(),
            )
            return self.defaults()

    def save_all(self, dashboards: list[Dashboard]) -> bool:
        """Replace the stored list."""
        blob = json.dumps([dashboard.to_blob() for dashboard in dashboards])
        saved = _write(self.store, DASHBOARDS_KEY, blob)
        if saved:
            logger.debug("Dashboards saved", count=len(dashboards))
        return saved

    def upsert(self, dashboards: list[Dashboard], dashboard: Dashboard) -> list[Dashboard]:
        """Replace the dashboard with the same id in place, or append it; then persist."""
        updated = list(dashboards)
        for index, existing in enumerate(updated):
            if existing.id == dashboard.id:
                updated[index] = dashboard
                break
        else:
            updated.append(dashboard)

        self.save_all(updated)
        return updated

    def delete(self, dashboards: list[Dashboard], dashboard_id: str) -> list[Dashboard]:
        """Drop the dashboard with the given id, then persist (including an empty list)."""
        updated = [d for d in dashboards if d.id != dashboard_id]
        self.save_all(updated)
        return updated


class LayoutRepository:
    """Widget layout and table column settings of the flange dashboard page."""

    def __init__(self, store: KeyValueStore):
        self.store = store

    def load_widgets(self) -> list:
        """Stored layout, or the default widgets."""
        raw = _read(self.store, LAYOUT_KEY)
        if raw is None:
            return default_widgets()

        try:
            return WIDGET_LIST_ADAPTER.validate_json(raw)
        except PydanticValidationError as e:
            logger.error(
                "Failed to parse saved layout, using defaults",
                key=LAYOUT_KEY,
                error_count=e.error_count(),
            )
            return default_widgets()

    def save_widgets(self, widgets: list) -> bool:
        """Persist the layout; an empty layout is not written, so the defaults return on reload."""
        if not widgets:
            return False
        blob = WIDGET_LIST_ADAPTER.dump_json(widgets, by_alias=True).decode("utf-8")
        return _write(self.store, LAYOUT_KEY, blob)

    def load_column_settings(self) -> dict[str, bool]:
        """Stored column visibility, or every column visible."""
        raw = _read(self.store, COLUMNS_KEY)
        if raw is None:
            return default_column_settings()

        try:
            return COLUMN_SETTINGS_ADAPTER.validate_json(raw)
        except PydanticValidationError as e:
            logger.error(
                "Failed to parse saved column settings, using defaults",
                key=COLUMNS_KEY,
                error_count=e.error_count(),
            )
            return default_column_settings()

    def save_column_settings(self, column_settings: dict[str, bool]) -> bool:
        return _write(self.store, COLUMNS_KEY, json.dumps(column_settings))
