"""Saved dashboards, the active selection, and the records they render."""

from typing import Optional

from shared.logging.config import get_logger

from .models import Dashboard
from .records import RecordStore
from .storage import DashboardRepository

logger = get_logger(__name__)


class DashboardManager:
    """Coordinates the dashboard repository with the record store."""

    def __init__(self, repository: DashboardRepository, record_store: RecordStore):
        """Initialize manager; loads dashboards and activates the first one.

        Args:
            repository: Dashboard persistence
            record_store: Flange records shared by every dashboard
        """
        self.repository = repository
        self.record_store = record_store
        self.dashboards: list[Dashboard] = repository.load()
        self.active_dashboard_id: Optional[str] = (
            self.dashboards[0].id if self.dashboards else None
        )

    @property
    def active_dashboard(self) -> Optional[Dashboard]:
        return self.get(self.active_dashboard_id) if self.active_dashboard_id else None

    def get(self, dashboard_id: str) -> Optional[Dashboard]:
        return next((d for d in self.dashboards if d.id == dashboard_id), None)

    def set_active(self, dashboard_id: str) -> bool:
        if self.get(dashboard_id) is None:
            logger.warning("Cannot activate unknown dashboard", dashboard_id=dashboard_id)
            return False
        self.active_dashboard_id = dashboard_id
        return True

    def save(self, dashboard: Dashboard) -> Dashboard:
        """Insert or replace a dashboard and make it active."""
        self.dashboards = self.repository.upsert(self.dashboards, dashboard)
        self.active_dashboard_id = dashboard.id
        logger.info("Dashboard saved", dashboard_id=dashboard.id, name=dashboard.name)
        return dashboard

    def delete(self, dashboard_id: str) -> bool:
        """Delete a dashboard; if it was active, the first remaining one becomes active."""
        if self.get(dashboard_id) is None:
            return False

        self.dashboards = self.repository.delete(self.dashboards, dashboard_id)
        if self.active_dashboard_id == dashboard_id:
            self.active_dashboard_id = self.dashboards[0].id if self.dashboards else None

        logger.info("Dashboard deleted", dashboard_id=dashboard_id)
        return True

    def refresh(self) -> bool:
        """Reload flange records."""
        return self.record_store.refresh()
