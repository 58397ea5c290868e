"""Dashboard-specific exception classes.

This module defines the exceptions raised by the flange dashboard engine.
Validation errors block a user action before any state changes; data source
errors are caught by the record store and shown as a banner; storage errors
never escape the repositories, which fall back to defaults instead.
"""

from typing import Any, Optional


class DashboardError(Exception):
    """Base dashboard exception."""

    def __init__(
        self,
        message: str,
        dashboard_id: Optional[str] = None,
        error_code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.dashboard_id = dashboard_id
        self.error_code = error_code
        self.details = details or {}


class WidgetError(DashboardError):
    """Widget-related errors."""

    def __init__(
        self,
        message: str,
        widget_id: Optional[str] = None,
        widget_type: Optional[str] = None,
        **kwargs,
    ):
        super().__init__(message, **kwargs)
        self.widget_id = widget_id
        self.widget_type = widget_type


class FilterError(DashboardError):
    """Filter configuration errors."""

    def __init__(self, message: str, filter_id: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.filter_id = filter_id


class ValidationError(DashboardError):
    """User input validation errors."""

    def __init__(
        self,
        message: str,
        validation_field: Optional[str] = None,
        validation_rule: Optional[str] = None,
        provided_value: Optional[Any] = None,
        **kwargs,
    ):
        super().__init__(message, **kwargs)
        self.validation_field = validation_field
        self.validation_rule = validation_rule
        self.provided_value = provided_value


class StorageError(DashboardError):
    """Storage and persistence errors."""

    def __init__(
        self,
        message: str,
        storage_type: Optional[str] = None,
        operation: Optional[str] = None,
        **kwargs,
    ):
        super().__init__(message, **kwargs)
        self.storage_type = storage_type
        self.operation = operation


class DataSourceError(DashboardError):
    """Flange log fetch errors."""

    def __init__(
        self,
        message: str,
        source_type: Optional[str] = None,
        url: Optional[str] = None,
        status_code: Optional[int] = None,
        **kwargs,
    ):
        super().__init__(message, **kwargs)
        self.source_type = source_type
        self.url = url
        self.status_code = status_code
