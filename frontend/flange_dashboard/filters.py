"""Dashboard filter evaluation.

Filters are field-equality constraints combined with AND. The sentinel value
``"all"`` disables a filter. Filter ids without a record field (``date_range``)
are declared for the builder but never constrain records.
"""

import logging
from collections.abc import Iterable, Mapping, Sequence
from typing import Any, Optional

from .models import DashboardFilter

logger = logging.getLogger(__name__)

ALL = "all"

# Filter id -> record field it constrains
FILTER_FIELDS = {
    "job": "job_number",
    "system": "system",
    "flange_type": "flange_type",
    "flange_size": "flange_size",
    "flange_material": "flange_material",
}

AVAILABLE_FILTERS = [
    {"id": "job", "name": "Job Number"},
    {"id": "system", "name": "System"},
    {"id": "flange_type", "name": "Flange Type"},
    {"id": "flange_size", "name": "Flange Size"},
    {"id": "flange_material", "name": "Flange Material"},
    {"id": "date_range", "name": "Date Range"},
]

# A plain mapping or a FlangeRecord model
Record = Any


def get_filter_name(filter_id: str) -> str:
    """Display name for a filter id, falling back to the id itself."""
    for option in AVAILABLE_FILTERS:
        if option["id"] == filter_id:
            return option["name"]
    return filter_id


def _active_constraints(active_filters: Mapping[str, str]) -> list[tuple[str, str]]:
    constraints = []
    for filter_id, value in active_filters.items():
        if value == ALL:
            continue
        field = FILTER_FIELDS.get(filter_id)
        if field is None:
            logger.debug(f"Ignoring filter without a record field: {filter_id}")
            continue
        constraints.append((field, value))
    return constraints


def _field_value(record: Any, field: str) -> Any:
    # Accepts plain mappings and FlangeRecord models alike
    if isinstance(record, Mapping):
        return record.get(field)
    return getattr(record, field, None)


def _matches(record: Any, constraints: list[tuple[str, str]]) -> bool:
    # Absent fields read as None, which never equals a selected value
    return all(_field_value(record, field) == value for field, value in constraints)


def apply_filters(records: Sequence[Record], active_filters: Mapping[str, str]) -> list[Record]:
    """Return the records matching every active filter.

    Args:
        records: Full record collection
        active_filters: Filter id -> selected value, or ``"all"``

    Returns:
        New list of matching records in their original order
    """
    constraints = _active_constraints(active_filters)
    if not constraints:
        return list(records)
    return [record for record in records if _matches(record, constraints)]


def get_filter_options(records: Iterable[Record], filter_id: str) -> list[Any]:
    """Distinct non-empty values of a filter's field, sorted ascending.

    Options always come from the unfiltered records so that choosing one
    filter does not hide the choices of another.
    """
    field = FILTER_FIELDS.get(filter_id)
    if field is None:
        return []

    options = {_field_value(record, field) for record in records}
    return sorted((value for value in options if value), key=str)


def initial_filter_values(filters: Iterable[DashboardFilter]) -> dict[str, str]:
    """Selection state with every enabled filter set to ``"all"``."""
    return {f.id: ALL for f in filters if f.enabled}


def sync_filter_values(
    filters: Iterable[DashboardFilter], stored: Optional[Mapping[str, str]]
) -> dict[str, str]:
    """Selection state for the dashboard's current filters.

    Every enabled filter starts at ``"all"``; a stored selection is kept only
    while its filter is still enabled, so a disabled or removed filter stops
    constraining records.
    """
    values = initial_filter_values(filters)
    for filter_id, value in (stored or {}).items():
        if filter_id in values:
            values[filter_id] = value
    return values


def update_filter_value(
    active_filters: Mapping[str, str], filter_id: str, value: Optional[str]
) -> dict[str, str]:
    """Copy of the selection state with one filter changed; ``None`` means all."""
    updated = dict(active_filters)
    updated[filter_id] = value if value is not None else ALL
    return updated
