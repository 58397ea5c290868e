"""Mock flange log data.

There is no flange database yet; records are generated on demand from fixed
vocabularies. A record's ``percent_complete`` is consistent with its status:
100 when Completed, 0 when Not Started, 5-94 otherwise.
"""

from collections.abc import Callable, Sequence
from datetime import datetime, timedelta, timezone
from typing import Any, Optional

import numpy as np

JOB_NUMBERS = ["81148-", "999999", "75432-", "88123-"]
FLANGE_TYPES = ["RFWN", "RFSW", "RFBL", "RFTJ", None]
FLANGE_SIZES = ["6.000", "8.000", "10.000", "12.000", "16.000", None]
FLANGE_RATINGS = ["150", "300", "600", None]
FLANGE_MATERIALS = ["CS", "SS", "AL", None]
GASKET_TYPES = ["SPIRAL WOUND", "RING", "FLAT", None]
GASKET_MATERIALS = ["304SS", "316SS", "GRAPHITE", None]
SYSTEMS = ["CA1-030", "CA1-031", "HY-CB-0262", "Test System", "Main System"]
STATUSES = ["Completed", "In Progress", "Not Started", "Delayed", "On Hold"]
INSPECTION_STATUSES = ["Passed", "Failed", "Pending", "Not Inspected"]
CLIENTS = ["OCI Clean Ammonia LLC", "Test", "Client A", "Client B"]
USERS = ["cmccall", "test", "user1", "user2"]

# Records every demo data set starts with
FIXED_RECORDS: list[dict[str, Any]] = [
    {
        "id": 1,
        "job_number": "81148-",
        "flange_number": 3389,
        "status": "Completed",
        "percent_complete": 100,
        "system": "CA1-030",
        "flange_type": "RFWN",
        "flange_size": "16.000",
        "flange_rating": "300",
        "flange_material": "CS",
        "created_at": "2025-05-17T06:23:07.993Z",
        "updated_at": "2025-05-17T19:23:55.850Z",
        "inspection_status": "Passed",
    },
    {
        "id": 2,
        "job_number": "81148-",
        "flange_number": 3388,
        "status": "In Progress",
        "percent_complete": 60,
        "system": "CA1-030",
        "flange_type": "RFWN",
        "flange_size": "10.000",
        "flange_rating": "300",
        "flange_material": "CS",
        "created_at": "2025-05-17T06:23:07.993Z",
        "updated_at": "2025-05-17T19:23:55.850Z",
        "inspection_status": "Pending",
    },
    {
        "id": 3,
        "job_number": "81148-",
        "flange_number": 3387,
        "status": "Not Started",
        "percent_complete": 0,
        "system": "CA1-030",
        "flange_type": "RFWN",
        "flange_size": "10.000",
        "flange_rating": "300",
        "flange_material": "CS",
        "created_at": "2025-05-17T06:23:07.993Z",
        "updated_at": "2025-05-17T19:23:55.850Z",
        "inspection_status": "Not Inspected",
    },
    {
        "id": 4,
        "job_number": "999999",
        "flange_number": 6,
        "status": "Completed",
        "percent_complete": 100,
        "system": "Test System",
        "flange_type": None,
        "flange_size": None,
        "flange_rating": None,
        "flange_material": None,
        "created_at": "2025-05-17T15:25:22.284Z",
        "updated_at": "2025-05-17T15:25:22.284Z",
        "inspection_status": "Passed",
    },
]

DEMO_GENERATED_COUNT = 20


def _choice(rng: np.random.Generator, options: Sequence[Any]) -> Any:
    return options[int(rng.integers(len(options)))]


def percent_complete_for(status: str, rng: np.random.Generator) -> int:
    """Completion percentage consistent with a status."""
    if status == "Completed":
        return 100
    if status == "Not Started":
        return 0
    return int(rng.integers(5, 95))


def _days_ago(now: datetime, rng: np.random.Generator, max_days: int) -> str:
    moment = now - timedelta(days=int(rng.integers(max_days)))
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def generate_mock_flange_data(
    count: int = 100,
    rng: Optional[np.random.Generator] = None,
    clock: Callable[[], datetime] = _utc_now,
) -> list[dict[str, Any]]:
    """Generate full flange log rows with ids ``1..count``.

    Args:
        count: Number of records
        rng: Random generator (unseeded if omitted)
        clock: Current time, used for the relative timestamps

    Returns:
        List of record dictionaries
    """
    rng = rng if rng is not None else np.random.default_rng()
    now = clock()
    data = []

    for i in range(max(count, 0)):
        status = _choice(rng, STATUSES)
        data.append(
            {
                "id": i + 1,
                "job": _choice(rng, JOB_NUMBERS),
                "job_number": _choice(rng, JOB_NUMBERS),
                "drawing_id": (
                    f"{int(rng.integers(999))}-{int(rng.integers(16**5)):05x}"
                    if rng.random() > 0.3
                    else None
                ),
                "flange_number": int(rng.integers(1, 5001)),
                "flange_type": _choice(rng, FLANGE_TYPES),
                "flange_size": _choice(rng, FLANGE_SIZES),
                "flange_rating": _choice(rng, FLANGE_RATINGS),
                "flange_material": _choice(rng, FLANGE_MATERIALS),
                "gasket_type": _choice(rng, GASKET_TYPES),
                "gasket_material": _choice(rng, GASKET_MATERIALS),
                "created_at": _days_ago(now, rng, 30),
                "created_by": _choice(rng, USERS),
                "updated_at": _days_ago(now, rng, 10),
                "updated_by": _choice(rng, USERS),
                "primary_scope": "TCM" if rng.random() > 0.5 else None,
                "system_no": _choice(rng, SYSTEMS),
                "system": _choice(rng, SYSTEMS),
                "client": _choice(rng, CLIENTS),
                "status": status,
                "percent_complete": percent_complete_for(status, rng),
                "inspection_status": _choice(rng, INSPECTION_STATUSES),
                "inspection_date": _days_ago(now, rng, 20) if rng.random() > 0.5 else None,
                "line_number": (
                    f"LINE-{int(rng.integers(999))}" if rng.random() > 0.3 else None
                ),
            }
        )

    return data


def demo_flange_records(
    rng: Optional[np.random.Generator] = None,
    clock: Callable[[], datetime] = _utc_now,
) -> list[dict[str, Any]]:
    """The fixed records followed by generated ones with ids 5 onward."""
    rng = rng if rng is not None else np.random.default_rng()
    now = clock()
    records = [dict(record) for record in FIXED_RECORDS]

    for i in range(DEMO_GENERATED_COUNT):
        status = _choice(rng, STATUSES)
        records.append(
            {
                "id": len(FIXED_RECORDS) + 1 + i,
                "job_number": "999999" if rng.random() > 0.7 else "81148-",
                "flange_number": 1000 + i,
                "status": status,
                "percent_complete": percent_complete_for(status, rng),
                "system": _choice(rng, SYSTEMS),
                "flange_type": _choice(rng, FLANGE_TYPES),
                "flange_size": _choice(rng, FLANGE_SIZES),
                "flange_rating": "300" if rng.random() > 0.3 else "150",
                "flange_material": _choice(rng, FLANGE_MATERIALS),
                "created_at": _days_ago(now, rng, 30),
                "updated_at": _days_ago(now, rng, 10),
                "inspection_status": _choice(rng, INSPECTION_STATUSES),
            }
        )

    return records
