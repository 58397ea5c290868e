"""Color assignment for breakdown labels.

Status-like fields use fixed lookup tables. Open-ended fields (type, size,
material) pick from a fixed palette by hashing the label, so the same label
gets the same color on every render regardless of group order.
"""

DEFAULT_COLOR = "#cbd5e1"  # slate-300

STATUS_COLORS = {
    "Completed": "#22c55e",  # green-500
    "In Progress": "#3b82f6",  # blue-500
    "Not Started": "#94a3b8",  # slate-400
    "Delayed": "#ef4444",  # red-500
    "On Hold": "#eab308",  # yellow-500
    "Pending Inspection": "#a855f7",  # purple-500
    "Failed Inspection": "#f59e0b",  # amber-500
    "Unknown": DEFAULT_COLOR,
}

INSPECTION_STATUS_COLORS = {
    "Passed": "#22c55e",  # green-500
    "Failed": "#ef4444",  # red-500
    "Pending": "#3b82f6",  # blue-500
    "Not Required": "#94a3b8",  # slate-400
    "Not Inspected": DEFAULT_COLOR,
}

PALETTE = [
    "#3b82f6",  # blue-500
    "#22c55e",  # green-500
    "#ef4444",  # red-500
    "#eab308",  # yellow-500
    "#a855f7",  # purple-500
    "#f59e0b",  # amber-500
    "#ec4899",  # pink-500
    "#14b8a6",  # teal-500
    "#f97316",  # orange-500
    "#8b5cf6",  # violet-500
]

# Tailwind-style color names used by summary card icons
ICON_COLORS = {
    "blue": "#3b82f6",
    "green": "#22c55e",
    "red": "#ef4444",
    "orange": "#f97316",
    "yellow": "#eab308",
    "purple": "#a855f7",
    "gray": "#94a3b8",
}


def get_status_color(status: str) -> str:
    """Color for a lifecycle status label."""
    return STATUS_COLORS.get(status, DEFAULT_COLOR)


def get_inspection_status_color(status: str) -> str:
    """Color for an inspection status label."""
    return INSPECTION_STATUS_COLORS.get(status, DEFAULT_COLOR)


def get_icon_color(name: str) -> str:
    """Hex value for a summary icon color name; unknown names map to gray."""
    return ICON_COLORS.get(name, ICON_COLORS["gray"])


def _to_int32(value: int) -> int:
    value &= 0xFFFFFFFF
    return value - 0x100000000 if value & 0x80000000 else value


def label_hash(label: str) -> int:
    """String hash ``hash = code + ((hash << 5) - hash)`` over UTF-16 code units.

    Only the shift wraps to 32 bits; the subtraction and addition do not, so
    the result matches what browsers compute for the same label.
    """
    encoded = label.encode("utf-16-le")
    value = 0
    for i in range(0, len(encoded), 2):
        code = encoded[i] | (encoded[i + 1] << 8)
        value = code + (_to_int32(_to_int32(value) << 5) - value)
    return value


def hash_color(label: str) -> str:
    """Stable palette color for a free-form label."""
    return PALETTE[abs(label_hash(label)) % len(PALETTE)]
