"""Leasing search constants and defaults."""

from datetime import date
from typing import Dict, List

# Reserved key in the raw vacancy mapping that holds schema metadata
SCHEMA_KEY = "_schema"

# Unparseable publish dates sort as this date (always last in descending order)
EPOCH_DATE = date(1970, 1, 1)

# Defaults (overridable from config.json)
DEFAULT_CACHE_DURATION = 5 * 60  # seconds
DEFAULT_PAGE_SIZE = 20
DEFAULT_SUGGESTION_LIMIT = 10
DEFAULT_MAX_PROBE_ATTEMPTS = 20
DEFAULT_PROBE_TIMEOUT = 5.0
DEFAULT_DEBOUNCE_MS = 200

# Pagination shows the current page and this many neighbours on each side
PAGINATION_WINDOW = 2

# Publisher badge colours, picked by hashing the publisher name
COLOR_PALETTE: List[str] = [
    "#0d6efd",  # blue
    "#198754",  # green
    "#dc3545",  # red
    "#fd7e14",  # orange
    "#6f42c1",  # purple
    "#20c997",  # teal
    "#e83e8c",  # pink
    "#005a2b",  # dark green
    "#6610f2",  # indigo
    "#d63384",  # magenta
    "#0dcaf0",  # cyan
    "#ffc107",  # yellow
    "#6c757d",  # gray
    "#0a58ca",  # dark blue
    "#ab2e3c",  # dark red
    "#087990",  # teal blue
    "#aa6e2e",  # brown
    "#5c636a",  # dark gray
    "#3d8bfd",  # light blue
    "#479f76",  # light green
]

# Viewer keyboard shortcuts -> viewer action
KEY_BINDINGS: Dict[str, str] = {
    "ArrowLeft": "prev_page",
    "ArrowRight": "next_page",
    "ArrowUp": "prev_publisher",
    "ArrowDown": "next_publisher",
    "Escape": "close",
}

# Raw vacancy fields that hold numbers
NUMERIC_VACANCY_FIELDS: List[str] = ["exclusiveArea", "rentArea"]
