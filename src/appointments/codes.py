# This module defines the fixed code sets an appointment may carry.
# It exists so validation, storage, and tests agree on one source of allowed values.

from __future__ import annotations

from enum import Enum
from typing import Final

COLLECTION_ROUTE: Final[str] = "appointments"


class ServiceCode(str, Enum):
    PB = "PB"
    LT = "LT"
    OC = "OC"
    REP = "REP"
    POL = "POL"


class AppointmentStatus(str, Enum):
    NE = "NE"
    VE = "VE"
    ST = "ST"


class Period(str, Enum):
    MORNING = "Morning"
    AFTERNOON = "Afternoon"


DEFAULT_STATUS: Final[str] = AppointmentStatus.NE.value
DEFAULT_SORT_INDEX: Final[int] = 1

SERVICE_CODES: Final[frozenset[str]] = frozenset(code.value for code in ServiceCode)
STATUS_CODES: Final[frozenset[str]] = frozenset(code.value for code in AppointmentStatus)
PERIODS: Final[frozenset[str]] = frozenset(period.value for period in Period)

# Day order, not alphabetical order.
PERIOD_ORDER: Final[tuple[str, ...]] = (Period.MORNING.value, Period.AFTERNOON.value)
