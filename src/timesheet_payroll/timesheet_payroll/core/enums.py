from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User role used for endpoint gating."""

    ADMIN = "admin"
    EMPLOYEE = "employee"


class UndertimeRule(str, Enum):
    """How undertime hours are accrued per time entry.

    SHORTFALL: hours short of a full shift on non-overtime entries.
    BOUNDARY: shortfall plus lateness/earliness against the shift window
        (both fire on the same entry, so undertime is counted twice).
    BOUNDARY_ONLY: lateness/earliness against the shift window only.
    """

    SHORTFALL = "shortfall"
    BOUNDARY = "boundary"
    BOUNDARY_ONLY = "boundary_only"


class DuplicatePolicy(str, Enum):
    """What payslip generation does when a (user, week) payslip already exists."""

    APPEND = "append"
    REJECT = "reject"
    REPLACE = "replace"


class ResultStatus(str, Enum):
    OK = "ok"
    EMPTY = "empty"
    FAULT = "fault"
