"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
Payroll values can be overridden through the PAYROLL settings dict.
"""

from datetime import time
from decimal import Decimal

DEFAULT_BASE_RATE = Decimal("25")
DEFAULT_OVERTIME_RATE = Decimal("35")
DEFAULT_UNDERTIME_RATE = Decimal("25")
DEFAULT_STAFF_HOUSE_DEDUCTION = Decimal("250")

DEFAULT_SHIFT_START = time(7, 0)
DEFAULT_SHIFT_END = time(15, 30)
DEFAULT_FULL_SHIFT_HOURS = Decimal("8")
DEFAULT_WEEKLY_HOUR_CAP = Decimal("40")
DEFAULT_OVERTIME_GRACE_MINUTES = 30

WEEK_LENGTH_DAYS = 7
MIN_PASSWORD_LENGTH = 6

# Scale of the DECIMAL hour and money columns in the payslips table.
STORED_SCALE = Decimal("0.00000001")
