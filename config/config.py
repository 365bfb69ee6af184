"""Environment readers shared by the settings modules."""

import os

PAYROLL_ENV_KEYS = (
    "BASE_RATE",
    "OVERTIME_RATE",
    "UNDERTIME_RATE",
    "STAFF_HOUSE_DEDUCTION",
    "SHIFT_START",
    "SHIFT_END",
    "FULL_SHIFT_HOURS",
    "WEEKLY_HOUR_CAP",
    "OVERTIME_GRACE_MINUTES",
    "UNDERTIME_RULE",
    "DUPLICATE_POLICY",
)


def db_config_from_env(*, default_password: str = "", default_database: str = "payroll_db") -> dict:
    return {
        "host": os.getenv("DB_HOST", "localhost"),
        "port": int(os.getenv("DB_PORT", "3306")),
        "user": os.getenv("DB_USER", "root"),
        "password": os.getenv("DB_PASSWORD", default_password),
        "database": os.getenv("DB_NAME", default_database),
    }


def payroll_from_env() -> dict:
    """PAYROLL_* variables that are set, without the prefix; unset keys keep engine defaults."""
    out = {}
    for key in PAYROLL_ENV_KEYS:
        value = os.getenv(f"PAYROLL_{key}")
        if value is not None and value.strip():
            out[key] = value.strip()
    return out
