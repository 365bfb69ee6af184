"""Create the payroll schema (and optionally the demo accounts) for APP_ENV."""

from __future__ import annotations

import argparse
import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.timesheet_payroll.timesheet_payroll.database.bootstrap import (
    DEMO_USERS,
    apply_schema,
    ensure_demo_users,
    list_tables,
)


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--seed", action="store_true", help="also create the demo admin/employee accounts")
    args = parser.parse_args(argv)

    settings_module = get_settings_module()
    db_config = dict(importlib.import_module(settings_module).DB_CONFIG)
    target = f"{db_config.get('user')}@{db_config.get('host')}:{db_config.get('port', 3306)}/{db_config.get('database')}"

    apply_schema(db_config, schema_path=REPO_ROOT / "database" / "schema.sql")
    print(f"schema applied to {target} ({len(list_tables(db_config))} tables, settings={settings_module})")

    if args.seed:
        ensure_demo_users(db_config)
        print("demo users ready: " + ", ".join(u[0] for u in DEMO_USERS))
    return 0


if __name__ == "__main__":
    sys.exit(main())
