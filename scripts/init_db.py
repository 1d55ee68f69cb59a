from __future__ import annotations

import importlib

from dotenv import load_dotenv

from attendance_payroll.config import get_settings_module
from attendance_payroll.database.bootstrap import apply_schema, list_tables
from attendance_payroll.database.connection import DBConfig


def main() -> None:
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    config = DBConfig.from_dict(dict(settings.DB_CONFIG), timeout_seconds=getattr(settings, "DATASTORE_TIMEOUT_SECONDS", None))

    apply_schema(config)
    tables = list_tables(config)
    print(f"OK: Applied schema.sql -> {config.user}@{config.host}:{config.port}/{config.database} (tables={len(tables)})")


if __name__ == "__main__":
    main()
