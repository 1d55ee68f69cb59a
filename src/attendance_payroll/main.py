from __future__ import annotations

import importlib
import logging

from dotenv import load_dotenv

from .config import get_settings_module
from .container import Container, build_container, build_memory_container
from .core.constants import DEFAULT_DATASTORE_TIMEOUT_SECONDS, DEFAULT_TAX_RATE
from .database.bootstrap import apply_schema, list_tables
from .database.connection import DBConfig
from .operations import CoreOperations

logger = logging.getLogger("attendance_payroll")


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def create_container(settings_module: str | None = None) -> Container:
    load_dotenv(override=False)

    settings_module = settings_module or get_settings_module()
    settings = importlib.import_module(settings_module)
    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    timeout = float(getattr(settings, "DATASTORE_TIMEOUT_SECONDS", DEFAULT_DATASTORE_TIMEOUT_SECONDS))
    tax_rate = getattr(settings, "TAX_RATE", DEFAULT_TAX_RATE)
    persistence = str(getattr(settings, "PERSISTENCE", "mysql")).lower()

    if persistence == "memory":
        logger.info("settings=%s persistence=memory", settings_module)
        return build_memory_container(timeout_seconds=timeout, tax_rate=tax_rate)

    db_config = dict(getattr(settings, "DB_CONFIG"))
    logger.info(
        "settings=%s db=%s@%s:%s/%s",
        settings_module,
        db_config.get("user"),
        db_config.get("host"),
        db_config.get("port", 3306),
        db_config.get("database"),
    )

    if bool(getattr(settings, "AUTO_INIT_DB", False)):
        config = DBConfig.from_dict(db_config, timeout_seconds=timeout)
        apply_schema(config)
        logger.info("schema ready (tables=%s)", len(list_tables(config)))

    return build_container(db_config=db_config, timeout_seconds=timeout, tax_rate=tax_rate)


def create_core(settings_module: str | None = None) -> CoreOperations:
    return CoreOperations(create_container(settings_module))
