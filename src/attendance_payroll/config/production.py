import os

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "payroll"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "payroll_db"),
}

PERSISTENCE = os.getenv("PERSISTENCE", "mysql")

DATASTORE_TIMEOUT_SECONDS = float(os.getenv("DATASTORE_TIMEOUT_SECONDS", "5"))
TAX_RATE = os.getenv("TAX_RATE", "0.10")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

DEBUG = False

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
