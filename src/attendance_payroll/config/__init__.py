import os


def get_settings_module() -> str:
    # APP_ENV picks the settings module; anything unrecognised falls back to development.
    env = os.getenv("APP_ENV", "development").lower()

    if env in {"prod", "production"}:
        return "attendance_payroll.config.production"

    if env in {"test", "testing"}:
        return "attendance_payroll.config.testing"

    return "attendance_payroll.config.development"
