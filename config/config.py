import os


def db_config_from_env(*, default_password: str = "") -> dict:
    return {
        "host": os.getenv("DB_HOST", "localhost"),
        "port": int(os.getenv("DB_PORT", "3306")),
        "user": os.getenv("DB_USER", "root"),
        "password": os.getenv("DB_PASSWORD", default_password),
        "database": os.getenv("DB_NAME", "leave_portal"),
    }


# "APPROVED", "PENDING", "REJECTED" or "ALL"
CALENDAR_DEFAULT_STATUS = os.getenv("CALENDAR_DEFAULT_STATUS", "APPROVED").upper()
