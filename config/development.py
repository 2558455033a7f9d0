import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "insight_edu"),
}

DEBUG = True

# Students reconciled in parallel by the attendance sync job
SYNC_MAX_WORKERS = int(os.getenv("SYNC_MAX_WORKERS", "4"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")
