import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "insight_edu"),
}

DEBUG = False

SYNC_MAX_WORKERS = int(os.getenv("SYNC_MAX_WORKERS", "8"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
