import os
import yaml

ROOT_PATH = os.path.dirname(__file__)
CONFIG_FILE_PATH = os.path.join(ROOT_PATH, "env.yaml")

if os.path.exists(CONFIG_FILE_PATH):
    with open(CONFIG_FILE_PATH, "r") as r_file:
        data = yaml.safe_load(r_file) or dict()
else:
    data = dict()


class ApplicationConfig:
    DB_URI = data.get("DB_URI", "sqlite+aiosqlite:///./invoicing.db")
    DB_ECHO = bool(data.get("DB_ECHO", False))
    # SQLite only: seconds a writer waits on a locked database before failing
    DB_BUSY_TIMEOUT_SECONDS = float(data.get("DB_BUSY_TIMEOUT_SECONDS", 5))
    API_PREFIX = data.get("API_PREFIX", "/api")
    API_PORT = data.get("API_PORT", 8000)
    API_HOST = data.get("API_HOST", "0.0.0.0")
    API_RELOAD = bool(data.get("API_RELOAD", False))
    API_WORKERS = int(data.get("API_WORKERS", 1))
    CORS_ORIGINS = data.get("CORS_ORIGINS", [])
    CORS_ALLOW_CREDENTIALS = data.get("CORS_ALLOW_CREDENTIALS", True)
    LOG_LEVEL = data.get("LOG_LEVEL", "INFO")
    ENABLE_LOGGING_MIDDLEWARE = bool(data.get("ENABLE_LOGGING_MIDDLEWARE", 1))
    ENABLE_SENTRY = data.get("ENABLE_SENTRY", 0)
    DSN_SENTRY = data.get("DSN_SENTRY", "")
    SENTRY_ENVIRONMENT = data.get("SENTRY_ENVIRONMENT", "dev")

    # Transaction retry on write conflicts
    TRANSACTION_MAX_ATTEMPTS = int(data.get("TRANSACTION_MAX_ATTEMPTS", 10))
    TRANSACTION_RETRY_BASE_DELAY = float(data.get("TRANSACTION_RETRY_BASE_DELAY", 0.01))  # Seconds

    # Invoice presentation
    DEFAULT_CURRENCY = data.get("DEFAULT_CURRENCY", "AUD")

    # Overdue sweep worker
    OVERDUE_SWEEP_ENABLED = bool(data.get("OVERDUE_SWEEP_ENABLED", True))
    OVERDUE_SWEEP_INTERVAL_SECONDS = data.get("OVERDUE_SWEEP_INTERVAL_SECONDS", 3600)  # Hourly
