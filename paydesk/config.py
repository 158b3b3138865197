# paydesk/config.py
import os
from dotenv import load_dotenv

load_dotenv()

def _as_bool(val: str | None, default=False) -> bool:
    if val is None:
        return default
    return str(val).strip().lower() in {"1", "true", "yes", "on"}

class Config:
    # --- Core ---
    SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-change-me")
    APP_VERSION = os.getenv("APP_VERSION")
    ENV = os.getenv("ENV", "development")
    JSON_SORT_KEYS = False

    # --- Ledger / dashboard ---
    SEED_DEMO_DATA = _as_bool(os.getenv("SEED_DEMO_DATA", "0"))
    RECENT_PAYMENTS_LIMIT = int(os.getenv("RECENT_PAYMENTS_LIMIT", "10"))
    LEDGER_RECENT_PAYMENTS = int(os.getenv("LEDGER_RECENT_PAYMENTS", "3"))

    # --- Logging ---
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
    LOG_DIR = os.getenv("LOG_DIR", "logs")
    LOG_FILENAME = os.getenv("LOG_FILENAME", "paydesk.log")
    LOG_JSON = _as_bool(os.getenv("LOG_JSON", "0"))
    LOG_TO_FILE = _as_bool(os.getenv("LOG_TO_FILE", "1"))

    # --- Sentry ---
    SENTRY_DSN = os.getenv("SENTRY_DSN", "")
    SENTRY_TRACES_SAMPLE_RATE = float(os.getenv("SENTRY_TRACES_SAMPLE_RATE", "0.0"))

    # Forms feed from JSON bodies; the API has no browser session to protect
    WTF_CSRF_ENABLED = False


class TestingConfig(Config):
    TESTING = True
    ENV = "testing"
    SEED_DEMO_DATA = False
    LOG_TO_FILE = False
    LOG_LEVEL = "DEBUG"
    SENTRY_DSN = ""
