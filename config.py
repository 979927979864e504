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
    DB_URI = data.get("DB_URI", "sqlite+aiosqlite:///./textsafe.db")
    API_PORT = int(data.get("API_PORT", 8000))
    API_HOST = data.get("API_HOST", "0.0.0.0")
    CORS_ORIGINS = data.get("CORS_ORIGINS", [])
    CORS_ALLOW_CREDENTIALS = data.get("CORS_ALLOW_CREDENTIALS", True)
    LOG_LEVEL = data.get("LOG_LEVEL", "INFO")
    ENABLE_LOGGING_MIDDLEWARE = bool(data.get("ENABLE_LOGGING_MIDDLEWARE", 1))
    ENVIRONMENT = data.get("ENVIRONMENT", "development")

    # Encryption at rest (AES-256 key is derived from this secret)
    ENCRYPTION_KEY = data.get(
        "ENCRYPTION_KEY", "dev-encryption-key-change-in-production"
    )

    # Single user provisioned by POST /init
    DEFAULT_USERNAME = data.get("DEFAULT_USERNAME")
    DEFAULT_PASSWORD = data.get("DEFAULT_PASSWORD")

    # Authentication policy
    BCRYPT_ROUNDS = int(data.get("BCRYPT_ROUNDS", 12))
    SESSION_TTL_HOURS = int(data.get("SESSION_TTL_HOURS", 24))
    SESSION_COOKIE_NAME = data.get("SESSION_COOKIE_NAME", "session_token")
    MAX_FAILED_LOGIN_ATTEMPTS = int(data.get("MAX_FAILED_LOGIN_ATTEMPTS", 5))
    LOCKOUT_MINUTES = int(data.get("LOCKOUT_MINUTES", 15))

    # Fixed-window rate limits per client IP
    RATE_LIMIT_MAX_REQUESTS = int(data.get("RATE_LIMIT_MAX_REQUESTS", 100))
    RATE_LIMIT_WINDOW_SECONDS = int(data.get("RATE_LIMIT_WINDOW_SECONDS", 15 * 60))
    AUTH_RATE_LIMIT_MAX_REQUESTS = int(data.get("AUTH_RATE_LIMIT_MAX_REQUESTS", 5))
    AUTH_RATE_LIMIT_WINDOW_SECONDS = int(data.get("AUTH_RATE_LIMIT_WINDOW_SECONDS", 15 * 60))
    RATE_LIMIT_MAX_TRACKED_KEYS = int(data.get("RATE_LIMIT_MAX_TRACKED_KEYS", 10_000))
