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
    DB_URI = data.get("DB_URI", "sqlite+aiosqlite:///./audit.db")
    API_PREFIX = data.get("API_PREFIX", "/api")
    API_PORT = data.get("API_PORT", 4004)
    API_HOST = data.get("API_HOST", "0.0.0.0")
    CORS_ORIGINS = data.get("CORS_ORIGINS", [])
    CORS_ALLOW_CREDENTIALS = data.get("CORS_ALLOW_CREDENTIALS", True)
    LOG_LEVEL = data.get("LOG_LEVEL", "INFO")
    ENABLE_LOGGING_MIDDLEWARE = bool(data.get("ENABLE_LOGGING_MIDDLEWARE", 1))
    JWT_SECRET = data.get("JWT_SECRET", "dev-secret-key-change-in-production")
    ADMIN_API_KEY = data.get("ADMIN_API_KEY", "test-admin-key-12345")
    SERVICE_API_KEY = data.get("SERVICE_API_KEY", "test-service-key-12345")
    AUTO_CREATE_SCHEMA = bool(data.get("AUTO_CREATE_SCHEMA", True))
    SEED_ACTION_TYPES = bool(data.get("SEED_ACTION_TYPES", True))
    DEDUP_TTL_DAYS = int(data.get("DEDUP_TTL_DAYS", 7))
    # 0 disables the background sweep
    DEDUP_CLEANUP_INTERVAL_SECONDS = int(data.get("DEDUP_CLEANUP_INTERVAL_SECONDS", 86400))
    DEFAULT_PAGE_SIZE = int(data.get("DEFAULT_PAGE_SIZE", 10))
    MAX_PAGE_SIZE = int(data.get("MAX_PAGE_SIZE", 100))
