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
    DB_URI = data.get("DB_URI", "sqlite+aiosqlite:///./lead_admin.db")
    API_PREFIX = data.get("API_PREFIX", "/api")
    API_PORT = data.get("API_PORT", 4000)
    API_HOST = data.get("API_HOST", "0.0.0.0")
    CORS_ORIGINS = data.get("CORS_ORIGINS", ["http://localhost:3000"])
    CORS_ALLOW_CREDENTIALS = data.get("CORS_ALLOW_CREDENTIALS", True)
    LOG_LEVEL = data.get("LOG_LEVEL", "INFO")
    ENABLE_LOGGING_MIDDLEWARE = bool(data.get("ENABLE_LOGGING_MIDDLEWARE", 1))

    # Session token
    JWT_SECRET = data.get("JWT_SECRET", "dev-secret-key-change-in-production")
    JWT_ALGORITHM = data.get("JWT_ALGORITHM", "HS256")
    JWT_EXPIRES_HOURS = int(data.get("JWT_EXPIRES_HOURS", 24))
    AUTH_COOKIE_NAME = data.get("AUTH_COOKIE_NAME", "admin_jwt")
    AUTH_COOKIE_SECURE = bool(data.get("AUTH_COOKIE_SECURE", True))

    # Legacy superuser, folded into the credential lookup when both are set
    LEGACY_ADMIN_USERNAME = data.get("LEGACY_ADMIN_USERNAME", "")
    LEGACY_ADMIN_PASSWORD_HASH = data.get("LEGACY_ADMIN_PASSWORD_HASH", "")

    # Activity tracking
    ACTIVITY_TRACKING_ENABLED = bool(data.get("ACTIVITY_TRACKING_ENABLED", True))
    AUDIT_MAX_BODY_SIZE = int(data.get("AUDIT_MAX_BODY_SIZE", 10000))
    GEO_LOOKUP_ENABLED = bool(data.get("GEO_LOOKUP_ENABLED", True))
    GEO_LOOKUP_URL = data.get("GEO_LOOKUP_URL", "http://ip-api.com/json/{ip}")
    GEO_LOOKUP_TIMEOUT = float(data.get("GEO_LOOKUP_TIMEOUT", 3.0))
    GEO_CACHE_TTL_SECONDS = int(data.get("GEO_CACHE_TTL_SECONDS", 24 * 60 * 60))

    # Non-GET rate limiting per client IP
    RATE_LIMIT_ENABLED = bool(data.get("RATE_LIMIT_ENABLED", True))
    RATE_LIMIT_PER_MINUTE = int(data.get("RATE_LIMIT_PER_MINUTE", 50))

    NOTIFICATION_EMAIL = data.get("NOTIFICATION_EMAIL", "")
