import os
import yaml

ROOT_PATH = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
CONFIG_FILE_PATH = os.environ.get(
    "COURSE_ACCESS_CONFIG", os.path.join(ROOT_PATH, "env.yaml")
)

if os.path.exists(CONFIG_FILE_PATH):
    with open(CONFIG_FILE_PATH, "r") as r_file:
        data = yaml.safe_load(r_file) or dict()
else:
    data = dict()


class ApplicationConfig:
    DB_URI = data.get("DB_URI", "sqlite+aiosqlite:///./course_access.db")
    API_PREFIX = data.get("API_PREFIX", "/api")
    API_PORT = data.get("API_PORT", 8000)
    API_HOST = data.get("API_HOST", "0.0.0.0")
    CORS_ORIGINS = data.get("CORS_ORIGINS", [])
    CORS_ALLOW_CREDENTIALS = data.get("CORS_ALLOW_CREDENTIALS", True)
    LOG_LEVEL = data.get("LOG_LEVEL", "INFO")
    ENABLE_LOGGING_MIDDLEWARE = bool(data.get("ENABLE_LOGGING_MIDDLEWARE", 1))
    ENABLE_SENTRY = data.get("ENABLE_SENTRY", 0)
    DSN_SENTRY = data.get("DSN_SENTRY", "")
    SENTRY_ENVIRONMENT = data.get("SENTRY_ENVIRONMENT", "dev")
    ADMIN_API_KEY = data.get("ADMIN_API_KEY", "test-admin-key-12345")

    # Storage
    STORAGE_TIMEOUT_SECONDS = float(data.get("STORAGE_TIMEOUT_SECONDS", 5.0))

    # One-time codes and sessions
    OTP_TTL_MINUTES = int(data.get("OTP_TTL_MINUTES", 5))
    OTP_MAX_ATTEMPTS = int(data.get("OTP_MAX_ATTEMPTS", 5))
    SESSION_TTL_DAYS = int(data.get("SESSION_TTL_DAYS", 30))
    SESSION_COOKIE_NAME = data.get("SESSION_COOKIE_NAME", "sid")
    SESSION_COOKIE_SECURE = bool(data.get("SESSION_COOKIE_SECURE", True))

    # Email delivery (unset EMAIL_API_URL means codes go to the log)
    EMAIL_API_URL = data.get("EMAIL_API_URL", "")
    EMAIL_API_KEY = data.get("EMAIL_API_KEY", "")
    EMAIL_FROM = data.get("EMAIL_FROM", "no-reply@example.com")
    EMAIL_TIMEOUT_SECONDS = float(data.get("EMAIL_TIMEOUT_SECONDS", 10.0))

    # Payments
    PAYMENT_MODE = data.get("PAYMENT_MODE", "dev")
    WAYFORPAY_MERCHANT_ACCOUNT = data.get("WAYFORPAY_MERCHANT_ACCOUNT", "test_merch_n1")
    WAYFORPAY_SECRET_KEY = data.get(
        "WAYFORPAY_SECRET_KEY", "dev-secret-key-change-in-production"
    )
    WAYFORPAY_DOMAIN = data.get("WAYFORPAY_DOMAIN", "localhost")
    WAYFORPAY_PAY_URL = data.get("WAYFORPAY_PAY_URL", "https://secure.wayforpay.com/pay")
    PAYMENT_SIGNATURE_ALGORITHM = data.get("PAYMENT_SIGNATURE_ALGORITHM", "md5")
    PAYMENT_CURRENCY = data.get("PAYMENT_CURRENCY", "UAH")

    # Read-only catalog; built-in default when unset
    CATALOG_FILE = data.get("CATALOG_FILE", "")
