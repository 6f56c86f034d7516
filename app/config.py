import os


def _env_int(name, default):
    return int(os.getenv(name, default))


class BaseConfig:
    JSON_SORT_KEYS = False
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    # Bodies above this size are answered with 413
    MAX_CONTENT_LENGTH = _env_int("MAX_CONTENT_LENGTH", 1024 * 1024)
    CORS_ALLOWED_ORIGINS = os.getenv("CORS_ALLOWED_ORIGINS", "*")

    # memory:// for a single process, redis://host:6379 to share counters
    RATELIMIT_STORAGE_URL = os.getenv("RATELIMIT_STORAGE_URL", "memory://")
    API_RATE_LIMIT = os.getenv("API_RATE_LIMIT", "100 per minute")
    LOGIN_LIMIT_PER_IP = os.getenv("LOGIN_LIMIT_PER_IP", "10 per 30 minutes")
    ORDER_LIMIT_PER_IP = os.getenv("ORDER_LIMIT_PER_IP", "20 per hour")
    # Number of reverse proxies whose X-Forwarded-For entries are trusted
    TRUSTED_PROXY_HOPS = _env_int("TRUSTED_PROXY_HOPS", 0)

    JWT_SECRET = os.getenv("JWT_SECRET", "dev-insecure-jwt-key")
    ACCESS_TOKEN_LIFETIME_MIN = _env_int("ACCESS_TOKEN_LIFETIME_MIN", 24 * 60)
    REFRESH_TOKEN_LIFETIME_DAYS = _env_int("REFRESH_TOKEN_LIFETIME_DAYS", 30)
    AUTH_COOKIE_NAME = "auth-token"
    AUTH_COOKIE_SECURE = False

    OTEL_SERVICE_NAME = os.getenv("OTEL_SERVICE_NAME", "jewelry-storefront")
    OTEL_EXPORTER_OTLP_ENDPOINT = os.getenv("OTEL_EXPORTER_OTLP_ENDPOINT", "http://localhost:4318/v1/traces")

    ADMIN_EMAIL = os.getenv("ADMIN_EMAIL", "admin@jewellery.com")


class DevelopmentConfig(BaseConfig):
    DEBUG = True
    SECRET_KEY = os.getenv("SECRET_KEY", "dev-insecure-key")
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URL", "sqlite:///dev.db")


class TestingConfig(BaseConfig):
    TESTING = True
    SECRET_KEY = "test-key"
    JWT_SECRET = "test-jwt-secret"
    SQLALCHEMY_DATABASE_URI = os.getenv("TEST_DATABASE_URL", "sqlite:///:memory:")
    API_RATE_LIMIT = "1000 per minute"
    LOGIN_LIMIT_PER_IP = "1000 per minute"
    ORDER_LIMIT_PER_IP = "1000 per minute"


class ProductionConfig(BaseConfig):
    DEBUG = False
    TESTING = False
    SECRET_KEY = os.getenv("SECRET_KEY")
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URL")
    AUTH_COOKIE_SECURE = True

    REQUIRED_ENV = ("SECRET_KEY", "DATABASE_URL", "JWT_SECRET")

    @classmethod
    def validate(cls):
        missing = [key for key in cls.REQUIRED_ENV if not os.getenv(key)]
        if missing:
            raise RuntimeError(
                f"Missing required env vars in production: {', '.join(missing)}"
            )


CONFIG_BY_ENV = {
    "development": DevelopmentConfig,
    "testing": TestingConfig,
    "production": ProductionConfig,
}


def get_config_class():
    """Pick the config class from ``APP_ENV`` (unknown values fall back to development)."""
    env = os.getenv("APP_ENV", "development").lower()
    config = CONFIG_BY_ENV.get(env, DevelopmentConfig)
    if config is ProductionConfig:
        config.validate()
    return config
