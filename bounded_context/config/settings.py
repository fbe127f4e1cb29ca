"""Application configuration with environment-based settings."""
import os
from typing import Optional
from dotenv import load_dotenv


class Config:
    """Base configuration class following Single Responsibility Principle."""

    # Load environment variables
    load_dotenv()

    SERVICE_NAME: str = os.getenv("SERVICE_NAME", "bounded-context")

    # Database Configuration
    DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite+pysqlite:///bounded_context.db")
    DATABASE_POOL_SIZE: int = int(os.getenv("DATABASE_POOL_SIZE", "5"))
    DATABASE_MAX_OVERFLOW: int = int(os.getenv("DATABASE_MAX_OVERFLOW", "10"))
    DATABASE_ECHO: bool = os.getenv("DATABASE_ECHO", "false").lower() == "true"
    # Creates missing tables on startup; schema migrations are handled outside the service
    DATABASE_AUTO_CREATE: bool = os.getenv("DATABASE_AUTO_CREATE", "false").lower() == "true"

    # Redis Configuration (job locks, rate limiting)
    REDIS_URL: str = os.getenv("REDIS_URL", "redis://localhost:6379/0")

    # Celery Configuration
    CELERY_BROKER_URL: str = os.getenv("CELERY_BROKER_URL", "redis://localhost:6379/1")
    CELERY_RESULT_BACKEND: str = os.getenv("CELERY_RESULT_BACKEND", "redis://localhost:6379/1")

    # Jobs
    JOB_LOCK_TIMEOUT_SECONDS: int = int(os.getenv("JOB_LOCK_TIMEOUT_SECONDS", str(5 * 60)))
    # The API only enqueues jobs when the job runner's broker is deliberately made available to it
    JOB_ENQUEUING_ENABLED: bool = os.getenv("JOB_ENQUEUING_ENABLED", "false").lower() == "true"

    # Rate Limiting
    RATELIMIT_STORAGE_URL: str = os.getenv("RATELIMIT_STORAGE_URL", "redis://localhost:6379/2")
    RATELIMIT_ENABLED: bool = os.getenv("RATELIMIT_ENABLED", "true").lower() == "true"

    # Monitoring
    SENTRY_DSN: Optional[str] = os.getenv("SENTRY_DSN")
    ENABLE_METRICS: bool = os.getenv("ENABLE_METRICS", "true").lower() == "true"

    # Application
    DEBUG: bool = os.getenv("DEBUG", "false").lower() == "true"
    SECRET_KEY: str = os.getenv("SECRET_KEY", "dev-secret-key-change-in-production")

    @classmethod
    def validate(cls) -> None:
        """Validate required configuration values."""
        required_vars = [
            ("DATABASE_URL", cls.DATABASE_URL),
        ]

        missing = [name for name, value in required_vars if not value]
        if missing:
            raise ValueError(f"Missing required environment variables: {', '.join(missing)}")

        if cls.JOB_LOCK_TIMEOUT_SECONDS <= 0:
            raise ValueError("JOB_LOCK_TIMEOUT_SECONDS must be positive")


class DevelopmentConfig(Config):
    """Development configuration."""
    DEBUG = True
    DATABASE_AUTO_CREATE = True


class ProductionConfig(Config):
    """Production configuration."""
    DEBUG = False

    @classmethod
    def validate(cls) -> None:
        """Validate required configuration values, including production-only ones."""
        super().validate()
        if cls.SECRET_KEY == Config.SECRET_KEY:
            raise ValueError("SECRET_KEY must be set in production")


class TestingConfig(Config):
    """Testing configuration."""
    TESTING = True
    DATABASE_URL = "sqlite+pysqlite:///:memory:"
    DATABASE_AUTO_CREATE = True
    REDIS_URL = ""  # Tests run without Redis
    RATELIMIT_ENABLED = False
    ENABLE_METRICS = True
    JOB_ENQUEUING_ENABLED = False
    SENTRY_DSN = None


def get_config() -> type[Config]:
    """Factory method to get configuration based on environment."""
    env = os.getenv("FLASK_ENV", "development").lower()

    config_map = {
        "development": DevelopmentConfig,
        "production": ProductionConfig,
        "testing": TestingConfig,
    }

    return config_map.get(env, DevelopmentConfig)
