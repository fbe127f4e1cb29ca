"""
Tests for configuration classes and the service container.
"""
import pytest

from bounded_context.config.settings import Config, DevelopmentConfig, ProductionConfig, TestingConfig, get_config
from bounded_context.infrastructure.jobs.job_enqueuers import CeleryJobEnqueuer, MockJobEnqueuer
from bounded_context.infrastructure.service_container import ServiceContainer


class TestConfig:

    @pytest.mark.parametrize("env, expected", [
        ("testing", TestingConfig),
        ("production", ProductionConfig),
        ("unknown", DevelopmentConfig),
    ])
    def test_get_config(self, monkeypatch, env, expected):
        monkeypatch.setenv("FLASK_ENV", env)
        assert get_config() is expected

    def test_testing_config_is_valid(self):
        TestingConfig.validate()

    def test_missing_database_url(self, monkeypatch):
        monkeypatch.setattr(TestingConfig, "DATABASE_URL", "")
        with pytest.raises(ValueError, match="DATABASE_URL"):
            TestingConfig.validate()

    def test_job_lock_timeout_must_be_positive(self, monkeypatch):
        monkeypatch.setattr(TestingConfig, "JOB_LOCK_TIMEOUT_SECONDS", 0)
        with pytest.raises(ValueError):
            TestingConfig.validate()

    def test_production_requires_secret_key(self, monkeypatch):
        monkeypatch.setattr(ProductionConfig, "SECRET_KEY", Config.SECRET_KEY)
        with pytest.raises(ValueError, match="SECRET_KEY"):
            ProductionConfig.validate()


class TestServiceContainer:

    @pytest.fixture(autouse=True)
    def reset_container(self):
        ServiceContainer.reset()
        yield
        ServiceContainer.reset()

    def test_singleton(self):
        assert ServiceContainer() is ServiceContainer()

    def test_configured_database_is_shared(self):
        container = ServiceContainer.configure(TestingConfig)
        assert container.get_database() is ServiceContainer().get_database()

    def test_mock_enqueuer_when_enqueuing_disabled(self):
        container = ServiceContainer.configure(TestingConfig)
        assert isinstance(container.get_job_enqueuer(), MockJobEnqueuer)

    def test_celery_enqueuer_when_enabled(self):
        class EnqueuingConfig(TestingConfig):
            JOB_ENQUEUING_ENABLED = True

        container = ServiceContainer.configure(EnqueuingConfig)
        assert isinstance(container.get_job_enqueuer(), CeleryJobEnqueuer)

    def test_redis_optional(self):
        container = ServiceContainer.configure(TestingConfig)
        assert container.get_redis_client() is None

    def test_reset_drops_services(self):
        container = ServiceContainer.configure(TestingConfig)
        database = container.get_database()
        ServiceContainer.reset()
        assert ServiceContainer.configure(TestingConfig).get_database() is not database
