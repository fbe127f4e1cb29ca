"""Service container for dependency injection (IoC Container Pattern)."""
import logging
from contextlib import contextmanager
from typing import Iterator, Optional

import redis

from bounded_context.application.use_cases.create_line_item_use_case import CreateLineItemUseCase
from bounded_context.application.use_cases.get_line_item_use_case import GetLineItemUseCase
from bounded_context.config.settings import Config, get_config
from bounded_context.domain.interfaces.job_enqueuer import IJobEnqueuer
from bounded_context.domain.interfaces.line_item_repository import ILineItemRepository
from bounded_context.infrastructure.database import Database
from bounded_context.infrastructure.redis_client import RedisClientFactory
from bounded_context.infrastructure.repositories.line_item_repository import SqlAlchemyLineItemRepository


class ServiceContainer:
    """
    Service container implementing Dependency Injection pattern.

    Follows Singleton pattern and Dependency Inversion Principle. Shared by
    the API and the job runner; each process configures it once on startup.
    """

    _instance: Optional['ServiceContainer'] = None
    _config: Optional[type] = None
    _database: Optional[Database] = None
    _job_enqueuer: Optional[IJobEnqueuer] = None
    _create_line_item_use_case: Optional[CreateLineItemUseCase] = None
    _get_line_item_use_case: Optional[GetLineItemUseCase] = None

    def __new__(cls):
        """Singleton pattern implementation."""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self):
        """Initialize service container."""
        self._logger = logging.getLogger(__name__)

    @classmethod
    def configure(cls, config: type) -> 'ServiceContainer':
        """
        Select the configuration the services are created from.

        Args:
            config: Config class (e.g. TestingConfig)

        Returns:
            The container instance
        """
        cls._config = config
        return cls()

    def get_config(self) -> type:
        """Get the active configuration, defaulting to the environment's."""
        if self._config is None:
            type(self)._config = get_config()
        return self._config

    def get_database(self) -> Database:
        """Get or create the core database."""
        if self._database is None:
            config = self.get_config()
            try:
                database = Database.from_config(config)
                if config.DATABASE_AUTO_CREATE:
                    database.create_schema()
            except Exception as e:
                self._logger.error(f"Failed to create Database: {e}")
                raise
            type(self)._database = database
            self._logger.info("Database created")
        return self._database

    def get_redis_client(self) -> Optional[redis.Redis]:
        """Get the shared Redis client, or None if Redis is unavailable."""
        return RedisClientFactory.get_client(self.get_config().REDIS_URL)

    @contextmanager
    def line_item_repository_scope(self) -> Iterator[ILineItemRepository]:
        """
        Provide a line item repository within a single unit of work.

        Yields:
            ILineItemRepository bound to a session that commits on success
        """
        with self.get_database().session_scope() as session:
            yield SqlAlchemyLineItemRepository(session)

    def get_create_line_item_use_case(self) -> CreateLineItemUseCase:
        """Get or create the create line item use case."""
        if self._create_line_item_use_case is None:
            type(self)._create_line_item_use_case = CreateLineItemUseCase(
                repository_scope=self.line_item_repository_scope
            )
            self._logger.info("CreateLineItemUseCase created")
        return self._create_line_item_use_case

    def get_get_line_item_use_case(self) -> GetLineItemUseCase:
        """Get or create the get line item use case."""
        if self._get_line_item_use_case is None:
            type(self)._get_line_item_use_case = GetLineItemUseCase(
                repository_scope=self.line_item_repository_scope
            )
            self._logger.info("GetLineItemUseCase created")
        return self._get_line_item_use_case

    def get_job_enqueuer(self) -> IJobEnqueuer:
        """
        Get or create the job enqueuer.

        Only processes with JOB_ENQUEUING_ENABLED reach the job runner's
        broker; elsewhere a mock that refuses to enqueue is returned.
        """
        if self._job_enqueuer is None:
            from bounded_context.infrastructure.jobs.job_enqueuers import CeleryJobEnqueuer, MockJobEnqueuer

            if self.get_config().JOB_ENQUEUING_ENABLED:
                type(self)._job_enqueuer = CeleryJobEnqueuer()
            else:
                type(self)._job_enqueuer = MockJobEnqueuer()
            self._logger.info(f"JobEnqueuer created: {type(self._job_enqueuer).__name__}")
        return self._job_enqueuer

    @classmethod
    def reset(cls) -> None:
        """Reset all service instances (useful for testing)."""
        if cls._database is not None:
            cls._database.dispose()
        cls._instance = None
        cls._config = None
        cls._database = None
        cls._job_enqueuer = None
        cls._create_line_item_use_case = None
        cls._get_line_item_use_case = None
