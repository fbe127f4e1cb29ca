"""
Pytest configuration and fixtures
"""
import pytest
from sqlalchemy.orm import Session

from bounded_context import create_app
from bounded_context.config.settings import TestingConfig
from bounded_context.infrastructure.database import Database, create_database_engine
from bounded_context.infrastructure.repositories.line_item_repository import SqlAlchemyLineItemRepository
from bounded_context.infrastructure.service_container import ServiceContainer


@pytest.fixture(scope="function")
def database() -> Database:
    """A fresh in-memory core database with its schema created."""
    database = Database(create_database_engine(TestingConfig.DATABASE_URL))
    database.create_schema()
    yield database
    database.dispose()


@pytest.fixture(scope="function")
def session(database) -> Session:
    """A session that is rolled back after the test."""
    with database.engine.connect() as connection:
        transaction = connection.begin()
        session = Session(bind=connection, autoflush=False, expire_on_commit=False)
        yield session
        session.close()
        if transaction.is_active:
            transaction.rollback()


@pytest.fixture(scope="function")
def repository(session) -> SqlAlchemyLineItemRepository:
    return SqlAlchemyLineItemRepository(session)


@pytest.fixture(scope="function")
def app():
    """Flask application configured for testing, with its own in-memory database."""
    ServiceContainer.reset()
    app = create_app(TestingConfig)
    yield app
    ServiceContainer.reset()


@pytest.fixture(scope="function")
def client(app):
    return app.test_client()


@pytest.fixture(scope="function")
def container(app) -> ServiceContainer:
    return app.config["service_container"]
