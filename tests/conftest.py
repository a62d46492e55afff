"""
Pytest configuration and shared fixtures.
This file ensures the project root is in sys.path for imports.

Every SQL fixture runs against a private in-memory SQLite database configured
exactly like the production engine (foreign keys on, explicit BEGIN so
savepoints nest), so transactions and constraints behave for real.
"""

import sys
from pathlib import Path
from typing import Generator

# Add project root to sys.path so we can import domain, services, etc.
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from domain.models import create_db_engine, init_database
from repositories import FoodSQLRepository, InMemoryFoodRepository
from api.dependencies import get_food_repository
from main import app


@pytest.fixture(scope="function")
def engine() -> Generator[Engine, None, None]:
    """Fresh in-memory database with the schema created"""
    eng = create_db_engine("sqlite://")
    init_database(bind=eng)
    try:
        yield eng
    finally:
        eng.dispose()


@pytest.fixture(scope="function")
def session_factory(engine):
    return sessionmaker(bind=engine, future=True)


@pytest.fixture(scope="function")
def db_session(session_factory) -> Generator[Session, None, None]:
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture(scope="function")
def sql_repository(db_session) -> FoodSQLRepository:
    return FoodSQLRepository(db_session)


@pytest.fixture(scope="function")
def memory_repository() -> InMemoryFoodRepository:
    return InMemoryFoodRepository()


@pytest.fixture(params=["sql", "memory"])
def food_repository(request):
    """Each repository implementation in turn, for contract tests"""
    if request.param == "sql":
        return request.getfixturevalue("sql_repository")
    return request.getfixturevalue("memory_repository")


@pytest.fixture(params=["sql", "memory"])
def api_client(request, session_factory) -> Generator[TestClient, None, None]:
    """TestClient whose food repository dependency is bound to a test backend"""
    if request.param == "sql":

        def override():
            session = session_factory()
            try:
                yield FoodSQLRepository(session)
            finally:
                session.close()

    else:
        shared = InMemoryFoodRepository()

        def override():
            yield shared

    app.dependency_overrides[get_food_repository] = override
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.pop(get_food_repository, None)
