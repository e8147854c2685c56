"""Shared fixtures: a fresh in-memory SQLite database per test."""

from __future__ import annotations

from collections.abc import Iterator

import pytest
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session

from db import create_db_engine, create_session_factory, ensure_schema
from repositories import SqlMatchRepository, SqlRosterRepository, SqlTeamStore


@pytest.fixture
def engine() -> Iterator[Engine]:
    engine = create_db_engine("sqlite://")
    ensure_schema(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session(engine: Engine) -> Iterator[Session]:
    session_factory = create_session_factory(engine)
    with session_factory() as session:
        yield session


@pytest.fixture
def roster(session: Session) -> SqlRosterRepository:
    return SqlRosterRepository(session)


@pytest.fixture
def matches(session: Session) -> SqlMatchRepository:
    return SqlMatchRepository(session)


@pytest.fixture
def team_store(session: Session) -> SqlTeamStore:
    return SqlTeamStore(session)
