"""Pytest configuration and shared fixtures."""

import os
from datetime import datetime, timedelta
from typing import Generator

import pytest

# Set test environment variables before importing the app
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("OPENAI_API_KEY", "")
os.environ.setdefault("LOG_LEVEL", "WARNING")

from callreview.config.database import Base, Database  # noqa: E402
from callreview.models import (  # noqa: E402
    AIEvaluation,
    Assistant,
    Call,
    CallType,
    Clinic,
    HumanEvaluation,
)

BASE_TIME = datetime(2026, 3, 2, 9, 0, 0)


class Seeder:
    """Inserts ingested rows the way the calling platform would."""

    def __init__(self, session):
        self.session = session
        self._calls = 0

    def _save(self, obj):
        self.session.add(obj)
        self.session.commit()
        return obj

    def clinic(self, name: str = "Downtown Vet") -> Clinic:
        return self._save(Clinic(name=name))

    def assistant(self, clinic: Clinic, name: str = "Ava") -> Assistant:
        return self._save(Assistant(name=name, clinic_id=clinic.id))

    def call(
        self,
        assistant: Assistant,
        ai: dict | None = None,
        human: dict | None = None,
        **fields,
    ) -> Call:
        """Insert a call, optionally with an AI and/or a human evaluation.

        Calls get increasing start times unless one is given.
        """
        self._calls += 1
        fields.setdefault("start_time", BASE_TIME + timedelta(minutes=self._calls))
        call = self._save(Call(assistant_id=assistant.id, **fields))

        if ai is not None:
            ai = {"score": 75, "outcome": True, **ai}
            self._save(AIEvaluation(call_id=call.id, **ai))
        if human is not None:
            human = {
                "reviewer_name": "Dana",
                "outcome": True,
                "call_type": CallType.GENERAL_INQUIRY,
                "tags": [],
                **human,
            }
            self._save(HumanEvaluation(call_id=call.id, **human))
        return call


@pytest.fixture
def database() -> Generator[Database, None, None]:
    """In-memory SQLite database with all tables created."""
    db = Database("sqlite://")
    db.create_all()
    yield db
    Base.metadata.drop_all(bind=db.engine)
    db.dispose()


@pytest.fixture
def seed(database) -> Generator[Seeder, None, None]:
    session = database.session()
    yield Seeder(session)
    session.close()


@pytest.fixture
def db(database):
    """Session handed to the service under test."""
    session = database.session()
    yield session
    session.close()


@pytest.fixture
def app(database):
    from callreview.main import create_app

    return create_app(database=database)


@pytest.fixture
def client(app):
    from fastapi.testclient import TestClient

    with TestClient(app) as tc:
        yield tc
