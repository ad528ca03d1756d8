import os
import random
import tempfile

# keep the app's default database out of the working directory
os.environ.setdefault("SELFASSESSMENT_DATA_DIR", tempfile.mkdtemp(prefix="selfassessment-"))

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from selfassessment.app import app
from selfassessment.database import Base, enable_sqlite_foreign_keys, get_db
from selfassessment.dependencies import get_rng
from selfassessment.engine import validate_config
from selfassessment.models.db import Participant  # noqa: F401  (registers tables)


def make_course_document() -> dict:
    return {
        "title": "Computer Science",
        "icon": "/assets/cs.png",
        "validationSchema": "AA-[0-9][0-9]%2",
        "tests": [
            {
                "id": 1001,
                "type": "logic",
                "category": "radio-buttons",
                "description": "radio button test",
                "task": "pick one",
                "evaluated": True,
                "options": [
                    {"text": "right", "correct": True},
                    {"text": "wrong", "correct": False},
                ],
            },
            {
                "id": 1002,
                "type": "logic",
                "category": "checkbox",
                "description": "checkbox test",
                "task": "pick all that apply",
                "evaluated": True,
                "options": [
                    {"text": "first", "correct": True},
                    {"text": "second", "correct": True},
                    {"text": "third", "correct": False},
                ],
            },
            {
                "id": 1003,
                "type": "logic",
                "category": "multiple-options",
                "description": "grid test",
                "task": "yes or no",
                "evaluated": True,
                "header": ["Yes", "No"],
                "options": [
                    {"text": "row one", "correct": "0"},
                    {"text": "row two", "correct": "1"},
                ],
            },
            {
                "id": 1004,
                "type": "concentration",
                "category": "speed",
                "description": "speed test",
                "task": "mark the second colon",
                "evaluated": True,
                "seconds": 10,
                "options": [{"text": "ab:cd:ef", "correct": ":", "index": "1"}],
            },
            {
                "id": 1005,
                "type": "survey",
                "category": "multiple-choice",
                "description": "not evaluated",
                "task": "tell us",
                "evaluated": False,
                "options": [{"text": "a"}, {"text": "b"}],
            },
            {
                "id": 1006,
                "type": "logic",
                "category": "checkbox",
                "description": "pool test one",
                "task": "pick",
                "evaluated": True,
                "options": [{"text": "x", "correct": True}],
            },
            {
                "id": 1007,
                "type": "logic",
                "category": "checkbox",
                "description": "pool test two",
                "task": "pick",
                "evaluated": True,
                "options": [{"text": "y", "correct": True}],
            },
            {
                "id": 1008,
                "type": "logic",
                "category": "checkbox",
                "description": "pool test three",
                "task": "pick",
                "evaluated": True,
                "options": [{"text": "z", "correct": True}],
            },
        ],
        "testgroups": [
            {"id": 2001, "tests": [1006, 1007, 1008], "select": 2},
            {"id": 2002, "tests": [1004, 1005]},
        ],
        "sets": [
            {
                "id": 3001,
                "elements": [1001, 1002, 2001],
                "evaluationTexts": {
                    "scoreIndependent": "thanks",
                    "scoreDependent": [[50, "keep going"], [100, "perfect"]],
                },
            },
            {"id": 3002, "elements": [1003, 2002]},
        ],
        "infopages": [
            {"id": 4001, "text": "about radio buttons", "belongs": [1001]},
            {"id": 4002, "text": "about the pool", "belongs": [2001]},
            {"id": 4003, "text": "about pool test two", "belongs": [1007]},
            {"id": 4004, "text": "second part", "belongs": [3002]},
        ],
    }


@pytest.fixture
def course_document() -> dict:
    return make_course_document()


@pytest.fixture
def course_config(course_document):
    return validate_config(course_document)


@pytest.fixture
def rng() -> random.Random:
    return random.Random(1234)


@pytest.fixture
def db():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    enable_sqlite_foreign_keys(engine)
    Base.metadata.create_all(bind=engine)
    session = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    try:
        yield session
    finally:
        session.close()
        engine.dispose()


@pytest.fixture
def client(db):
    def _get_db():
        yield db

    app.dependency_overrides[get_db] = _get_db
    app.dependency_overrides[get_rng] = lambda: random.Random(99)
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
