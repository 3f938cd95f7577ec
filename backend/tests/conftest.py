"""Shared fixtures: in-memory database, API client, auth tokens and a fake AI gateway."""

import os
import sys

# Set test environment before the app reads its settings
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["GEMINI_API_KEY"] = ""
os.environ["ANTHROPIC_API_KEY"] = ""
os.environ["ORACLE_GENAI_COMPARTMENT_ID"] = ""
os.environ["AUTH_ISSUER"] = ""

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import json

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from careercraft.database import Base, get_db
from careercraft.main import app
from careercraft.middleware.auth import create_access_token
from careercraft.models.user import User
from careercraft.services import ai_client


class FakeAI:
    """Stands in for ai_client.generate_text and records every prompt."""

    def __init__(self):
        self.replies = []
        self.prompts = []

    def queue(self, *replies):
        self.replies.extend(replies)

    async def generate_text(self, prompt, max_tokens=None, temperature=None):
        self.prompts.append(prompt)
        if not self.replies:
            raise AssertionError("Unexpected AI call")
        reply = self.replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        return reply

    @property
    def calls(self):
        return len(self.prompts)


INSIGHT_REPLY = json.dumps({
    "salaryRanges": [
        {"role": "Robotics Engineer", "min": 80000, "max": 150000, "median": 110000, "location": "US"}
    ],
    "growthRate": 12.5,
    "demandLevel": "High",
    "topSkills": ["ROS", "C++", "Python", "Control Systems", "Computer Vision"],
    "marketOutlook": "Positive",
    "keyTrends": ["Cobots", "Warehouse automation"],
    "recommendedSkills": ["ROS 2", "SLAM"],
})


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(session_factory):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def fake_ai(monkeypatch):
    fake = FakeAI()
    monkeypatch.setattr(ai_client, "generate_text", fake.generate_text)
    return fake


def make_user(db, subject="user_alice", email="alice@example.com", **fields) -> User:
    fields.setdefault("skills", "[]")
    user = User(clerk_user_id=subject, email=email, name=email.split("@")[0], **fields)
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def auth_headers(subject="user_alice", email="alice@example.com") -> dict:
    token = create_access_token({"sub": subject, "email": email})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def alice(db):
    return make_user(db)


@pytest.fixture
def bob(db):
    return make_user(db, subject="user_bob", email="bob@example.com")