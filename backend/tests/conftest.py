import json

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from maturity.db import Base, get_db
from maturity.main import app
from maturity.scoring_client import get_scoring_client_factory


class FakeScoringClient:
    def __init__(self, reply=None, error=None):
        self.reply = reply
        self.error = error
        self.calls = []
        self.closed = False

    async def complete_json(self, system_prompt, user_content):
        self.calls.append((system_prompt, user_content))
        if self.error is not None:
            raise self.error
        return self.reply

    async def aclose(self):
        self.closed = True


@pytest.fixture
def session_factory():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield sessionmaker(autocommit=False, autoflush=False, bind=engine)
    engine.dispose()


@pytest.fixture
def scoring_client():
    return FakeScoringClient(reply=json.dumps({
        "scores": {"overall": 3, "data": 2, "channels": "4"},
        "analysis": {"overallSummary": "Solid foundations."},
        "benchmarks": {"data": {"label": "Average B2B SME data maturity", "score": 3.5}},
        "options": {"crawl": {"summary": "Clean up data."}},
        "growthSimulation": {"crawl": {"data": 9}},
    }))


@pytest.fixture
def client(session_factory, scoring_client):
    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_scoring_client_factory] = lambda: (lambda: scoring_client)
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def start_payload():
    return {
        "businessType": "B2B",
        "userInfo": {
            "firstName": " Ada ",
            "email": " ada@example.com ",
            "businessName": "Acme",
            "country": "UK",
        },
        "selectedCategories": ["data", "channels"],
    }


@pytest.fixture
def assessment_id(client, start_payload):
    res = client.post("/api/assessments/start", json=start_payload)
    assert res.status_code == 200
    return res.json()["assessmentId"]
