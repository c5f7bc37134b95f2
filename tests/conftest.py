import os

# 앱 import 전에 기본 엔진을 메모리 SQLite 로 (MySQL 드라이버 연결 방지)
os.environ.setdefault("SQLALCHEMY_URL", "sqlite://")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from database.db import get_db
from database.init_db import init_db
from main import app
from services.grading_cache import GradingCache


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autocommit=False, autoflush=False)


@pytest.fixture
def db_session(session_factory):
    db = session_factory()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def client(session_factory):
    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    app.state.grading_cache = GradingCache(ttl_seconds=300)
    yield TestClient(app)
    app.dependency_overrides.clear()


# ==========================================================
# 공용 헬퍼 fixture
# ==========================================================

@pytest.fixture
def group(client):
    return client.post("/v1/groups/", json={"name": "Group A"}).json()["data"]


@pytest.fixture
def student(client, group):
    return client.post("/v1/students/", json={"fullName": "Ivan Petrov", "groupId": group["id"]}).json()["data"]


@pytest.fixture
def year(client):
    return client.post("/v1/years/", json={"year": "2024/2025", "months": ["Sep", "Oct", "Nov"]}).json()["data"]


@pytest.fixture
def criteria(client):
    ids = []
    for order, name in enumerate(["Drama", "Speaking", "Homework", "Engagement"], start=1):
        resp = client.post("/v1/criteria/", json={"name": name, "weight": 0.25, "scale": "1-4", "order": order})
        ids.append(resp.json()["data"]["id"])
    return ids


@pytest.fixture
def grade_scale(client):
    for letter, min_score in [("A", 3.5), ("B", 2.5), ("C", 1.5), ("D", 1.0)]:
        client.post("/v1/grade-scales/", json={"letter": letter, "minScore": min_score})
