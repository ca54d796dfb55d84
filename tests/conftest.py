import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["GROQ_API_KEY"] = ""

from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from studyflow import crud
from studyflow.core.config import Settings, get_settings
from studyflow.main import app
from studyflow.models.db import Base, get_db
from studyflow.services.file_storage import LocalFileStorage, get_file_storage
from studyflow.services.recommendations import get_llm_client


class FakeLLM:
    """Stands in for the Groq client: chat.completions.create(...) -> reply."""

    def __init__(self):
        self.reply = "[]"
        self.error = None
        self.calls = []
        self.chat = SimpleNamespace(completions=SimpleNamespace(create=self._create))

    def _create(self, **kwargs):
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        message = SimpleNamespace(content=self.reply)
        return SimpleNamespace(choices=[SimpleNamespace(message=message)])


def auth_headers(user_id: str, email: str | None = None) -> dict:
    return {
        "X-Auth-Request-User": user_id,
        "X-Auth-Request-Email": email or f"{user_id}@example.com",
    }


@pytest.fixture
def session_factory():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    yield sessionmaker(autocommit=False, autoflush=False, bind=engine)
    engine.dispose()


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def llm():
    return FakeLLM()


@pytest.fixture
def test_settings():
    return Settings(MAX_UPLOAD_BYTES=64 * 1024, GROQ_MODEL="test-model")


@pytest.fixture
def file_storage(tmp_path):
    return LocalFileStorage(tmp_path / "uploads")


@pytest.fixture
def client(session_factory, file_storage, llm, test_settings):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_file_storage] = lambda: file_storage
    app.dependency_overrides[get_llm_client] = lambda: llm
    app.dependency_overrides[get_settings] = lambda: test_settings
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def alice():
    return auth_headers("user-alice")


@pytest.fixture
def bob():
    return auth_headers("user-bob")


@pytest.fixture
def make_admin(db):
    def _make(user_id: str):
        return crud.upsert_profile(db, user_id, role="admin")
    return _make
