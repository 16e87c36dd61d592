# tests/conftest.py
from __future__ import annotations

import os
import tempfile
from collections.abc import Generator, Iterator
from pathlib import Path

import pytest

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("UPLOAD_DIR", tempfile.mkdtemp(prefix="subfapp-uploads-"))

from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from subfapp.core.security import create_access_token
from subfapp.core.settings import settings
from subfapp.db.session import Base
from subfapp.db.session import get_db as app_get_session
from subfapp.main import app as fastapi_app
from subfapp.models import Community
from subfapp.schemas.community import CommunityCreate
from subfapp.schemas.identity import Identity
from subfapp.services.community_service import create_community

TEST_DB_URL = "sqlite://"


@pytest.fixture(scope="session")
def engine() -> Generator[Engine, None, None]:
    engine = create_engine(
        TEST_DB_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture()
def db_session(engine: Engine) -> Iterator[Session]:
    SessionLocal = sessionmaker(
        bind=engine,
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
    )
    session = SessionLocal()
    try:
        yield session
    finally:
        session.rollback()
        session.close()

        # Services commit, so each test wipes the tables it may have touched.
        with engine.begin() as cleanup_conn:
            for table in reversed(Base.metadata.sorted_tables):
                cleanup_conn.execute(table.delete())


@pytest.fixture(scope="session")
def app() -> FastAPI:
    return fastapi_app


@pytest.fixture(autouse=True)
def override_session_dependency(app: FastAPI, db_session: Session) -> Iterator[None]:
    def _get_session_override() -> Generator[Session, None, None]:
        yield db_session

    app.dependency_overrides[app_get_session] = _get_session_override
    try:
        yield
    finally:
        app.dependency_overrides.pop(app_get_session, None)


@pytest.fixture()
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app, base_url="http://test") as test_client:
        yield test_client


@pytest.fixture()
def upload_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point image storage at a per-test directory."""
    monkeypatch.setattr(settings, "upload_dir", str(tmp_path))
    return tmp_path


@pytest.fixture()
def alice() -> Identity:
    """Identity that creates the test communities."""
    return Identity(id="user-alice", display_name="Alice")


@pytest.fixture()
def bob() -> Identity:
    """Second identity, not a member of anything by default."""
    return Identity(id="user-bob", display_name="Bob")


def _auth_headers(identity: Identity) -> dict[str, str]:
    token = create_access_token(identity.id, identity.display_name)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture()
def alice_headers(alice: Identity) -> dict[str, str]:
    """Authorization headers for Alice."""
    return _auth_headers(alice)


@pytest.fixture()
def bob_headers(bob: Identity) -> dict[str, str]:
    """Authorization headers for Bob."""
    return _auth_headers(bob)


@pytest.fixture()
def public_community(db_session: Session, alice: Identity) -> Community:
    """A public community created by Alice."""
    return create_community(
        db_session,
        CommunityCreate(name="Python Lovers", description="All things Python", is_public=True),
        alice,
    )


@pytest.fixture()
def private_community(db_session: Session, alice: Identity) -> Community:
    """A private community created by Alice."""
    return create_community(
        db_session,
        CommunityCreate(name="Rust Fans", description="Borrow checker support group", is_public=False),
        alice,
    )
