"""Shared fixtures: in-memory SQLite app client and a fake narrative generator."""
from __future__ import annotations

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import dealtracker.models  # noqa: F401
from dealtracker.db.base import Base
from dealtracker.db.session import get_db
from dealtracker.models import BusinessUnit, Tag, User
from dealtracker.services.ai_generator import (
    REPORT_FALLBACK,
    SUMMARY_FALLBACK,
    get_narrative_generator,
)


class FakeNarrativeGenerator:
    """Stands in for DealNarrativeGenerator; records every context it receives."""

    def __init__(self):
        self.summary_calls: list[dict] = []
        self.report_calls: list[dict] = []
        self.fail = False

    def generate_deal_summary(self, context):
        self.summary_calls.append(context)
        if self.fail:
            return SUMMARY_FALLBACK
        return f"Summary of {context['company']} ({len(self.summary_calls)})"

    def generate_market_research(self, context):
        self.report_calls.append(context)
        if self.fail:
            return REPORT_FALLBACK
        return f"## Executive Summary\nReport on {context['company']}"


@pytest.fixture()
def session_factory():
    """Temporary SQLite in-memory database with foreign keys enforced.

    Uses StaticPool so all connections share the same in-memory database.
    """
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    @event.listens_for(engine, "connect")
    def _enable_foreign_keys(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    Base.metadata.create_all(engine)
    TestSession = sessionmaker(bind=engine, autoflush=False)
    yield TestSession
    engine.dispose()


@pytest.fixture()
def generator():
    return FakeNarrativeGenerator()


@pytest.fixture()
def client(session_factory, generator):
    """FastAPI TestClient using the in-memory database and fake generator."""
    from dealtracker.main import app

    def override_get_db():
        session = session_factory()
        try:
            yield session
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_narrative_generator] = lambda: generator
    with TestClient(app, raise_server_exceptions=True) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture()
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture()
def user(db):
    user = User(
        username="jsmith", password="password123", full_name="John Smith",
        email="jsmith@company.com", role="bizdev",
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


@pytest.fixture()
def other_user(db):
    user = User(
        username="mlee", password="password123", full_name="Michelle Lee",
        email="mlee@company.com", role="lead",
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


@pytest.fixture()
def business_unit(db):
    unit = BusinessUnit(name="Eng", color="#000")
    db.add(unit)
    db.commit()
    db.refresh(unit)
    return unit


@pytest.fixture()
def vip_tag(db):
    tag = Tag(name="VIP")
    db.add(tag)
    db.commit()
    db.refresh(tag)
    return tag


def create_deal(client, **fields) -> dict:
    payload = {"company": "Acme", "dealType": "Vendor", "stage": "Following"}
    payload.update(fields)
    resp = client.post("/api/deals", json=payload)
    assert resp.status_code == 201, resp.text
    return resp.json()
