import os

# must be set before the app modules create their engine
os.environ["DATABASE_URL"] = "sqlite://"
os.environ.setdefault("SECRET_KEY", "test-secret")

import datetime

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from clubhouse.database import Base, get_db
from clubhouse.main import app
from clubhouse.models.player import Player
from clubhouse.models.team import Team
from clubhouse.models.training import Training
from clubhouse.services.points_service import credit

ADMIN_USER = "admin"
ADMIN_PASSWORD = "correct-horse"


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
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def client(session_factory, monkeypatch):
    monkeypatch.setenv("ADMIN_USERNAME", ADMIN_USER)
    monkeypatch.setenv("ADMIN_PASSWORD", ADMIN_PASSWORD)

    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def admin_client(client):
    resp = client.post("/api/admin/login", json={"username": ADMIN_USER, "password": ADMIN_PASSWORD})
    assert resp.status_code == 200
    return client


def make_team(db, name, **manual):
    team = Team(name=name, **manual)
    db.add(team)
    db.commit()
    return team


def make_player(db, name="Player", points=0, pin=None, **fields):
    player = Player(name=name, position=fields.pop("position", "MF"), pin=pin, unlocked_card_types=[], **fields)
    db.add(player)
    db.commit()
    if points:
        credit(db, player, points, "award", "Opening balance")
        db.commit()
    return player


def make_training(db, days_ago=0, location="Main pitch"):
    training = Training(
        date=datetime.datetime(2026, 1, 1, 18, 0) - datetime.timedelta(days=days_ago),
        location=location,
    )
    db.add(training)
    db.commit()
    return training
