"""
Shared fixtures: a fresh SQLite database per test and a TestClient bound to it
"""
import itertools
import os

os.environ.setdefault("SECRET_KEY", "test-secret-key-for-the-webseries-suite")
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["DEBUG"] = "false"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

import webseries.models  # noqa: F401
from webseries.database import Base, get_db
from webseries.main import app
from webseries.models.country import Country
from webseries.models.series import Series, SeriesGenre
from webseries.models.viewer import Role, Viewer

API = "/api/v1"
PASSWORD = "Secret123"


@pytest.fixture
def engine(tmp_path):
    engine = create_engine(
        f"sqlite:///{tmp_path / 'test.db'}",
        connect_args={"check_same_thread": False},
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
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
def catalog(db):
    """One country and one series, enough to register viewers"""
    country = Country(name="Germany")
    series = Series(name="Dark", description="Time travel in Winden", country_of_release="Germany")
    db.add_all([country, series])
    db.flush()
    db.add(SeriesGenre(series_id=series.id, type_name="Mystery"))
    db.commit()
    return {"country_id": country.id, "series_id": series.id}


@pytest.fixture
def make_viewer(client, db, catalog):
    """Register a viewer through the API and optionally promote it in the store"""
    counter = itertools.count(1)

    def _make(role=Role.CUSTOMER, email=None, password=PASSWORD):
        email = email or f"viewer{next(counter)}@example.com"
        response = client.post(f"{API}/auth/register", json={
            "first_name": "Test",
            "last_name": "Viewer",
            "email": email,
            "password": password,
            "series_id": catalog["series_id"],
            "country_id": catalog["country_id"],
        })
        assert response.status_code == 201, response.text
        body = response.json()

        if role != Role.CUSTOMER:
            db.query(Viewer).filter(Viewer.id == body["viewer"]["id"]).update({Viewer.role: role})
            db.commit()

        token = body["token"]
        return {
            "id": body["viewer"]["id"],
            "email": email,
            "token": token,
            "headers": {"Authorization": f"Bearer {token}"},
        }

    return _make


@pytest.fixture
def customer(make_viewer):
    return make_viewer()


@pytest.fixture
def employee(make_viewer):
    return make_viewer(Role.EMPLOYEE)


@pytest.fixture
def admin(make_viewer):
    return make_viewer(Role.ADMIN)


@pytest.fixture
def create_series(client, employee):
    def _create(name="Sacred Games", **fields):
        payload = {"name": name, "country_of_release": "India", **fields}
        response = client.post(f"{API}/series", json=payload, headers=employee["headers"])
        assert response.status_code == 201, response.text
        return response.json()

    return _create


@pytest.fixture
def create_episode(client, employee):
    def _create(series_id, episode_no, **fields):
        payload = {"series_id": series_id, "episode_no": episode_no, **fields}
        response = client.post(f"{API}/episodes", json=payload, headers=employee["headers"])
        assert response.status_code == 201, response.text
        return response.json()

    return _create
