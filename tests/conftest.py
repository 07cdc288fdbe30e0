import uuid
from datetime import datetime

import mongomock
import pytest
from fastapi.testclient import TestClient

from social_events.main import create_app
from social_events.services.dependencies import build_components

FUTURE = datetime(2099, 6, 1, 18, 0, 0)
PAST = datetime(2001, 6, 1, 18, 0, 0)


@pytest.fixture
def database():
    client = mongomock.MongoClient()
    name = f"socialdevelopment_{uuid.uuid4().hex}"
    yield client[name]
    client.drop_database(name)


@pytest.fixture
def components(database):
    return build_components(database)


@pytest.fixture
def store(components):
    return components[0]


@pytest.fixture
def ledger(components):
    return components[1]


@pytest.fixture
def app(database):
    return create_app(database=database)


@pytest.fixture
def client(app):
    return TestClient(app)


def make_event(**overrides) -> dict:
    fields = dict(
        eventName="Beach Cleanup",
        organizerEmail="a@x.com",
        category="Environment",
        location="Cox's Bazar",
        description="Bring gloves.",
        image="https://img.example.com/cleanup.png",
        eventDate=FUTURE,
    )
    fields.update(overrides)
    return fields
