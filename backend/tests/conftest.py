"""Shared fixtures: in-memory SQLite, fakeredis, and a mocked palette queue."""

import io
import os
import tempfile

# must be set before filmcraft.core.config is imported
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["MEDIA_ROOT"] = tempfile.mkdtemp(prefix="filmcraft-media-")

from unittest.mock import Mock

import fakeredis
import fakeredis.aioredis
import pytest
from fastapi.testclient import TestClient
from PIL import Image

from filmcraft.core.queue import get_palette_queue
from filmcraft.core.redis import get_async_redis, get_redis
from filmcraft.db import Base, engine
from filmcraft.main import app

API = "/api/v1"


@pytest.fixture(autouse=True)
def fresh_db():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture
def redis_server():
    return fakeredis.FakeServer()


@pytest.fixture
def fake_redis(redis_server):
    return fakeredis.FakeRedis(server=redis_server)


@pytest.fixture
def palette_queue():
    return Mock()


@pytest.fixture
def client(redis_server, fake_redis, palette_queue):
    async def _async_redis():
        r = fakeredis.aioredis.FakeRedis(server=redis_server)
        try:
            yield r
        finally:
            await r.aclose()

    app.dependency_overrides[get_redis] = lambda: fake_redis
    app.dependency_overrides[get_async_redis] = _async_redis
    app.dependency_overrides[get_palette_queue] = lambda: palette_queue
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


def sign_up(client, email, password="secret123"):
    res = client.post(f"{API}/auth/signup", json={"email": email, "password": password})
    assert res.status_code == 201, res.text
    return res.json()


def bearer(session):
    return {"Authorization": f"Bearer {session['access_token']}"}


@pytest.fixture
def owner(client):
    return sign_up(client, "director@filmcraft.io")


@pytest.fixture
def headers(owner):
    return bearer(owner)


@pytest.fixture
def project(client, headers):
    res = client.post(f"{API}/projects/", json={"title": "Night Market"}, headers=headers)
    assert res.status_code == 201, res.text
    return res.json()


def png_bytes(color=(200, 30, 30), size=(32, 32)):
    buf = io.BytesIO()
    Image.new("RGB", size, color).save(buf, format="PNG")
    return buf.getvalue()
