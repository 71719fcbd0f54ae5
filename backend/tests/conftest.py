import io
import os
import sys
import tempfile
from pathlib import Path

import pytest

# Ensure the backend package root is on sys.path for direct pytest runs
BACKEND_ROOT = Path(__file__).resolve().parents[1]
if str(BACKEND_ROOT) not in sys.path:
    sys.path.insert(0, str(BACKEND_ROOT))

# Importing api.main builds a default app; keep its files out of backend/data.
os.environ.setdefault("BOOKSWAP_DATA_DIR", tempfile.mkdtemp(prefix="bookswap-tests-"))

from fastapi.testclient import TestClient
from PIL import Image

from api.main import create_app
from db import JsonFileStore
from settings import Settings


@pytest.fixture
def data_dir(tmp_path, monkeypatch):
    monkeypatch.setenv("BOOKSWAP_DATA_DIR", str(tmp_path))
    monkeypatch.delenv("BOOKSWAP_DB_PATH", raising=False)
    monkeypatch.delenv("BOOKSWAP_UPLOADS_DIR", raising=False)
    monkeypatch.delenv("BOOKSWAP_UPLOADS_URL", raising=False)
    return tmp_path


@pytest.fixture
def app_settings(data_dir):
    return Settings()


@pytest.fixture
def app(app_settings):
    return create_app(app_settings)


@pytest.fixture
def client(app):
    return TestClient(app)


@pytest.fixture
def store(app) -> JsonFileStore:
    return app.state.store


@pytest.fixture
def db_path(app_settings) -> Path:
    return app_settings.DB_PATH


@pytest.fixture
def uploads_dir(app_settings) -> Path:
    return app_settings.UPLOADS_DIR


def png_bytes(color="red", size=(8, 8)) -> bytes:
    img = Image.new("RGB", size, color=color)
    buf = io.BytesIO()
    img.save(buf, format="PNG")
    return buf.getvalue()


def register(client, name="A", email="a@x.com", password="secret1", role="Owner", **extra):
    payload = {"name": name, "email": email, "password": password, "role": role, **extra}
    return client.post("/api/users/register", json=payload)


def add_book(client, user_id, **fields):
    payload = {"title": "T", "author": "Au", "location": "L", "contact": "C"}
    payload.update(fields)
    return client.post("/api/books", json=payload, headers={"x-user-id": user_id})


@pytest.fixture
def owner(client):
    return register(client).json()


@pytest.fixture
def book(client, owner):
    return add_book(client, owner["id"]).json()
