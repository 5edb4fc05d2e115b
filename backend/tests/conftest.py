import io
import os
import threading

# Settings are read at import time; give the gate a secret before the app is imported.
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key-for-hero-uploads")
os.environ.setdefault("SUPABASE_URL", "")
os.environ.setdefault("SUPABASE_SERVICE_ROLE_KEY", "")

import pytest
from fastapi.testclient import TestClient
from PIL import Image

from app.api.deps import get_storage
from app.auth.jwt import create_access_token
from app.main import app
from app.services.storage.ports import ContainerAlreadyExists, StorageError


class FakeObjectStore:
    """In-memory ObjectStore; records every call so tests can assert on ordering."""

    def __init__(self, *, buckets=None, write_error: Exception | None = None, base_url="https://proj.supabase.co"):
        self.buckets = dict(buckets or {})
        self.objects: dict[tuple[str, str], tuple[bytes, str]] = {}
        self.calls: list[str] = []
        self.write_error = write_error
        self.base_url = base_url
        self._lock = threading.Lock()

    def container_exists(self, name):
        self.calls.append("container_exists")
        return name in self.buckets

    def create_container(self, name, policy):
        self.calls.append("create_container")
        with self._lock:
            if name in self.buckets:
                raise ContainerAlreadyExists(name)
            self.buckets[name] = policy.to_bucket_options()

    def write_object(self, container, key, data, content_type):
        self.calls.append("write_object")
        if self.write_error is not None:
            raise self.write_error
        if container not in self.buckets:
            raise StorageError("bucket not found")
        self.objects[(container, key)] = (data, content_type)

    def resolve_public_url(self, container, key):
        self.calls.append("resolve_public_url")
        return f"{self.base_url}/storage/v1/object/public/{container}/{key}"


def make_image(width: int, height: int, fmt: str = "JPEG") -> bytes:
    mode = "P" if fmt == "GIF" else "RGB"
    img = Image.new(mode, (width, height), color=0 if mode == "P" else (40, 90, 160))
    buf = io.BytesIO()
    img.save(buf, format=fmt)
    return buf.getvalue()


@pytest.fixture
def store():
    return FakeObjectStore(buckets={"hero-images": {"public": True}})


@pytest.fixture
def client(store):
    app.dependency_overrides[get_storage] = lambda: store
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def admin_headers():
    token = create_access_token(subject="admin-1", role="admin")
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture(scope="session")
def hero_jpeg() -> bytes:
    return make_image(1920, 1080, "JPEG")
