import io
import json
import logging

from app.auth.jwt import create_access_token
from app.core.logging_config import JsonFormatter
from app.services.storage.ports import StorageQuotaExceeded

from conftest import FakeObjectStore, make_image

URL = "/api/admin/settings/site-content/upload"


def _files(data: bytes, content_type: str = "image/jpeg", filename: str = "hero.jpg"):
    return {"file": (filename, io.BytesIO(data), content_type)}


def test_valid_hero_image_is_uploaded(client, store, admin_headers, hero_jpeg):
    resp = client.post(URL, files=_files(hero_jpeg), headers=admin_headers)
    assert resp.status_code == 200, resp.text

    body = resp.json()
    assert body["width"] == 1920
    assert body["height"] == 1080
    assert "hero-images" in body["url"]
    assert len(store.objects) == 1
    assert resp.headers["x-request-id"]


def test_two_megabyte_jpeg_is_accepted(client, store, admin_headers, hero_jpeg):
    # Pad with trailing bytes after EOI; decoders ignore them, size checks do not.
    padded = hero_jpeg + b"\x00" * (2 * 1024 * 1024 - len(hero_jpeg))
    resp = client.post(URL, files=_files(padded), headers=admin_headers)

    assert resp.status_code == 200, resp.text
    assert resp.json()["width"] == 1920
    (stored, content_type), = store.objects.values()
    assert len(stored) == 2 * 1024 * 1024
    assert content_type == "image/jpeg"


def test_staff_role_is_allowed(client, hero_jpeg):
    token = create_access_token(subject="staff-7", role="staff")
    resp = client.post(URL, files=_files(hero_jpeg), headers={"Authorization": f"Bearer {token}"})
    assert resp.status_code == 200, resp.text


def test_no_file_field(client, store, admin_headers):
    resp = client.post(URL, data={"other": "value"}, headers=admin_headers)
    assert resp.status_code == 400
    assert resp.json() == {"error": "No file provided"}
    assert "write_object" not in store.calls


def test_pdf_is_rejected_by_type(client, store, admin_headers):
    resp = client.post(URL, files=_files(b"%PDF-1.4\n%fake pdf\n", "application/pdf", "hero.pdf"), headers=admin_headers)
    assert resp.status_code == 400
    assert resp.json() == {"error": "File must be JPEG, PNG, or WebP"}
    assert "write_object" not in store.calls


def test_six_megabyte_jpeg_is_too_large(client, store, admin_headers, hero_jpeg):
    data = hero_jpeg + b"\x00" * (6 * 1024 * 1024 - len(hero_jpeg))
    resp = client.post(URL, files=_files(data), headers=admin_headers)
    assert resp.status_code == 400
    assert resp.json() == {"error": "File size must be under 5MB (current: 6.00MB)"}
    assert "write_object" not in store.calls


def test_small_jpeg_is_rejected_with_actual_size(client, admin_headers):
    resp = client.post(URL, files=_files(make_image(800, 600)), headers=admin_headers)
    assert resp.status_code == 400
    assert resp.json() == {"error": "Image must be at least 1920x800 pixels (actual: 800x600)"}


def test_corrupt_image_is_rejected(client, admin_headers):
    resp = client.post(URL, files=_files(b"\xff\xd8\xff\xe0 not really", "image/jpeg"), headers=admin_headers)
    assert resp.status_code == 400
    assert resp.json() == {
        "error": "Failed to read image metadata. Please ensure the file is a valid image."
    }


def test_missing_bucket_is_created_transparently(client, store, admin_headers, hero_jpeg):
    store.buckets.clear()
    resp = client.post(URL, files=_files(hero_jpeg), headers=admin_headers)

    assert resp.status_code == 200, resp.text
    assert store.buckets["hero-images"]["public"] is True
    assert store.calls[:2] == ["container_exists", "create_container"]


def test_storage_quota_exceeded(client, store, admin_headers, hero_jpeg):
    store.write_error = StorageQuotaExceeded("The project exceeded its storage quota")
    resp = client.post(URL, files=_files(hero_jpeg), headers=admin_headers)
    assert resp.status_code == 500
    assert resp.json() == {"error": "Storage quota exceeded"}


def test_provisioning_failure_is_generic_500(admin_headers, hero_jpeg):
    from fastapi.testclient import TestClient

    from app.api.deps import get_storage
    from app.main import app
    from app.services.storage.ports import StorageError

    class Down(FakeObjectStore):
        def container_exists(self, name):
            raise StorageError("upstream 503 from storage-api.internal")

    down = Down()
    app.dependency_overrides[get_storage] = lambda: down
    try:
        resp = TestClient(app).post(URL, files=_files(hero_jpeg), headers=admin_headers)
    finally:
        app.dependency_overrides.clear()

    assert resp.status_code == 500
    assert resp.json() == {"error": "Internal server error"}
    assert "write_object" not in down.calls


def test_missing_token_is_401(client, store, hero_jpeg):
    resp = client.post(URL, files=_files(hero_jpeg))
    assert resp.status_code == 401
    assert resp.json() == {"error": "Unauthorized: Admin or staff access required"}
    assert store.calls == []


def test_invalid_token_is_401(client, hero_jpeg):
    resp = client.post(URL, files=_files(hero_jpeg), headers={"Authorization": "Bearer not-a-jwt"})
    assert resp.status_code == 401


def test_customer_role_is_403(client, store, hero_jpeg):
    token = create_access_token(subject="cust-1", role="customer")
    resp = client.post(URL, files=_files(hero_jpeg), headers={"Authorization": f"Bearer {token}"})
    assert resp.status_code == 403
    assert resp.json() == {"error": "Unauthorized: Admin or staff access required"}
    assert store.calls == []


def test_health(client):
    resp = client.get("/api/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}


class _JsonLines(logging.Handler):
    """Formats at emit time, on the thread that logged, so context vars are captured."""

    def __init__(self):
        super().__init__(level=logging.INFO)
        self.setFormatter(JsonFormatter())
        self.lines: list[dict] = []

    def emit(self, record):
        self.lines.append(json.loads(self.format(record)))


def test_upload_logs_carry_actor_and_object_key(client, admin_headers, hero_jpeg):
    handler = _JsonLines()
    loggers = [logging.getLogger("app.hero_image_service"), logging.getLogger("app.http")]
    levels = [lg.level for lg in loggers]
    for lg in loggers:
        lg.addHandler(handler)
        lg.setLevel(logging.INFO)
    try:
        resp = client.post(URL, files=_files(hero_jpeg), headers=admin_headers)
    finally:
        for lg, level in zip(loggers, levels):
            lg.removeHandler(handler)
            lg.setLevel(level)

    assert resp.status_code == 200, resp.text
    key = resp.json()["url"].rsplit("/", 1)[-1]

    stored = next(line for line in handler.lines if line["msg"] == "hero_image.stored")
    assert stored["actor"] == "admin-1"
    assert stored["object_key"] == key

    access = next(line for line in handler.lines if line["msg"] == "http.response")
    assert access["actor"] == "admin-1"
    assert access["object_key"] == key
    assert access["request_id"] == resp.headers["x-request-id"]
