from concurrent.futures import ThreadPoolExecutor

import pytest

from app.core import AppError, ErrorCode
from app.images.policy import HERO_IMAGE_POLICY
from app.services.storage.ports import StorageError
from app.services.storage.provisioner import BucketProvisioner

from conftest import FakeObjectStore


def test_creates_missing_bucket_with_policy():
    store = FakeObjectStore()
    BucketProvisioner(store).ensure(HERO_IMAGE_POLICY)

    assert store.buckets["hero-images"] == {
        "public": True,
        "file_size_limit": 5 * 1024 * 1024,
        "allowed_mime_types": ["image/jpeg", "image/png", "image/webp"],
    }
    assert store.calls == ["container_exists", "create_container"]


def test_existing_bucket_is_left_alone():
    store = FakeObjectStore(buckets={"hero-images": {"public": True, "custom": "kept"}})
    BucketProvisioner(store).ensure(HERO_IMAGE_POLICY)

    assert store.calls == ["container_exists"]
    assert store.buckets["hero-images"] == {"public": True, "custom": "kept"}


def test_ensure_twice_is_a_noop_the_second_time():
    store = FakeObjectStore()
    provisioner = BucketProvisioner(store)
    provisioner.ensure(HERO_IMAGE_POLICY)
    provisioner.ensure(HERO_IMAGE_POLICY)

    assert store.calls.count("create_container") == 1
    assert len(store.buckets) == 1


def test_lost_create_race_counts_as_success():
    class StaleListing(FakeObjectStore):
        # Another request created the bucket between our listing and our create.
        def container_exists(self, name):
            self.calls.append("container_exists")
            return False

    store = StaleListing(buckets={"hero-images": {"public": True}})
    BucketProvisioner(store).ensure(HERO_IMAGE_POLICY)

    assert store.calls == ["container_exists", "create_container"]
    assert store.buckets == {"hero-images": {"public": True}}


def test_concurrent_ensure_never_fails_and_creates_once():
    class StaleListing(FakeObjectStore):
        def container_exists(self, name):
            return False

    store = StaleListing()
    provisioner = BucketProvisioner(store)

    with ThreadPoolExecutor(max_workers=8) as pool:
        results = list(pool.map(lambda _: provisioner.ensure(HERO_IMAGE_POLICY), range(16)))

    assert results == [None] * 16
    assert list(store.buckets) == ["hero-images"]


def test_create_failure_is_internal_error():
    class Broken(FakeObjectStore):
        def create_container(self, name, policy):
            raise StorageError("403 forbidden")

    with pytest.raises(AppError) as exc:
        BucketProvisioner(Broken()).ensure(HERO_IMAGE_POLICY)

    assert exc.value.code == ErrorCode.INTERNAL_ERROR
    assert exc.value.status_code == 500
    assert exc.value.to_dict() == {"error": "Internal server error"}


def test_listing_failure_is_internal_error():
    class Unreachable(FakeObjectStore):
        def container_exists(self, name):
            raise StorageError("connection refused")

    with pytest.raises(AppError) as exc:
        BucketProvisioner(Unreachable()).ensure(HERO_IMAGE_POLICY)

    assert exc.value.code == ErrorCode.INTERNAL_ERROR
