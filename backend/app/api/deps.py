from fastapi import Depends

from app.services.hero_image_service import HeroImageService
from app.services.storage.ports import ObjectStore
from app.services.storage.supabase_storage import SupabaseStorage


def get_storage() -> ObjectStore:
    """
    Provides the storage client.
    Using Depends(get_storage) allows for easy mocking of Supabase in tests.
    """
    return SupabaseStorage()


def get_hero_image_service(storage: ObjectStore = Depends(get_storage)) -> HeroImageService:
    """
    Service dependency for the hero image flow; one instance per request.
    """
    return HeroImageService(store=storage)
