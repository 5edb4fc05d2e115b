# app/core/config.py
import os
from pathlib import Path
from pydantic_settings import BaseSettings, SettingsConfigDict

PROJECT_ROOT = Path(__file__).parent.parent.parent

class Settings(BaseSettings):
    app_name: str = "HeroImageService"
    env: str = "local"

    # Supabase (service-role key: storage admin calls bypass RLS)
    SUPABASE_URL: str = ""
    SUPABASE_SERVICE_ROLE_KEY: str = ""
    HERO_IMAGES_BUCKET: str = "hero-images"

    # Admin gate
    JWT_SECRET_KEY: str = ""
    JWT_ALGORITHM: str = "HS256"
    JWT_ACCESS_TOKEN_EXPIRES_MINUTES: int = 60
    ADMIN_ROLES: str = "admin,staff"

    # HTTP
    CORS_ALLOW_ORIGINS: str | None = None

    model_config = SettingsConfigDict(
        env_file=os.path.join(PROJECT_ROOT, ".env"),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @property
    def admin_roles(self) -> frozenset[str]:
        return frozenset(r.strip().lower() for r in self.ADMIN_ROLES.split(",") if r.strip())

settings = Settings()
