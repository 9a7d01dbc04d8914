# backend/storefront/core/config.py
from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    app_name: str = "Storefront"
    environment: str = "development"
    debug: bool = False
    log_level: str = "INFO"

    # Firestore (REST)
    firebase_project_id: str = "shinora"
    firestore_base_url: str = "https://firestore.googleapis.com/v1"
    firestore_timeout_seconds: float = 10.0

    # Cloudinary upload widget
    cloudinary_cloud_name: str = "isinidev"
    cloudinary_upload_preset: str = "shinora"

    # Admin session
    session_timeout_hours: int = 24
    session_file: str = ".storefront/admin_session.json"

    # Static catalog data (keyed by category)
    catalog_file: str = "data/products.json"

    model_config = {"env_file": ".env", "extra": "ignore"}

    @property
    def session_timeout_ms(self) -> int:
        return self.session_timeout_hours * 60 * 60 * 1000

    @property
    def firestore_documents_url(self) -> str:
        return (
            f"{self.firestore_base_url}/projects/{self.firebase_project_id}"
            "/databases/(default)/documents"
        )


@lru_cache
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
