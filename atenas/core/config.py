"""Application configuration"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True, extra="ignore")

    # API Configuration
    API_V1_PREFIX: str = "/api/v1"
    PROJECT_NAME: str = "Fundación Atenas"
    VERSION: str = "1.0.0"
    DESCRIPTION: str = "Donations, beneficiaries and headquarters management"

    # Security
    SECRET_KEY: str
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 30
    REFRESH_TOKEN_EXPIRE_DAYS: int = 7
    ALGORITHM: str = "HS256"
    PASSWORD_RESET_EXPIRE_MINUTES: int = 60

    # Database
    DATABASE_URL: str
    AUTO_CREATE_TABLES: bool = False

    # Bold payment gateway
    BOLD_API_KEY: str = ""
    BOLD_SECRET_KEY: str = ""
    BOLD_REDIRECT_URL: Optional[str] = None  # Defaults to {FRONTEND_URL}/payment/result
    BOLD_PRODUCTION: bool = False
    BOLD_ORDER_PREFIX: str = "ATENAS"
    BOLD_VERIFY_WEBHOOK_SIGNATURE: bool = True
    CHECKOUT_TIMEOUT_SECONDS: float = 15.0

    # Geocoding (OpenStreetMap Nominatim)
    NOMINATIM_URL: str = "https://nominatim.openstreetmap.org/search"
    GEOCODER_USER_AGENT: str = "fundacion-atenas-api"
    GEOCODER_TIMEOUT: float = 10.0
    MAP_DEFAULT_LAT: float = 3.4516
    MAP_DEFAULT_LNG: float = -76.5320

    # MinIO File Storage
    MINIO_ENDPOINT: str = "localhost:9000"
    MINIO_ACCESS_KEY: str = "minioadmin"
    MINIO_SECRET_KEY: str = "minioadmin"
    MINIO_BUCKET_NAME: str = "images"
    MINIO_GALLERY_BUCKET: str = "gallery"
    MINIO_SECURE: bool = False  # Use HTTPS

    # Email (SMTP)
    SMTP_HOST: str = ""
    SMTP_PORT: int = 587
    SMTP_USERNAME: str = ""
    SMTP_PASSWORD: str = ""
    SMTP_USE_TLS: bool = True
    FROM_EMAIL: str = "no-reply@fundacionatenas.org"
    FROM_NAME: str = "Fundación Atenas"

    # CORS
    ALLOWED_HOSTS: list[str] = Field(default=["http://localhost:3000"])

    # Application URLs
    FRONTEND_URL: str = "http://localhost:3000"

    # File Processing
    MAX_FILE_SIZE: int = 10 * 1024 * 1024  # 10MB
    ALLOWED_IMAGE_TYPES: list[str] = Field(default=["image/jpeg", "image/png", "image/webp"])

    # Donor dashboard
    DONATION_FETCH_RETRY_DELAYS: list[float] = Field(default=[0.8, 1.6])

    # Development
    DEBUG: bool = False
    TESTING: bool = False
    LOG_LEVEL: str = "INFO"
    ENVIRONMENT: str = "development"

    @property
    def bold_redirect_url(self) -> str:
        return self.BOLD_REDIRECT_URL or f"{self.FRONTEND_URL}/payment/result"

    @property
    def minio_public_base(self) -> str:
        protocol = "https" if self.MINIO_SECURE else "http"
        return f"{protocol}://{self.MINIO_ENDPOINT}"


settings = Settings()
