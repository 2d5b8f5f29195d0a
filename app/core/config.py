"""Application configuration (settings and environment).

Single source of truth for all configuration. Uses pydantic-settings
with .env support. Required fields (e.g. SECRET_KEY) are validated at
load time.
"""

from functools import lru_cache

from pydantic import SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment and .env.

    All settings are optional with defaults except those validated in
    validate_required (secret_key, and razorpay_key_secret when a Razorpay
    key id is configured).
    """

    # App
    app_name: str = "eventdesk"
    app_version: str = "1.0.0"
    debug: bool = False
    host: str = "0.0.0.0"
    port: int = 5000

    # Session tokens
    secret_key: SecretStr = SecretStr("")
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 60 * 24 * 7  # 7 days

    # CORS
    allowed_origins: str = "*"

    # Firebase: web API key for Identity Toolkit, service account for Database/Storage.
    firebase_api_key: SecretStr | None = None
    firebase_project_id: str | None = None
    firebase_database_url: str = ""
    firebase_storage_bucket: str = ""
    firebase_service_account_key: SecretStr | None = None
    firebase_service_account_path: str | None = None

    # Razorpay
    razorpay_key_id: str = ""
    razorpay_key_secret: SecretStr = SecretStr("")
    payment_currency: str = "INR"

    # Admin: if set, POST /admin/register must send X-Admin-Registration-Secret.
    admin_registration_secret: SecretStr | None = None

    # Rate limits (fixed window per client address)
    rate_limit_enabled: bool = True
    global_rate_limit: str = "500 per 15 minutes"
    auth_rate_limit: str = "50 per 15 minutes"
    payment_rate_limit: str = "30 per 15 minutes"

    # Request / uploads
    request_id_header: str = "X-Request-ID"
    max_upload_size: int = 10 * 1024 * 1024  # 10MB
    http_timeout_seconds: float = 30.0

    # Campus ambassador images
    image_max_width: int = 800
    image_quality: int = 80

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    @model_validator(mode="after")
    def validate_required(self) -> "Settings":
        """Validate required secrets.

        - SECRET_KEY always (signs session tokens).
        - RAZORPAY_KEY_SECRET whenever RAZORPAY_KEY_ID is set (payment signatures).
        """
        if not self.secret_key.get_secret_value():
            raise ValueError(
                "SECRET_KEY is required. Generate with: openssl rand -hex 32."
            )
        if self.razorpay_key_id and not self.razorpay_key_secret.get_secret_value():
            raise ValueError(
                "RAZORPAY_KEY_SECRET is required when RAZORPAY_KEY_ID is set."
            )
        if self.image_quality < 1 or self.image_quality > 100:
            raise ValueError(
                f"image_quality must be between 1 and 100, got: {self.image_quality!r}"
            )
        return self

    @property
    def origins(self) -> list[str]:
        return [o.strip() for o in self.allowed_origins.split(",") if o.strip()]


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings (single instance per process).

    Validation runs on first call, not at import time. In tests, call
    get_settings.cache_clear() before overriding env vars so the next
    get_settings() uses the new values.

    Returns:
        Loaded and validated Settings instance.
    """
    return Settings()
