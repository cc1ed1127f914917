"""Application Configuration: environment-driven settings via pydantic-settings.

Invariants:
    - All secrets come from environment variables (never hardcoded)
    - get_settings() is cached (lru_cache): single instance per process
    - Firebase credentials are optional at load time and enforced at startup
      (main.lifespan exits when any is missing)

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - Defaults provided for every non-secret setting
"""

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_FIREBASE_FIELDS = (
    "firebase_project_id",
    "firebase_client_email",
    "firebase_private_key",
    "firebase_database_url",
)


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Firebase service account
    firebase_project_id: str | None = None
    firebase_client_email: str | None = None
    firebase_private_key: str | None = None
    firebase_database_url: str | None = None

    @field_validator("firebase_private_key", mode="before")
    @classmethod
    def normalize_private_key(cls, v: str | None) -> str | None:
        """Hosting dashboards store the PEM with literal \\n and stray quotes."""
        if isinstance(v, str):
            v = v.replace("\\n", "\n").replace('"', "").strip()
            return v or None
        return v

    # Firestore collections
    documents_collection: str = "api"
    healthcheck_collection: str = "healthcheck"

    # Server
    host: str = "0.0.0.0"
    port: int = 5000
    environment: str = "production"
    shutdown_grace_seconds: int = 30

    # HTTP policies
    cors_origins: list[str] = [
        "http://localhost:3000",
        "http://localhost:5173",
        "https://jsonspark.vercel.app",
    ]
    max_body_bytes: int = 10 * 1024 * 1024
    rate_limit_max_requests: int = 100
    rate_limit_window_seconds: int = 15 * 60

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"

    def missing_firebase_credentials(self) -> list[str]:
        """Names of the Firebase env vars that are unset or blank."""
        return [
            name.upper() for name in _FIREBASE_FIELDS
            if not getattr(self, name)
        ]


@lru_cache
def get_settings() -> Settings:
    return Settings()
