"""Application configuration (settings and environment).

Single source of truth for all configuration. Uses pydantic-settings
with .env support. Required fields (SECRET_KEY, Firestore credentials when
the firestore backend is selected) are validated at load time.
"""

from functools import lru_cache

from pydantic import SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_DATABASE_BACKENDS = ("firestore", "memory")


class Settings(BaseSettings):
    """Application settings loaded from environment and .env."""

    # App
    app_name: str = "orgcore"
    app_version: str = "1.0.0"
    debug: bool = False

    # Document store: "firestore" (REST API) or "memory" (local dev / tests)
    database_backend: str = "firestore"
    firebase_service_account_key: SecretStr | None = None
    firebase_service_account_path: str | None = None

    # Security (caller identity is a bearer JWT signed with secret_key)
    secret_key: SecretStr = SecretStr("")
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 480  # 8 hours

    # CORS
    allowed_origins: str = "http://localhost:3000,http://localhost:8080"

    # Request / middleware
    request_id_header: str = "X-Request-ID"
    correlation_id_header: str = "X-Correlation-ID"

    # Workflow engine
    workflow_default_delay_ms: int = 1000
    # Validation report warns about delay steps longer than this.
    workflow_delay_warning_ms: int = 60_000

    # Rule engine: change events are redelivered at least once. When enabled
    # (and Redis is available) each event_id fires rules at most once per TTL.
    rule_event_dedup_enabled: bool = False
    rule_event_dedup_ttl_seconds: int = 86_400

    # In-memory store publishes its own writes as change events.
    memory_store_emit_changes: bool = False

    # Change webhook: POST /changes must send
    # X-Webhook-Signature-256: sha256=<hex(hmac_sha256(secret, body))>.
    change_webhook_secret: SecretStr | None = None

    # Redis
    redis_enabled: bool = False
    redis_host: str = "localhost"
    redis_port: int = 6379
    redis_db: int = 0
    redis_password: SecretStr | None = None
    redis_max_connections: int = 10

    # OpenTelemetry
    telemetry_enabled: bool = False
    telemetry_exporter: str = "console"
    telemetry_otlp_endpoint: str | None = None
    telemetry_sample_rate: float = 1.0
    telemetry_environment: str = "development"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    @model_validator(mode="after")
    def validate_required(self) -> "Settings":
        """Validate backend selection, its credentials, and the JWT secret."""
        if self.database_backend not in _DATABASE_BACKENDS:
            raise ValueError(
                f"database_backend must be one of {_DATABASE_BACKENDS}, got: {self.database_backend!r}"
            )
        if self.database_backend == "firestore":
            has_key = (
                self.firebase_service_account_key
                and self.firebase_service_account_key.get_secret_value()
            )
            if not has_key and not self.firebase_service_account_path:
                raise ValueError(
                    "When database_backend is 'firestore', set FIREBASE_SERVICE_ACCOUNT_KEY (full JSON string) "
                    "or FIREBASE_SERVICE_ACCOUNT_PATH (path to JSON file)."
                )
        if not self.secret_key.get_secret_value():
            raise ValueError("SECRET_KEY is required. Generate with: openssl rand -hex 32.")
        if self.workflow_default_delay_ms < 0:
            raise ValueError("workflow_default_delay_ms must be >= 0")
        if self.rule_event_dedup_ttl_seconds <= 0:
            raise ValueError("rule_event_dedup_ttl_seconds must be > 0")
        return self

    @property
    def cors_origins(self) -> list[str]:
        return [o.strip() for o in self.allowed_origins.split(",") if o.strip()]


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings (single instance per process).

    Validation runs on first call, not at import time. In tests, call
    get_settings.cache_clear() before overriding env vars.
    """
    return Settings()
