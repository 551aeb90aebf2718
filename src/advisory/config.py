from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_ANALYSIS_ENDPOINT = (
    "https://n8n.estdev.cloud/webhook/8d5563f9-d123-4b03-8de5-923dce86e6d8"
)


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Analysis backend
    analysis_endpoint_url: str = DEFAULT_ANALYSIS_ENDPOINT
    gateway_url: str = Field(
        default="",
        description="Optional CORS gateway. Empty = call the analysis endpoint directly.",
    )

    # Resilient request policy
    request_max_attempts: int = Field(default=3, ge=1)
    request_timeout_seconds: float = Field(
        default=600.0,
        gt=0,
        description="Hard deadline for a single attempt (10 minutes).",
    )
    request_retry_delay_seconds: float = Field(
        default=3.0,
        ge=0,
        description="Fixed backoff between attempts, not exponential.",
    )

    # Progress simulation
    progress_total_seconds: float = Field(
        default=420.0,
        gt=0,
        description="Simulated analysis duration (7 minutes).",
    )
    progress_tick_seconds: float = Field(default=1.0, gt=0)

    # Gateway
    gateway_host: str = "0.0.0.0"
    gateway_port: int = 8000
    gateway_default_content_type: str = "application/json"
    gateway_upstream_timeout_seconds: float = Field(default=600.0, gt=0)
    gateway_preflight_status: int = Field(default=204, ge=200, le=299)

    # Application
    log_level: str = "INFO"  # DEBUG for development


settings = Settings()
