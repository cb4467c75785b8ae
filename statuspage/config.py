from __future__ import annotations

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings

# Level names both logging and uvicorn understand
LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


class Settings(BaseSettings):
    """Central configuration loaded from environment / .env file."""

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}

    # Main server
    host: str = "0.0.0.0"
    port: int = Field(default=80, ge=0, le=65535)

    # TLS mode: serve on `port` with cert/key, redirect plaintext traffic
    https: bool = False
    tls_cert_file: str = "/etc/letsencrypt/live/status.wavy.fm/fullchain.pem"
    tls_key_file: str = "/etc/letsencrypt/live/status.wavy.fm/privkey.pem"
    secure_origin: str = "https://status.wavy.fm"
    redirect_port: int = Field(default=80, ge=0, le=65535)

    # Files
    status_dir: str = "status"
    index_file: str = "index.html"

    # Checkers
    check_interval: float = Field(default=30.0, gt=0)
    probe_timeout: float = Field(default=10.0, gt=0)

    # /metrics proxy source
    metrics_upstream_url: str = "http://127.0.0.1:9090/metrics"

    # Logging
    log_level: str = "INFO"

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        level = value.upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"Unknown log level: {value} (expected one of {', '.join(LOG_LEVELS)})")
        return level

    @model_validator(mode="after")
    def _distinct_ports(self) -> "Settings":
        if self.https and self.port == self.redirect_port:
            raise ValueError(
                f"HTTPS mode needs PORT ({self.port}) to differ from REDIRECT_PORT ({self.redirect_port})"
            )
        return self
