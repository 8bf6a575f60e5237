"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - get_settings() is cached (lru_cache): one instance per process
    - Defaults reproduce the public card service: popcat screenshot API, 900x300, 2s delay

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - Render endpoint passed explicitly to the renderer, never read from a module constant
"""

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Rendering service
    render_service_url: str = "https://api.popcat.xyz/screenshot"
    render_delay_seconds: int = 2
    render_timeout_seconds: float = 30.0
    card_width: int = 900
    card_height: int = 300

    # Card
    fallback_avatar_url: str = "https://cdn.discordapp.com/embed/avatars/0.png"
    cache_max_age_seconds: int = 86_400

    @field_validator("render_service_url", "fallback_avatar_url")
    @classmethod
    def require_http_url(cls, v: str) -> str:
        v = v.strip()
        if not v.startswith(("http://", "https://")):
            raise ValueError("must be an http(s) URL")
        return v

    # API
    # 500 bodies carry the raw exception message unless disabled
    expose_internal_errors: bool = True

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"

    @property
    def cache_control(self) -> str:
        return f"public, max-age={self.cache_max_age_seconds}"


@lru_cache
def get_settings() -> Settings:
    return Settings()
