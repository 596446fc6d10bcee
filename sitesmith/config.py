from __future__ import annotations

from dataclasses import dataclass, field
import os

from dotenv import find_dotenv, load_dotenv


DEFAULT_GATEWAY_BASE_URL = "https://ai.gateway.lovable.dev/v1"
DEFAULT_TEXT_MODEL = "google/gemini-2.5-flash"
DEFAULT_IMAGE_MODEL = "google/gemini-2.5-flash-image-preview"
DEFAULT_FALLBACK_IMAGE_URL = "https://placehold.co/1200x800/png?text=Image+unavailable"
DEFAULT_CORS_ALLOW_HEADERS = "authorization, x-client-info, apikey, content-type"


def _load_env() -> None:
    env_path = find_dotenv(usecwd=True)
    if env_path:
        load_dotenv(env_path, override=False)


_load_env()


def _get_env(key: str, default: str | None = None) -> str | None:
    value = os.getenv(key)
    if value is None or value == "":
        return default
    return value


def _get_bool(key: str, default: bool = False) -> bool:
    value = os.getenv(key)
    if value is None:
        return default
    return value.lower() in {"1", "true", "yes", "on"}


def _get_int(key: str, default: int) -> int:
    value = os.getenv(key)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default


def _get_float(key: str, default: float) -> float:
    value = os.getenv(key)
    if value is None:
        return default
    try:
        return float(value)
    except ValueError:
        return default


def _get_list(key: str, default: str) -> list[str]:
    raw = _get_env(key, default) or ""
    return [item.strip() for item in raw.split(",") if item.strip()]


@dataclass
class Settings:
    gateway_api_key: str | None = field(
        default_factory=lambda: _get_env("GATEWAY_API_KEY") or _get_env("LOVABLE_API_KEY")
    )
    gateway_base_url: str = field(
        default_factory=lambda: _get_env("GATEWAY_BASE_URL", DEFAULT_GATEWAY_BASE_URL)
    )
    gateway_timeout_seconds: float = field(default_factory=lambda: _get_float("GATEWAY_TIMEOUT_SECONDS", 120.0))

    text_model: str = field(default_factory=lambda: _get_env("TEXT_MODEL", DEFAULT_TEXT_MODEL))
    image_model: str = field(default_factory=lambda: _get_env("IMAGE_MODEL", DEFAULT_IMAGE_MODEL))

    fallback_image_url: str = field(
        default_factory=lambda: _get_env("FALLBACK_IMAGE_URL", DEFAULT_FALLBACK_IMAGE_URL)
    )
    hero_image: bool = field(default_factory=lambda: _get_bool("HERO_IMAGE", True))
    inline_images: bool = field(default_factory=lambda: _get_bool("INLINE_IMAGES", True))
    max_image_prompts: int = field(default_factory=lambda: _get_int("MAX_IMAGE_PROMPTS", 5))

    cors_allow_origins: list[str] = field(default_factory=lambda: _get_list("CORS_ALLOW_ORIGINS", "*"))
    cors_allow_headers: list[str] = field(
        default_factory=lambda: _get_list("CORS_ALLOW_HEADERS", DEFAULT_CORS_ALLOW_HEADERS)
    )

    log_level: str = field(default_factory=lambda: (_get_env("LOG_LEVEL", "INFO") or "INFO").upper())
    log_json: bool = field(default_factory=lambda: _get_bool("LOG_JSON", True))


_settings: Settings | None = None


def get_settings() -> Settings:
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def refresh_settings() -> Settings:
    """Rebuild settings from environment variables."""
    global _settings
    _settings = Settings()
    return _settings


__all__ = [
    "Settings",
    "get_settings",
    "refresh_settings",
]
