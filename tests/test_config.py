from sitesmith.config import refresh_settings


def test_settings_read_environment(monkeypatch):
    monkeypatch.setenv("GATEWAY_API_KEY", "key-1")
    monkeypatch.setenv("MAX_IMAGE_PROMPTS", "3")
    monkeypatch.setenv("INLINE_IMAGES", "off")
    monkeypatch.setenv("CORS_ALLOW_ORIGINS", "https://a.test, https://b.test")
    monkeypatch.setenv("LOG_LEVEL", "debug")

    settings = refresh_settings()

    assert settings.gateway_api_key == "key-1"
    assert settings.max_image_prompts == 3
    assert settings.inline_images is False
    assert settings.cors_allow_origins == ["https://a.test", "https://b.test"]
    assert settings.log_level == "DEBUG"


def test_legacy_key_name_is_accepted(monkeypatch):
    monkeypatch.delenv("GATEWAY_API_KEY", raising=False)
    monkeypatch.setenv("LOVABLE_API_KEY", "legacy")

    assert refresh_settings().gateway_api_key == "legacy"


def test_defaults_and_bad_numbers(monkeypatch):
    for key in ("TEXT_MODEL", "IMAGE_MODEL", "CORS_ALLOW_HEADERS", "HERO_IMAGE"):
        monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("GATEWAY_TIMEOUT_SECONDS", "soon")

    settings = refresh_settings()

    assert settings.text_model == "google/gemini-2.5-flash"
    assert settings.image_model == "google/gemini-2.5-flash-image-preview"
    assert settings.gateway_timeout_seconds == 120.0
    assert settings.hero_image is True
    assert settings.cors_allow_headers == ["authorization", "x-client-info", "apikey", "content-type"]
