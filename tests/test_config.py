"""Tests for settings loading."""

from food_diary.config import Settings


def test_defaults_do_not_require_credentials(monkeypatch) -> None:
    for name in ("SUPABASE_URL", "SUPABASE_SERVICE_KEY", "FDC_API_KEY", "OPENAI_API_KEY"):
        monkeypatch.delenv(name, raising=False)

    settings = Settings(_env_file=None)

    assert settings.supabase_enabled is False
    assert settings.external_search_threshold == 10
    assert settings.fallback_category == "vegetables"
    assert settings.seed_catalog is True


def test_environment_overrides(monkeypatch) -> None:
    monkeypatch.setenv("SUPABASE_URL", "https://example.supabase.co")
    monkeypatch.setenv("SUPABASE_SERVICE_KEY", "service-key")
    monkeypatch.setenv("EXTERNAL_SEARCH_THRESHOLD", "4")
    monkeypatch.setenv("FALLBACK_CATEGORY", "grains")

    settings = Settings(_env_file=None)

    assert settings.supabase_enabled is True
    assert settings.external_search_threshold == 4
    assert settings.fallback_category == "grains"
