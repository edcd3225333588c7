import pytest

from app.core.config import AppSettings, OpenRouterSettings, settings
from app.modules.flashcards.main import FlashcardsGenerator


@pytest.mark.unit
def test_openrouter_defaults(monkeypatch):
    for name in (
        "OPENROUTER_MODEL",
        "OPENROUTER_MAX_RETRIES",
        "OPENROUTER_TIMEOUT",
        "OPENROUTER_BASE_URL",
    ):
        monkeypatch.delenv(name, raising=False)

    config = OpenRouterSettings(_env_file=None)

    assert config.max_retries == 3
    assert config.timeout_ms == 30000
    assert config.timeout_seconds == 30.0
    assert config.base_url == "https://openrouter.ai/api/v1"


@pytest.mark.unit
def test_openrouter_reads_environment(monkeypatch):
    monkeypatch.setenv("OPENROUTER_API_KEY", "sk-env")
    monkeypatch.setenv("OPENROUTER_MODEL", "some/model")
    monkeypatch.setenv("OPENROUTER_MAX_RETRIES", "5")
    monkeypatch.setenv("OPENROUTER_TIMEOUT", "1500")

    config = OpenRouterSettings(_env_file=None)

    assert config.api_key == "sk-env"
    assert config.model == "some/model"
    assert config.max_retries == 5
    assert config.timeout_seconds == 1.5


@pytest.mark.unit
def test_openrouter_rejects_zero_attempts(monkeypatch):
    monkeypatch.setenv("OPENROUTER_MAX_RETRIES", "0")

    with pytest.raises(ValueError):
        OpenRouterSettings(_env_file=None)


@pytest.mark.unit
@pytest.mark.parametrize("mode,production", [("dev", False), ("prod", True)])
def test_app_mode_flags(monkeypatch, mode, production):
    monkeypatch.setenv("MODE", mode)

    config = AppSettings(_env_file=None)

    assert config.is_production is production
    assert set(AppSettings.model_computed_fields) == {"is_production"}


@pytest.mark.unit
def test_generator_from_settings_uses_openrouter_group():
    generator = FlashcardsGenerator.from_settings()

    assert generator.config is settings.openrouter
