import os
import sys
from pathlib import Path

import pytest

# Settings are read at import time; provide test values before `app` loads
os.environ.setdefault("POSTGRES_HOST", "localhost")
os.environ.setdefault("POSTGRES_DB_PORT", "5432")
os.environ.setdefault("POSTGRES_DB_NAME", "tenx_cards_test")
os.environ.setdefault("POSTGRES_DB_USER", "postgres")
os.environ.setdefault("POSTGRES_DB_PASSWORD", "postgres")
os.environ.setdefault("JWT_SECRET", "test-secret")
os.environ.setdefault("OPENROUTER_API_KEY", "test-openrouter-key")
os.environ.setdefault("MODE", "dev")

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))


@pytest.fixture
def study_text():
    paragraph = (
        "Photosynthesis is the process by which green plants, algae and some "
        "bacteria convert light energy into chemical energy stored in glucose. "
    )
    return paragraph * 15


@pytest.fixture
def openrouter_settings():
    from app.core.config import OpenRouterSettings

    return OpenRouterSettings(
        api_key="sk-test",
        model="test/model",
        max_retries=3,
        timeout_ms=5000,
        base_url="https://openrouter.test/api/v1",
    )


@pytest.fixture
def recorded_sleeps():
    return []


@pytest.fixture
def fake_sleep(recorded_sleeps):
    async def _sleep(seconds: float) -> None:
        recorded_sleeps.append(seconds)

    return _sleep
