import pytest

from splitshare.config import Settings
from splitshare.engine import SplitEngine


@pytest.fixture
def settings() -> Settings:
    return Settings(default_currency="USD", debounce_ms=100)


@pytest.fixture
def engine(settings: Settings) -> SplitEngine:
    return SplitEngine(settings)
