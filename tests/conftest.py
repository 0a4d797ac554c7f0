"""Pytest fixtures and configuration."""

import pytest

from sensitive_filter.cache.memory_cache import MemoryCache


@pytest.fixture(autouse=True)
def isolated_caches(tmp_path, monkeypatch):
    """Keep cache state from leaking between tests."""
    monkeypatch.setenv("SENSITIVE_CACHE_PATH", str(tmp_path / "cache"))
    for name in (
        "SENSITIVE_CACHE",
        "SENSITIVE_CACHE_CLASS",
        "SENSITIVE_CACHE_KEY",
        "SENSITIVE_REPLACE_CODE",
        "SENSITIVE_DISTURBS",
        "SENSITIVE_WORDS_FILE",
        "SENSITIVE_CONFIG_PATH",
    ):
        monkeypatch.delenv(name, raising=False)
    MemoryCache.clear_all()
    yield
    MemoryCache.clear_all()


@pytest.fixture
def sample_words():
    """Words used across the engine scenarios."""
    return ["笨蛋", "sb", "sss"]


@pytest.fixture
def sample_text():
    """Text containing two of the sample words."""
    return "你是笨蛋大sb嘛"


@pytest.fixture
def words_file(tmp_path):
    """A one-word-per-line word list file."""
    path = tmp_path / "words.txt"
    path.write_text("笨蛋\n  sb  \n'sss'\n\n", encoding="utf-8")
    return path
