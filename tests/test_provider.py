"""Tests for the shared engine provider."""

import pytest

from sensitive_filter.config.settings import SensitiveConfig
from sensitive_filter.provider import get_sensitive, load_default_config, reset_sensitive


@pytest.fixture(autouse=True)
def fresh_provider():
    reset_sensitive()
    yield
    reset_sensitive()


class TestProvider:
    """Tests for get_sensitive / reset_sensitive."""

    def test_returns_same_instance(self):
        assert get_sensitive() is get_sensitive()

    def test_first_config_wins(self, sample_text):
        first = get_sensitive(SensitiveConfig(words=["sb"]))
        second = get_sensitive(SensitiveConfig(words=["笨蛋"]))

        assert first is second
        assert second.search(sample_text) == ["sb"]

    def test_reset_rebuilds(self):
        first = get_sensitive()
        reset_sensitive()

        assert get_sensitive() is not first

    def test_builds_from_environment(self, words_file, monkeypatch, sample_text):
        monkeypatch.setenv("SENSITIVE_WORDS_FILE", str(words_file))
        monkeypatch.setenv("SENSITIVE_REPLACE_CODE", "#")

        assert get_sensitive().filter(sample_text) == "你是##大##嘛"

    def test_config_path(self, tmp_path, monkeypatch):
        path = tmp_path / "config.yaml"
        path.write_text("sensitive:\n  words: [zz]\n", encoding="utf-8")
        monkeypatch.setenv("SENSITIVE_CONFIG_PATH", str(path))

        assert load_default_config().words == ["zz"]
        assert get_sensitive().search("azzb") == ["zz"]
