"""
Tests for settings loading and settings-driven construction.
"""

import pytest
from pydantic import ValidationError
from recency_cache import CacheSettings, LRUCache


class TestCacheSettings:
    """Test CacheSettings defaults and environment overrides."""

    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("RECENCY_CACHE_DEFAULT_LIMIT", raising=False)
        monkeypatch.delenv("RECENCY_CACHE_DESCRIBE_DELIMITER", raising=False)
        cache_settings = CacheSettings(_env_file=None)
        assert cache_settings.default_limit == 1000
        assert cache_settings.describe_delimiter == " < "

    def test_environment_override(self, monkeypatch):
        monkeypatch.setenv("RECENCY_CACHE_DEFAULT_LIMIT", "25")
        monkeypatch.setenv("recency_cache_describe_delimiter", " | ")
        cache_settings = CacheSettings(_env_file=None)
        assert cache_settings.default_limit == 25
        assert cache_settings.describe_delimiter == " | "

    def test_env_file(self, tmp_path):
        env_file = tmp_path / ".env"
        env_file.write_text("RECENCY_CACHE_DEFAULT_LIMIT=7\n")
        cache_settings = CacheSettings(_env_file=str(env_file))
        assert cache_settings.default_limit == 7

    def test_negative_limit_rejected(self):
        with pytest.raises(ValidationError):
            CacheSettings(_env_file=None, default_limit=-1)


class TestFromSettings:
    """Test building caches from settings."""

    def test_from_explicit_settings(self):
        cache = LRUCache.from_settings(CacheSettings(_env_file=None, default_limit=3))
        assert cache.limit == 3
        assert cache.size == 0

    def test_from_settings_with_hook(self):
        seen = []
        cache = LRUCache.from_settings(
            CacheSettings(_env_file=None, default_limit=1),
            on_evict=seen.append
        )
        cache.put("a", 1)
        cache.put("b", 2)
        assert [entry.key for entry in seen] == ["a"]

    def test_from_default_settings(self):
        from recency_cache.config import settings
        cache = LRUCache.from_settings()
        assert cache.limit == settings.default_limit

    def test_from_settings_uses_describe_delimiter(self):
        cache = LRUCache.from_settings(
            CacheSettings(_env_file=None, default_limit=3, describe_delimiter=" | ")
        )
        cache.put("a", 1)
        cache.put("b", 2)
        assert cache.describe() == "a:1 | b:2"
        assert str(cache) == "a:1 | b:2"

    def test_explicit_delimiter_overrides_settings(self):
        cache = LRUCache(3, describe_delimiter=" -> ")
        cache.put("a", 1)
        cache.put("b", 2)
        assert cache.describe() == "a:1 -> b:2"
        assert cache.describe(",") == "a:1,b:2"
