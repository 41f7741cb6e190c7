# tests/unit/infrastructure/cache/test_cache_store.py

"""Tests for ExpiringCacheStore"""

# Standard library imports
from datetime import timedelta
from json import dump
from json import load
from os import listdir
from os.path import exists
from tempfile import TemporaryDirectory
from unittest.mock import patch

# Third party imports
import pytest

# Local imports
from geocode_tool.core.domain.errors import CacheError
from geocode_tool.core.domain.errors import CacheExpiredError
from geocode_tool.core.domain.errors import CacheMissError
from geocode_tool.core.domain.errors import PersistenceError
from geocode_tool.infrastructure.cache import ExpiringCacheStore

POINT = {"latitude": 33.66, "longitude": -117.83, "formatted_address": "Irvine, CA"}


class TestExpiringCacheStore:
    """Test in-memory behavior of the store"""

    def test_empty_on_missing_file(self, cache_store):
        """No cache file means an empty, clean store"""
        assert len(cache_store) == 0
        assert not cache_store.updated()
        assert cache_store.file_path.endswith("geo/geocode_cache.json")

    def test_set_then_get(self, cache_store, clock):
        expires_at = cache_store.set("92612", POINT, timedelta(hours=1))
        assert expires_at == clock.now + 3600
        value, stored_expiry = cache_store.get("92612")
        assert value == POINT
        assert stored_expiry == expires_at
        assert "92612" in cache_store

    def test_miss(self, cache_store):
        with pytest.raises(CacheMissError) as exc_info:
            cache_store.get("missing")
        assert exc_info.value.key == "missing"

    def test_expiry(self, cache_store, clock):
        """Entries stop being returned once their expiry passes"""
        cache_store.set("k", POINT, timedelta(minutes=30))
        clock.advance(timedelta(minutes=29))
        assert cache_store.get("k")[0] == POINT

        clock.advance(timedelta(minutes=1))
        with pytest.raises(CacheExpiredError):
            cache_store.get("k")

    def test_cache_errors_share_base(self, cache_store):
        with pytest.raises(CacheError):
            cache_store.get("missing")

    @pytest.mark.parametrize("ttl", [timedelta(0), timedelta(seconds=-1)])
    def test_non_positive_ttl_rejected(self, cache_store, ttl):
        with pytest.raises(ValueError):
            cache_store.set("k", POINT, ttl)
        assert not cache_store.updated()

    def test_unserializable_value_rejected(self, cache_store):
        with pytest.raises(TypeError):
            cache_store.set("k", {"when": object()}, timedelta(hours=1))  # type: ignore[dict-item]
        assert "k" not in cache_store

    def test_set_marks_dirty(self, cache_store):
        cache_store.set("k", POINT, timedelta(hours=1))
        assert cache_store.updated()

    def test_delete(self, cache_store):
        cache_store.set("k", POINT, timedelta(hours=1))
        assert cache_store.delete("k")
        assert not cache_store.delete("k")
        assert len(cache_store) == 0

    def test_purge_expired(self, cache_store, clock):
        cache_store.set("short", POINT, timedelta(minutes=1))
        cache_store.set("long", POINT, timedelta(days=1))
        clock.advance(timedelta(hours=1))

        assert cache_store.purge_expired() == 1
        assert "short" not in cache_store
        assert "long" in cache_store

    def test_clear(self, cache_store):
        cache_store.set("k", POINT, timedelta(hours=1))
        cache_store.save_file()
        cache_store.clear()
        assert len(cache_store) == 0
        assert cache_store.updated()

    def test_entries_is_copy(self, cache_store):
        cache_store.set("k", POINT, timedelta(hours=1))
        cache_store.entries["k"]["expires_at"] = 0
        assert cache_store.get("k")[0] == POINT


class TestCacheStorePersistence:
    """Test saving and loading the cache file"""

    def test_save_and_reload(self, cache_dir, clock):
        """Entries survive a save/load cycle with their expiry"""
        store = ExpiringCacheStore(cache_dir, clock=clock)
        expires_at = store.set("92612", POINT, timedelta(days=1))
        store.save_file()
        assert not store.updated()

        reloaded = ExpiringCacheStore(cache_dir, clock=clock)
        assert reloaded.get("92612") == (POINT, expires_at)
        assert not reloaded.updated()

    def test_file_format(self, cache_store):
        """File is a mapping of key to value and expiry"""
        expires_at = cache_store.set("k", POINT, timedelta(hours=1))
        cache_store.save_file()

        with open(cache_store.file_path, "r", encoding="utf-8") as f:
            data = load(f)
        assert data == {"k": {"value": POINT, "expires_at": expires_at}}

    def test_save_creates_directory(self, tmp_path, clock):
        cache_dir = str(tmp_path / "nested" / "geo")
        store = ExpiringCacheStore(cache_dir, clock=clock)
        store.set("k", POINT, timedelta(hours=1))
        store.save_file()
        assert exists(store.file_path)

    def test_save_leaves_no_temp_files(self, cache_store, cache_dir):
        cache_store.set("k", POINT, timedelta(hours=1))
        cache_store.save_file()
        assert listdir(cache_dir) == ["geocode_cache.json"]

    def test_failed_save_keeps_previous_file(self, cache_store, cache_dir):
        """A failing rename leaves the old file intact and the store dirty"""
        cache_store.set("old", POINT, timedelta(hours=1))
        cache_store.save_file()
        cache_store.set("new", POINT, timedelta(hours=1))

        with patch(
            "geocode_tool.infrastructure.cache._store.replace", side_effect=OSError("disk full")
        ):
            with pytest.raises(PersistenceError, match="disk full"):
                cache_store.save_file()

        assert cache_store.updated()
        assert listdir(cache_dir) == ["geocode_cache.json"]
        with open(cache_store.file_path, "r", encoding="utf-8") as f:
            assert list(load(f)) == ["old"]

    def test_unwritable_directory(self, tmp_path, clock):
        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory")
        store = ExpiringCacheStore(str(blocker / "geo"), clock=clock)
        store.set("k", POINT, timedelta(hours=1))
        with pytest.raises(PersistenceError):
            store.save_file()

    def test_load_invalid_json(self, clock):
        """A corrupt file yields an empty store"""
        with TemporaryDirectory() as temp_dir:
            with open(f"{temp_dir}/geocode_cache.json", "w", encoding="utf-8") as f:
                f.write("{not json")
            store = ExpiringCacheStore(temp_dir, clock=clock)
            assert len(store) == 0
            assert not store.updated()

    def test_load_non_object(self, clock):
        with TemporaryDirectory() as temp_dir:
            with open(f"{temp_dir}/geocode_cache.json", "w", encoding="utf-8") as f:
                dump(["a", "b"], f)
            assert len(ExpiringCacheStore(temp_dir, clock=clock)) == 0

    def test_load_skips_malformed_entries(self, clock):
        """Entries without a value or numeric expiry are dropped"""
        with TemporaryDirectory() as temp_dir:
            with open(f"{temp_dir}/geocode_cache.json", "w", encoding="utf-8") as f:
                dump(
                    {
                        "good": {"value": POINT, "expires_at": clock.now + 60},
                        "no_value": {"expires_at": clock.now + 60},
                        "bad_expiry": {"value": POINT, "expires_at": "tomorrow"},
                        "bool_expiry": {"value": POINT, "expires_at": True},
                        "not_a_dict": 5,
                    },
                    f,
                )
            store = ExpiringCacheStore(temp_dir, clock=clock)
            assert list(store.entries) == ["good"]

    def test_custom_file_name(self, clock):
        with TemporaryDirectory() as temp_dir:
            store = ExpiringCacheStore(temp_dir, file_name="other", clock=clock)
            assert store.file_path == f"{temp_dir}/other.json"
