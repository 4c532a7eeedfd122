from __future__ import annotations

from pathlib import Path

import pytest

from patchdelta.config import (
    ConfigurationError,
    StorageConfig,
    env_float,
    env_list,
    get_ddragon_config,
    get_engine_config,
    get_patch_notes_config,
    get_storage_config,
)


def test_storage_config_reads_environment(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("PATCHDELTA_DATA_DIR", str(tmp_path))
    monkeypatch.setenv("PATCHDELTA_HTTP_CACHE", "SQLite")

    storage = get_storage_config()

    assert storage.data_dir == tmp_path
    assert storage.http_cache_backend == "sqlite"
    cache = storage.cache_config()
    assert cache is not None
    assert cache.backend == "sqlite"
    assert cache.sqlite_path == str(tmp_path.resolve() / "http_cache.db")


def test_storage_config_rejects_unknown_backend(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PATCHDELTA_HTTP_CACHE", "redis")

    with pytest.raises(ConfigurationError, match="PATCHDELTA_HTTP_CACHE"):
        get_storage_config()


def test_cache_can_be_disabled(tmp_path: Path) -> None:
    assert StorageConfig(data_dir=tmp_path, http_cache_backend="off").cache_config() is None
    memory = StorageConfig(data_dir=tmp_path).cache_config()
    assert memory is not None
    assert memory.backend == "memory"


def test_ddragon_config_defaults(tmp_path: Path) -> None:
    config = get_ddragon_config(storage=StorageConfig(data_dir=tmp_path, http_cache_backend="off"))

    assert config.locale == "es_ES"
    assert config.alias_locales == ("en_US",)
    assert config.resilience.base_url == "https://ddragon.leagueoflegends.com"
    assert config.resilience.cache is None
    assert config.resilience.ratelimit is not None


def test_ddragon_config_drops_primary_locale_from_aliases(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.setenv("PATCHDELTA_LOCALE", "en_US")
    monkeypatch.setenv("PATCHDELTA_ALIAS_LOCALES", "en_US, es_MX ,")
    monkeypatch.setenv("DDRAGON_BASE_URL", "http://cdn.test/")

    config = get_ddragon_config()

    assert config.locale == "en_US"
    assert config.alias_locales == ("es_MX",)
    assert config.resilience.base_url == "http://cdn.test"


def test_patch_notes_config_builds_page_paths(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PATCH_NOTES_LOCALE", "en-us")

    config = get_patch_notes_config()

    assert config.url_for("25-3") == "/en-us/news/game-updates/patch-25-3-notes/"
    assert config.resilience.default_headers is not None
    assert "User-Agent" in config.resilience.default_headers


def test_engine_config_epsilon(monkeypatch: pytest.MonkeyPatch) -> None:
    assert get_engine_config().float_epsilon == pytest.approx(1e-4)

    monkeypatch.setenv("PATCHDELTA_FLOAT_EPSILON", "0.01")
    assert get_engine_config().float_epsilon == pytest.approx(0.01)


@pytest.mark.parametrize("value", ["abc", "-1"])
def test_env_float_rejects_invalid_values(monkeypatch: pytest.MonkeyPatch, value: str) -> None:
    monkeypatch.setenv("SOME_FLOAT", value)

    with pytest.raises(ConfigurationError, match="SOME_FLOAT"):
        env_float("SOME_FLOAT", 1.0)


def test_env_list_blank_value_is_empty(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SOME_LIST", "")

    assert env_list("SOME_LIST", ("a",)) == ()
    assert env_list("MISSING_LIST", ("a", "b")) == ("a", "b")
