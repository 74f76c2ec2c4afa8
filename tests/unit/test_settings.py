from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

import pytest

from kvstore.settings import Settings, get_settings, reset_settings


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    monkeypatch.chdir(tmp_path)
    reset_settings()
    yield
    reset_settings()


def test_defaults_to_memory_backend_with_logging_disabled() -> None:
    settings = Settings()

    assert settings.store.backend == "memory"
    assert settings.store.directory is None
    assert settings.logging.enabled is False
    assert settings.app.project_name == "kvstore"


def test_reads_nested_environment_variables(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("KVSTORE_STORE__BACKEND", "directory")
    monkeypatch.setenv("KVSTORE_STORE__DIRECTORY", "/var/lib/kv")
    monkeypatch.setenv("KVSTORE_LOGGING__LOG_LEVEL", "DEBUG")

    settings = Settings()

    assert settings.store.backend == "directory"
    assert settings.store.directory == Path("/var/lib/kv")
    assert settings.logging.log_level == "DEBUG"


def test_reads_dotenv_file(tmp_path: Path) -> None:
    (tmp_path / ".env").write_text("KVSTORE_STORE__NAME=dotenv\n", encoding="utf-8")

    settings = Settings()

    assert settings.store.name == "dotenv"


def test_get_settings_caches_instance() -> None:
    assert get_settings() is get_settings()
