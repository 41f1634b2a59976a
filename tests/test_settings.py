"""Settings: environment parsing and per-backend config models."""
import logging
from pathlib import Path

import pytest
from pydantic import ValidationError

from inventory_console.logging_setup import setup_logging
from inventory_console.models import (
    BackendKind, DocumentStoreConfig, LocalConfig, MemoryConfig, RelationalConfig,
)
from inventory_console.settings import Settings


@pytest.fixture
def clean_env(monkeypatch):
    for name in ("STORAGE_BACKEND", "ic_backend", "DB_URL", "MONGO_URI", "SEED_FIXTURES"):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


class TestSettings:
    def test_defaults(self, clean_env):
        s = Settings()
        assert s.backend_kind is BackendKind.memory
        assert s.backend_config() == MemoryConfig(seed=True)

    def test_backend_from_environment(self, clean_env):
        clean_env.setenv("STORAGE_BACKEND", "postgres")
        clean_env.setenv("DB_URL", "sqlite+aiosqlite:///console.db")
        clean_env.setenv("DB_PORT", "6543")

        config = Settings().backend_config()

        assert isinstance(config, RelationalConfig)
        assert config.url == "sqlite+aiosqlite:///console.db"
        assert config.port == 6543

    def test_short_alias(self, clean_env):
        clean_env.setenv("ic_backend", "mongo")
        config = Settings().backend_config()
        assert isinstance(config, DocumentStoreConfig)
        assert config.db_name == "inventory_management"

    def test_local_config_carries_root_and_prefix(self, clean_env, tmp_path):
        s = Settings(INVENTORY_DATA_ROOT=tmp_path, LOCAL_COLLECTION_PREFIX="acme_")
        config = s.backend_config(BackendKind.local)
        assert config == LocalConfig(collection_name_prefix="acme_", data_root=tmp_path)

    def test_unknown_backend_is_rejected(self, clean_env):
        clean_env.setenv("STORAGE_BACKEND", "redis")
        with pytest.raises(ValidationError):
            Settings()

    def test_timeouts_must_be_positive(self, clean_env):
        with pytest.raises(ValidationError):
            Settings(DB_TIMEOUT=0)


class TestLogging:
    def test_rotating_file_under_data_root(self, tmp_path):
        s = Settings(INVENTORY_DATA_ROOT=tmp_path, LOG_LEVEL="debug")

        path = setup_logging(s)
        logging.getLogger("inventory_console.tests").warning("hello from the tests")
        for h in logging.getLogger().handlers:
            h.flush()

        assert path == Path(tmp_path) / "logs" / "inventory_console.log"
        assert path.exists()
