# inventory_console/settings.py
"""
Inventory Console Settings - storage backend selection and connection options.
"""
from __future__ import annotations
from pathlib import Path
from typing import Literal, Optional, Union
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field, AliasChoices

from inventory_console.models import (
    BackendKind, MemoryConfig, LocalConfig, DocumentStoreConfig, RelationalConfig,
)

class Settings(BaseSettings):
    # =========================================================================
    # Backend selection
    # =========================================================================
    STORAGE_BACKEND: Literal["memory", "local", "mongo", "postgres"] = Field(
        default="memory",
        validation_alias=AliasChoices("STORAGE_BACKEND", "ic_backend"),
        description="Which storage adapter family the console talks to",
    )
    SEED_FIXTURES: bool = Field(default=True, validation_alias="SEED_FIXTURES")

    # =========================================================================
    # Local persisted storage (JSON slots)
    # =========================================================================
    INVENTORY_DATA_ROOT: Path = Field(
        default=(Path(__file__).resolve().parents[2] / "inventory-data"),
        validation_alias=AliasChoices("INVENTORY_DATA_ROOT", "ic_data_root"),
    )
    LOCAL_COLLECTION_PREFIX: str = Field(default="inventory_", validation_alias="LOCAL_COLLECTION_PREFIX")

    # =========================================================================
    # MongoDB document store
    # =========================================================================
    MONGO_URI: str = Field(default="mongodb://localhost:27017", validation_alias="MONGO_URI")
    MONGO_DB_NAME: str = Field(default="inventory_management", validation_alias="MONGO_DB_NAME")

    # =========================================================================
    # PostgreSQL relational store
    # =========================================================================
    DB_HOST: str = Field(default="localhost", validation_alias="DB_HOST")
    DB_PORT: int = Field(default=5432, validation_alias="DB_PORT")
    DB_NAME: str = Field(default="inventory_console", validation_alias="DB_NAME")
    DB_USER: str = Field(default="postgres", validation_alias="DB_USER")
    DB_PASSWORD: str = Field(default="postgres", validation_alias="DB_PASSWORD")
    DB_SSL: bool = Field(default=False, validation_alias="DB_SSL")
    DB_URL: Optional[str] = Field(
        default=None,
        validation_alias="DB_URL",
        description="Full async DSN, overrides the DB_* parts (e.g. sqlite+aiosqlite:///console.db)",
    )

    # Connection pool settings
    DB_POOL_SIZE: int = Field(default=5, validation_alias="DB_POOL_SIZE")
    DB_MAX_OVERFLOW: int = Field(default=10, validation_alias="DB_MAX_OVERFLOW")
    DB_ECHO: bool = Field(default=False, validation_alias="DB_ECHO")

    # =========================================================================
    # Timeouts (seconds) for external backends
    # =========================================================================
    DB_TIMEOUT: float = Field(default=10.0, gt=0, validation_alias="DB_TIMEOUT")
    CONNECT_TIMEOUT: float = Field(default=15.0, gt=0, validation_alias="CONNECT_TIMEOUT")

    LOG_LEVEL: str = Field(default="INFO", validation_alias="LOG_LEVEL")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="",
        case_sensitive=False,
        extra="ignore",
    )

    @property
    def backend_kind(self) -> BackendKind:
        return BackendKind(self.STORAGE_BACKEND)

    def backend_config(
        self, kind: Optional[BackendKind] = None
    ) -> Union[MemoryConfig, LocalConfig, DocumentStoreConfig, RelationalConfig]:
        """Build the connection config model for ``kind`` (defaults to STORAGE_BACKEND)."""
        kind = kind or self.backend_kind
        if kind is BackendKind.memory:
            return MemoryConfig(seed=self.SEED_FIXTURES)
        if kind is BackendKind.local:
            return LocalConfig(
                collection_name_prefix=self.LOCAL_COLLECTION_PREFIX,
                data_root=self.INVENTORY_DATA_ROOT,
            )
        if kind is BackendKind.mongo:
            return DocumentStoreConfig(uri=self.MONGO_URI, db_name=self.MONGO_DB_NAME)
        return RelationalConfig(
            host=self.DB_HOST,
            port=self.DB_PORT,
            database=self.DB_NAME,
            user=self.DB_USER,
            password=self.DB_PASSWORD,
            ssl=self.DB_SSL,
            url=self.DB_URL,
            pool_size=self.DB_POOL_SIZE,
            max_overflow=self.DB_MAX_OVERFLOW,
            echo=self.DB_ECHO,
        )

settings = Settings()

