# inventory_console/connection.py
"""
Connection lifecycle for each storage backend.

A ``ConnectionManager`` owns at most one live resource for its backend kind
(a ``MemoryStore``, a ``JsonSlotStore``, a Mongo database handle or a
``Database``). Opening and closing the resource is delegated to a connector;
the manager only tracks state:

    disconnected -> connecting -> connected
                              \\-> error

``ConnectionManagers`` is built once by the application and holds exactly one
manager per kind.
"""
from __future__ import annotations
import asyncio
import enum
import logging
from pathlib import Path
from typing import Any, Callable, Dict, Optional

from pymongo import AsyncMongoClient
from sqlalchemy import text

from inventory_console.adapters.memory import MemoryStore
from inventory_console.config_io import JsonSlotStore
from inventory_console.database import Database
from inventory_console.errors import ConnectionFailure
from inventory_console.models import (
    BackendKind, MemoryConfig, LocalConfig, DocumentStoreConfig, RelationalConfig,
)

logger = logging.getLogger(__name__)


class ConnectionState(str, enum.Enum):
    disconnected = "disconnected"
    connecting = "connecting"
    connected = "connected"
    error = "error"


# ============================================================================
# Connectors
# ============================================================================

class MemoryConnector:
    def __init__(self, store: Optional[MemoryStore] = None):
        self._store = store

    async def open(self, config: MemoryConfig) -> MemoryStore:
        if self._store is not None:
            return self._store
        return MemoryStore.seeded() if config.seed else MemoryStore()

    async def close(self, resource: MemoryStore) -> None:
        return None


class LocalConnector:
    def __init__(self, default_root: Optional[Path] = None):
        self.default_root = default_root

    async def open(self, config: LocalConfig) -> JsonSlotStore:
        return JsonSlotStore(config.data_root or self.default_root)

    async def close(self, resource: JsonSlotStore) -> None:
        return None


class DocumentConnector:
    """Opens an ``AsyncMongoClient`` and checks it with ``ping``."""

    def __init__(self, client_factory: Optional[Callable[..., Any]] = None):
        self.client_factory = client_factory or AsyncMongoClient
        self._client: Any = None

    async def open(self, config: DocumentStoreConfig) -> Any:
        client = self.client_factory(config.uri, **config.options)
        try:
            await client.admin.command("ping")
        except BaseException:
            await client.close()
            raise
        self._client = client
        return client[config.db_name]

    async def close(self, resource: Any) -> None:
        client, self._client = self._client, None
        if client is not None:
            await client.close()


class RelationalConnector:
    """Builds a ``Database``, checks it with ``SELECT 1`` and creates the schema."""

    async def open(self, config: RelationalConfig) -> Database:
        db = Database.from_config(config)
        await db.init()
        try:
            async with db.begin() as conn:
                await conn.execute(text("SELECT 1"))
            await db.create_all()
        except BaseException:
            await db.close()
            raise
        return db

    async def close(self, resource: Database) -> None:
        await resource.close()


# ============================================================================
# Manager
# ============================================================================

class ConnectionManager:
    def __init__(self, kind: BackendKind, connector: Any, *, connect_timeout: Optional[float] = None):
        self.kind = BackendKind(kind)
        self.connector = connector
        self.connect_timeout = connect_timeout
        self.state = ConnectionState.disconnected
        self.config: Any = None
        self.last_error: Optional[str] = None
        self._resource: Any = None

    def __repr__(self) -> str:
        return f"<ConnectionManager {self.kind.value} {self.state.value}>"

    @property
    def is_connected(self) -> bool:
        return self.state is ConnectionState.connected

    @property
    def resource(self) -> Any:
        if not self.is_connected:
            raise ConnectionFailure(f"{self.kind.value} backend is {self.state.value}")
        return self._resource

    async def connect(self, config: Any) -> bool:
        """Open the backend; ``False`` (with ``last_error`` set) when that fails."""
        if self.is_connected:
            await self.disconnect()

        self.state = ConnectionState.connecting
        self.last_error = None
        logger.info("connecting %s backend", self.kind.value)
        try:
            opened = self.connector.open(config)
            if self.connect_timeout is not None:
                resource = await asyncio.wait_for(opened, self.connect_timeout)
            else:
                resource = await opened
        except asyncio.TimeoutError:
            self._fail(f"connect timed out after {self.connect_timeout}s")
            return False
        except Exception as exc:
            self._fail(f"{type(exc).__name__}: {exc}")
            return False

        self._resource = resource
        self.config = config
        self.state = ConnectionState.connected
        logger.info("%s backend connected", self.kind.value)
        return True

    async def disconnect(self) -> bool:
        if not self.is_connected:
            return True
        try:
            await self.connector.close(self._resource)
        except Exception as exc:
            self.last_error = f"{type(exc).__name__}: {exc}"
            logger.error("%s backend: close failed: %s", self.kind.value, self.last_error)
            return False
        self._resource = None
        self.config = None
        self.state = ConnectionState.disconnected
        logger.info("%s backend disconnected", self.kind.value)
        return True

    def reset(self) -> None:
        """Forget everything without closing the resource."""
        self._resource = None
        self.config = None
        self.last_error = None
        self.state = ConnectionState.disconnected

    def _fail(self, message: str) -> None:
        self._resource = None
        self.state = ConnectionState.error
        self.last_error = message
        logger.error("%s backend: %s", self.kind.value, message)


class ConnectionManagers:
    """One ``ConnectionManager`` per backend kind."""

    def __init__(
        self,
        *,
        connect_timeout: Optional[float] = None,
        connectors: Optional[Dict[BackendKind, Any]] = None,
        data_root: Optional[Path] = None,
    ):
        given = dict(connectors or {})
        self._managers: Dict[BackendKind, ConnectionManager] = {}
        for kind in BackendKind:
            connector = given.get(kind) or self._default_connector(kind, data_root)
            self._managers[kind] = ConnectionManager(kind, connector, connect_timeout=connect_timeout)

    @staticmethod
    def _default_connector(kind: BackendKind, data_root: Optional[Path]) -> Any:
        if kind is BackendKind.memory:
            return MemoryConnector()
        if kind is BackendKind.local:
            return LocalConnector(data_root)
        if kind is BackendKind.mongo:
            return DocumentConnector()
        return RelationalConnector()

    def __getitem__(self, kind: Any) -> ConnectionManager:
        return self._managers[BackendKind(kind)]

    def __iter__(self):
        return iter(self._managers.values())

    async def disconnect_all(self) -> None:
        for manager in self._managers.values():
            await manager.disconnect()
