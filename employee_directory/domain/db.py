"""Database connection for MongoDB."""

from __future__ import annotations

import threading
from typing import Callable, Optional

from pymongo import MongoClient
from pymongo.database import Database

from employee_directory.config import DirectoryConfig


class MongoConnection:
    """
    Lazily created MongoDB client bound to one database.

    The caller owns the lifetime: use it as a context manager or call close().
    The client is created on first use, under a lock, so concurrent first
    calls still share one client.
    """

    def __init__(
        self,
        uri: str,
        database: str,
        client_factory: Optional[Callable[..., MongoClient]] = None,
        **client_options,
    ):
        self.uri = uri
        self.database_name = database
        self._client_factory = client_factory
        self._client_options = client_options
        self._client: Optional[MongoClient] = None
        self._lock = threading.Lock()

    @classmethod
    def from_config(cls, cfg: DirectoryConfig, client_factory=None) -> MongoConnection:
        options = {}
        if cfg.server_selection_timeout_ms is not None:
            options["serverSelectionTimeoutMS"] = cfg.server_selection_timeout_ms
        return cls(cfg.mongo_uri, cfg.database, client_factory=client_factory, **options)

    def get_client(self) -> MongoClient:
        """Get or create the MongoDB client."""
        if self._client is None:
            with self._lock:
                if self._client is None:
                    factory = self._client_factory or MongoClient
                    self._client = factory(self.uri, **self._client_options)
                    print(f"[INFO] MongoDB client initialized for database: {self.database_name}")
        return self._client

    def get_database(self) -> Database:
        """Get the handle of the configured database."""
        return self.get_client()[self.database_name]

    def close(self) -> None:
        with self._lock:
            if self._client is not None:
                self._client.close()
                self._client = None

    @property
    def is_open(self) -> bool:
        return self._client is not None

    def __enter__(self) -> MongoConnection:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
