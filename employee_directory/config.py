from __future__ import annotations

import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import yaml
from dotenv import load_dotenv


DEFAULT_MONGO_URI = "mongodb://localhost:27017"
DEFAULT_DATABASE = "EmployeeDB"
DEFAULT_COLLECTION = "employees"
DEFAULT_PAGE_SIZE = 5


def _load_yaml(path: Path) -> dict:
    with path.open("r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def _load_json(path: Path) -> dict:
    with path.open("r", encoding="utf-8") as f:
        return json.load(f)


@dataclass
class DirectoryConfig:
    mongo_uri: str = DEFAULT_MONGO_URI
    database: str = DEFAULT_DATABASE
    collection: str = DEFAULT_COLLECTION
    page_size: int = DEFAULT_PAGE_SIZE
    server_selection_timeout_ms: Optional[int] = None


def _read_file(path: str | Path) -> dict:
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    if path.suffix.lower() in {".yaml", ".yml"}:
        raw = _load_yaml(path)
    elif path.suffix.lower() == ".json":
        raw = _load_json(path)
    else:
        raise ValueError("Unsupported config extension. Use .yaml/.yml or .json")

    if not isinstance(raw, dict):
        raise ValueError(f"Config file {path} must contain a mapping")
    # Settings may be nested under a "mongo" section or given flat
    mongo = raw.get("mongo") or {}
    return {**raw, **mongo}


def load_config(path: str | Path | None = None) -> DirectoryConfig:
    """
    Build the directory configuration.

    Values come from the optional YAML/JSON file first, then from environment
    variables (a local .env file is read too), then fall back to defaults.
    """
    load_dotenv()
    raw = _read_file(path) if path is not None else {}
    env = os.environ

    timeout = env.get("MONGO_TIMEOUT_MS", raw.get("server_selection_timeout_ms"))

    cfg = DirectoryConfig(
        mongo_uri=str(env.get("MONGO_URI") or raw.get("uri") or raw.get("mongo_uri") or DEFAULT_MONGO_URI),
        database=str(env.get("MONGO_DB") or raw.get("database") or DEFAULT_DATABASE),
        collection=str(env.get("MONGO_COLLECTION") or raw.get("collection") or DEFAULT_COLLECTION),
        page_size=int(env.get("DIRECTORY_PAGE_SIZE", raw.get("page_size", DEFAULT_PAGE_SIZE))),
        server_selection_timeout_ms=int(timeout) if timeout not in (None, "") else None,
    )
    _validate_config(cfg)
    return cfg


def _validate_config(cfg: DirectoryConfig) -> None:
    if not cfg.mongo_uri.strip():
        raise ValueError("mongo_uri must not be empty")
    if not cfg.database.strip():
        raise ValueError("database must not be empty")
    if not cfg.collection.strip():
        raise ValueError("collection must not be empty")
    if cfg.page_size <= 0:
        raise ValueError("page_size must be positive")
    if cfg.server_selection_timeout_ms is not None and cfg.server_selection_timeout_ms <= 0:
        raise ValueError("server_selection_timeout_ms must be positive")
