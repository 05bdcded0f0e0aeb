from __future__ import annotations

import os
from dataclasses import dataclass

from common.mongo.config import get_mongo_db_name, get_mongo_uri


PORT_ENV = "PORT"
HOST_ENV = "HOST"
POST_AUTO_UPDATED_AT_ENV = "POST_AUTO_UPDATED_AT"

DEFAULT_PORT = 3000
DEFAULT_HOST = "0.0.0.0"

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off", ""}


@dataclass(slots=True)
class ServerConfig:
    host: str
    port: int


@dataclass(slots=True)
class MongoConfig:
    uri: str
    db_name: str | None


@dataclass(slots=True)
class AppConfig:
    """post-service 전체 설정 루트."""

    server: ServerConfig
    mongo: MongoConfig
    auto_updated_at: bool = False


def _parse_bool(name: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise RuntimeError(f"{name} must be a boolean if set, got: {raw!r}")


def load_server_config() -> ServerConfig:
    host = os.getenv(HOST_ENV, "").strip() or DEFAULT_HOST

    port_raw = os.getenv(PORT_ENV, "").strip()
    if not port_raw:
        return ServerConfig(host=host, port=DEFAULT_PORT)
    try:
        port = int(port_raw)
    except ValueError as exc:
        raise RuntimeError(
            f"{PORT_ENV} must be an integer if set, got: {port_raw!r}"
        ) from exc
    if not 0 < port < 65536:
        raise RuntimeError(f"{PORT_ENV} must be between 1 and 65535, got: {port}")
    return ServerConfig(host=host, port=port)


def load_config() -> AppConfig:
    """환경 변수에서 post-service 설정을 읽어 AppConfig 로 반환한다."""

    auto_updated_at = _parse_bool(
        POST_AUTO_UPDATED_AT_ENV, os.getenv(POST_AUTO_UPDATED_AT_ENV, "")
    )
    return AppConfig(
        server=load_server_config(),
        mongo=MongoConfig(uri=get_mongo_uri(), db_name=get_mongo_db_name()),
        auto_updated_at=auto_updated_at,
    )
