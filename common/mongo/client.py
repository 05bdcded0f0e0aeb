from __future__ import annotations

import logging
from typing import Optional

from fastapi import Request
from pymongo import MongoClient
from pymongo.database import Database
from pymongo.errors import PyMongoError


logger = logging.getLogger(__name__)


class MongoConnection:
    """프로세스 전체에서 공유하는 MongoClient 수명주기 래퍼.

    - connect() 에서 클라이언트를 만들고 ping 으로 연결을 확인한다.
    - ping 실패는 로그로만 남긴다. 드라이버가 이후 요청에서 다시 연결을 시도한다.
    - close() 로 커넥션 풀을 정리한다.
    """

    def __init__(self, uri: str, db_name: str | None = None) -> None:
        self._uri = uri
        self._db_name = db_name
        self._client: Optional[MongoClient] = None
        self._db: Optional[Database] = None

    @property
    def database(self) -> Database:
        if self._db is None:
            raise RuntimeError("MongoConnection.connect() must be called first")
        return self._db

    def connect(self) -> Database:
        if self._db is not None:
            return self._db

        client: MongoClient = MongoClient(self._uri)

        # 사용할 DB 이름 결정: MONGO_DB_NAME 우선, 없으면 URI의 기본 DB 사용
        try:
            if self._db_name:
                db = client[self._db_name]
            else:
                db = client.get_default_database()
        except Exception as exc:  # noqa: BLE001
            client.close()
            raise RuntimeError(
                "MongoDB database name must be specified via MONGO_DB_NAME or in MONGO_URI (mongodb://.../db_name)",
            ) from exc

        try:
            client.admin.command("ping")
        except PyMongoError as exc:
            logger.error("MongoDB connection error: %s", exc)
        else:
            logger.info("MongoDB connected (db=%s)", db.name)

        self._client = client
        self._db = db
        return db

    def close(self) -> None:
        if self._client is not None:
            self._client.close()
        self._client = None
        self._db = None


def get_database(request: Request) -> Database:
    """FastAPI DI용 Database 팩토리.

    lifespan 에서 app.state.mongo 에 올려 둔 MongoConnection 을 사용한다.
    """

    connection: MongoConnection = request.app.state.mongo
    return connection.database
