from __future__ import annotations

import os


MONGO_URI_ENV = "MONGO_URI"
MONGO_DB_NAME_ENV = "MONGO_DB_NAME"

DEFAULT_MONGO_URI = "mongodb://localhost:27017/blog_app2"


def get_mongo_uri() -> str:
    """MongoDB 연결에 사용할 URI를 반환한다.

    MONGO_URI 가 없으면 로컬 기본 주소(blog_app2 DB)를 사용한다.
    """

    value = os.getenv(MONGO_URI_ENV, "").strip()
    return value or DEFAULT_MONGO_URI


def get_mongo_db_name() -> str | None:
    """MongoDB에서 사용할 기본 데이터베이스 이름을 반환한다.

    - MONGO_DB_NAME 이 설정되어 있으면 해당 값을 사용한다.
    - 설정되어 있지 않으면 None 을 반환하고, 클라이언트는 URI의 기본 DB를 사용한다.
    """

    value = os.getenv(MONGO_DB_NAME_ENV, "").strip()
    return value or None
