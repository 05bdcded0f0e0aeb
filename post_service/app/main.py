from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from starlette.concurrency import run_in_threadpool

from common.logger import setup_logger
from common.middleware.request_trace import RequestTraceMiddleware
from common.mongo.client import MongoConnection

from .api import api_router, health_router
from .api.errors import ApiError, api_error_handler
from .config import AppConfig, load_config


logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """애플리케이션 생명주기 동안 MongoDB 커넥션을 관리한다."""

    config: AppConfig = app.state.config
    connection = MongoConnection(config.mongo.uri, config.mongo.db_name)
    await run_in_threadpool(connection.connect)
    app.state.mongo = connection

    logger.info("Server is running on port %d", config.server.port)
    try:
        yield
    finally:
        connection.close()


def create_app(config: AppConfig | None = None) -> FastAPI:
    setup_logger(name="post-service")
    app = FastAPI(
        title="Blog Post Service",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.config = config or load_config()

    app.add_middleware(RequestTraceMiddleware)
    # 모든 origin 허용 (고정 정책)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(ApiError, api_error_handler)  # type: ignore[arg-type]

    app.include_router(health_router, tags=["health"])
    app.include_router(api_router)

    return app


app = create_app()


def main() -> None:
    """명령행에서 실행할 수 있도록 uvicorn 런처를 제공한다."""

    import uvicorn

    server = app.state.config.server
    uvicorn.run(
        "post_service.app.main:app",
        host=server.host,
        port=server.port,
        reload=False,
        access_log=False,
    )


if __name__ == "__main__":  # pragma: no cover - CLI entrypoint
    main()
