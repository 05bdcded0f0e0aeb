from __future__ import annotations

import logging
from collections.abc import Mapping
from datetime import datetime, timezone
from typing import Any

from fastapi import Depends, Request
from pydantic import ValidationError
from pymongo.database import Database

from common.mongo.client import get_database

from ..exceptions import InvalidPostPayloadError, PostNotFoundError
from ..models.post import Post, PostPayload
from ..repositories.interfaces import PostRepositoryInterface
from ..repositories.post_repository import PostRepository

logger = logging.getLogger(__name__)


class PostsService:
    """포스트 CRUD 비즈니스 로직.

    - Repository(PostRepositoryInterface)에만 의존하고, Mongo 세부 구현은 알지 않는다.
    - 규칙은 createdAt 기본값과 존재 여부 확인뿐이다.
    - auto_updated_at=True 이면 수정 시 updatedAt 을 현재 시각으로 채운다. (기본은 꺼짐)
    """

    def __init__(
        self,
        repo: PostRepositoryInterface,
        auto_updated_at: bool = False,
    ) -> None:
        self._repo = repo
        self._auto_updated_at = auto_updated_at

    def list_posts(self) -> list[Post]:
        return self._repo.list()

    def create_post(self, raw: Any) -> Post:
        """요청 본문으로 새 포스트를 만든다. createdAt 이 없으면 현재 시각을 쓴다."""

        payload = self._parse_payload(raw)
        post = Post(
            title=payload.title,
            content=payload.content,
            created_at=payload.created_at or datetime.now(timezone.utc),
            updated_at=payload.updated_at,
        )
        created = self._repo.insert(post)
        logger.debug("post created", extra={"post_id": created.id})
        return created

    def update_post(self, post_id: str, raw: Any) -> Post:
        """본문에 포함된 필드만 덮어쓰고 수정 후 상태를 반환한다.

        Raises:
            PostNotFoundError: post_id 에 해당하는 포스트가 없을 때
        """

        updates = self._parse_payload(raw).to_updates()
        if self._auto_updated_at and "updatedAt" not in updates:
            updates["updatedAt"] = datetime.now(timezone.utc)

        post = self._repo.update_fields(post_id, updates)
        if post is None:
            raise PostNotFoundError(post_id)
        return post

    def delete_post(self, post_id: str) -> None:
        """포스트를 영구 삭제한다.

        Raises:
            PostNotFoundError: post_id 에 해당하는 포스트가 없을 때
        """

        if not self._repo.delete_by_id(post_id):
            raise PostNotFoundError(post_id)
        logger.debug("post deleted", extra={"post_id": post_id})

    @staticmethod
    def _parse_payload(raw: Any) -> PostPayload:
        if not isinstance(raw, Mapping):
            raise InvalidPostPayloadError("request body must be a JSON object")
        try:
            return PostPayload.model_validate(dict(raw))
        except ValidationError as exc:
            raise InvalidPostPayloadError(str(exc)) from exc


def get_post_repository(
    db: Database = Depends(get_database),
) -> PostRepositoryInterface:
    """FastAPI DI용 PostRepository 팩토리."""

    return PostRepository(db)


def get_posts_service(
    request: Request,
    repo: PostRepositoryInterface = Depends(get_post_repository),
) -> PostsService:
    """FastAPI DI용 PostsService 팩토리."""

    config = getattr(request.app.state, "config", None)
    auto_updated_at = bool(config and config.auto_updated_at)
    return PostsService(repo, auto_updated_at=auto_updated_at)
