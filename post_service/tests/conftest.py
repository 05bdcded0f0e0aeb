from __future__ import annotations

from typing import Any, Iterator

import pytest
from bson import ObjectId
from bson.errors import InvalidId
from fastapi.testclient import TestClient

from common.mongo.types import to_object_id
from post_service.app.config import AppConfig, MongoConfig, ServerConfig
from post_service.app.exceptions import InvalidPostIdError
from post_service.app.main import create_app
from post_service.app.models.post import Post
from post_service.app.repositories.interfaces import PostRepositoryInterface
from post_service.app.services.posts_service import get_post_repository


class FakePostRepository(PostRepositoryInterface):
    """Mongo 없이 서비스/API 를 검증하기 위한 메모리 기반 PostRepository."""

    def __init__(self) -> None:
        self.posts: dict[str, Post] = {}
        self.fail_with: Exception | None = None
        self.update_calls: list[tuple[str, dict[str, Any]]] = []

    def _check_failure(self) -> None:
        if self.fail_with is not None:
            raise self.fail_with

    @staticmethod
    def _check_id(id_value: str) -> str:
        try:
            return str(to_object_id(id_value))
        except (InvalidId, TypeError) as exc:
            raise InvalidPostIdError(id_value) from exc

    def list(self) -> list[Post]:
        self._check_failure()
        return list(self.posts.values())

    def insert(self, post: Post) -> Post:
        self._check_failure()
        created = post.model_copy(update={"id": str(ObjectId())})
        self.posts[created.id] = created
        return created

    def update_fields(self, id_value: str, updates: dict[str, Any]) -> Post | None:
        key = self._check_id(id_value)
        self._check_failure()
        self.update_calls.append((id_value, updates))
        current = self.posts.get(key)
        if current is None:
            return None
        data = current.model_dump(by_alias=True)
        data.update(updates)
        updated = Post.model_validate(data)
        self.posts[key] = updated
        return updated

    def delete_by_id(self, id_value: str) -> bool:
        key = self._check_id(id_value)
        self._check_failure()
        return self.posts.pop(key, None) is not None


def build_config(auto_updated_at: bool = False) -> AppConfig:
    return AppConfig(
        server=ServerConfig(host="127.0.0.1", port=3000),
        mongo=MongoConfig(uri="mongodb://localhost:27017/blog_app2_test", db_name=None),
        auto_updated_at=auto_updated_at,
    )


@pytest.fixture
def app_config() -> AppConfig:
    return build_config()


@pytest.fixture
def repo() -> FakePostRepository:
    return FakePostRepository()


@pytest.fixture
def client(repo: FakePostRepository, app_config: AppConfig) -> Iterator[TestClient]:
    # lifespan(Mongo 연결)을 타지 않도록 with 블록 없이 TestClient 를 사용한다.
    app = create_app(app_config)
    app.dependency_overrides[get_post_repository] = lambda: repo
    yield TestClient(app)
    app.dependency_overrides.clear()
