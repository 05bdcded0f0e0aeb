from __future__ import annotations

from typing import Any

from bson import ObjectId
from bson.errors import InvalidId
from pymongo import ReturnDocument
from pymongo.database import Database
from pymongo.errors import PyMongoError

from common.mongo.types import to_object_id

from ..exceptions import InvalidPostIdError, StorageError
from ..models.post import Post
from .documents.post_document import PostDocument
from .interfaces import PostRepositoryInterface


class PostRepository(PostRepositoryInterface):
    """posts 컬렉션에 대한 MongoDB 접근 레이어.

    모든 연산은 pymongo 호출 한 번으로 끝나며, 도큐먼트 단위 원자성만 보장한다.
    """

    def __init__(self, database: Database) -> None:
        """Mongo Database를 의존성으로 받고, posts 컬렉션을 내부에서 선택한다."""

        self._col = database["posts"]

    # --- helpers -----------------------------------------------------------------
    @staticmethod
    def _parse_id(id_value: str) -> ObjectId:
        try:
            return to_object_id(id_value)
        except (InvalidId, TypeError) as exc:
            raise InvalidPostIdError(f"invalid post id: {id_value!r}") from exc

    @staticmethod
    def _from_document(doc: dict) -> Post:
        return PostDocument.model_validate(doc).to_domain()

    # --- queries -----------------------------------------------------------------
    def list(self) -> list[Post]:
        """정렬 없이 저장소 순서 그대로 모든 포스트를 반환한다."""

        try:
            return [self._from_document(doc) for doc in self._col.find({})]
        except PyMongoError as exc:
            raise StorageError(f"failed to list posts: {exc}") from exc

    # --- commands ----------------------------------------------------------------
    def insert(self, post: Post) -> Post:
        """새 포스트를 삽입하고 생성된 ID 가 채워진 포스트를 반환한다."""

        doc = PostDocument.from_domain(post).to_mongo_record()
        try:
            result = self._col.insert_one(doc)
        except PyMongoError as exc:
            raise StorageError(f"failed to insert post: {exc}") from exc

        return post.model_copy(update={"id": str(result.inserted_id)})

    def update_fields(self, id_value: str, updates: dict[str, Any]) -> Post | None:
        object_id = self._parse_id(id_value)
        try:
            if not updates:
                # 빈 $set 은 Mongo 가 거부하므로 현재 상태만 조회한다.
                doc = self._col.find_one({"_id": object_id})
            else:
                doc = self._col.find_one_and_update(
                    {"_id": object_id},
                    {"$set": updates},
                    return_document=ReturnDocument.AFTER,
                )
        except PyMongoError as exc:
            raise StorageError(f"failed to update post {id_value}: {exc}") from exc

        if not doc:
            return None
        return self._from_document(doc)

    def delete_by_id(self, id_value: str) -> bool:
        object_id = self._parse_id(id_value)
        try:
            result = self._col.delete_one({"_id": object_id})
        except PyMongoError as exc:
            raise StorageError(f"failed to delete post {id_value}: {exc}") from exc
        return result.deleted_count > 0
