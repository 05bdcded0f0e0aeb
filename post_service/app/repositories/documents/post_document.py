from __future__ import annotations

from pydantic import Field

from common.mongo.types import BaseDocument, MongoDateTime, from_object_id
from ...models.post import Post


class PostDocument(BaseDocument):
    """MongoDB posts 컬렉션 도큐먼트 모델.

    필드 이름은 API JSON 과 동일한 camelCase 를 그대로 사용한다.
    """

    title: str | None = None
    content: str | None = None
    # 오래된 도큐먼트에는 createdAt 이 없을 수 있으므로 Optional 로 둔다.
    created_at: MongoDateTime | None = Field(default=None, alias="createdAt")
    updated_at: MongoDateTime | None = Field(default=None, alias="updatedAt")

    @classmethod
    def from_domain(cls, post: Post) -> "PostDocument":
        data = post.model_dump(by_alias=True)
        _id = data.pop("id", None)
        if _id is not None:
            data["_id"] = _id

        return cls.model_validate(data)

    def to_domain(self) -> Post:
        return Post(
            id=from_object_id(self.id),
            title=self.title,
            content=self.content,
            created_at=self.created_at,
            updated_at=self.updated_at,
        )
