from __future__ import annotations

from datetime import datetime, timezone
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field
from pydantic.functional_serializers import PlainSerializer

from ...models.post import Post


def serialize_datetime_to_utc_iso8601(value: datetime) -> str:
    """모든 datetime을 UTC 기준 ISO8601(+타임존) 문자열로 직렬화한다."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    else:
        value = value.astimezone(timezone.utc)
    return value.isoformat()


UtcDateTime = Annotated[
    datetime,
    PlainSerializer(
        serialize_datetime_to_utc_iso8601,
        return_type=str,
        when_used="json",
    ),
]


class PostResponse(BaseModel):
    """포스트 응답 DTO.

    JSON 필드는 camelCase(createdAt, updatedAt)로 내보낸다.
    """

    model_config = ConfigDict(populate_by_name=True)

    id: str | None
    title: str | None = None
    content: str | None = None
    created_at: UtcDateTime | None = Field(default=None, alias="createdAt")
    updated_at: UtcDateTime | None = Field(default=None, alias="updatedAt")

    @classmethod
    def from_domain(cls, post: Post) -> "PostResponse":
        """도메인 Post 모델을 응답 DTO 로 변환한다."""

        return cls.model_validate(post.model_dump())


class MessageResponse(BaseModel):
    message: str


class ErrorResponse(BaseModel):
    error: str
