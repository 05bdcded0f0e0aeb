from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.functional_validators import BeforeValidator
from typing_extensions import Annotated

from common.mongo.types import MongoDateTime


def _bool_to_str(value: Any) -> Any:
    """true/false 는 "true"/"false" 문자열로 저장한다."""

    if isinstance(value, bool):
        return "true" if value else "false"
    return value


PayloadStr = Annotated[str, BeforeValidator(_bool_to_str)]


class Post(BaseModel):
    """블로그 게시글 도메인 모델 (API/저장소에서 공통 사용)"""

    model_config = ConfigDict(populate_by_name=True)

    id: str | None = None
    title: str | None = None
    content: str | None = None
    created_at: MongoDateTime | None = Field(default=None, alias="createdAt")
    updated_at: MongoDateTime | None = Field(default=None, alias="updatedAt")


class PostPayload(BaseModel):
    """생성/수정 요청 본문으로 들어오는 부분(partial) Post.

    - 정의되지 않은 필드(id, _id 포함)는 무시한다.
    - title/content 의 숫자와 불리언은 문자열로 바꾸고, 객체/배열은 거부한다.
    - 요청에 실제로 포함된 필드만 model_fields_set 에 남으므로,
      수정 시 빠진 필드를 덮어쓰지 않는다.
    - createdAt 은 null 로 지울 수 없다.
    """

    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)

    title: PayloadStr | None = None
    content: PayloadStr | None = None
    created_at: MongoDateTime = Field(default=None, alias="createdAt")  # type: ignore[assignment]
    updated_at: MongoDateTime | None = Field(default=None, alias="updatedAt")

    def to_updates(self) -> dict[str, Any]:
        """요청에 포함된 필드만 Mongo 필드 이름(camelCase)으로 반환한다."""

        return self.model_dump(by_alias=True, exclude_unset=True)
