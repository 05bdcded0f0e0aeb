from __future__ import annotations

from typing import Any, Protocol

from ..models.post import Post


class PostRepositoryInterface(Protocol):
    """PostRepository가 따라야 할 최소한의 계약.

    Service 레이어는 이 인터페이스에만 의존하고, 구체 구현(Mongo 등)은 몰라도 된다.
    구현체는 id 형식 오류에 InvalidPostIdError, 저장소 오류에 StorageError 를 발생시킨다.
    """

    def list(self) -> list[Post]:  # pragma: no cover - Protocol
        ...

    def insert(self, post: Post) -> Post:  # pragma: no cover - Protocol
        ...

    def update_fields(
        self, id_value: str, updates: dict[str, Any]
    ) -> Post | None:  # pragma: no cover - Protocol
        """updates 의 필드만 $set 하고 수정 후 상태를 반환한다. 없으면 None."""
        ...

    def delete_by_id(self, id_value: str) -> bool:  # pragma: no cover - Protocol
        ...
