from __future__ import annotations

import json
import logging
from typing import Any
from urllib.parse import parse_qsl

from fastapi import APIRouter, Depends, Request

from ..exceptions import InvalidPostIdError, PostNotFoundError
from ..services.posts_service import PostsService, get_posts_service
from .errors import ApiError
from .schemas.posts import ErrorResponse, MessageResponse, PostResponse


logger = logging.getLogger(__name__)

router = APIRouter()

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"


async def read_post_body(request: Request) -> Any:
    """요청 본문을 dict 로 읽는다.

    - 빈 본문은 {} 로 취급한다.
    - form-urlencoded 본문은 필드별 문자열 dict 로 변환한다.
    - JSON 으로 해석할 수 없으면 None 을 반환하고, 서비스 레이어에서 400 으로 처리한다.
    """

    body = await request.body()
    if not body.strip():
        return {}

    content_type = request.headers.get("content-type", "")
    if content_type.startswith(FORM_CONTENT_TYPE):
        text = body.decode("utf-8", errors="replace")
        return dict(parse_qsl(text, keep_blank_values=True))

    try:
        return json.loads(body)
    except ValueError:
        return None


@router.get(
    "",
    response_model=list[PostResponse],
    summary="포스트 목록 조회",
    description="저장소 순서 그대로 전체 포스트를 반환한다.",
    responses={500: {"model": ErrorResponse}},
)
def list_posts(
    service: PostsService = Depends(get_posts_service),
) -> list[PostResponse]:
    try:
        posts = service.list_posts()
    except Exception as exc:  # noqa: BLE001
        logger.exception("failed to fetch posts")
        raise ApiError(500, "Failed to fetch posts") from exc
    return [PostResponse.from_domain(post) for post in posts]


@router.post(
    "",
    response_model=PostResponse,
    status_code=201,
    summary="포스트 생성",
    description="본문의 title/content/createdAt/updatedAt 으로 포스트를 만든다.",
    responses={400: {"model": ErrorResponse}},
)
def create_post(
    body: Any = Depends(read_post_body),
    service: PostsService = Depends(get_posts_service),
) -> PostResponse:
    try:
        post = service.create_post(body)
    except Exception as exc:  # noqa: BLE001
        logger.warning("failed to create post: %s", exc)
        raise ApiError(400, "Failed to create post") from exc
    return PostResponse.from_domain(post)


@router.put(
    "/{post_id}",
    response_model=PostResponse,
    summary="포스트 수정",
    description="본문에 포함된 필드만 덮어쓰고 수정 후 상태를 반환한다.",
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
def update_post(
    post_id: str,
    body: Any = Depends(read_post_body),
    service: PostsService = Depends(get_posts_service),
) -> PostResponse:
    try:
        post = service.update_post(post_id, body)
    except PostNotFoundError as exc:
        raise ApiError(404, "Post not found") from exc
    except Exception as exc:  # noqa: BLE001
        logger.warning("failed to update post %s: %s", post_id, exc)
        raise ApiError(400, "Failed to update post") from exc
    return PostResponse.from_domain(post)


@router.delete(
    "/{post_id}",
    response_model=MessageResponse,
    summary="포스트 삭제",
    responses={404: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
def delete_post(
    post_id: str,
    service: PostsService = Depends(get_posts_service),
) -> MessageResponse:
    try:
        service.delete_post(post_id)
    except (PostNotFoundError, InvalidPostIdError) as exc:
        # 형식이 잘못된 id 와 일치하는 포스트는 존재할 수 없다.
        raise ApiError(404, "Post not found") from exc
    except Exception as exc:  # noqa: BLE001
        logger.exception("failed to delete post %s", post_id)
        raise ApiError(500, "Failed to delete post") from exc
    return MessageResponse(message="Post deleted successfully")
