"""댓글 라우터 — 동영상 댓글 목록, 작성, 수정, 삭제.

Comments Router — List and add comments on a video; update and delete
one's own comments.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_current_user, get_optional_user
from app.config import settings
from app.database import get_db
from app.models.user import User
from app.schemas.common import MessageResponse, PaginatedResponse
from app.schemas.content import CommentCreate, CommentResponse, CommentUpdate
from app.services.comment_service import comment_service

router: APIRouter = APIRouter()


@router.get("/{video_id}", response_model=PaginatedResponse)
async def list_comments(
    video_id: str,
    db: Annotated[AsyncSession, Depends(get_db)],
    viewer: Annotated[User | None, Depends(get_optional_user)],
    page: Annotated[int, Query()] = 1,
    limit: Annotated[int, Query()] = settings.DEFAULT_PAGE_SIZE,
    query: Annotated[str | None, Query()] = None,
    sort_by: Annotated[str, Query()] = "created_at",
    sort_type: Annotated[str, Query()] = "desc",
) -> PaginatedResponse:
    """동영상 댓글 목록 (페이지네이션) — Paginated comments of a video."""
    return await comment_service.list_comments(
        db, video_id, page, limit, query, sort_by, sort_type, viewer=viewer
    )


@router.post("/{video_id}", response_model=CommentResponse, status_code=201)
async def add_comment(
    video_id: str,
    data: CommentCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> CommentResponse:
    result: CommentResponse = await comment_service.add_comment(
        db, current_user, video_id, data.content
    )
    await db.commit()
    return result


@router.patch("/c/{comment_id}", response_model=CommentResponse)
async def update_comment(
    comment_id: str,
    data: CommentUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> CommentResponse:
    result: CommentResponse = await comment_service.update_comment(
        db, current_user, comment_id, data.content
    )
    await db.commit()
    return result


@router.delete("/c/{comment_id}", response_model=MessageResponse)
async def delete_comment(
    comment_id: str,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> MessageResponse:
    await comment_service.delete_comment(db, current_user, comment_id)
    await db.commit()
    return MessageResponse(message="Comment deleted successfully")
