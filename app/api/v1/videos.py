"""동영상 라우터 — 동영상 목록, 업로드, 조회, 수정, 삭제, 공개 전환.

Videos Router — Listing, publishing, reading, updating, deleting, and
toggling the published flag of videos. Follows 3-layer architecture:
Router → Service → Repository.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_current_user, get_optional_user, read_upload
from app.config import settings
from app.database import get_db
from app.models.user import User
from app.schemas.common import MessageResponse, PaginatedResponse
from app.schemas.content import VideoResponse
from app.services.video_service import video_service

router: APIRouter = APIRouter()


@router.get("", response_model=PaginatedResponse)
async def list_videos(
    db: Annotated[AsyncSession, Depends(get_db)],
    viewer: Annotated[User | None, Depends(get_optional_user)],
    page: Annotated[int, Query()] = 1,
    limit: Annotated[int, Query()] = settings.DEFAULT_PAGE_SIZE,
    query: Annotated[str | None, Query()] = None,
    sort_by: Annotated[str, Query()] = "created_at",
    sort_type: Annotated[str, Query()] = "desc",
    user_id: Annotated[str | None, Query()] = None,
) -> PaginatedResponse:
    """동영상 목록 조회 (페이지네이션).

    Paginated video listing with optional search, owner filter, and sort.

    Args:
        page: 페이지 번호 (1-based page)
        limit: 페이지 크기 (Page size)
        query: 제목/설명 검색어 (Search over title and description)
        sort_by: 정렬 키 (created_at, views, title, duration, updated_at)
        sort_type: "asc" | "desc"
        user_id: 채널 필터 (Owner filter)
    """
    return await video_service.list_videos(
        db, page, limit, query, sort_by, sort_type, user_id=user_id, viewer=viewer
    )


@router.post("", response_model=VideoResponse, status_code=201)
async def publish_video(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
    title: Annotated[str, Form()] = "",
    description: Annotated[str, Form()] = "",
    duration: Annotated[float, Form()] = 0.0,
    video_file: Annotated[UploadFile | None, File()] = None,
    thumbnail: Annotated[UploadFile | None, File()] = None,
) -> VideoResponse:
    """동영상 업로드 — multipart 폼 (동영상 파일 + 썸네일)."""
    result: VideoResponse = await video_service.publish_video(
        db,
        current_user,
        title=title,
        description=description,
        video_file=await read_upload(video_file),
        thumbnail=await read_upload(thumbnail),
        duration=duration,
    )
    await db.commit()
    return result


@router.get("/me", response_model=PaginatedResponse)
async def list_my_videos(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
    page: Annotated[int, Query()] = 1,
    limit: Annotated[int, Query()] = settings.DEFAULT_PAGE_SIZE,
    query: Annotated[str | None, Query()] = None,
    sort_by: Annotated[str, Query()] = "created_at",
    sort_type: Annotated[str, Query()] = "desc",
) -> PaginatedResponse:
    """내 동영상 목록 — 비공개 동영상 포함 (Unpublished included)."""
    return await video_service.list_my_videos(
        db, current_user, page, limit, query, sort_by, sort_type
    )


@router.get("/trending", response_model=list[VideoResponse])
async def get_trending(
    db: Annotated[AsyncSession, Depends(get_db)],
    viewer: Annotated[User | None, Depends(get_optional_user)],
    limit: Annotated[int, Query()] = settings.DEFAULT_PAGE_SIZE,
) -> list[VideoResponse]:
    return await video_service.get_trending(db, limit, viewer)


@router.get("/{video_id}", response_model=VideoResponse)
async def get_video(
    video_id: str,
    db: Annotated[AsyncSession, Depends(get_db)],
    viewer: Annotated[User | None, Depends(get_optional_user)],
) -> VideoResponse:
    """동영상 조회 — 조회수 증가, 로그인 사용자는 시청 기록 추가.

    Read a video. Counts a view and records it in the viewer's history.
    """
    result: VideoResponse = await video_service.get_video(db, video_id, viewer)
    await db.commit()
    return result


@router.patch("/{video_id}", response_model=VideoResponse)
async def update_video(
    video_id: str,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
    title: Annotated[str | None, Form()] = None,
    description: Annotated[str | None, Form()] = None,
    thumbnail: Annotated[UploadFile | None, File()] = None,
) -> VideoResponse:
    """동영상 정보 수정 (소유자만) — 제목, 설명, 썸네일."""
    result: VideoResponse = await video_service.update_video(
        db,
        current_user,
        video_id,
        title=title,
        description=description,
        thumbnail=await read_upload(thumbnail),
    )
    await db.commit()
    return result


@router.delete("/{video_id}", response_model=MessageResponse)
async def delete_video(
    video_id: str,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> MessageResponse:
    """동영상 삭제 (소유자만) — 댓글, 좋아요, 재생목록 항목 포함."""
    await video_service.delete_video(db, current_user, video_id)
    await db.commit()
    return MessageResponse(message="Video deleted successfully")


@router.patch("/toggle/publish/{video_id}", response_model=VideoResponse)
async def toggle_publish(
    video_id: str,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> VideoResponse:
    result: VideoResponse = await video_service.toggle_publish(db, current_user, video_id)
    await db.commit()
    return result
