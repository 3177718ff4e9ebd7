"""재생목록 라우터 — 재생목록 CRUD와 동영상 추가/제거.

Playlists Router — Create, read, update, and delete playlists, and add or
remove member videos. Mutations are owner-only.
"""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_current_user, get_optional_user
from app.database import get_db
from app.models.user import User
from app.schemas.common import MessageResponse
from app.schemas.content import (
    PlaylistCreate,
    PlaylistDetailResponse,
    PlaylistResponse,
    PlaylistUpdate,
)
from app.services.playlist_service import playlist_service

router: APIRouter = APIRouter()


@router.post("", response_model=PlaylistResponse, status_code=201)
async def create_playlist(
    data: PlaylistCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> PlaylistResponse:
    result: PlaylistResponse = await playlist_service.create_playlist(db, current_user, data)
    await db.commit()
    return result


@router.get("/user/{user_id}", response_model=list[PlaylistResponse])
async def list_user_playlists(
    user_id: str,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> list[PlaylistResponse]:
    return await playlist_service.list_user_playlists(db, user_id)


@router.patch("/add/{video_id}/{playlist_id}", response_model=PlaylistDetailResponse)
async def add_video_to_playlist(
    video_id: str,
    playlist_id: str,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> PlaylistDetailResponse:
    """재생목록에 동영상 추가 — 이미 있으면 변화 없음 (Idempotent)."""
    result: PlaylistDetailResponse = await playlist_service.add_video(
        db, current_user, video_id, playlist_id
    )
    await db.commit()
    return result


@router.patch("/remove/{video_id}/{playlist_id}", response_model=PlaylistDetailResponse)
async def remove_video_from_playlist(
    video_id: str,
    playlist_id: str,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> PlaylistDetailResponse:
    result: PlaylistDetailResponse = await playlist_service.remove_video(
        db, current_user, video_id, playlist_id
    )
    await db.commit()
    return result


@router.get("/{playlist_id}", response_model=PlaylistDetailResponse)
async def get_playlist(
    playlist_id: str,
    db: Annotated[AsyncSession, Depends(get_db)],
    viewer: Annotated[User | None, Depends(get_optional_user)],
) -> PlaylistDetailResponse:
    """재생목록 상세 — 동영상은 추가 순서대로 (Videos in insertion order)."""
    return await playlist_service.get_playlist(db, playlist_id, viewer)


@router.patch("/{playlist_id}", response_model=PlaylistDetailResponse)
async def update_playlist(
    playlist_id: str,
    data: PlaylistUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> PlaylistDetailResponse:
    result: PlaylistDetailResponse = await playlist_service.update_playlist(
        db, current_user, playlist_id, data
    )
    await db.commit()
    return result


@router.delete("/{playlist_id}", response_model=MessageResponse)
async def delete_playlist(
    playlist_id: str,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> MessageResponse:
    await playlist_service.delete_playlist(db, current_user, playlist_id)
    await db.commit()
    return MessageResponse(message="Playlist deleted successfully")
