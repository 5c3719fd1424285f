from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.core.db import get_db
from storefront.schemas.announcement_schemas import AnnouncementIn, AnnouncementResponse, AnnouncementListResponse
from storefront.services.announcement_service import (
    create_announcement, get_announcements, update_announcement, delete_announcement
)
from storefront.utils.check_roles import admin_only
from storefront.utils.get_user import get_current_user

router = APIRouter(prefix="/announcements", tags=["Announcements"])


@router.post("", response_model=AnnouncementResponse, status_code=status.HTTP_201_CREATED)
@admin_only
async def create_announcement_route(data: AnnouncementIn, db: AsyncSession = Depends(get_db), _user = Depends(get_current_user)):
    return await create_announcement(db, data, _user)


@router.get("", response_model=AnnouncementListResponse)
async def list_announcements_route(db: AsyncSession = Depends(get_db)):
    return await get_announcements(db)


@router.put("/{announcement_id}", response_model=AnnouncementResponse)
@admin_only
async def update_announcement_route(
    announcement_id: int,
    data: AnnouncementIn,
    db: AsyncSession = Depends(get_db),
    _user = Depends(get_current_user)
):
    return await update_announcement(db, announcement_id, data, _user)


@router.delete("/{announcement_id}", response_model=AnnouncementResponse)
@admin_only
async def delete_announcement_route(announcement_id: int, db: AsyncSession = Depends(get_db), _user = Depends(get_current_user)):
    return await delete_announcement(db, announcement_id, _user)
