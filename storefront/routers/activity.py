# storefront/routers/activity.py
from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Literal, Optional
from storefront.core.db import get_db
from storefront.services.activity_service import list_activity
from storefront.schemas.activity_schemas import ActivityOut, ActivityPage
from storefront.utils.get_user import get_current_user
from storefront.utils.check_roles import admin_only

router = APIRouter(prefix="/activities", tags=["Activity Log"])


@router.get("", response_model=ActivityPage)
@admin_only
async def list_activity_route(
    db: AsyncSession = Depends(get_db),
    _user=Depends(get_current_user),
    user_id: Optional[int] = Query(None, ge=1),
    email: Optional[str] = Query(None, description="Substring of the actor's email"),
    page: int = Query(1, ge=1),
    page_size: int = Query(20, ge=1, le=100),
    sort_by: str = Query("created_at"),
    order: Literal["asc", "desc"] = Query("desc"),
):
    """Who changed what in the store, newest first by default."""
    total, entries = await list_activity(
        db, user_id=user_id, email=email, page=page, page_size=page_size, sort_by=sort_by, order=order
    )
    return ActivityPage(
        message="Activity log fetched successfully",
        total=total,
        page=page,
        page_size=page_size,
        data=[ActivityOut.model_validate(e) for e in entries],
    )
