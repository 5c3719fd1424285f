# storefront/services/activity_service.py
from sqlalchemy import select, desc, asc, func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List, Optional, Tuple

from storefront.core.exceptions import StoreError
from storefront.models.activity_models import ActivityLog

SORT_COLUMNS = {
    "id": ActivityLog.id,
    "user_id": ActivityLog.user_id,
    "user_email": ActivityLog.user_email,
    "created_at": ActivityLog.created_at,
}


async def list_activity(
    db: AsyncSession,
    user_id: Optional[int] = None,
    email: Optional[str] = None,
    page: int = 1,
    page_size: int = 20,
    sort_by: str = "created_at",
    order: str = "desc",
) -> Tuple[int, List[ActivityLog]]:
    """
    Page through the activity log. Unknown sort keys fall back to
    ``created_at``; ``id`` always breaks ties so pages never overlap.
    """
    direction = asc if order.lower() == "asc" else desc
    column = SORT_COLUMNS.get(sort_by, ActivityLog.created_at)

    filters = []
    if user_id:
        filters.append(ActivityLog.user_id == user_id)
    if email:
        filters.append(ActivityLog.user_email.ilike(f"%{email}%"))

    try:
        total = (await db.execute(select(func.count(ActivityLog.id)).where(*filters))).scalar() or 0

        stmt = (
            select(ActivityLog)
            .where(*filters)
            .order_by(direction(column), direction(ActivityLog.id))
            .offset((page - 1) * page_size)
            .limit(page_size)
        )
        result = await db.execute(stmt)
        return total, list(result.scalars().all())
    except SQLAlchemyError as e:
        raise StoreError(f"Failed to fetch activity log: {e}")
