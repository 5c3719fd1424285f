# storefront/utils/activity_helpers.py
from sqlalchemy import inspect
from sqlalchemy.ext.asyncio import AsyncSession
from storefront.models.activity_models import ActivityLog


async def record_activity(db: AsyncSession, actor, message: str) -> ActivityLog:
    """
    Stage an activity entry for ``actor`` in the current transaction.
    Nothing is flushed here; it is persisted by the caller's commit.
    """
    state = inspect(actor, raiseerr=False)
    if state is not None and state.expired and state.persistent:
        # A rollback earlier in the request expired the user row
        await db.refresh(actor)

    entry = ActivityLog(
        user_id=getattr(actor, "id", None),
        user_email=getattr(actor, "email", None) or "system",
        message=message,
    )
    db.add(entry)
    return entry
