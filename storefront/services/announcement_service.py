# storefront/services/announcement_service.py
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from storefront.core.exceptions import NotFoundError
from storefront.models.announcement_models import Announcement
from storefront.schemas.announcement_schemas import AnnouncementIn, AnnouncementOut
from storefront.utils.activity_helpers import record_activity


async def create_announcement(db: AsyncSession, data: AnnouncementIn, current_user):
    announcement = Announcement(message=data.message)
    db.add(announcement)
    await db.flush()
    await record_activity(
        db,
        current_user,
        f"Created announcement (ID: {announcement.id})"
    )
    await db.commit()
    await db.refresh(announcement)
    return {"message": "Announcement created", "data": AnnouncementOut.model_validate(announcement)}


async def get_announcements(db: AsyncSession):
    result = await db.execute(select(Announcement).order_by(Announcement.created_at.desc(), Announcement.id.desc()))
    return {
        "message": "Announcements fetched successfully",
        "data": [AnnouncementOut.model_validate(a) for a in result.scalars().all()],
    }


async def update_announcement(db: AsyncSession, announcement_id: int, data: AnnouncementIn, current_user):
    announcement = await db.get(Announcement, announcement_id)
    if not announcement:
        raise NotFoundError("Announcement not found")

    announcement.message = data.message
    await record_activity(
        db,
        current_user,
        f"Updated announcement (ID: {announcement.id})"
    )
    await db.commit()
    await db.refresh(announcement)
    return {"message": "Announcement updated", "data": AnnouncementOut.model_validate(announcement)}


async def delete_announcement(db: AsyncSession, announcement_id: int, current_user):
    announcement = await db.get(Announcement, announcement_id)
    if not announcement:
        raise NotFoundError("Announcement not found")

    await db.delete(announcement)
    await record_activity(
        db,
        current_user,
        f"Deleted announcement (ID: {announcement_id})"
    )
    await db.commit()
    return {"message": "Announcement deleted"}
