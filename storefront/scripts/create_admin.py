from sqlalchemy.future import select
from storefront.models.user_models import User
from storefront.core.db import AsyncSessionLocal, init_models
from storefront.core.config import ADMIN_EMAIL, ADMIN_PASSWORD
from storefront.core.security import hash_password
import asyncio

async def create_admin():
    if not ADMIN_PASSWORD:
        raise SystemExit("ADMIN_PASSWORD must be set")

    await init_models()
    async with AsyncSessionLocal() as session:
        result = await session.execute(select(User).where(User.email == ADMIN_EMAIL.lower()))
        if result.scalars().first():
            print(f"Admin {ADMIN_EMAIL} already exists")
            return

        admin = User(
            first_name="Store",
            last_name="Admin",
            email=ADMIN_EMAIL.lower(),
            phone_number="+96100000000",
            location="Beirut",
            password_hash=hash_password(ADMIN_PASSWORD),
            role="admin",
            is_active=True
        )
        session.add(admin)
        await session.commit()
        print("Admin user created!")

if __name__ == "__main__":
    asyncio.run(create_admin())
