"""
Database seeding script for initial officers.

Creates one officer per role for testing and development.
Run this script after database is set up but before first use.
"""

import asyncio
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from backend.app.db.session import AsyncSessionLocal, engine, Base
from backend.app.models.enums import OfficerRole
from backend.app.core.security import get_password_hash
from backend.app.services.officers import create_officer, get_officer_by_email

SEED_OFFICERS = [
    ("Morgan Manager", "manager@fleet.io", "manager123", OfficerRole.FLEET_MANAGER),
    ("Dana Dispatcher", "dispatcher@fleet.io", "dispatch123", OfficerRole.DISPATCHER),
    ("Sam Safety", "safety@fleet.io", "safety123", OfficerRole.SAFETY_OFFICER),
    ("Alex Analyst", "analyst@fleet.io", "analyst123", OfficerRole.FINANCIAL_ANALYST),
]


async def seed_officers():
    """
    Seed initial officers with different roles.

    Existing emails are skipped, so the script can be re-run safely.
    """
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with AsyncSessionLocal() as db:
        print("🌱 Starting officer seeding...")

        for full_name, email, password, role in SEED_OFFICERS:
            if await get_officer_by_email(db, email):
                print(f"ℹ️  {email} already exists, skipping")
                continue

            await create_officer(
                db,
                full_name=full_name,
                email=email,
                password_hash=get_password_hash(password),
                role=role,
            )
            print(f"✅ Created {role.value} officer (email: {email}, password: {password})")

    await engine.dispose()


if __name__ == "__main__":
    asyncio.run(seed_officers())
