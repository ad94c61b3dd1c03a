"""
Officer persistence.

The one module that creates and looks up officer records. Passwords are
hashed by the caller through core.security before they reach here.
"""

from typing import List, Optional
from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession
from backend.app.models.enums import OfficerRole
from backend.app.models.officer import Officer


def normalize_email(email: str) -> str:
    return email.strip().lower()


async def get_officer_by_email(db: AsyncSession, email: str) -> Optional[Officer]:
    result = await db.execute(select(Officer).where(Officer.email == normalize_email(email)))
    return result.scalar_one_or_none()


async def get_officer_by_id(db: AsyncSession, officer_id: int) -> Optional[Officer]:
    result = await db.execute(select(Officer).where(Officer.id == officer_id))
    return result.scalar_one_or_none()


async def create_officer(
    db: AsyncSession,
    full_name: str,
    email: str,
    password_hash: str,
    role: OfficerRole,
) -> Officer:
    """
    Insert a new officer.

    Raises sqlalchemy IntegrityError if the email is already taken
    (the caller checks first; the unique index is the last line).
    """
    officer = Officer(
        full_name=full_name.strip(),
        email=normalize_email(email),
        password_hash=password_hash,
        role=role,
    )
    db.add(officer)
    await db.commit()
    await db.refresh(officer)
    return officer


async def list_officers(db: AsyncSession, offset: int = 0, limit: int = 50) -> tuple[List[Officer], int]:
    total = (await db.execute(select(func.count(Officer.id)))).scalar() or 0
    result = await db.execute(
        select(Officer).order_by(Officer.created_at.desc(), Officer.id.desc()).offset(offset).limit(limit)
    )
    return list(result.scalars().all()), total
