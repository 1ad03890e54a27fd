import logging

from fastapi import APIRouter, Depends
from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from portfolio_admin.database import get_db
from portfolio_admin.exceptions import StorageError
from portfolio_admin.models.coding_profile import CodingProfile
from portfolio_admin.schemas.coding_profile import CodingProfileIn, CodingProfileOut


router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("", response_model=list[CodingProfileOut])
async def list_profiles(db: AsyncSession = Depends(get_db)) -> list[CodingProfileOut]:
    rows = (await db.execute(select(CodingProfile).order_by(CodingProfile.created_at))).scalars().all()
    return [CodingProfileOut.model_validate(p) for p in rows]


@router.post("/sync", response_model=list[CodingProfileOut])
async def sync_profiles(
    payload: list[CodingProfileIn],
    db: AsyncSession = Depends(get_db),
) -> list[CodingProfileOut]:
    """Replace every coding profile with the posted list in a single commit."""
    try:
        await db.execute(delete(CodingProfile))
        profiles = [CodingProfile(**p.model_dump()) for p in payload]
        db.add_all(profiles)
        await db.commit()
        for profile in profiles:
            await db.refresh(profile)
    except SQLAlchemyError as e:
        await db.rollback()
        logger.error("Coding profile sync failed: %s", e)
        raise StorageError("Sync failed", cause=e) from e
    logger.info("Synced %d coding profiles", len(profiles))
    return [CodingProfileOut.model_validate(p) for p in profiles]
