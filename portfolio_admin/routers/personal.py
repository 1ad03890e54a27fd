import logging

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from portfolio_admin.database import get_db
from portfolio_admin.models.personal_details import PersonalDetails
from portfolio_admin.schemas.personal import PersonalDetailsOut, PersonalDetailsUpdate
from portfolio_admin.services.documents import get_singleton, upsert_singleton


router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/user")
async def get_personal_details(db: AsyncSession = Depends(get_db)):
    """The profile document, or ``{}`` before one has been saved."""
    details = await get_singleton(db, PersonalDetails)
    if details is None:
        return {}
    return PersonalDetailsOut.model_validate(details).model_dump(by_alias=True, mode="json")


@router.post("/user/update", response_model=PersonalDetailsOut)
async def update_personal_details(
    payload: PersonalDetailsUpdate,
    db: AsyncSession = Depends(get_db),
) -> PersonalDetailsOut:
    details = await upsert_singleton(db, PersonalDetails, payload.model_dump(exclude_unset=True))
    logger.info("Personal details updated (%s)", details.name or "unnamed")
    return PersonalDetailsOut.model_validate(details)
