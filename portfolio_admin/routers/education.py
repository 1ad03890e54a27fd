from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from portfolio_admin.database import get_db
from portfolio_admin.models.education import Education
from portfolio_admin.schemas.education import EducationOut, EducationUpdate
from portfolio_admin.services.documents import get_singleton, upsert_singleton


router = APIRouter()


@router.get("/education", response_model=EducationOut)
async def get_education(db: AsyncSession = Depends(get_db)) -> EducationOut:
    education = await get_singleton(db, Education)
    if education is None:
        return EducationOut()
    return EducationOut(
        id=education.id,
        core_objective=education.core_objective or "",
        academic=education.academic or [],
    )


@router.post("/update/education", response_model=EducationOut)
async def update_education(
    payload: EducationUpdate,
    db: AsyncSession = Depends(get_db),
) -> EducationOut:
    education = await upsert_singleton(db, Education, payload.model_dump(exclude_unset=True))
    return EducationOut(
        id=education.id,
        core_objective=education.core_objective or "",
        academic=education.academic or [],
    )
