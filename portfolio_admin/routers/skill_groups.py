import logging
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from portfolio_admin.database import get_db
from portfolio_admin.exceptions import StorageError
from portfolio_admin.models.skill_group import SkillGroup
from portfolio_admin.schemas.common import MessageOut
from portfolio_admin.schemas.skill_group import SkillGroupCreate, SkillGroupOut, SkillGroupUpdate


router = APIRouter()
logger = logging.getLogger(__name__)


async def _find_group(db: AsyncSession, key: str) -> SkillGroup | None:
    """Look a group up by UUID, falling back to a case-insensitive title match."""
    try:
        return await db.get(SkillGroup, UUID(key))
    except ValueError:
        pass
    return (
        await db.execute(
            select(SkillGroup).where(func.lower(SkillGroup.title) == key.strip().lower()).limit(1)
        )
    ).scalar_one_or_none()


async def _commit(db: AsyncSession, action: str, group: SkillGroup | None = None) -> None:
    try:
        await db.commit()
        if group is not None:
            await db.refresh(group)
    except SQLAlchemyError as e:
        await db.rollback()
        logger.error("Skill group %s failed: %s", action, e)
        raise StorageError("Operation failed", cause=e) from e


@router.post("", response_model=SkillGroupOut, status_code=status.HTTP_201_CREATED)
async def create_skill_group(
    payload: SkillGroupCreate,
    db: AsyncSession = Depends(get_db),
) -> SkillGroupOut:
    group = SkillGroup(**payload.model_dump())
    db.add(group)
    await _commit(db, "create", group)
    return SkillGroupOut.model_validate(group)


@router.get("", response_model=list[SkillGroupOut])
async def list_skill_groups(db: AsyncSession = Depends(get_db)) -> list[SkillGroupOut]:
    rows = (await db.execute(select(SkillGroup).order_by(SkillGroup.created_at))).scalars().all()
    return [SkillGroupOut.model_validate(g) for g in rows]


@router.put("/{group_key}", response_model=SkillGroupOut)
async def update_skill_group(
    group_key: str,
    payload: SkillGroupUpdate,
    db: AsyncSession = Depends(get_db),
) -> SkillGroupOut:
    group = await _find_group(db, group_key)
    if group is None:
        raise HTTPException(status_code=404, detail="Group not found")
    for field, value in payload.model_dump(exclude_unset=True).items():
        setattr(group, field, value)
    await _commit(db, "update", group)
    return SkillGroupOut.model_validate(group)


@router.delete("/{group_key}", response_model=MessageOut)
async def delete_skill_group(
    group_key: str,
    db: AsyncSession = Depends(get_db),
) -> MessageOut:
    group = await _find_group(db, group_key)
    if group is not None:
        await db.delete(group)
        await _commit(db, "delete")
    return MessageOut(message="Skill group deleted")
