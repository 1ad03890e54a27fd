import logging
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from portfolio_admin.database import get_db
from portfolio_admin.exceptions import StorageError
from portfolio_admin.models.project import Project
from portfolio_admin.schemas.common import MessageOut
from portfolio_admin.schemas.project import ProjectOut, ProjectSave


router = APIRouter()
logger = logging.getLogger(__name__)


def _parse_id(raw: Optional[str]) -> Optional[UUID]:
    if not raw:
        return None
    try:
        return UUID(raw)
    except ValueError:
        return None


@router.get("/projects", response_model=list[ProjectOut])
async def list_projects(
    category: Optional[str] = None,
    db: AsyncSession = Depends(get_db),
) -> list[ProjectOut]:
    """Projects newest first; ``category=All`` (or none) disables the filter."""
    query = select(Project)
    if category and category != "All":
        query = query.where(Project.category == category)
    rows = (await db.execute(query.order_by(Project.created_at.desc()))).scalars().all()
    return [ProjectOut.model_validate(p) for p in rows]


@router.post("/projects/save", response_model=ProjectOut)
async def save_project(
    payload: ProjectSave,
    db: AsyncSession = Depends(get_db),
) -> ProjectOut:
    project_id = _parse_id(payload.id)
    values = payload.model_dump(exclude={"id"})

    if project_id is not None:
        project = await db.get(Project, project_id)
        if project is None:
            raise HTTPException(status_code=404, detail="Project not found")
        for field, value in values.items():
            setattr(project, field, value)
    else:
        project = Project(**values)
        db.add(project)

    try:
        await db.commit()
        await db.refresh(project)
    except SQLAlchemyError as e:
        await db.rollback()
        logger.error("Project save failed: %s", e)
        raise StorageError("Operation failed", cause=e) from e
    return ProjectOut.model_validate(project)


@router.delete("/projects/{project_id}", response_model=MessageOut)
async def delete_project(
    project_id: UUID,
    db: AsyncSession = Depends(get_db),
) -> MessageOut:
    try:
        await db.execute(delete(Project).where(Project.id == project_id))
        await db.commit()
    except SQLAlchemyError as e:
        await db.rollback()
        logger.error("Project delete failed: %s", e)
        raise StorageError("Operation failed", cause=e) from e
    return MessageOut(message="Project deleted successfully")
