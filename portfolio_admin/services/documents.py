"""Helpers for the single-document collections (personal details, education)."""
from __future__ import annotations

import logging
from typing import Any, Optional, Type, TypeVar

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from portfolio_admin.exceptions import StorageError
from portfolio_admin.models.base import Base

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=Base)


async def get_singleton(db: AsyncSession, model: Type[ModelT]) -> Optional[ModelT]:
    try:
        return (
            await db.execute(select(model).order_by(model.created_at).limit(1))
        ).scalar_one_or_none()
    except SQLAlchemyError as e:
        logger.error("Load %s failed: %s", model.__tablename__, e)
        raise StorageError(f"Failed to load {model.__tablename__}", cause=e) from e


async def upsert_singleton(db: AsyncSession, model: Type[ModelT], values: dict[str, Any]) -> ModelT:
    """Update the one row of ``model`` with ``values``, creating it first if the table is empty."""
    doc = await get_singleton(db, model)
    try:
        if doc is None:
            doc = model()
            db.add(doc)
        for field, value in values.items():
            setattr(doc, field, value)
        await db.commit()
        await db.refresh(doc)
    except SQLAlchemyError as e:
        await db.rollback()
        logger.error("Update %s failed: %s", model.__tablename__, e)
        raise StorageError(f"Failed to update {model.__tablename__}", cause=e) from e
    return doc
