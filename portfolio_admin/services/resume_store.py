"""Resume persistence and the at-most-one-active rule.

"Current" resume is never cached: ``resolve_current`` derives it from the rows
on every call. Every mutation that touches ``is_active`` clears and sets the
flag inside one transaction, and the ``uq_resumes_single_active`` partial index
rejects anything that would leave two rows active.
"""
from __future__ import annotations

import logging
from typing import Optional
from uuid import UUID

from sqlalchemy import select, text, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from portfolio_admin.config import get_settings
from portfolio_admin.exceptions import (
    CorruptPayloadError,
    InvalidTypeError,
    NotFoundError,
    StorageError,
    ValidationError,
)
from portfolio_admin.models.resume import Resume
from portfolio_admin.services import transfer_codec

logger = logging.getLogger(__name__)


def _newest_first():
    return (Resume.uploaded_at.desc(), Resume.id)


def validate_upload(file_name: str, file_data: str) -> bytes:
    """Boundary checks for a new resume. Returns the decoded file bytes."""
    if not file_name or not file_name.strip():
        raise ValidationError("fileName must not be empty")
    if not file_data or not file_data.strip():
        raise ValidationError("fileData must not be empty")

    media_type, _ = transfer_codec.split_data_url(file_data)
    if media_type is not None and media_type != transfer_codec.PDF_MEDIA_TYPE:
        raise InvalidTypeError("Please upload a PDF file only.")

    try:
        content = transfer_codec.decode(file_data)
    except CorruptPayloadError as e:
        raise ValidationError("fileData is not valid base64", cause=e) from e
    if not content:
        raise ValidationError("fileData must not be empty")

    max_bytes = get_settings().max_resume_bytes
    if len(content) > max_bytes:
        limit = f"{max_bytes // (1024 * 1024)}MB" if max_bytes >= 1024 * 1024 else f"{max_bytes} byte"
        raise ValidationError(f"File size exceeds {limit} limit")
    return content


async def _lock_active_flag(db: AsyncSession) -> None:
    """Serialise clear-then-set units until the surrounding transaction ends.

    Under READ COMMITTED a second ``_clear_active`` would not see the row a
    concurrent writer just activated and then trip the unique index. The lock
    mode conflicts with itself but not with plain reads. SQLite already
    serialises writers, so nothing is taken there.
    """
    if db.get_bind().dialect.name == "postgresql":
        await db.execute(text(f"LOCK TABLE {Resume.__tablename__} IN SHARE ROW EXCLUSIVE MODE"))


async def _clear_active(db: AsyncSession) -> None:
    await db.execute(
        update(Resume).where(Resume.is_active.is_(True)).values(is_active=False)
    )


async def list_resumes(db: AsyncSession) -> list[Resume]:
    try:
        rows = (await db.execute(select(Resume).order_by(*_newest_first()))).scalars().all()
    except SQLAlchemyError as e:
        logger.error("List resumes failed: %s", e)
        raise StorageError("Failed to load resumes", cause=e) from e
    return list(rows)


async def create_resume(
    db: AsyncSession,
    file_name: str,
    file_data: str,
    is_active: bool = False,
) -> Resume:
    """Insert a resume. With ``is_active`` the previous active one is cleared in the same commit."""
    content = validate_upload(file_name, file_data)

    try:
        if is_active:
            await _lock_active_flag(db)
            await _clear_active(db)
        resume = Resume(
            file_name=file_name.strip(),
            file_data=file_data,
            is_active=is_active,
        )
        db.add(resume)
        await db.commit()
        await db.refresh(resume)
    except SQLAlchemyError as e:
        await db.rollback()
        logger.error("Resume upload failed: %s", e)
        raise StorageError("Failed to save resume", cause=e) from e

    logger.info(
        "Stored resume %s (%s, %d bytes, active=%s)",
        resume.id, resume.file_name, len(content), resume.is_active,
    )
    return resume


async def activate_resume(db: AsyncSession, resume_id: UUID) -> Resume:
    """Make ``resume_id`` the only active resume.

    The id is looked up before anything is cleared, so an unknown id leaves
    the current active resume in place.
    """
    try:
        await _lock_active_flag(db)
        resume = await db.get(Resume, resume_id)
        if resume is None:
            raise NotFoundError("Resume ID not found")

        await _clear_active(db)
        await db.execute(
            update(Resume).where(Resume.id == resume.id).values(is_active=True)
        )
        await db.commit()
        await db.refresh(resume)
    except SQLAlchemyError as e:
        await db.rollback()
        logger.error("Activate resume %s failed: %s", resume_id, e)
        raise StorageError("Failed to activate resume", cause=e) from e

    logger.info("Resume %s is now active", resume.id)
    return resume


async def delete_resume(db: AsyncSession, resume_id: UUID) -> bool:
    """Delete by id. Returns whether a row existed; a missing id is not an error."""
    try:
        resume = await db.get(Resume, resume_id)
        if resume is None:
            return False
        await db.delete(resume)
        await db.commit()
    except SQLAlchemyError as e:
        await db.rollback()
        logger.error("Delete resume %s failed: %s", resume_id, e)
        raise StorageError("Failed to delete resume", cause=e) from e

    logger.info("Deleted resume %s (%s)", resume_id, resume.file_name)
    return True


async def resolve_current(db: AsyncSession) -> Resume:
    """The active resume, else the newest upload. Raises NotFoundError on an empty store."""
    try:
        resume: Optional[Resume] = (
            await db.execute(select(Resume).where(Resume.is_active.is_(True)).limit(1))
        ).scalar_one_or_none()
        if resume is None:
            resume = (
                await db.execute(select(Resume).order_by(*_newest_first()).limit(1))
            ).scalar_one_or_none()
    except SQLAlchemyError as e:
        logger.error("Resolve current resume failed: %s", e)
        raise StorageError("Failed to load resume", cause=e) from e

    if resume is None:
        raise NotFoundError("Resume file data not found")
    return resume
