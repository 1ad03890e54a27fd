"""Resume upload, activation, deletion and download."""
import io
import logging
import re
from urllib.parse import quote
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.responses import StreamingResponse
from sqlalchemy.ext.asyncio import AsyncSession

from portfolio_admin.config import get_settings
from portfolio_admin.database import get_db
from portfolio_admin.dependencies import limiter
from portfolio_admin.models.personal_details import PersonalDetails
from portfolio_admin.schemas.common import MessageOut
from portfolio_admin.schemas.resume import ResumeCreate, ResumeOut
from portfolio_admin.services import resume_store, transfer_codec
from portfolio_admin.services.documents import get_singleton

logger = logging.getLogger(__name__)

router = APIRouter()

_settings = get_settings()


def download_filename(profile_name: str | None) -> str:
    """``<Display_Name>_Resume.pdf``; whitespace runs in the profile name become underscores."""
    name = (profile_name or "").strip()
    display = re.sub(r"\s+", "_", name) if name else get_settings().default_display_name
    return f"{display}_Resume.pdf"


def content_disposition(filename: str) -> str:
    """Attachment header value safe for any profile name.

    Header values go out as latin-1, so ``filename`` carries an ASCII copy
    (non-printable-ASCII, quote and backslash replaced by ``_``) and
    ``filename*`` carries the real name percent-encoded as UTF-8 (RFC 5987).
    """
    fallback = re.sub(r'[^\x20-\x7e]|["\\]', "_", filename)
    return f"attachment; filename=\"{fallback}\"; filename*=UTF-8''{quote(filename, safe='')}"


@router.get("/resumes", response_model=list[ResumeOut])
async def list_resumes(db: AsyncSession = Depends(get_db)) -> list[ResumeOut]:
    """All resumes, newest upload first."""
    rows = await resume_store.list_resumes(db)
    return [ResumeOut.model_validate(r) for r in rows]


@router.post("/resumes", response_model=ResumeOut, status_code=status.HTTP_201_CREATED)
@limiter.limit(_settings.resume_upload_rate_limit)
async def create_resume(
    request: Request,
    payload: ResumeCreate,
    db: AsyncSession = Depends(get_db),
) -> ResumeOut:
    """Store an encoded PDF. ``isActive: true`` makes it the only active resume."""
    resume = await resume_store.create_resume(
        db,
        file_name=payload.file_name,
        file_data=payload.file_data,
        is_active=payload.is_active,
    )
    return ResumeOut.model_validate(resume)


@router.patch("/resumes/{resume_id}/active", response_model=ResumeOut)
async def activate_resume(
    resume_id: UUID,
    db: AsyncSession = Depends(get_db),
) -> ResumeOut:
    resume = await resume_store.activate_resume(db, resume_id)
    return ResumeOut.model_validate(resume)


@router.delete("/resumes/{resume_id}", response_model=MessageOut)
async def delete_resume(
    resume_id: UUID,
    db: AsyncSession = Depends(get_db),
) -> MessageOut:
    await resume_store.delete_resume(db, resume_id)
    return MessageOut(message="Deleted successfully")


@router.get("/resume/download")
async def download_resume(db: AsyncSession = Depends(get_db)):
    """Download the active resume (or the newest one when none is active) as a PDF."""
    resume = await resume_store.resolve_current(db)
    if not resume.file_data:
        raise HTTPException(status_code=404, detail="Resume file data not found")

    pdf_bytes = transfer_codec.decode(resume.file_data)

    profile = await get_singleton(db, PersonalDetails)
    filename = download_filename(profile.name if profile else None)
    logger.info("Serving resume %s as %s (%d bytes)", resume.id, filename, len(pdf_bytes))

    return StreamingResponse(
        io.BytesIO(pdf_bytes),
        media_type=transfer_codec.PDF_MEDIA_TYPE,
        headers={
            "Content-Disposition": content_disposition(filename),
            "Content-Length": str(len(pdf_bytes)),
        },
    )
