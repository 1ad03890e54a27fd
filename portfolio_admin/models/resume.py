from __future__ import annotations

from datetime import datetime

from sqlalchemy import Boolean, DateTime, Index, String, Text, text
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, IDMixin, utcnow


class Resume(Base, IDMixin):
    __tablename__ = "resumes"

    file_name: Mapped[str] = mapped_column(String(255), nullable=False)
    # data-URL text ("data:application/pdf;base64,...")
    file_data: Mapped[str] = mapped_column(Text, nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    uploaded_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, nullable=False
    )

    __table_args__ = (
        Index("ix_resumes_uploaded_at", "uploaded_at"),
        # At most one active resume.
        Index(
            "uq_resumes_single_active",
            "is_active",
            unique=True,
            postgresql_where=text("is_active"),
            sqlite_where=text("is_active = 1"),
        ),
    )
