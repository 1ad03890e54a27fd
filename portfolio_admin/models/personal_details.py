from __future__ import annotations

from typing import Optional

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, IDMixin, TimestampMixin


class PersonalDetails(Base, IDMixin, TimestampMixin):
    __tablename__ = "personal_details"

    name: Mapped[Optional[str]] = mapped_column(String(255))
    role: Mapped[Optional[str]] = mapped_column(String(255))
    bio: Mapped[Optional[str]] = mapped_column(Text)
    location: Mapped[Optional[str]] = mapped_column(String(255))
    email: Mapped[Optional[str]] = mapped_column(String(255))
    github_url: Mapped[Optional[str]] = mapped_column(String(1000))
    linkedin_url: Mapped[Optional[str]] = mapped_column(String(1000))
    avatar_url: Mapped[Optional[str]] = mapped_column(Text)
