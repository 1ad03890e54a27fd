from __future__ import annotations

from typing import List, Optional

from sqlalchemy import Boolean, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, IDMixin, TimestampMixin
from .types import StringArray


class Project(Base, IDMixin, TimestampMixin):
    __tablename__ = "projects"

    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text)
    category: Mapped[Optional[str]] = mapped_column(String(100), index=True)
    tech_stack: Mapped[Optional[List[str]]] = mapped_column(StringArray(), default=list)
    github_url: Mapped[Optional[str]] = mapped_column(String(1000))
    live_url: Mapped[Optional[str]] = mapped_column(String(1000))
    image_url: Mapped[Optional[str]] = mapped_column(Text)
    featured: Mapped[bool] = mapped_column(Boolean, default=False)
