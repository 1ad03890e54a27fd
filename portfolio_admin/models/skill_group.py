from __future__ import annotations

from typing import List, Optional

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, IDMixin, TimestampMixin
from .types import StringArray


class SkillGroup(Base, IDMixin, TimestampMixin):
    __tablename__ = "skill_groups"

    title: Mapped[str] = mapped_column(String(255), nullable=False)
    skills: Mapped[Optional[List[str]]] = mapped_column(StringArray(), default=list)
