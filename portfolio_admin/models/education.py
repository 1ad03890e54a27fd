from __future__ import annotations

from typing import List, Optional

from sqlalchemy import Text
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, IDMixin, TimestampMixin
from .types import JSONBCompat


class Education(Base, IDMixin, TimestampMixin):
    __tablename__ = "education"

    core_objective: Mapped[Optional[str]] = mapped_column(Text, default="")
    # [{"institution": ..., "degree": ..., "year": ..., "score": ...}]
    academic: Mapped[Optional[List[dict]]] = mapped_column(JSONBCompat(), default=list)
