from typing import Optional
from uuid import UUID

from pydantic import ConfigDict, Field
from pydantic.alias_generators import to_camel

from .common import CamelModel


class SkillGroupCreate(CamelModel):
    title: str = Field(..., min_length=1, max_length=255)
    skills: list[str] = []


class SkillGroupUpdate(CamelModel):
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    skills: Optional[list[str]] = None


class SkillGroupOut(CamelModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)
    id: UUID
    title: str
    skills: Optional[list[str]] = None
