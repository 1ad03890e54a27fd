from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import AliasChoices, ConfigDict, Field
from pydantic.alias_generators import to_camel

from .common import CamelModel


class ProjectSave(CamelModel):
    """Update the project named by ``id`` when it is a UUID, create one otherwise."""

    id: Optional[str] = Field(None, validation_alias=AliasChoices("id", "_id"))
    title: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    category: Optional[str] = Field(None, max_length=100)
    tech_stack: list[str] = []
    github_url: Optional[str] = None
    live_url: Optional[str] = None
    image_url: Optional[str] = None
    featured: bool = False


class ProjectOut(CamelModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)
    id: UUID
    title: str
    description: Optional[str] = None
    category: Optional[str] = None
    tech_stack: Optional[list[str]] = None
    github_url: Optional[str] = None
    live_url: Optional[str] = None
    image_url: Optional[str] = None
    featured: bool = False
    created_at: datetime
