from typing import Optional
from uuid import UUID

from pydantic import ConfigDict
from pydantic.alias_generators import to_camel

from .common import CamelModel


class PersonalDetailsUpdate(CamelModel):
    name: Optional[str] = None
    role: Optional[str] = None
    bio: Optional[str] = None
    location: Optional[str] = None
    email: Optional[str] = None
    github_url: Optional[str] = None
    linkedin_url: Optional[str] = None
    avatar_url: Optional[str] = None


class PersonalDetailsOut(PersonalDetailsUpdate):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)
    id: UUID
