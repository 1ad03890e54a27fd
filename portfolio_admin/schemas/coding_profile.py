from typing import Optional
from uuid import UUID

from pydantic import ConfigDict, Field
from pydantic.alias_generators import to_camel

from .common import CamelModel


class CodingProfileIn(CamelModel):
    # Client-side ids ("_id"/"id") are accepted and ignored; sync assigns new ones.
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")
    platform: str = Field(..., min_length=1, max_length=100)
    url: str = Field(..., min_length=1, max_length=1000)
    username: Optional[str] = None
    icon: Optional[str] = None
    color: Optional[str] = None


class CodingProfileOut(CamelModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)
    id: UUID
    platform: str
    url: str
    username: Optional[str] = None
    icon: Optional[str] = None
    color: Optional[str] = None
