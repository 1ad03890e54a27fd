from typing import Optional
from uuid import UUID

from pydantic import ConfigDict
from pydantic.alias_generators import to_camel

from .common import CamelModel


class EducationUpdate(CamelModel):
    core_objective: Optional[str] = None
    academic: Optional[list[dict]] = None


class EducationOut(CamelModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)
    id: Optional[UUID] = None
    core_objective: str = ""
    academic: list[dict] = []
