from datetime import datetime
from uuid import UUID

from pydantic import AliasChoices, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from .common import CamelModel


class ResumeCreate(CamelModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        json_schema_extra={
            "examples": [
                {
                    "fileName": "jane_doe_2026.pdf",
                    "fileData": "data:application/pdf;base64,JVBERi0xLjQK...",
                    "isActive": True,
                }
            ]
        },
    )
    file_name: str = Field(..., max_length=255)
    # Older admin builds post the encoded file as "url".
    file_data: str = Field(..., validation_alias=AliasChoices("fileData", "file_data", "url"))
    is_active: bool = False

    @field_validator("file_name")
    @classmethod
    def file_name_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("fileName must not be empty")
        return v

    @field_validator("file_data")
    @classmethod
    def file_data_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("fileData must not be empty")
        return v


class ResumeOut(CamelModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )
    id: UUID
    file_name: str
    file_data: str
    is_active: bool
    uploaded_at: datetime
