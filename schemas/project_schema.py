from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


# camelCase on the wire, snake_case in Python; either is accepted on input
CAMEL_CONFIG = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


class InputData(BaseModel):
    model_config = CAMEL_CONFIG

    text: str | None = None
    speech_transcript: str | None = None
    # Opaque client blob, e.g. drawing strokes
    drawing_data: Any = None


class ProjectCreate(BaseModel):
    """Client payload for creating a project. Owner is inferred from auth."""
    model_config = CAMEL_CONFIG

    title: str | None = None
    description: str | None = None
    code: str | None = None
    input_data: InputData | None = None
    is_public: Any = None


class ProjectUpdate(BaseModel):
    model_config = CAMEL_CONFIG

    title: str | None = None
    description: str | None = None
    code: str | None = None
    input_data: InputData | None = None
    # Applied only when it is a real boolean; anything else is ignored
    is_public: Any = None


class VersionResponse(BaseModel):
    model_config = CAMEL_CONFIG

    code: str
    created_at: datetime | None = None


class ProjectResponse(BaseModel):
    model_config = CAMEL_CONFIG

    id: str
    owner_id: str
    title: str
    description: str | None = None
    code: str
    versions: list[VersionResponse] = Field(default_factory=list)
    assets: list[str] = Field(default_factory=list)
    input_data: InputData = Field(default_factory=InputData)
    is_public: bool = False
    deployed_url: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
