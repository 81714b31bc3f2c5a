from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class AssetAdd(BaseModel):
    url: str | None = None


class UploadResponse(BaseModel):
    url: str


class DeployResponse(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    deployed_url: str
