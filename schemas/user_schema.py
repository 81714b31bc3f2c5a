from pydantic import BaseModel


class UserCreate(BaseModel):
    # Optional so that missing fields reach the register handler as InvalidInput
    username: str | None = None
    password: str | None = None


class UserResponse(BaseModel):
    id: str
    username: str

    model_config = {
        "from_attributes": True,
    }
