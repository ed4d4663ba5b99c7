from pydantic import BaseModel, ConfigDict, Field


class UserRoleUpsert(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    user_id: str = Field(..., alias="userId", min_length=1)
    role: str = Field(..., min_length=1, max_length=64)
    email: str | None = Field(None, max_length=255)
    name: str | None = Field(None, max_length=255)


class UserRoleUpsertResult(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    message: str
    role: str
    # Only present when the record was created.
    id: str | None = Field(None, alias="_id")


class UserRoleRead(BaseModel):
    role: str
