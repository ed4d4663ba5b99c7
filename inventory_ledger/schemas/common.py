from pydantic import BaseModel, ConfigDict, Field


class _Ack(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    acknowledged: bool = True


class InsertAck(_Ack):
    inserted_id: str = Field(..., alias="insertedId")


class UpdateAck(_Ack):
    matched_count: int = Field(..., alias="matchedCount")
    modified_count: int = Field(..., alias="modifiedCount")


class DeleteAck(_Ack):
    deleted_count: int = Field(..., alias="deletedCount")


class ErrorResponse(BaseModel):
    error: str
