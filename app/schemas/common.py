from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    return_code: int = Field(400, serialization_alias="returnCode")
