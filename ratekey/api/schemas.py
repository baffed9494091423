from pydantic import BaseModel, Field


class SourceResponse(BaseModel):
    variable: str
    token: str
    amount: int = Field(..., ge=0)


class StatusResponse(BaseModel):
    status: str = "ok"
    variable: str
