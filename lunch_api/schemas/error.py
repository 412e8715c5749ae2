from pydantic import BaseModel, ConfigDict


class ErrorResponse(BaseModel):
    """Body of every 4xx response"""
    error: str

    model_config = ConfigDict(
        json_schema_extra={"example": {"error": "Poll doesn't exist"}}
    )


class ServerErrorDetail(BaseModel):
    message: str = "server error"


class ServerErrorResponse(BaseModel):
    """500 body in production; other environments return ``{"message", "error"}`` with the cause"""
    error: ServerErrorDetail
