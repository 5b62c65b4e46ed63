from pydantic import BaseModel


class MessageResponse(BaseModel):
    """Plain acknowledgement."""
    message: str


class ErrorResponse(BaseModel):
    """Body returned for every failed workflow call."""
    error: str
    code: str


def error_responses(*statuses: int) -> dict:
    """OpenAPI `responses=` entries documenting ErrorResponse for each status."""
    return {status: {"model": ErrorResponse} for status in statuses}
