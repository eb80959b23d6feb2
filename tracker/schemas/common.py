from pydantic import BaseModel


class SuccessResponse(BaseModel):
    success: bool = True


def reject_null(value):
    """Update fields may be left out, but a required column cannot be set to null."""
    if value is None:
        raise ValueError("Field cannot be null")
    return value
