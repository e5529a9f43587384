"""Response envelope shared by every API endpoint."""

from typing import Any

from pydantic import BaseModel


class Envelope(BaseModel):
    """Uniform response wrapper."""

    success: bool
    message: str | None = None
    data: Any = None
    errors: dict[str, list[str]] | None = None
