"""Helpers rendering the JSON envelope used by every endpoint."""

from typing import Any

from fastapi.responses import JSONResponse
from pydantic import BaseModel

from postboard.schemas.common import Envelope


def _dump(data: Any) -> Any:
    if isinstance(data, BaseModel):
        return data.model_dump(mode="json", by_alias=True)
    return data


def envelope(
    *,
    success: bool = True,
    message: str | None = None,
    data: Any = None,
    errors: dict[str, list[str]] | None = None,
    status_code: int = 200,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    """Wrap a payload in ``{success, message, data, errors}``, omitting empty keys."""
    body = Envelope(success=success, message=message, data=_dump(data), errors=errors)
    return JSONResponse(
        content=body.model_dump(mode="json", exclude_none=True),
        status_code=status_code,
        headers=headers,
    )


def error_envelope(
    status_code: int,
    message: str | None = None,
    errors: dict[str, list[str]] | None = None,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    return envelope(
        success=False,
        message=message,
        errors=errors,
        status_code=status_code,
        headers=headers,
    )
