"""
Shared schema primitives used across the API.
"""
from typing import Any, Optional
from pydantic import BaseModel


class ErrorResponse(BaseModel):
    """Error envelope returned for all 4xx/5xx responses.

    Validation failures carry `details.errors`: a list of
    `{field, message, type}` objects.
    """
    code: str
    message: str
    details: Optional[dict[str, Any]] = None
