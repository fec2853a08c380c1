"""
Uniform response envelope and the camelCase base model shared by all schemas.
"""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from typing import Generic, Optional, TypeVar


DataT = TypeVar("DataT")


class CamelModel(BaseModel):
    """Base schema: snake_case attributes, camelCase on the wire."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )


class APIResponse(CamelModel, Generic[DataT]):
    """Success envelope returned by every endpoint."""

    status_code: int = Field(..., description="HTTP status code", examples=[200])
    success: bool = Field(..., description="True for 2xx and 3xx responses", examples=[True])
    message: Optional[str] = Field(None, description="Human-readable outcome", examples=["List of Properties"])
    data: Optional[DataT] = Field(None, description="Response payload")

    @classmethod
    def build(cls, status_code: int, message: Optional[str] = None, data: Optional[DataT] = None):
        """Create an envelope, deriving the success flag from the status code."""
        return cls(
            status_code=status_code,
            success=200 <= status_code < 400,
            message=message,
            data=data,
        )
