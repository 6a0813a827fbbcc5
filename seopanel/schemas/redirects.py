"""Pydantic schemas for redirect requests"""
from typing import List

from pydantic import BaseModel, ConfigDict, Field, field_validator

from seopanel.db.enums import REDIRECT_STATUS_CODES


class RedirectCreate(BaseModel):
    """Request model for creating a redirect"""
    model_config = ConfigDict(populate_by_name=True)

    from_path: str = Field(..., alias="from", min_length=1, max_length=500)
    to_path: str = Field(..., alias="to", min_length=1, max_length=500)
    status_code: int = Field(301, description="One of 301, 302, 307, 308")

    @field_validator("from_path", "to_path")
    @classmethod
    def validate_path(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Redirect path cannot be blank")
        if any(char.isspace() for char in v):
            raise ValueError("Redirect path cannot contain whitespace")
        return v

    @field_validator("status_code")
    @classmethod
    def validate_status_code(cls, v: int) -> int:
        if v not in REDIRECT_STATUS_CODES:
            raise ValueError(f"Status code must be one of {', '.join(map(str, REDIRECT_STATUS_CODES))}")
        return v


class RedirectDelete(BaseModel):
    """Request model for deleting redirects"""
    ids: List[str] = Field(..., min_length=1)
