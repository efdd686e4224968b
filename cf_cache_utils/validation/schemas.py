"""
cf-cache-utils - Action Input Validation Schemas

Pydantic models for validating interactive action inputs.
"""

from pydantic import BaseModel, Field, field_validator


class ClearCacheInput(BaseModel):
    """Input validation for the clear-cache action."""

    nonce: str = Field(
        ...,
        min_length=1,
        max_length=256,
        description="One-time action token",
    )
    url: str | None = Field(
        default=None,
        max_length=2048,
        description="URL to purge; omitted or empty purges everything",
    )

    @field_validator("url", mode="before")
    @classmethod
    def validate_url(cls, v: str | None) -> str | None:
        """Treat blank as "everything" and require an absolute http(s) URL otherwise."""
        if v is None:
            return None
        v = str(v).strip()
        if not v:
            return None
        if not v.startswith(("http://", "https://")):
            raise ValueError("url must be an absolute http(s) URL")
        return v
