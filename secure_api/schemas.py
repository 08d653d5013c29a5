from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


# ---------------------------------------------------------------------------
# Client address resolution
# ---------------------------------------------------------------------------

class RequestAddressInfo(BaseModel):
    """Addresses a request presents for its origin."""

    model_config = ConfigDict(frozen=True)

    claimed_address: str = Field(
        default="",
        description="Address the request asserts, e.g. the first X-Forwarded-For entry.",
    )
    transport_address: Optional[str] = Field(
        default=None,
        description="Peer address seen at the transport layer, if known.",
    )


# ---------------------------------------------------------------------------
# Input validation
# ---------------------------------------------------------------------------

class InputError(str, Enum):
    MISSING = "Input is required"
    INVALID = "Invalid input"


class ValidationResult(BaseModel):
    """Outcome of validating one input string."""

    model_config = ConfigDict(frozen=True)

    is_valid: bool
    sanitized: str = ""
    error: Optional[str] = None

    @model_validator(mode="after")
    def _check_outcome(self) -> "ValidationResult":
        if self.is_valid and self.error is not None:
            raise ValueError("a valid result cannot carry an error")
        if not self.is_valid and (self.error is None or self.sanitized):
            raise ValueError("an invalid result needs an error and an empty sanitized value")
        return self

    @classmethod
    def valid(cls, sanitized: str) -> "ValidationResult":
        return cls(is_valid=True, sanitized=sanitized)

    @classmethod
    def invalid(cls, error: InputError) -> "ValidationResult":
        return cls(is_valid=False, sanitized="", error=error.value)


# ---------------------------------------------------------------------------
# HTTP payloads
# ---------------------------------------------------------------------------

class EndpointStatus(BaseModel):
    status: str = "ok"
    client_ip: str


class MessageAccepted(BaseModel):
    success: bool = True
    message: str = "Security measures are working!"
