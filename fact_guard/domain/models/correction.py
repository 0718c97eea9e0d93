"""Domain model for user correction feedback."""

from datetime import datetime, timezone
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class CorrectionType(str, Enum):
    """What the user did with a suggested correction."""

    ACCEPTED = "accepted"
    REJECTED = "rejected"
    IGNORED = "ignored"


class CorrectionRecord(BaseModel):
    """One entry in a user's append-only correction history."""

    model_config = ConfigDict(frozen=True)

    user_id: str = Field(..., description="Owner of the record")
    content_digest: str = Field(..., description="Digest of the original text")
    original_text: str = Field(..., description="Text the suggestion was made against")
    corrected_text: str = Field(..., description="Text after the user's decision")
    correction_type: CorrectionType = Field(..., description="Accepted, rejected or ignored")
    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="When the feedback was recorded",
    )
