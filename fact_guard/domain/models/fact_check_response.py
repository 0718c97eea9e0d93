"""Domain model for the outcome of one fact-check request."""

from dataclasses import dataclass
from typing import Any, Dict, Optional

from .fact_check_issue import CheckMode, VerificationResult


@dataclass
class FactCheckResponse:
    """Result of a fact-check request as returned to the caller."""

    mode: CheckMode
    result: VerificationResult
    content_length: int
    plain_text_length: int
    processing_time: float = 0.0  # milliseconds
    cached: bool = False
    user_corrected: Optional[bool] = None

    def __post_init__(self):
        """Validate the response."""
        if self.result.mode != self.mode:
            raise ValueError("Result shape does not match the requested mode")
        if self.content_length < 0 or self.plain_text_length < 0:
            raise ValueError("Lengths cannot be negative")

    def to_dict(self) -> Dict[str, Any]:
        """Convert the response to dictionary format for API responses."""
        payload = {
            'mode': self.mode.value,
            'result': self.result.to_payload(),
            'contentLength': self.content_length,
            'plainTextLength': self.plain_text_length,
            'processingTime': round(self.processing_time, 2),
            'cached': self.cached,
        }
        if self.user_corrected is not None:
            payload['userCorrected'] = self.user_corrected
        return payload
