"""Fact-checking API endpoints."""

import logging
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field

from ...domain.errors import InputError
from ...domain.models.correction import CorrectionType
from ...domain.models.fact_check_issue import CheckMode
from ...domain.ports.auth_provider import AuthProvider
from ...infrastructure.dependencies import ServiceContainer, get_auth_provider, get_service_container

# Configure logging
logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["fact-check"])


class UserFeedback(BaseModel):
    """What the user did with a suggestion."""

    model_config = ConfigDict(populate_by_name=True)

    correction_type: CorrectionType = Field(..., alias="correctionType", description="accepted, rejected or ignored")
    original_text: str = Field(..., alias="originalText", description="Text the suggestion targeted")
    corrected_text: str = Field(default="", alias="correctedText", description="Text after the user's action")


class FactCheckRequest(BaseModel):
    """Request model for prose fact-checking."""

    model_config = ConfigDict(populate_by_name=True)

    content: Optional[str] = Field(default=None, description="Markup or plain text to check")
    mode: CheckMode = Field(default=CheckMode.REALTIME, description="realtime or detailed")
    user_feedback: Optional[UserFeedback] = Field(
        default=None, alias="userFeedback", description="Correction feedback instead of a check"
    )


def get_current_user(
    request: Request,
    auth: AuthProvider = Depends(get_auth_provider),
) -> str:
    """Resolve the caller identity or reject the request."""
    user_id = auth.resolve_user(request.headers)
    if not user_id:
        raise HTTPException(status_code=401, detail="Unauthorized")
    return user_id


@router.post("/factcheck", response_model=None)
async def fact_check(
    payload: FactCheckRequest,
    user_id: str = Depends(get_current_user),
    container: ServiceContainer = Depends(get_service_container),
) -> Any:
    """Fact check prose, or record feedback on an earlier suggestion.

    Args:
        payload: Check request or feedback
        user_id: Authenticated caller

    Returns:
        The verification response, or a feedback acknowledgement
    """
    try:
        service = container.get_fact_checking_service()

        if payload.user_feedback is not None:
            feedback = payload.user_feedback
            await service.record_feedback(
                user_id,
                feedback.original_text,
                feedback.corrected_text,
                feedback.correction_type,
            )
            return {"message": "Feedback recorded"}

        if not payload.content or not payload.content.strip():
            raise InputError("Content is required")

        response = await service.fact_check(payload.content, payload.mode, user_id=user_id)
        body: Dict[str, Any] = response.to_dict()
        return body

    except InputError as e:
        logger.warning(f"⚠️ Rejected fact-check request: {e}")
        return JSONResponse(status_code=400, content={"error": str(e)})
    except Exception as e:
        logger.error(f"Error in fact-checking: {type(e).__name__}: {str(e)}", exc_info=True)
        return JSONResponse(
            status_code=500,
            content={"error": "Internal server error", "message": str(e) or type(e).__name__},
        )
