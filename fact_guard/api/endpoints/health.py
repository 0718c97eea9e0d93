"""Health check endpoints."""

from typing import Dict

from fastapi import APIRouter, Depends

from ...infrastructure.dependencies import ServiceContainer, get_service_container

router = APIRouter(tags=["health"])


@router.get("/health")
async def health_check(
    container: ServiceContainer = Depends(get_service_container),
) -> Dict[str, Dict[str, bool]]:
    """Check the health of all service components.

    Returns:
        Availability of the AI and search providers
    """
    status = container.provider_status()
    return {
        "ai_providers": status["ai_providers"],
        "search_providers": status["search_providers"],
        "features": {
            "web_verification": container.web_verification_enabled,
        },
    }
