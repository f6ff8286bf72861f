# This project was developed with assistance from AI tools.
"""Liveness and dependency health."""

from fastapi import APIRouter

from .. import __version__
from ..core.config import settings
from ..dependencies import Delivery
from ..schemas.health import HealthItem

router = APIRouter()


@router.get("/", response_model=list[HealthItem])
async def health(delivery: Delivery) -> list[HealthItem]:
    """Report the API, the case store and the chat delivery channel."""
    items = [HealthItem(name="API", status="healthy", message="API is running", version=__version__)]

    if settings.REPOSITORY_BACKEND == "memory":
        items.append(
            HealthItem(name="Database", status="healthy", message="In-memory case store")
        )
    else:
        from loandesk_db import get_db_service

        ok = await get_db_service().health_check()
        items.append(
            HealthItem(
                name="Database",
                status="healthy" if ok else "unhealthy",
                message="PostgreSQL reachable" if ok else "PostgreSQL unreachable",
            )
        )

    items.append(
        HealthItem(
            name="LINE",
            status="healthy" if delivery.is_configured else "disabled",
            message="Reply and push enabled"
            if delivery.is_configured
            else "Credentials missing; outbound messages are logged only",
        )
    )
    return items
