# This project was developed with assistance from AI tools.
"""Read-only case API."""

from fastapi import APIRouter, HTTPException, Query, status
from loandesk_db.enums import StatusGroup

from ..dependencies import Repository
from ..schemas import Pagination
from ..schemas.application import (
    ApplicationListResponse,
    ApplicationRecord,
    ChannelTarget,
    ConversationLogEntry,
)
from ..services.channels import resolve_channels

router = APIRouter()


async def _get_or_404(repository, case_id: str) -> ApplicationRecord:
    app = await repository.get_application_by_id(case_id)
    if app is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Application {case_id} not found",
        )
    return app


@router.get("/", response_model=ApplicationListResponse)
async def list_applications(
    repository: Repository,
    offset: int = Query(default=0, ge=0),
    limit: int = Query(default=20, ge=1, le=100),
    status_group: StatusGroup | None = None,
) -> ApplicationListResponse:
    """List cases newest first, optionally filtered by status group."""
    applications = await repository.list_applications(
        status_group=status_group, offset=offset, limit=limit
    )
    total = await repository.count_applications(status_group=status_group)
    return ApplicationListResponse(
        data=applications,
        pagination=Pagination(
            total=total,
            offset=offset,
            limit=limit,
            has_more=(offset + limit < total),
        ),
    )


@router.get("/{case_id}", response_model=ApplicationRecord)
async def get_application(case_id: str, repository: Repository) -> ApplicationRecord:
    return await _get_or_404(repository, case_id)


@router.get("/{case_id}/channels", response_model=list[ChannelTarget])
async def get_application_channels(case_id: str, repository: Repository) -> list[ChannelTarget]:
    """Chats that would receive a status notification for this case."""
    app = await _get_or_404(repository, case_id)
    return await resolve_channels(repository, case_id, application=app)


@router.get("/{case_id}/logs", response_model=list[ConversationLogEntry])
async def get_application_logs(
    case_id: str, repository: Repository
) -> list[ConversationLogEntry]:
    await _get_or_404(repository, case_id)
    return await repository.list_conversation_logs(case_id)
