# This project was developed with assistance from AI tools.
"""Back-office routes: case dashboard, update form and deletions.

The admin surface has no authentication of its own; deploy it behind
whatever gate fronts the service.
"""

import logging

from fastapi import APIRouter, Form, HTTPException, Request, status
from fastapi.responses import HTMLResponse, PlainTextResponse, RedirectResponse
from pydantic import ValidationError

from ..dashboard import DASHBOARD_TABS, tab_group, templates
from ..dependencies import Delivery, Repository
from ..schemas.application import StatusUpdateRequest, StatusUpdateResult
from ..services.case_update import apply_status_update, purge_case, purge_partner
from ..services.extractor import INITIAL_STATUS

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/dashboard", response_class=HTMLResponse)
async def dashboard(request: Request, repository: Repository, tab: str = "all"):
    """Case table filtered by status group, newest first."""
    group = tab_group(tab)
    current_tab = group.value if group else "all"
    applications = await repository.list_applications(status_group=group)

    counts = {"all": await repository.count_applications()}
    for value, _label in DASHBOARD_TABS:
        group_for_tab = tab_group(value)
        if group_for_tab is not None:
            counts[value] = await repository.count_applications(status_group=group_for_tab)

    return templates.TemplateResponse(
        request,
        "dashboard.html",
        {"applications": applications, "current_tab": current_tab, "counts": counts},
    )


@router.get("/app/{case_id}", response_class=HTMLResponse)
async def application_detail(request: Request, case_id: str, repository: Repository):
    app = await repository.get_application_by_id(case_id)
    if app is None:
        return HTMLResponse("ไม่พบเคส", status_code=status.HTTP_404_NOT_FOUND)
    logs = await repository.list_conversation_logs(case_id)
    return templates.TemplateResponse(request, "application.html", {"app": app, "logs": logs})


@router.post("/app/{case_id}")
async def submit_application_update(
    case_id: str,
    repository: Repository,
    delivery: Delivery,
    status_label: str = Form(default="", alias="status"),
    credit_score: str = Form(default=""),
    officer_name: str = Form(default=""),
    collateral_value: str = Form(default=""),
) -> RedirectResponse:
    """Apply the update form, then return to the dashboard."""
    try:
        update = StatusUpdateRequest(
            id=case_id,
            status=status_label.strip() or INITIAL_STATUS,
            credit_score=credit_score,
            officer_name=officer_name,
            collateral_value=collateral_value,
        )
    except ValidationError as exc:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail="ราคาประเมินต้องเป็นตัวเลขที่ไม่ติดลบ",
        ) from exc

    result = await apply_status_update(repository, delivery, update)
    if not result.ok:
        logger.warning("Update form for case %s was not applied", case_id)
    return RedirectResponse("/admin/dashboard", status_code=status.HTTP_303_SEE_OTHER)


@router.post("/update", response_model=StatusUpdateResult)
async def update_application_status(
    body: StatusUpdateRequest, repository: Repository, delivery: Delivery
) -> StatusUpdateResult:
    return await apply_status_update(repository, delivery, body)


@router.post("/delete-case/{case_id}", response_class=PlainTextResponse)
async def delete_case(case_id: str, repository: Repository) -> str:
    """Delete a case together with its conversation logs."""
    await purge_case(repository, case_id)
    return f"Deleted case: {case_id}"


@router.post("/delete-partner/{partner_id}", response_class=PlainTextResponse)
async def delete_partner(partner_id: int, repository: Repository) -> str:
    await purge_partner(repository, partner_id)
    return f"Deleted partner: {partner_id}"
