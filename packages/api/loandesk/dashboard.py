# This project was developed with assistance from AI tools.
"""Back-office dashboard rendering.

Jinja2 templates live in ``loandesk/templates``. The CSS-class helpers are
registered as template filters so the markup stays free of branching on
Thai status text.
"""

from decimal import Decimal, InvalidOperation
from pathlib import Path

from fastapi.templating import Jinja2Templates
from loandesk_db.enums import StatusGroup

from .services.extractor import STATUS_LABELS
from .services.messages import format_baht, format_thai_date
from .services.status import APPROVED_KEYWORD, NOT_APPROVED_KEYWORD

TEMPLATES_DIR = Path(__file__).resolve().parent / "templates"

# (query value, tab label); "all" shows every case.
DASHBOARD_TABS: tuple[tuple[str, str], ...] = (
    ("all", "ทั้งหมด"),
    (StatusGroup.PENDING.value, "รอดำเนินการ"),
    (StatusGroup.APPROVED.value, "อนุมัติแล้ว"),
    (StatusGroup.REJECTED.value, "ไม่อนุมัติ"),
)

CREDIT_SCORE_GOOD = 760
CREDIT_SCORE_MID = 680
LTV_HIGH_PERCENT = 100


def _to_decimal(value) -> Decimal | None:
    if value is None:
        return None
    try:
        number = Decimal(str(value).replace("%", "").replace(",", "").strip())
    except InvalidOperation:
        return None
    return number if number.is_finite() else None


def status_class(status: str | None) -> str:
    text = (status or "").strip()
    if APPROVED_KEYWORD in text and "ไม่" not in text:
        tone = "success"
    elif NOT_APPROVED_KEYWORD in text:
        tone = "danger"
    elif "รอเอกสาร" in text:
        tone = "warning"
    elif "รอประเมิน" in text:
        tone = "info"
    else:
        tone = "default"
    return f"status-pill status-{tone}"


def credit_score_class(score: str | None) -> str:
    number = _to_decimal(score)
    if number is None:
        return "score-neutral"
    if number >= CREDIT_SCORE_GOOD:
        return "score-good"
    if number >= CREDIT_SCORE_MID:
        return "score-mid"
    return "score-low"


def ltv_class(ltv: str | None) -> str:
    number = _to_decimal(ltv)
    if number is not None and number >= LTV_HIGH_PERCENT:
        return "ltv-high"
    return "ltv-neutral"


def tab_group(tab: str | None) -> StatusGroup | None:
    """Map a ``?tab=`` value to a status group; unknown values mean all cases."""
    try:
        return StatusGroup(tab) if tab else None
    except ValueError:
        return None


templates = Jinja2Templates(directory=str(TEMPLATES_DIR))
templates.env.filters.update(
    baht=format_baht,
    thai_date=format_thai_date,
    status_class=status_class,
    credit_score_class=credit_score_class,
    ltv_class=ltv_class,
)
templates.env.globals.update(tabs=DASHBOARD_TABS, status_labels=STATUS_LABELS)
