# This project was developed with assistance from AI tools.
"""Derived case fields.

``status_group`` is a pure function of the free-text status label and
``ltv`` is derived from the loan amount and the appraised collateral value.
Neither is ever set independently of its inputs.
"""

from decimal import ROUND_HALF_UP, Decimal

from loandesk_db.enums import StatusGroup

from .extractor import match_first

APPROVED_KEYWORD = "อนุมัติ"
NOT_APPROVED_KEYWORD = "ไม่อนุมัติ"

# The negated phrase contains the approved phrase, so it must be tested first.
_STATUS_GROUP_TABLE: tuple[tuple[str, StatusGroup], ...] = (
    (NOT_APPROVED_KEYWORD, StatusGroup.REJECTED),
    (APPROVED_KEYWORD, StatusGroup.APPROVED),
)

_ONE_DECIMAL = Decimal("0.1")


def map_status_group(status: str | None) -> StatusGroup:
    """Classify a status label as pending, approved or rejected."""
    text = (status or "").strip()
    if not text:
        return StatusGroup.PENDING
    return match_first(text, _STATUS_GROUP_TABLE) or StatusGroup.PENDING


def compute_ltv(loan_amount: Decimal | None, collateral_value: Decimal | None) -> str | None:
    """Return loan-to-value as ``"91.6%"``, or None when it cannot be computed.

    None means "leave the stored value alone", not "clear it".
    """
    if loan_amount is None or collateral_value is None:
        return None
    loan = Decimal(str(loan_amount))
    collateral = Decimal(str(collateral_value))
    if collateral <= 0:
        return None
    ratio = (loan / collateral * 100).quantize(_ONE_DECIMAL, rounding=ROUND_HALF_UP)
    return f"{ratio}%"
