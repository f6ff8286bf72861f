# This project was developed with assistance from AI tools.
"""Field extraction for inbound chat commands.

Pure functions that classify a chat message into a command and pull typed
case fields out of loosely formatted ``label=value`` text. Nothing here
touches storage or the network.
"""

import enum
import re
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import TypeVar

from .messages import (
    ERROR_INCOME_NOT_NUMBER,
    ERROR_LOAN_NOT_NUMBER,
    ERROR_MISSING_CUSTOMER_NAME,
)

T = TypeVar("T")


def match_first(text: str, table: Iterable[tuple[str, T]]) -> T | None:
    """Return the result of the first (phrase, result) pair contained in *text*.

    Matching is case-insensitive substring containment. Table order is
    significant: when one phrase is a substring of another, list the longer
    (more specific) phrase first.
    """
    lowered = text.lower()
    for phrase, result in table:
        if phrase.lower() in lowered:
            return result
    return None


# ---------------------------------------------------------------------------
# Status keywords
# ---------------------------------------------------------------------------

STATUS_APPROVED = "อนุมัติแล้ว"
STATUS_REJECTED = "ไม่อนุมัติ"
STATUS_AWAITING_DOCUMENTS = "รอเอกสารเพิ่ม"
STATUS_AWAITING_APPRAISAL = "รอประเมินราคา"
STATUS_UNDER_REVIEW = "รอพิจารณา"

INITIAL_STATUS = STATUS_UNDER_REVIEW

# (trigger phrase, canonical label) in match priority order.
STATUS_KEYWORDS: tuple[tuple[str, str], ...] = (
    ("อนุมัติแล้ว", STATUS_APPROVED),
    ("ไม่อนุมัติ", STATUS_REJECTED),
    ("รอเอกสาร", STATUS_AWAITING_DOCUMENTS),
    ("รอประเมิน", STATUS_AWAITING_APPRAISAL),
    ("รอพิจารณา", STATUS_UNDER_REVIEW),
)

STATUS_LABELS: tuple[str, ...] = tuple(label for _, label in STATUS_KEYWORDS)


def extract_status_keyword(text: str) -> str | None:
    """Infer a canonical status label from free text, or None."""
    return match_first(text, STATUS_KEYWORDS)


# ---------------------------------------------------------------------------
# Case ids
# ---------------------------------------------------------------------------

_CASE_ID_RE = re.compile(r"HL[\s_-]?(\d{4})[\s_-]?(\d{4,})", re.IGNORECASE)


def extract_case_id(text: str) -> str | None:
    """Find a case reference in free text and normalize it to ``HL-YYYY-NNNN``.

    Accepts ``HL20240001``, ``hl-2024-0001``, ``HL 2024 0001`` and similar.
    """
    match = _CASE_ID_RE.search(text)
    if match is None:
        return None
    digits = match.group(1) + match.group(2)
    if len(digits) < 8:
        return None
    return f"HL-{digits[:4]}-{digits[4:]}"


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


class Command(str, enum.Enum):
    OPEN_CASE = "open_case"
    CHECK_CASE = "check_case"
    HELP = "help"


OPEN_CASE_TRIGGERS: tuple[str, ...] = ("#เปิดเคส", "#สมัครกู้", "ลงทะเบียนกู้:")
CHECK_CASE_TRIGGERS: tuple[str, ...] = ("#เช็คเคส", "#สถานะ", "#เช็คสถานะ")

_COMMAND_TABLE: tuple[tuple[Command, Sequence[str]], ...] = (
    (Command.OPEN_CASE, OPEN_CASE_TRIGGERS),
    (Command.CHECK_CASE, CHECK_CASE_TRIGGERS),
)


def classify_command(text: str) -> tuple[Command, str]:
    """Classify a chat message and return ``(command, payload)``.

    Triggers are case-insensitive prefixes of the trimmed text. The longest
    matching trigger of the winning set is stripped and the remainder
    trimmed. Unrecognized messages map to HELP with the whole text as payload.
    """
    stripped = text.strip()
    lowered = stripped.lower()
    for command, triggers in _COMMAND_TABLE:
        matched = [t for t in triggers if lowered.startswith(t.lower())]
        if matched:
            prefix = max(matched, key=len)
            return command, stripped[len(prefix):].strip()
    return Command.HELP, stripped


# ---------------------------------------------------------------------------
# Open-case payload
# ---------------------------------------------------------------------------

LABEL_CUSTOMER_NAME = "ชื่อลูกค้า"
LABELS_INCOME = ("เงินเดือน", "รายได้")
LABELS_LOAN = ("วงเงิน", "ยอดกู้")
LABEL_PROPERTY_TYPE = "ทรัพย์"
LABEL_PROJECT = "โครงการ"

# Labels that get a "|" inserted before them so users may omit separators.
_SEPARATOR_LABELS = (*LABELS_INCOME, *LABELS_LOAN, LABEL_PROPERTY_TYPE, LABEL_PROJECT)
_SEPARATOR_RE = re.compile(r"(" + "|".join(map(re.escape, _SEPARATOR_LABELS)) + r")\s*=")

_NUMBER_NOISE_RE = re.compile(r"[,\s]")


def parse_number(value: str | None) -> Decimal | None:
    """Parse an amount, tolerating thousands separators. None if unparseable."""
    if not value:
        return None
    cleaned = _NUMBER_NOISE_RE.sub("", value)
    try:
        number = Decimal(cleaned)
    except InvalidOperation:
        return None
    if not number.is_finite():
        return None
    return number


@dataclass
class NewCaseFields:
    customer_name: str = ""
    monthly_income: Decimal | None = None
    loan_amount: Decimal | None = None
    property_type: str = ""
    project_name: str = ""


@dataclass
class ParseResult:
    """Outcome of :func:`parse_new_case_payload`: fields on success, error text otherwise."""

    ok: bool
    fields: NewCaseFields | None = None
    error: str | None = None


def parse_new_case_payload(raw_text: str) -> ParseResult:
    """Parse the text after an open-case trigger into case fields.

    ``ชื่อลูกค้า=นายสมชาย เงินเดือน=85,000 | วงเงิน=5000000`` and the fully
    pipe-delimited form parse the same. Keys match by substring so labels
    may carry extra words (``เงินเดือนรวม=...``).
    """
    cleaned = _SEPARATOR_RE.sub(r"|\1=", raw_text).strip()
    if cleaned.startswith("|"):
        cleaned = cleaned[1:].strip()

    fields = NewCaseFields()
    saw_income = False
    saw_loan = False

    for part in cleaned.split("|"):
        key, _, value = part.partition("=")
        key = key.strip()
        value = value.strip()
        if not key or not value:
            continue

        if LABEL_CUSTOMER_NAME in key:
            fields.customer_name = value
        elif any(label in key for label in LABELS_INCOME):
            saw_income = True
            fields.monthly_income = parse_number(value)
        elif any(label in key for label in LABELS_LOAN):
            saw_loan = True
            fields.loan_amount = parse_number(value)
        elif LABEL_PROPERTY_TYPE in key:
            fields.property_type = value
        elif LABEL_PROJECT in key:
            fields.project_name = value

    if not fields.customer_name:
        return ParseResult(ok=False, error=ERROR_MISSING_CUSTOMER_NAME)
    if saw_income and fields.monthly_income is None:
        return ParseResult(ok=False, error=ERROR_INCOME_NOT_NUMBER)
    if saw_loan and fields.loan_amount is None:
        return ParseResult(ok=False, error=ERROR_LOAN_NOT_NUMBER)
    return ParseResult(ok=True, fields=fields)
