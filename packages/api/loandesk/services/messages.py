# This project was developed with assistance from AI tools.
"""Chat-language reply texts and value formatting.

Every user-visible string the bot sends lives here so the dispatcher and
the update orchestrator only decide *which* message to send.
"""

from datetime import datetime, timedelta, timezone
from decimal import Decimal, InvalidOperation
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from ..schemas.application import ApplicationRecord

PLACEHOLDER = "-"
CURRENCY_GLYPH = "฿"

THAI_MONTHS = (
    "ม.ค.",
    "ก.พ.",
    "มี.ค.",
    "เม.ย.",
    "พ.ค.",
    "มิ.ย.",
    "ก.ค.",
    "ส.ค.",
    "ก.ย.",
    "ต.ค.",
    "พ.ย.",
    "ธ.ค.",
)
BUDDHIST_ERA_OFFSET = 543

# Thailand observes no DST.
BANGKOK_TZ = timezone(timedelta(hours=7), "ICT")

# ---------------------------------------------------------------------------
# Fixed texts
# ---------------------------------------------------------------------------

ERROR_MISSING_CUSTOMER_NAME = (
    "❌ ข้อมูลไม่ครบ\n"
    "ตัวอย่าง: #เปิดเคส ชื่อลูกค้า=นายสมชาย | เงินเดือน=85000 | วงเงิน=5000000"
)
ERROR_INCOME_NOT_NUMBER = "❌ กรุณากรอกเงินเดือนเป็นตัวเลข เช่น 85000"
ERROR_LOAN_NOT_NUMBER = "❌ กรุณากรอกวงเงินเป็นตัวเลข เช่น 5000000"

ERROR_PARTNER_BINDING = "❌ ระบบขัดข้อง ไม่สามารถผูก Partner กับ LINE ได้"
ERROR_SAVE_CASE = "❌ ระบบขัดข้อง ไม่สามารถบันทึกเคสได้ กรุณาลองใหม่อีกครั้ง"
ERROR_LOOKUP_CASE = "❌ ระบบขัดข้อง ไม่สามารถค้นหาเคสได้ กรุณาลองใหม่อีกครั้ง"

ASK_FOR_CASE_QUERY = "กรุณาระบุเลขเคส หรือชื่อลูกค้า"

HELP_MESSAGE = (
    "สวัสดีครับ ระบบสินเชื่อบ้าน\n\n"
    "• เปิดเคสใหม่:\n"
    "#เปิดเคส ชื่อลูกค้า=... | เงินเดือน=... | วงเงิน=...\n\n"
    "• เช็คสถานะเคส:\n"
    "#เช็คเคส เลขเคส หรือชื่อลูกค้า"
)


# ---------------------------------------------------------------------------
# Formatting
# ---------------------------------------------------------------------------


def _to_decimal(value: Any) -> Decimal | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        number = value if isinstance(value, Decimal) else Decimal(str(value))
    except (InvalidOperation, ValueError):
        return None
    return number if number.is_finite() else None


def format_baht(amount: Any) -> str:
    """Render an amount as ``฿85,000``; missing or non-numeric values render ``-``."""
    number = _to_decimal(amount)
    if number is None:
        return PLACEHOLDER
    if number == number.to_integral_value():
        return f"{CURRENCY_GLYPH}{int(number):,}"
    return f"{CURRENCY_GLYPH}{number.normalize():,f}"


def format_thai_date(value: datetime | str | None) -> str:
    """Render an instant as ``5 มี.ค. 67`` (day, Thai month, Buddhist-era year mod 100)."""
    if value is None or value == "":
        return PLACEHOLDER
    if isinstance(value, str):
        try:
            value = datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            return PLACEHOLDER
    if value.tzinfo is not None:
        value = value.astimezone(BANGKOK_TZ)
    year = (value.year + BUDDHIST_ERA_OFFSET) % 100
    return f"{value.day} {THAI_MONTHS[value.month - 1]} {year:02d}"


# ---------------------------------------------------------------------------
# Composed replies
# ---------------------------------------------------------------------------


def case_not_found(query: str) -> str:
    return f'❌ ไม่พบเคส "{query}"'


def open_case_confirmation(
    case_id: str,
    customer_name: str,
    monthly_income: Any,
    loan_amount: Any,
    project_name: str,
) -> str:
    return (
        "✅ เปิดเคสใหม่แล้ว\n"
        f"เลขเคส: {case_id}\n"
        f"ชื่อลูกค้า: {customer_name}\n"
        f"เงินเดือน: {format_baht(monthly_income)}\n"
        f"ยอดกู้: {format_baht(loan_amount)}\n"
        f"โครงการ: {project_name}"
    )


def case_detail(app: "ApplicationRecord") -> str:
    ltv_text = f" (LTV {app.ltv})" if app.ltv else ""
    return (
        "📌 รายละเอียดเคส\n"
        f"เลขเคส: {app.id}\n"
        f"ชื่อลูกค้า: {app.customer_name}\n"
        f"เงินเดือน: {format_baht(app.monthly_income)}\n"
        f"โครงการ: {app.project_name}\n"
        f"ยอดกู้: {format_baht(app.loan_amount)}{ltv_text}\n"
        f"สถานะ: {app.status}\n"
        f"เครดิตสกอร์: {app.credit_score or PLACEHOLDER}"
    )


def status_update_notification(
    case_id: str,
    status: str,
    credit_score: str | None,
    officer_name: str | None,
) -> str:
    text = (
        "📢 อัปเดตเคส\n"
        f"เลขเคส: {case_id}\n"
        f"สถานะ: {status}\n"
        f"เครดิตสกอร์: {credit_score or PLACEHOLDER}"
    )
    if officer_name:
        text += f"\nโดย: {officer_name}"
    return text
