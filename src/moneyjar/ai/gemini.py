"""
ai/gemini.py
------------
Google Gemini integration.

Responsibilities:
    - Read receipts from photos into transaction fields.
    - Map a free-text note onto one of the standard categories.
    - Turn a spoken Vietnamese sentence into a transaction draft.
    - Review an asset portfolio and chat as a financial advisor.

Every call goes out over the network. Failures are logged and surface as
AIUnavailableError or a documented fallback; they never reach the finance
core.
"""

import json
import os
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Optional, Sequence

import google.generativeai as genai

from moneyjar.domain.asset import portfolio_summary
from moneyjar.domain.entities import Asset, StandardCategory, Transaction, TransactionType
from moneyjar.domain.errors import AI_UNAVAILABLE_MESSAGE, AIUnavailableError
from moneyjar.database.mappers import asset_to_dict, transaction_to_dict
from moneyjar.utils.logger import get_logger

logger = get_logger(__name__)

DEFAULT_MODEL = "gemini-2.5-flash"
ADVISOR_CONTEXT_TRANSACTIONS = 50

# Categories the model may answer with
AI_CATEGORIES = (
    StandardCategory.FOOD.value,
    StandardCategory.TRANSPORT.value,
    StandardCategory.SHOPPING.value,
    StandardCategory.BILLS.value,
    StandardCategory.ENTERTAINMENT.value,
    StandardCategory.HEALTH.value,
    StandardCategory.EDUCATION.value,
    StandardCategory.OTHER.value,
)
_CATEGORY_LIST = ", ".join(AI_CATEGORIES)

_JSON_CONFIG = {"response_mime_type": "application/json", "temperature": 0.1}


@dataclass(frozen=True)
class ReceiptData:
    amount: float
    date: Optional[date]
    merchant: str
    category: str
    note: str


@dataclass(frozen=True)
class VoiceCommand:
    amount: float
    category: str
    type: TransactionType
    note: str


@dataclass(frozen=True)
class PortfolioAnalysis:
    health_score: float
    cash_ratio: float
    summary: str
    warnings: list[str] = field(default_factory=list)
    suggestions: list[str] = field(default_factory=list)


def _get_model(system_instruction: Optional[str] = None) -> genai.GenerativeModel:
    """Create a configured Gemini model.

    Raises:
        AIUnavailableError: If no API key is configured
    """
    api_key = os.environ.get("GEMINI_API_KEY")
    if not api_key:
        raise AIUnavailableError(AI_UNAVAILABLE_MESSAGE)
    genai.configure(api_key=api_key)
    return genai.GenerativeModel(
        os.environ.get("MONEYJAR_GEMINI_MODEL", DEFAULT_MODEL),
        system_instruction=system_instruction,
    )


def _clean_json(raw: str) -> Any:
    """Parse a model reply as JSON, tolerating markdown code fences."""
    raw = raw.strip()
    if raw.startswith("```"):
        raw = raw.split("\n", 1)[1] if "\n" in raw else raw[3:]
    if raw.endswith("```"):
        raw = raw[:-3]
    return json.loads(raw.strip())


def _generate_json(contents: Any) -> dict[str, Any]:
    model = _get_model()
    response = model.generate_content(contents, generation_config=_JSON_CONFIG)
    result = _clean_json(response.text)
    if not isinstance(result, dict):
        raise ValueError(f"Expected a JSON object, got {type(result).__name__}")
    return result


def _parse_optional_date(value: Any) -> Optional[date]:
    if not value:
        return None
    try:
        return date.fromisoformat(str(value)[:10])
    except ValueError:
        return None


def parse_receipt(image_bytes: bytes, mime_type: str = "image/jpeg") -> ReceiptData:
    """Extract transaction fields from a receipt photo.

    Raises:
        AIUnavailableError: If the model fails or returns unusable data
    """
    prompt = (
        "Phân tích hóa đơn này và trích xuất thông tin JSON. Fields: "
        "'amount' (number only), 'date' (ISO string YYYY-MM-DD if found, else null), "
        "'merchant' (string), "
        f"'category' (string, map to nearest: {_CATEGORY_LIST}), "
        "'note' (string summary)."
    )
    try:
        result = _generate_json([{"mime_type": mime_type, "data": image_bytes}, prompt])
        receipt = ReceiptData(
            amount=float(result.get("amount") or 0),
            date=_parse_optional_date(result.get("date")),
            merchant=str(result.get("merchant") or ""),
            category=str(result.get("category") or StandardCategory.OTHER.value),
            note=str(result.get("note") or ""),
        )
    except AIUnavailableError:
        raise
    except Exception as e:
        logger.error(f"Gemini receipt parsing failed: {e}")
        raise AIUnavailableError(AI_UNAVAILABLE_MESSAGE) from e

    logger.info(f"Gemini parsed receipt: {receipt}")
    return receipt


def auto_categorize(note: str) -> str:
    """Pick a category for an expense note; "Khác" when the model can't help."""
    prompt = (
        f'Phân loại chi tiêu: "{note}". '
        f"Chỉ trả về 1 trong các danh mục sau: {_CATEGORY_LIST}."
    )
    try:
        text = _get_model().generate_content(prompt).text.strip()
    except Exception as e:
        logger.warning(f"Gemini categorisation failed: {e}")
        return StandardCategory.OTHER.value
    return text or StandardCategory.OTHER.value


def parse_voice_command(transcript: str) -> Optional[VoiceCommand]:
    """Turn a spoken sentence into a transaction draft, or None on failure."""
    prompt = (
        f'Phân tích câu nói tiếng Việt này thành giao dịch tài chính JSON: "{transcript}".\n'
        "Fields:\n"
        "- amount (number, handle 'k', 'nghìn', 'triệu', 'củ'),\n"
        f"- category (Map to closest: {_CATEGORY_LIST}),\n"
        "- type (INCOME nếu là thu nhập/lương/thưởng, EXPENSE nếu là chi tiêu),\n"
        "- note (string description)."
    )
    try:
        result = _generate_json(prompt)
        return VoiceCommand(
            amount=float(result["amount"]),
            category=str(result.get("category") or StandardCategory.OTHER.value),
            type=TransactionType(str(result.get("type", "EXPENSE")).upper()),
            note=str(result.get("note") or transcript),
        )
    except Exception as e:
        logger.warning(f"Gemini voice parsing failed: {e}")
        return None


def analyze_portfolio(assets: Sequence[Asset]) -> Optional[PortfolioAnalysis]:
    """Ask the model for a diversification review, or None on failure."""
    holdings = json.dumps(
        [{"name": a.name, "type": a.type.value, "value": a.value} for a in assets],
        ensure_ascii=False,
    )
    prompt = f"""Bạn là chuyên gia quản lý gia sản (Wealth Manager). Hãy phân tích danh mục đầu tư sau: {holdings}.

Yêu cầu phân tích:
1. Tính tỷ lệ Tiền mặt/Tiền gửi so với Tổng tài sản.
2. Nếu tỷ lệ tiền mặt > 40% và Tổng tài sản > 500 triệu VND: cảnh báo rủi ro lạm phát và đề xuất đa dạng hóa (Vàng, Chứng khoán, BĐS).
3. Nếu danh mục quá tập trung vào 1 loại tài sản: cảnh báo rủi ro tập trung.
4. Trả về JSON với các field: healthScore (0-100), cashRatio (0-1), summary (string), warnings (list of string), suggestions (list of string).
"""
    try:
        result = _generate_json(prompt)
        return PortfolioAnalysis(
            health_score=float(result.get("healthScore") or 0),
            cash_ratio=float(result.get("cashRatio") or 0),
            summary=str(result.get("summary") or ""),
            warnings=[str(w) for w in result.get("warnings") or []],
            suggestions=[str(s) for s in result.get("suggestions") or []],
        )
    except Exception as e:
        logger.warning(f"Gemini portfolio analysis failed: {e}")
        return None


def _format_vnd(amount: float) -> str:
    return f"{amount:,.0f} ₫".replace(",", ".")


def build_advisor_context(
    transactions: Sequence[Transaction],
    budget_limit: float,
    spent: float,
    month: str,
    assets: Sequence[Asset] = (),
) -> str:
    """System instruction describing the user's finances to the advisor."""
    summary = portfolio_summary(list(assets))
    recent = json.dumps(
        [transaction_to_dict(t) for t in transactions[:ADVISOR_CONTEXT_TRANSACTIONS]],
        ensure_ascii=False,
    )
    holdings = json.dumps([asset_to_dict(a) for a in assets], ensure_ascii=False)
    return f"""
Vai trò: Bạn là một Chuyên gia Tài chính Cá nhân & Quản lý Gia sản (Wealth Manager) cao cấp.

Ngữ cảnh Dòng tiền (Tháng {month}):
- Ngân sách: {_format_vnd(budget_limit)}
- Đã tiêu: {_format_vnd(spent)}

Ngữ cảnh Tài sản:
- Tổng tài sản: {_format_vnd(summary.total_assets)}
- Tổng nợ: {_format_vnd(summary.total_liabilities)}
- Giá trị ròng (Net Worth): {_format_vnd(summary.net_worth)}

Chi tiết Danh mục đầu tư:
{holdings}

Dữ liệu giao dịch gần đây:
{recent}

Nhiệm vụ:
1. Phân tích chi tiêu và đưa ra lời khuyên tiết kiệm.
2. Đánh giá danh mục đầu tư, cảnh báo nếu giữ quá nhiều tiền mặt.
3. Nếu có nợ, ưu tiên khuyên trả nợ.
4. Trả lời ngắn gọn, sắc sảo.
"""


class FinancialAdvisor:
    """Chat session primed with the user's budget, assets and recent transactions."""

    def __init__(
        self,
        transactions: Sequence[Transaction],
        budget_limit: float,
        spent: float,
        month: str,
        assets: Sequence[Asset] = (),
    ):
        self.context = build_advisor_context(transactions, budget_limit, spent, month, assets)
        self._chat = None

    def ask(self, message: str) -> str:
        """Send a message and return the advisor's reply.

        Raises:
            AIUnavailableError: If the model is unavailable or fails
        """
        try:
            if self._chat is None:
                self._chat = _get_model(system_instruction=self.context).start_chat()
            reply = self._chat.send_message(message).text
        except AIUnavailableError:
            raise
        except Exception as e:
            logger.error(f"Gemini advisor chat failed: {e}")
            raise AIUnavailableError(AI_UNAVAILABLE_MESSAGE) from e
        return reply.strip()
