"""Domain models - pure Python dataclasses representing business entities"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional, Tuple

from credit_approver.domain.credit import format_currency
from credit_approver.domain.exceptions import DispatchError


@dataclass(frozen=True)
class Question:
    """Eligibility question and the points a "yes" earns"""

    text: str
    weight: int


class Phase(str, Enum):
    """Coarse-grained stage of an assessment session"""

    QUESTIONING = "questioning"
    AWAITING_FINANCIALS = "awaiting_financials"
    REJECTED = "rejected"
    APPROVED = "approved"


@dataclass(frozen=True)
class FinancialAnswers:
    """Raw monthly figures exactly as the user submitted them"""

    monthly_income: str
    monthly_expenses: str


@dataclass(frozen=True)
class Answer:
    """Question-answer pair shown in the summary"""

    question: str
    answer: str


@dataclass(frozen=True)
class CreditSummary:
    """Fully resolved assessment outcome handed to the PDF and mail collaborators"""

    recipient: str
    basic_answers: Tuple[Answer, ...]
    financial_answers: Tuple[Answer, ...]
    credit_amount: int
    approved: bool
    generated_at: datetime

    @property
    def formatted_amount(self) -> str:
        return f"${format_currency(self.credit_amount)}"

    def to_dict(self) -> Dict[str, Any]:
        """JSON-ready representation"""
        return {
            "recipient": self.recipient,
            "basic_answers": [{"question": a.question, "answer": a.answer} for a in self.basic_answers],
            "financial_answers": [{"question": a.question, "answer": a.answer} for a in self.financial_answers],
            "credit_amount": self.credit_amount,
            "formatted_amount": self.formatted_amount,
            "approved": self.approved,
            "generated_at": self.generated_at.isoformat(),
        }


@dataclass(frozen=True)
class EmailCheck:
    """Outcome of email address validation, with a message for display"""

    ok: bool
    message: str


@dataclass(frozen=True)
class Attachment:
    filename: str
    mime_type: str
    content: bytes = field(repr=False)


@dataclass(frozen=True)
class EmailMessage:
    """Composed message ready for the mail collaborator"""

    recipient: str
    sender: str
    subject: str
    html_body: str
    text_body: str
    attachment: Attachment


@dataclass(frozen=True)
class SentReceipt:
    """Confirmation of a delivered assessment summary"""

    recipient: str
    subject: str
    attachment_filename: str
    sent_at: datetime


@dataclass(frozen=True)
class DispatchResult:
    """Either a receipt or the error of the stage that failed"""

    receipt: Optional[SentReceipt] = None
    error: Optional[DispatchError] = None

    @property
    def ok(self) -> bool:
        return self.error is None and self.receipt is not None
