"""Pydantic schemas for API request/response validation"""

from datetime import datetime
from typing import List, Optional, Union

from pydantic import BaseModel, Field

from credit_approver.domain.assessment import AssessmentState
from credit_approver.domain.credit import format_currency
from credit_approver.domain.models import SentReceipt

# Form values arrive as text or numbers; the state machine coerces them
FormValue = Union[str, int, float, None]


class AdvanceRequest(BaseModel):
    """Request body for POST /v1/assessments/{session_id}/advance"""

    answer: str = Field(..., description="Answer to the current question, usually yes or no")
    step: FormValue = Field(None, description="Index of the question being answered")


class RetreatRequest(BaseModel):
    """Request body for POST /v1/assessments/{session_id}/retreat"""

    step: FormValue = Field(None, description="Index of the question being left")


class FinancialsRequest(BaseModel):
    """Request body for POST /v1/assessments/{session_id}/financials"""

    monthly_income: FormValue = Field(..., description="Total monthly income in USD")
    monthly_expenses: FormValue = Field(..., description="Total monthly expenses in USD")


class EmailRequest(BaseModel):
    """Request body for POST /v1/assessments/{session_id}/email"""

    email: Optional[str] = None


class AnswerSchema(BaseModel):
    step: int
    question: str
    answer: str


class FinancialAnswersSchema(BaseModel):
    monthly_income: str
    monthly_expenses: str


class AssessmentView(BaseModel):
    """Current view of an assessment session"""

    session_id: str
    phase: str
    current_step: int
    question_count: int
    current_question: Optional[str] = None
    current_answer: Optional[str] = None
    progress_percent: float
    score: int
    answers: List[AnswerSchema]
    financial_answers: Optional[FinancialAnswersSchema] = None
    credit_amount: int
    formatted_credit_amount: str
    approved: bool
    email_address: Optional[str] = None
    email_valid: bool
    email_message: str

    @classmethod
    def from_state(cls, session_id: str, state: AssessmentState) -> "AssessmentView":
        financial_answers = None
        if state.financial_answers is not None:
            financial_answers = FinancialAnswersSchema(
                monthly_income=state.financial_answers.monthly_income,
                monthly_expenses=state.financial_answers.monthly_expenses,
            )

        return cls(
            session_id=session_id,
            phase=state.phase.value,
            current_step=state.current_step,
            question_count=state.question_count,
            current_question=state.current_question.text if state.current_question else None,
            current_answer=state.current_answer,
            progress_percent=state.progress_percent,
            score=state.score,
            answers=[
                AnswerSchema(step=step, question=state.questions[step].text, answer=str(answer))
                for step, answer in state.ledger.answers()
                if step < state.question_count
            ],
            financial_answers=financial_answers,
            credit_amount=state.credit_amount,
            formatted_credit_amount=format_currency(state.credit_amount),
            approved=state.approved,
            email_address=state.email_address,
            email_valid=state.email_valid,
            email_message=state.email_message,
        )


class SendResponse(BaseModel):
    """Response for POST /v1/assessments/{session_id}/send"""

    sent: bool
    recipient: str
    subject: str
    attachment_filename: str
    sent_at: datetime

    @classmethod
    def from_receipt(cls, receipt: SentReceipt) -> "SendResponse":
        return cls(
            sent=True,
            recipient=receipt.recipient,
            subject=receipt.subject,
            attachment_filename=receipt.attachment_filename,
            sent_at=receipt.sent_at,
        )
