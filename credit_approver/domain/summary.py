"""Assessment summary assembly"""

from datetime import datetime, timezone
from typing import Callable, Tuple, TYPE_CHECKING

from credit_approver.domain.models import Answer, CreditSummary, Phase
from credit_approver.domain.questionnaire import (
    MONTHLY_EXPENSES_QUESTION,
    MONTHLY_INCOME_QUESTION,
    UNANSWERED,
)

if TYPE_CHECKING:
    from credit_approver.domain.assessment import AssessmentState

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class SummaryAssembler:
    """
    Builds the CreditSummary sent to the user from the current session state.

    A new summary is assembled for every send attempt, stamped with the clock
    at assembly time, so a resend always reflects the latest answers.
    """

    def __init__(self, clock: Clock = utc_now):
        self.clock = clock

    def assemble(self, state: "AssessmentState") -> CreditSummary:
        return CreditSummary(
            recipient=state.email_address or "",
            basic_answers=self._basic_answers(state),
            financial_answers=self._financial_answers(state),
            credit_amount=state.credit_amount,
            approved=state.credit_amount > 0,
            generated_at=self.clock(),
        )

    @staticmethod
    def _basic_answers(state: "AssessmentState") -> Tuple[Answer, ...]:
        answers = []
        for idx, question in enumerate(state.questions):
            value = state.ledger.get(idx)
            answers.append(Answer(question=question.text, answer=UNANSWERED if value is None else str(value)))
        return tuple(answers)

    @staticmethod
    def _financial_answers(state: "AssessmentState") -> Tuple[Answer, ...]:
        if state.phase is not Phase.APPROVED or state.financial_answers is None:
            return ()
        return (
            Answer(question=MONTHLY_INCOME_QUESTION, answer=state.financial_answers.monthly_income),
            Answer(question=MONTHLY_EXPENSES_QUESTION, answer=state.financial_answers.monthly_expenses),
        )
