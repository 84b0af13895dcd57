"""Assessment state machine - questionnaire, financial form and summary dispatch"""

from dataclasses import dataclass, field, replace
from typing import Any, Optional, Sequence, Tuple, TYPE_CHECKING

from credit_approver.config import settings
from credit_approver.domain.credit import compute_credit_amount, parse_amount, parse_int
from credit_approver.domain.email_validation import validate_email
from credit_approver.domain.exceptions import InvalidTransition
from credit_approver.domain.ledger import AnswerLedger
from credit_approver.domain.models import DispatchResult, FinancialAnswers, Phase, Question
from credit_approver.domain.questionnaire import QUESTIONNAIRE
from credit_approver.domain.summary import SummaryAssembler

if TYPE_CHECKING:
    from credit_approver.services.dispatch import DispatchCoordinator


@dataclass(frozen=True)
class AssessmentState:
    """
    Snapshot of one assessment session.

    Transitions never mutate a state; they return a new one. current_step runs
    from 0 to len(questions), where len(questions) means every question has
    been answered.
    """

    questions: Tuple[Question, ...]
    current_step: int = 0
    ledger: AnswerLedger = field(default_factory=AnswerLedger)
    score: int = 0
    phase: Phase = Phase.QUESTIONING
    financial_answers: Optional[FinancialAnswers] = None
    credit_amount: int = 0
    email_address: Optional[str] = None
    email_valid: bool = False
    email_message: str = ""

    @property
    def question_count(self) -> int:
        return len(self.questions)

    @property
    def current_question(self) -> Optional[Question]:
        if self.current_step < len(self.questions):
            return self.questions[self.current_step]
        return None

    @property
    def current_answer(self) -> Optional[str]:
        """Previously recorded answer for the current question, for prefilling the form"""
        return self.ledger.get(self.current_step)

    @property
    def is_last_question(self) -> bool:
        return self.current_step == len(self.questions) - 1

    @property
    def progress_percent(self) -> float:
        return min((self.current_step + 1) / len(self.questions) * 100, 100.0)

    @property
    def approved(self) -> bool:
        """Credit is only granted for a positive amount, whatever the phase says"""
        return self.credit_amount > 0


class AssessmentStateMachine:
    """
    Drives an AssessmentState through its phases.

    Phases:
    - QUESTIONING: one yes/no question per step, back navigation allowed
    - AWAITING_FINANCIALS: score > threshold after the last question
    - REJECTED: score <= threshold after the last question
    - APPROVED: income and expenses submitted, credit amount computed

    Operations called in the wrong phase raise InvalidTransition.
    """

    def __init__(
        self,
        questions: Sequence[Question] = QUESTIONNAIRE,
        threshold: int | None = None,
    ):
        if not questions:
            raise ValueError("Questionnaire needs at least one question")
        self.questions: Tuple[Question, ...] = tuple(questions)
        self.threshold = settings.approval_threshold if threshold is None else threshold

    def start(self) -> AssessmentState:
        """Fresh session at the first question"""
        return AssessmentState(questions=self.questions)

    def restart(self, state: AssessmentState) -> AssessmentState:
        """Jump back to the start, discarding every answer"""
        return self.start()

    def advance(self, state: AssessmentState, answer: str, step: Any = None) -> AssessmentState:
        """
        Record the answer for the current question and move to the next one.

        step comes from the UI form; it is coerced to a question index
        (unparsable → 0) and can only point at the current question or an
        earlier one. After the last question the score decides between
        AWAITING_FINANCIALS and REJECTED.
        """
        self._require(state, "advance", Phase.QUESTIONING)

        current = self._coerce_step(state, step)
        ledger = state.ledger.copy()
        ledger.record_answer(current, answer)
        score = ledger.score(self.questions)
        next_step = current + 1

        phase = Phase.QUESTIONING
        if next_step == len(self.questions):
            phase = Phase.AWAITING_FINANCIALS if self.qualifies(score) else Phase.REJECTED

        return replace(state, ledger=ledger, score=score, current_step=next_step, phase=phase)

    def retreat(self, state: AssessmentState, step: Any = None) -> AssessmentState:
        """Go back one question, keeping every recorded answer. No-op on the first question."""
        self._require(state, "retreat", Phase.QUESTIONING)

        previous = max(self._coerce_step(state, step) - 1, 0)
        score = state.ledger.score(self.questions)

        return replace(state, current_step=previous, score=score)

    def submit_financials(
        self,
        state: AssessmentState,
        monthly_income: Any,
        monthly_expenses: Any,
    ) -> AssessmentState:
        """
        Compute the credit line from monthly income and expenses.

        Always moves to APPROVED; a zero or negative amount stays representable
        and is reported as not approved by the summary.
        """
        self._require(state, "submit financials", Phase.AWAITING_FINANCIALS)

        credit_amount = compute_credit_amount(parse_amount(monthly_income), parse_amount(monthly_expenses))
        financial_answers = FinancialAnswers(
            monthly_income=_raw_text(monthly_income),
            monthly_expenses=_raw_text(monthly_expenses),
        )

        return replace(
            state,
            phase=Phase.APPROVED,
            financial_answers=financial_answers,
            credit_amount=credit_amount,
        )

    def validate_email(self, state: AssessmentState, candidate: Any) -> AssessmentState:
        """Store the candidate address with its validation result; phase is unchanged"""
        if state.phase is Phase.QUESTIONING:
            raise InvalidTransition("validate email", state.phase.value)

        check = validate_email(candidate)
        return replace(
            state,
            email_address=candidate if isinstance(candidate, str) else None,
            email_valid=check.ok,
            email_message=check.message,
        )

    def send_assessment(
        self,
        state: AssessmentState,
        coordinator: "DispatchCoordinator",
        assembler: SummaryAssembler | None = None,
    ) -> DispatchResult:
        """
        Email the assessment summary to the validated address.

        The state is left untouched, so a failed dispatch can simply be retried.
        """
        self._require(state, "send assessment", Phase.APPROVED, Phase.REJECTED)
        if not state.email_valid:
            raise InvalidTransition("send assessment without a valid email", state.phase.value)

        summary = (assembler or SummaryAssembler()).assemble(state)
        return coordinator.dispatch(summary, state.email_address)

    def qualifies(self, score: int) -> bool:
        return score > self.threshold

    def _coerce_step(self, state: AssessmentState, step: Any) -> int:
        """Resolve a UI step, never past the question the session is on"""
        if step is None:
            return state.current_step
        return min(max(parse_int(step), 0), state.current_step)

    @staticmethod
    def _require(state: AssessmentState, operation: str, *phases: Phase) -> None:
        if state.phase not in phases:
            raise InvalidTransition(operation, state.phase.value)


def _raw_text(value: Any) -> str:
    return "" if value is None else str(value)
