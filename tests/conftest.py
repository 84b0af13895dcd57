"""Pytest fixtures for testing"""

import pytest
from datetime import datetime, timezone
from typing import List
from fastapi.testclient import TestClient
from credit_approver.api.main import create_app
from credit_approver.api.dependencies import (
    get_dispatch_coordinator,
    get_session_store,
    get_state_machine,
    get_summary_assembler,
)
from credit_approver.domain.assessment import AssessmentState, AssessmentStateMachine
from credit_approver.domain.exceptions import MailDeliveryError, PdfRenderError
from credit_approver.domain.models import CreditSummary, EmailMessage
from credit_approver.domain.questionnaire import QUESTIONNAIRE
from credit_approver.domain.summary import SummaryAssembler
from credit_approver.infrastructure.sessions import SessionStore
from credit_approver.services.dispatch import DispatchCoordinator

FIXED_NOW = datetime(2024, 3, 1, 12, 30, tzinfo=timezone.utc)
FAKE_PDF = b"%PDF-1.4 fake"


class FakePdfRenderer:
    """Records render calls; fails with PdfRenderError when given a reason"""

    def __init__(self, fail_with: str | None = None):
        self.fail_with = fail_with
        self.calls: List[CreditSummary] = []

    def render(self, summary: CreditSummary) -> bytes:
        self.calls.append(summary)
        if self.fail_with:
            raise PdfRenderError(self.fail_with)
        return FAKE_PDF


class FakeMailer:
    """Records send calls; fails with MailDeliveryError when given a reason"""

    def __init__(self, fail_with: str | None = None):
        self.fail_with = fail_with
        self.sent: List[EmailMessage] = []
        self.call_count = 0

    def send(self, message: EmailMessage) -> None:
        self.call_count += 1
        if self.fail_with:
            raise MailDeliveryError(self.fail_with)
        self.sent.append(message)


@pytest.fixture
def machine() -> AssessmentStateMachine:
    """State machine over the reference questionnaire with threshold 6"""
    return AssessmentStateMachine(QUESTIONNAIRE, threshold=6)


@pytest.fixture
def assembler() -> SummaryAssembler:
    """Summary assembler with a frozen clock"""
    return SummaryAssembler(clock=lambda: FIXED_NOW)


@pytest.fixture
def renderer() -> FakePdfRenderer:
    return FakePdfRenderer()


@pytest.fixture
def mailer() -> FakeMailer:
    return FakeMailer()


@pytest.fixture
def coordinator(renderer: FakePdfRenderer, mailer: FakeMailer) -> DispatchCoordinator:
    return DispatchCoordinator(renderer, mailer)


def answer_all(machine: AssessmentStateMachine, answers: List[str]) -> AssessmentState:
    """Run a fresh session through the questionnaire with the given answers"""
    state = machine.start()
    for answer in answers:
        state = machine.advance(state, answer)
    return state


@pytest.fixture
def answer_questions(machine: AssessmentStateMachine):
    """Callable running a fresh session through the given answers"""
    return lambda answers: answer_all(machine, answers)


@pytest.fixture
def awaiting_financials(machine: AssessmentStateMachine) -> AssessmentState:
    """Every question answered yes (score 11)"""
    return answer_all(machine, ["yes"] * 5)


@pytest.fixture
def rejected(machine: AssessmentStateMachine) -> AssessmentState:
    """Only the first question answered yes (score 4)"""
    return answer_all(machine, ["yes", "no", "no", "no", "no"])


@pytest.fixture
def approved(machine: AssessmentStateMachine, awaiting_financials: AssessmentState) -> AssessmentState:
    """Financials 5000 / 3000 submitted, credit amount 24000"""
    return machine.submit_financials(awaiting_financials, "5000", "3000")


@pytest.fixture
def client(machine: AssessmentStateMachine, coordinator: DispatchCoordinator, assembler: SummaryAssembler) -> TestClient:
    """Create FastAPI test client with an isolated session store and fake collaborators"""
    app = create_app()
    store = SessionStore(machine)

    app.dependency_overrides[get_state_machine] = lambda: machine
    app.dependency_overrides[get_session_store] = lambda: store
    app.dependency_overrides[get_dispatch_coordinator] = lambda: coordinator
    app.dependency_overrides[get_summary_assembler] = lambda: assembler
    return TestClient(app)
