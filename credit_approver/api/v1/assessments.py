"""/v1/assessments - drive an assessment session through its phases"""

import logging
from fastapi import APIRouter, Depends, HTTPException, Request

from credit_approver.api.v1.schemas import (
    AdvanceRequest,
    AssessmentView,
    EmailRequest,
    FinancialsRequest,
    RetreatRequest,
    SendResponse,
)
from credit_approver.api.dependencies import (
    get_dispatch_coordinator,
    get_request_id,
    get_session_store,
    get_state_machine,
    get_summary_assembler,
)
from credit_approver.domain.assessment import AssessmentState, AssessmentStateMachine
from credit_approver.domain.models import Phase
from credit_approver.domain.summary import SummaryAssembler
from credit_approver.infrastructure.sessions import SessionStore
from credit_approver.infrastructure.observability.logging import log_transition
from credit_approver.infrastructure.observability.metrics import record_assessment_outcome
from credit_approver.services.dispatch import DispatchCoordinator

router = APIRouter()


@router.post("/assessments", response_model=AssessmentView, status_code=201)
def create_assessment(store: SessionStore = Depends(get_session_store)):
    """Start a new assessment session at the first question"""
    session_id, state = store.create()
    return AssessmentView.from_state(session_id, state)


@router.get("/assessments/{session_id}", response_model=AssessmentView)
def get_assessment(session_id: str, store: SessionStore = Depends(get_session_store)):
    return AssessmentView.from_state(session_id, store.get(session_id))


@router.post("/assessments/{session_id}/advance", response_model=AssessmentView)
def advance(
    session_id: str,
    request_body: AdvanceRequest,
    store: SessionStore = Depends(get_session_store),
    machine: AssessmentStateMachine = Depends(get_state_machine),
):
    """Answer the current question and move forward"""
    before = store.get(session_id)
    after = machine.advance(before, request_body.answer, request_body.step)
    if after.phase is Phase.REJECTED:
        record_assessment_outcome("rejected")
    return _commit(store, session_id, "advance", before, after)


@router.post("/assessments/{session_id}/retreat", response_model=AssessmentView)
def retreat(
    session_id: str,
    request_body: RetreatRequest,
    store: SessionStore = Depends(get_session_store),
    machine: AssessmentStateMachine = Depends(get_state_machine),
):
    """Go back to the previous question"""
    before = store.get(session_id)
    after = machine.retreat(before, request_body.step)
    return _commit(store, session_id, "retreat", before, after)


@router.post("/assessments/{session_id}/financials", response_model=AssessmentView)
def submit_financials(
    session_id: str,
    request_body: FinancialsRequest,
    store: SessionStore = Depends(get_session_store),
    machine: AssessmentStateMachine = Depends(get_state_machine),
):
    """Submit monthly income and expenses to compute the credit line"""
    before = store.get(session_id)
    after = machine.submit_financials(before, request_body.monthly_income, request_body.monthly_expenses)
    record_assessment_outcome("approved" if after.approved else "no_credit", after.credit_amount)
    return _commit(store, session_id, "submit_financials", before, after, credit_amount=after.credit_amount)


@router.post("/assessments/{session_id}/email", response_model=AssessmentView)
def validate_email(
    session_id: str,
    request_body: EmailRequest,
    store: SessionStore = Depends(get_session_store),
    machine: AssessmentStateMachine = Depends(get_state_machine),
):
    """Validate the address the summary should be sent to"""
    before = store.get(session_id)
    after = machine.validate_email(before, request_body.email)
    return _commit(store, session_id, "validate_email", before, after, email_valid=after.email_valid)


@router.post("/assessments/{session_id}/send", response_model=SendResponse)
def send_assessment(
    session_id: str,
    request: Request,
    store: SessionStore = Depends(get_session_store),
    machine: AssessmentStateMachine = Depends(get_state_machine),
    coordinator: DispatchCoordinator = Depends(get_dispatch_coordinator),
    assembler: SummaryAssembler = Depends(get_summary_assembler),
):
    """
    Email the PDF summary to the validated address.

    A failed dispatch leaves the session as it was, so the client may retry.
    """
    request_id = get_request_id(request)
    state = store.get(session_id)
    result = machine.send_assessment(state, coordinator, assembler)

    if not result.ok:
        logging.warning(
            f"Summary dispatch failed: {result.error}",
            extra={"request_id": request_id, "session_id": session_id},
        )
        raise HTTPException(
            status_code=502,
            detail={"stage": result.error.stage, "reason": result.error.reason},
        )

    return SendResponse.from_receipt(result.receipt)


@router.post("/assessments/{session_id}/restart", response_model=AssessmentView)
def restart(
    session_id: str,
    store: SessionStore = Depends(get_session_store),
    machine: AssessmentStateMachine = Depends(get_state_machine),
):
    """Discard all answers and return to the first question"""
    before = store.get(session_id)
    after = machine.restart(before)
    return _commit(store, session_id, "restart", before, after)


def _commit(
    store: SessionStore,
    session_id: str,
    operation: str,
    before: AssessmentState,
    after: AssessmentState,
    **fields,
) -> AssessmentView:
    store.save(session_id, after)
    log_transition(
        session_id,
        operation,
        before.phase.value,
        after.phase.value,
        step=after.current_step,
        score=after.score,
        **fields,
    )
    return AssessmentView.from_state(session_id, after)
