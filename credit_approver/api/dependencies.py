"""Dependency injection for FastAPI endpoints"""

from functools import lru_cache

from fastapi import Request
from credit_approver.config import settings
from credit_approver.domain.assessment import AssessmentStateMachine
from credit_approver.domain.summary import SummaryAssembler
from credit_approver.infrastructure.clients.mailer import LocalMailbox, MailApiClient
from credit_approver.infrastructure.clients.pdf import LocalPdfRenderer, PdfServiceClient
from credit_approver.infrastructure.sessions import SessionStore
from credit_approver.services.dispatch import DispatchCoordinator, MailSender, PdfRenderer


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


@lru_cache
def get_state_machine() -> AssessmentStateMachine:
    """Provide the assessment state machine for the reference questionnaire"""
    return AssessmentStateMachine()


@lru_cache
def get_session_store() -> SessionStore:
    """Provide the process-wide session store"""
    return SessionStore(get_state_machine())


@lru_cache
def get_mailbox() -> LocalMailbox:
    """Provide the in-memory dev mailbox"""
    return LocalMailbox()


def get_pdf_renderer() -> PdfRenderer:
    if settings.pdf_backend == "service":
        return PdfServiceClient()
    return LocalPdfRenderer()


def get_mail_sender() -> MailSender:
    if settings.mail_backend == "api":
        return MailApiClient()
    return get_mailbox()


def get_summary_assembler() -> SummaryAssembler:
    return SummaryAssembler()


def get_dispatch_coordinator() -> DispatchCoordinator:
    """Provide a coordinator wired to the configured PDF and mail backends"""
    return DispatchCoordinator(get_pdf_renderer(), get_mail_sender())
