"""Summary dispatch: render the PDF, compose the email, hand it to the mailer"""

import logging
import time
from datetime import datetime, timezone
from typing import Protocol

from credit_approver.domain.exceptions import (
    CollaboratorError,
    DeliveryFailed,
    DispatchError,
    RenderFailed,
)
from credit_approver.domain.models import CreditSummary, DispatchResult, EmailMessage, SentReceipt
from credit_approver.infrastructure.observability.logging import log_dispatch
from credit_approver.infrastructure.observability.metrics import (
    delivery_latency_histogram,
    record_dispatch,
    render_latency_histogram,
)
from credit_approver.services.message import MessageComposer

logger = logging.getLogger(__name__)


class PdfRenderer(Protocol):
    def render(self, summary: CreditSummary) -> bytes:
        """Return the PDF document or raise PdfRenderError"""
        ...


class MailSender(Protocol):
    def send(self, message: EmailMessage) -> None:
        """Deliver the message or raise MailDeliveryError"""
        ...


class DispatchCoordinator:
    """
    Sends an assessment summary through the PDF and mail collaborators.

    Flow:
    1. Render the summary to PDF
    2. Compose the email with the PDF attached
    3. Deliver it

    Each collaborator is called at most once per dispatch. A render failure
    stops the flow before anything is sent. Failures are returned as a
    DispatchResult carrying RenderFailed or DeliveryFailed, never raised.
    """

    def __init__(
        self,
        renderer: PdfRenderer,
        mailer: MailSender,
        composer: MessageComposer | None = None,
    ):
        self.renderer = renderer
        self.mailer = mailer
        self.composer = composer or MessageComposer()

    def dispatch(self, summary: CreditSummary, recipient: str | None = None) -> DispatchResult:
        start_time = time.time()
        recipient = recipient or summary.recipient
        logger.info(
            "Sending assessment summary",
            extra={"recipient": recipient, "credit_amount": summary.credit_amount, "approved": summary.approved},
        )

        try:
            with render_latency_histogram.time():
                pdf = self.renderer.render(summary)
        except Exception as e:
            return self._failed(RenderFailed(_reason(e)), summary, recipient, start_time)

        try:
            message = self.composer.compose(summary, pdf, recipient)
            with delivery_latency_histogram.time():
                self.mailer.send(message)
        except Exception as e:
            return self._failed(DeliveryFailed(_reason(e)), summary, recipient, start_time)

        record_dispatch("sent")
        log_dispatch(recipient, "sent", summary.credit_amount, _elapsed_ms(start_time))

        return DispatchResult(
            receipt=SentReceipt(
                recipient=recipient,
                subject=message.subject,
                attachment_filename=message.attachment.filename,
                sent_at=datetime.now(timezone.utc),
            )
        )

    @staticmethod
    def _failed(
        error: DispatchError,
        summary: CreditSummary,
        recipient: str,
        start_time: float,
    ) -> DispatchResult:
        record_dispatch(f"{error.stage}_failed")
        log_dispatch(
            recipient,
            "failed",
            summary.credit_amount,
            _elapsed_ms(start_time),
            stage=error.stage,
            reason=error.reason,
        )
        return DispatchResult(error=error)


def _reason(error: Exception) -> str:
    if isinstance(error, CollaboratorError):
        return str(error)
    # Collaborator raised outside its contract
    logger.exception("Unexpected collaborator error")
    return f"{type(error).__name__}: {error}"


def _elapsed_ms(start_time: float) -> float:
    return (time.time() - start_time) * 1000
