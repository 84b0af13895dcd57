"""Email composition for assessment summaries"""

from html import escape
from typing import Iterable

from credit_approver.config import settings
from credit_approver.domain.models import Answer, Attachment, CreditSummary, EmailMessage

SUBJECT = "Your Credit Assessment Summary"
PDF_MIME_TYPE = "application/pdf"


class MessageComposer:
    """Turns a summary and its rendered PDF into an EmailMessage"""

    def __init__(
        self,
        from_name: str | None = None,
        from_address: str | None = None,
        pdf_filename: str | None = None,
    ):
        self.from_name = from_name or settings.mail_from_name
        self.from_address = from_address or settings.mail_from_address
        self.pdf_filename = pdf_filename or settings.pdf_filename

    @property
    def sender(self) -> str:
        return f"{self.from_name} <{self.from_address}>"

    def compose(self, summary: CreditSummary, pdf: bytes, recipient: str | None = None) -> EmailMessage:
        return EmailMessage(
            recipient=recipient or summary.recipient,
            sender=self.sender,
            subject=SUBJECT,
            html_body=build_html_body(summary),
            text_body=build_text_body(summary),
            attachment=Attachment(filename=self.pdf_filename, mime_type=PDF_MIME_TYPE, content=pdf),
        )


def build_text_body(summary: CreditSummary) -> str:
    status = "APPROVED" if summary.approved else "NOT APPROVED"
    amount_text = (
        f"Credit Amount: {summary.formatted_amount}"
        if summary.approved
        else "Credit not approved at this time"
    )
    return (
        "CREDIT ASSESSMENT SUMMARY\n"
        "\n"
        f"Status: {status}\n"
        f"{amount_text}\n"
        "\n"
        "A detailed PDF summary is attached to this email.\n"
        "\n"
        "Thank you for choosing Credit Approver!\n"
        "If you have any questions, please contact our support team.\n"
    )


def build_html_body(summary: CreditSummary) -> str:
    heading = "Congratulations!" if summary.approved else "Assessment Complete"
    if summary.approved:
        status = f"<p>You have been approved for credit up to <strong>{escape(summary.formatted_amount)}</strong>.</p>"
    else:
        status = "<p>Thank you for your answers. We are currently unable to issue credit to you.</p>"

    return (
        "<html><body>"
        f"<h1>{heading}</h1>"
        f"{status}"
        f"{_answer_list('Your answers', summary.basic_answers)}"
        f"{_answer_list('Your finances', summary.financial_answers)}"
        "<p>A detailed PDF summary is attached to this email.</p>"
        "</body></html>"
    )


def _answer_list(title: str, answers: Iterable[Answer]) -> str:
    items = "".join(
        f"<li>{escape(a.question)} <strong>{escape(a.answer)}</strong></li>" for a in answers
    )
    if not items:
        return ""
    return f"<h2>{escape(title)}</h2><ul>{items}</ul>"
