"""PDF rendering clients for assessment summaries"""

import logging

import httpx
from fpdf import FPDF
from fpdf.errors import FPDFException
from credit_approver.config import settings
from credit_approver.domain.exceptions import PdfRenderError
from credit_approver.domain.models import CreditSummary

logger = logging.getLogger(__name__)


class PdfServiceClient:
    """Client for the external HTML-to-PDF rendering service"""

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.BaseTransport | None = None,
    ):
        self.base_url = base_url or settings.pdf_service_url
        self.timeout = timeout or settings.http_timeout_seconds
        self.transport = transport

    def render(self, summary: CreditSummary) -> bytes:
        """
        Render a credit summary to a PDF document.

        Raises:
            PdfRenderError: On timeout, HTTP errors, or an empty document
        """
        with httpx.Client(timeout=self.timeout, transport=self.transport) as client:
            try:
                response = client.post(
                    f"{self.base_url}/render",
                    json={"template": "credit_assessment_summary", "data": summary.to_dict()},
                    headers={"Accept": "application/pdf"},
                )
                response.raise_for_status()

            except httpx.TimeoutException as e:
                raise PdfRenderError(f"PDF service timeout after {self.timeout}s") from e
            except httpx.HTTPStatusError as e:
                raise PdfRenderError(f"PDF service error: {e.response.status_code}") from e
            except httpx.RequestError as e:
                raise PdfRenderError(f"PDF service unreachable: {e}") from e

        if not response.content:
            raise PdfRenderError("PDF service returned an empty document")
        return response.content


class LocalPdfRenderer:
    """
    Renders a credit summary in process with fpdf2.

    Used when no rendering service is configured. The document carries the
    approval status, the offered amount, every questionnaire answer and, for
    approved sessions, the submitted income and expenses. Core fonts only
    cover Latin-1, so other characters are replaced with "?".
    """

    MARGIN = 20
    PRIMARY_COLOR = (30, 64, 175)
    APPROVED_COLOR = (5, 150, 105)
    REJECTED_COLOR = (220, 38, 38)
    TEXT_COLOR = (50, 50, 50)
    MUTED_COLOR = (100, 100, 100)

    def __init__(self, compress: bool = True):
        self.compress = compress

    def render(self, summary: CreditSummary) -> bytes:
        """
        Raises:
            PdfRenderError: If fpdf2 cannot lay out the document
        """
        try:
            pdf = FPDF()
            pdf.set_compression(self.compress)
            pdf.set_title("Credit Assessment Summary")
            pdf.set_author(settings.mail_from_name)
            pdf.set_margins(self.MARGIN, self.MARGIN)
            pdf.set_auto_page_break(auto=True, margin=15)
            pdf.add_page()

            self._add_header(pdf)
            self._add_outcome(pdf, summary)
            self._add_answers(pdf, "Assessment Questions", summary.basic_answers)
            if summary.financial_answers:
                self._add_answers(pdf, "Financial Information", summary.financial_answers)
            self._add_footer(pdf, summary)

            document = bytes(pdf.output())
        except FPDFException as e:
            raise PdfRenderError(f"PDF layout failed: {e}") from e

        logger.debug("Rendered assessment summary", extra={"size_bytes": len(document)})
        return document

    def _add_header(self, pdf: FPDF) -> None:
        pdf.set_font("Helvetica", "B", 18)
        pdf.set_text_color(*self.PRIMARY_COLOR)
        pdf.cell(0, 12, "Credit Assessment Summary", align="C", new_x="LMARGIN", new_y="NEXT")
        pdf.set_draw_color(*self.PRIMARY_COLOR)
        pdf.set_line_width(0.5)
        pdf.line(self.MARGIN, pdf.get_y(), pdf.w - self.MARGIN, pdf.get_y())
        pdf.ln(8)

    def _add_outcome(self, pdf: FPDF, summary: CreditSummary) -> None:
        if summary.approved:
            color = self.APPROVED_COLOR
            status = "Status: APPROVED"
            headline = f"Credit Amount: {summary.formatted_amount}"
            note = "Congratulations! You have been approved for credit."
        else:
            color = self.REJECTED_COLOR
            status = "Status: NOT APPROVED"
            headline = "Credit Not Approved"
            note = "We are currently unable to issue credit at this time."

        pdf.set_text_color(*color)
        pdf.set_font("Helvetica", "B", 12)
        pdf.cell(0, 8, status, align="C", new_x="LMARGIN", new_y="NEXT")
        pdf.set_font("Helvetica", "B", 16)
        pdf.cell(0, 10, headline, align="C", new_x="LMARGIN", new_y="NEXT")
        pdf.set_font("Helvetica", size=10)
        pdf.cell(0, 6, note, align="C", new_x="LMARGIN", new_y="NEXT")
        pdf.ln(6)

    def _add_answers(self, pdf: FPDF, title: str, answers) -> None:
        pdf.set_font("Helvetica", "B", 13)
        pdf.set_text_color(*self.PRIMARY_COLOR)
        pdf.cell(0, 9, title, new_x="LMARGIN", new_y="NEXT")

        pdf.set_text_color(*self.TEXT_COLOR)
        for answer in answers:
            pdf.set_font("Helvetica", "B", 10)
            pdf.multi_cell(0, 6, _latin1(answer.question), new_x="LMARGIN", new_y="NEXT")
            pdf.set_font("Helvetica", size=10)
            pdf.multi_cell(0, 6, _latin1(answer.answer), new_x="LMARGIN", new_y="NEXT")
            pdf.ln(2)
        pdf.ln(4)

    def _add_footer(self, pdf: FPDF, summary: CreditSummary) -> None:
        generated = summary.generated_at.strftime("%B %d, %Y at %I:%M %p UTC")
        pdf.set_font("Helvetica", "I", 9)
        pdf.set_text_color(*self.MUTED_COLOR)
        pdf.cell(0, 5, f"Generated on {generated}", align="C", new_x="LMARGIN", new_y="NEXT")
        pdf.cell(0, 5, f"Thank you for choosing {settings.mail_from_name}", align="C", new_x="LMARGIN", new_y="NEXT")


def _latin1(text: str) -> str:
    return text.encode("latin-1", "replace").decode("latin-1")
