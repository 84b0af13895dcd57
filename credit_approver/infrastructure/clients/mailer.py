"""Mail delivery clients for assessment summaries"""

import base64
import threading
from typing import Any, Dict, List

import httpx
from credit_approver.config import settings
from credit_approver.domain.exceptions import MailDeliveryError
from credit_approver.domain.models import EmailMessage


class MailApiClient:
    """Client for a transactional mail HTTP API"""

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.BaseTransport | None = None,
    ):
        self.base_url = base_url or settings.mail_api_url
        self.timeout = timeout or settings.http_timeout_seconds
        self.transport = transport

    def send(self, message: EmailMessage) -> None:
        """
        Deliver a message with its PDF attachment.

        Single attempt; the caller decides whether to retry.

        Raises:
            MailDeliveryError: On timeout, HTTP errors, or network failures
        """
        with httpx.Client(timeout=self.timeout, transport=self.transport) as client:
            try:
                response = client.post(f"{self.base_url}/send", json=build_payload(message))
                response.raise_for_status()

            except httpx.TimeoutException as e:
                raise MailDeliveryError(f"Mail API timeout after {self.timeout}s") from e
            except httpx.HTTPStatusError as e:
                raise MailDeliveryError(f"Mail API error: {e.response.status_code}") from e
            except httpx.RequestError as e:
                raise MailDeliveryError(f"Mail API unreachable: {e}") from e


class LocalMailbox:
    """In-memory mailbox that keeps every delivered message, for development and tests"""

    def __init__(self):
        self._lock = threading.Lock()
        self._messages: List[EmailMessage] = []

    def send(self, message: EmailMessage) -> None:
        with self._lock:
            self._messages.append(message)

    @property
    def messages(self) -> List[EmailMessage]:
        with self._lock:
            return list(self._messages)

    def clear(self) -> None:
        with self._lock:
            self._messages.clear()


def build_payload(message: EmailMessage) -> Dict[str, Any]:
    """JSON body for the mail API, attachment base64-encoded"""
    return {
        "from": message.sender,
        "to": [message.recipient],
        "subject": message.subject,
        "html": message.html_body,
        "text": message.text_body,
        "attachments": [
            {
                "filename": message.attachment.filename,
                "content_type": message.attachment.mime_type,
                "content": base64.b64encode(message.attachment.content).decode("ascii"),
            }
        ],
    }
