"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class InvalidTransition(DomainException):
    """Operation attempted in a phase that does not allow it"""

    def __init__(self, operation: str, phase: str):
        self.operation = operation
        self.phase = phase
        super().__init__(f"Cannot {operation} while assessment is {phase}")


class SessionNotFound(DomainException):
    """No assessment session is registered under the given id"""

    pass


class CollaboratorError(DomainException):
    """External collaborator reported a failure"""

    pass


class PdfRenderError(CollaboratorError):
    """PDF renderer could not produce a document"""

    pass


class MailDeliveryError(CollaboratorError):
    """Mail transport rejected or failed to deliver a message"""

    pass


class DispatchError(DomainException):
    """
    Failed dispatch of an assessment summary.

    Returned inside a DispatchResult rather than raised, so the owning session
    can report the failure and retry the send.
    """

    stage = "dispatch"

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"{self.stage} failed: {reason}")


class RenderFailed(DispatchError):
    """PDF rendering stage failed; nothing was sent"""

    stage = "render"


class DeliveryFailed(DispatchError):
    """Mail delivery stage failed"""

    stage = "delivery"
