"""Domain layer errors."""


class DomainError(Exception):
    """Base domain error."""

    pass


class CollaboratorError(DomainError):
    """An external collaborator failed or refused a request.

    Attribution and onboarding steps catch these and carry on as if the
    step found nothing.
    """

    pass


class TransportError(CollaboratorError):
    """Guild API unreachable or permission denied."""

    pass


class StoreError(CollaboratorError):
    """Account store unreachable or query rejected."""

    pass


class SendSuppressedError(CollaboratorError):
    """A direct message was refused, e.g. the member closed their inbox."""

    def __init__(self, member_id: int, reason: str = "direct messages closed"):
        self.member_id = member_id
        super().__init__(f"Cannot message member {member_id}: {reason}")
