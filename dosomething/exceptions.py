"""Domain errors shared by every feature.

Routers never build error bodies by hand: the handlers registered in
``dosomething.main`` turn these into JSON objects of human readable
messages keyed by field.
"""


class DoSomethingError(Exception):
    """Base class for domain errors."""


class ValidationError(DoSomethingError):
    """Malformed or missing input. Surfaced as HTTP 400."""

    def __init__(self, errors: dict[str, str]) -> None:
        self.errors = errors
        super().__init__("; ".join(f"{k}: {v}" for k, v in errors.items()))


class ConflictError(ValidationError):
    """An identifier that must be unique is already taken."""


class NotFoundError(DoSomethingError):
    """Raised when the requested record does not exist. Surfaced as HTTP 404."""

    def __init__(self, field: str, message: str) -> None:
        self.field = field
        self.message = message
        super().__init__(message)

    @property
    def errors(self) -> dict[str, str]:
        return {self.field: self.message}


class DeliveryError(DoSomethingError):
    """An SMS or email provider could not be reached or rejected the message.

    Never surfaced to the HTTP caller.
    """

    def __init__(self, channel: str, recipient: str, message: str) -> None:
        self.channel = channel
        self.recipient = recipient
        super().__init__(f"{channel} delivery to {recipient} failed: {message}")
