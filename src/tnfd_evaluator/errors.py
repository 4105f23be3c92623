"""Exception types raised by the evaluation pipeline."""

from typing import Optional


class EvaluatorError(Exception):
    """Base class for all evaluation failures."""


class EvaluationInputError(EvaluatorError):
    """The submitted document is missing or unreadable."""


class ProviderError(EvaluatorError):
    """An outbound call to the provider failed."""

    def __init__(self, message: str, operation: Optional[str] = None):
        super().__init__(message)
        self.operation = operation


class ProviderTransportError(ProviderError):
    """The request never produced an HTTP response."""


class ProviderStatusError(ProviderError):
    """The provider answered with a non-2xx status."""

    def __init__(
        self,
        message: str,
        status_code: int,
        body: str = "",
        operation: Optional[str] = None,
    ):
        super().__init__(message, operation=operation)
        self.status_code = status_code
        self.body = body


class ProviderDecodeError(ProviderError):
    """The provider response was not JSON or lacked a required field."""
