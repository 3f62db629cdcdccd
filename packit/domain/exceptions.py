"""Domain semantic exceptions."""


class DomainError(Exception):
    """Base domain exception."""


class StepValidationError(DomainError):
    """Raised when a wizard step cannot be left because required input is missing."""

    def __init__(self, step: str, message: str):
        self.step = step
        super().__init__(message)
