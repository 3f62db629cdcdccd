"""Shared (non-domain) exceptions."""


class TransportError(Exception):
    """Backend call failed: network error, timeout or non-success status."""

    def __init__(self, call: str, message: str, *, status_code: int | None = None):
        self.call = call
        self.status_code = status_code
        super().__init__(f"[{call}] {message}")


class DataShapeError(Exception):
    """Backend response is missing the fields a call expects."""

    def __init__(self, call: str, message: str):
        self.call = call
        super().__init__(f"[{call}] {message}")
