"""Exceptions raised by the restaurant booking tools."""


class UpstreamError(RuntimeError):
    """The place catalog could not be reached or returned an error."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
