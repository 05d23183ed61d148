"""Domain errors raised by the entry services."""


class EntryError(Exception):
    """Base class for errors reported to the client with an HTTP status."""

    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(EntryError):
    """Missing or empty required input."""

    status_code = 400


class NotFoundError(EntryError):
    """Unknown entry id."""

    status_code = 404


class ProcessingNotImplementedError(EntryError, NotImplementedError):
    """Non-demo processing was requested."""

    status_code = 501
