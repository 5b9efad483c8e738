# app/core/errors.py


class AcademicDataError(Exception):
    """Base class for errors raised by the data access layer."""


class RetrievalFailure(AcademicDataError):
    """
    A read against the store failed.
    The message is fixed and safe to show to users; the underlying
    error is only available as __cause__ for logging.
    """

    DEFAULT_MESSAGE = "Failed to fetch student marks."

    def __init__(self, message: str = DEFAULT_MESSAGE):
        super().__init__(message)
        self.message = message
