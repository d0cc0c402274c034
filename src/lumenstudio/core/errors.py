"""Error taxonomy for Lumen Studio operations.

Every failure that leaves an orchestration entry point is a
:class:`StudioError`.  The subclasses tell the caller (usually the HTTP
layer, ultimately the browser) whether the user has to fix their input or
can simply try again:

========================  ==========  =======================================
Error                     Retryable   Meaning
========================  ==========  =======================================
``MissingInputError``     no          A required image or text field is absent
``EncodingError``         no          A local file could not be read/encoded
``RemoteServiceError``    yes         Network, auth, quota or service failure
``NoImageReturnedError``  yes         The model replied without an image
``EmptyResponseError``    yes         The model replied without any text
========================  ==========  =======================================

``ConfigurationError`` is raised once at startup when the remote credential
is missing.  It is deliberately not a :class:`StudioError`: it is fatal for
the whole process, not for a single call.
"""

from __future__ import annotations


class ConfigurationError(RuntimeError):
    """Raised when the application cannot start (e.g. no API key)."""


class StudioError(Exception):
    """Base class for all per-operation failures.

    Attributes:
        operation: Name of the operation that failed (``"merge"``,
            ``"relight"``...), or ``None`` before the error has been tagged.
        retryable: ``True`` when re-invoking the same operation may succeed.
    """

    retryable: bool = False
    user_message: str = "The operation failed."

    def __init__(self, message: str, *, operation: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.operation = operation

    def with_operation(self, operation: str) -> StudioError:
        """Tag the error with the operation name unless already tagged."""
        if self.operation is None:
            self.operation = operation
        return self

    def __str__(self) -> str:
        if self.operation:
            return f"[{self.operation}] {self.message}"
        return self.message


class MissingInputError(StudioError):
    """A required input was not supplied.  Always user-correctable."""

    user_message = "Please provide all required inputs."

    def __init__(self, field: str, *, operation: str | None = None) -> None:
        super().__init__(f"Missing required input: {field}", operation=operation)
        self.field = field


class EncodingError(StudioError):
    """A local asset could not be read or transformed for transport."""

    user_message = "The uploaded file could not be read."


class RemoteServiceError(StudioError):
    """The remote generation service failed (transport, auth, quota...)."""

    retryable = True
    user_message = "The generation service reported an error. Please try again."

    def __init__(
        self,
        message: str,
        *,
        operation: str | None = None,
        status_code: int | None = None,
    ) -> None:
        super().__init__(message, operation=operation)
        self.status_code = status_code


class NoImageReturnedError(StudioError):
    """The call succeeded but no inline image part came back.

    Common and expected: the model may decline to produce an image (safety
    filters, ambiguous instruction).
    """

    retryable = True
    user_message = "No image was returned. Try again or rephrase your request."


class EmptyResponseError(StudioError):
    """The call succeeded but the reply carried no text."""

    retryable = True
    user_message = "The service returned an empty response. Please try again."
