"""Error classes raised by the address verification client.

Builder validation errors wrap Pydantic errors so they can be handled like
any other Pydantic error. Service errors are plain exceptions and form a
small hierarchy so callers can catch authentication problems separately.
"""

from __future__ import annotations

from pydantic_core import PydanticCustomError

# Package identifier for error context
PACKAGE_NAME = "addressfactory_direct"


class RequestValidationError(PydanticCustomError):
    """Raised by the request builder when a required field is missing or blank.

    The error context always contains the ``field`` that failed validation.
    """

    @classmethod
    def from_validation_error(
        cls, error: Exception, context: dict | None = None
    ) -> RequestValidationError:
        """Wrap a pydantic.ValidationError, naming the first offending field.

        Args:
            error: The ValidationError raised while building a request section.
            context: Additional context to include in the error.

        Returns:
            RequestValidationError naming the field that failed.
        """
        from pydantic import ValidationError

        ctx = {"package": PACKAGE_NAME, **(context or {})}
        if isinstance(error, ValidationError) and error.errors():
            first = error.errors()[0]
            field = ".".join(str(part) for part in first.get("loc", ())) or "unknown"
            return cls(
                "request_validation",
                "Invalid value for field '{field}': {reason}",
                {**ctx, "field": field, "reason": first.get("msg", str(error))},
            )

        return cls(
            "request_validation",
            "{reason}",
            {**ctx, "field": ctx.get("field", "unknown"), "reason": str(error)},
        )


class ServiceException(Exception):
    """Raised for any fault reported by the transport or the remote service.

    The message is the upstream fault message, unchanged.
    """


class AuthenticationException(ServiceException):
    """Raised when the remote side rejects the credentials or the session."""


class AuthenticationErrorException(Exception):
    """A detailed authentication error as reported by the remote service.

    Attached as ``__cause__`` of the :class:`AuthenticationException` that is
    raised to callers, so the upstream code and message stay inspectable.
    """

    def __init__(self, message: str, code: str | None = None) -> None:
        super().__init__(message)
        self.code = code

    def __repr__(self) -> str:
        return f"AuthenticationErrorException({str(self)!r}, code={self.code!r})"
