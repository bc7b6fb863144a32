"""
Jarvis - HTTP-classified Application Errors

AppError attaches an HTTP status code and a human-readable message to an
optional underlying cause. It is a label only: nothing here is bound to a
transport layer.

Patterns Applied:
- Status constants from fastapi.status instead of bare integers
- Pydantic response model for the serializable part of the error
"""

from fastapi import status
from pydantic import BaseModel

from jarvis.core.exceptions import JarvisError


class ErrorResponse(BaseModel):
    """Serializable view of an AppError. The cause is never exposed."""

    code: int
    message: str


class AppError(JarvisError):
    """Error carrying an HTTP status code, a message and an optional cause."""

    def __init__(self, code: int, message: str, err: BaseException | None = None) -> None:
        """Initialize AppError.

        Args:
            code: HTTP status code classifying the failure
            message: Human-readable description
            err: Optional underlying cause
        """
        self._code = code
        self._message = message
        self._err = err
        super().__init__(code, message, err)
        self.__cause__ = err

    @property
    def code(self) -> int:
        return self._code

    @property
    def message(self) -> str:
        return self._message

    @property
    def err(self) -> BaseException | None:
        return self._err

    def __str__(self) -> str:
        if self._err is not None:
            return f"{self._message}: {self._err}"
        return self._message

    def __repr__(self) -> str:
        return f"AppError(code={self._code!r}, message={self._message!r}, err={self._err!r})"

    def to_response(self) -> ErrorResponse:
        """Build the serializable error body."""
        return ErrorResponse(code=self._code, message=self._message)


def new_app_error(code: int, message: str, err: BaseException | None = None) -> AppError:
    return AppError(code, message, err)


# Common error constructors


def bad_request_error(message: str, err: BaseException | None = None) -> AppError:
    return new_app_error(status.HTTP_400_BAD_REQUEST, message, err)


def unauthorized_error(message: str, err: BaseException | None = None) -> AppError:
    return new_app_error(status.HTTP_401_UNAUTHORIZED, message, err)


def not_found_error(message: str, err: BaseException | None = None) -> AppError:
    return new_app_error(status.HTTP_404_NOT_FOUND, message, err)


def internal_server_error(message: str, err: BaseException | None = None) -> AppError:
    return new_app_error(status.HTTP_500_INTERNAL_SERVER_ERROR, message, err)
