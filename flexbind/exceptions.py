from typing import Any, Optional

__all__ = (
    "FlexBindError",
    "ImproperConfigurationError",
    "MalformedIdentifierError",
    "MissingIdentifierError",
    "NotFoundError",
    "ParameterError",
    "ParameterShapeError",
    "ParameterStyleMismatchError",
)


class FlexBindError(Exception):
    """Base exception class from which all flexbind exceptions inherit."""

    detail: str

    def __init__(self, *args: Any, detail: str = "") -> None:
        """Initialize ``FlexBindError``.

        Args:
            *args: args are converted to :class:`str` before passing to :class:`Exception`
            detail: detail of the exception.
        """
        str_args = [str(arg) for arg in args if arg]
        if not detail:
            if str_args:
                detail, *str_args = str_args
            elif hasattr(self, "detail"):
                detail = self.detail
        self.detail = detail
        super().__init__(*str_args)

    def __repr__(self) -> str:
        if self.detail:
            return f"{self.__class__.__name__} - {self.detail}"
        return self.__class__.__name__

    def __str__(self) -> str:
        return " ".join((*self.args, self.detail)).strip()


class ImproperConfigurationError(FlexBindError):
    """Improper Configuration error.

    Raised when a handle or setting cannot be used the way it was supplied.
    """


class NotFoundError(FlexBindError):
    """A named handle does not exist."""


# -- SQL Parameter Errors --
class ParameterError(FlexBindError):
    """Base class for parameter-related errors."""

    sql: Optional[str]

    def __init__(self, message: str, sql: Optional[str] = None) -> None:
        """Initialize with optional SQL context."""
        detail_message = message
        if sql:
            detail_message = f"{message}\nSQL: {sql}"
        super().__init__(detail=detail_message)
        self.sql = sql


class MissingIdentifierError(ParameterError):
    """Raised when a binding identifier is empty or undefined."""

    def __init__(self, message: Optional[str] = None, sql: Optional[str] = None) -> None:
        super().__init__(message or "Binding identifier is missing", sql)


class MalformedIdentifierError(ParameterError):
    """Raised when a binding identifier contains characters other than word characters and ``@``."""

    identifier: Any

    def __init__(self, identifier: Any, sql: Optional[str] = None) -> None:
        super().__init__(f'Binding identifier "{identifier}" is malformed', sql)
        self.identifier = identifier


class ParameterShapeError(ParameterError):
    """Raised when binding values cannot be interpreted for automatic binding."""

    def __init__(self, message: Optional[str] = None, sql: Optional[str] = None) -> None:
        super().__init__(message or "Expected a mapping or sequence for automatic binding", sql)


class ParameterStyleMismatchError(FlexBindError):
    """Error when parameter style doesn't match SQL placeholder style.

    This exception is raised when there's a mismatch between the parameter type
    (dictionary, tuple, etc.) and the placeholder style in the SQL query
    (named, positional, etc.).
    """

    sql: Optional[str]

    def __init__(self, message: Optional[str] = None, sql: Optional[str] = None) -> None:
        final_message = message
        if final_message is None:
            final_message = (
                "Parameter style mismatch: dictionary parameters provided but no named placeholders found in SQL."
            )

        detail_message = final_message
        if sql:
            detail_message = f"{final_message}\nSQL: {sql}"

        super().__init__(detail=detail_message)
        self.sql = sql
