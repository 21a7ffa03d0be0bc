from __future__ import annotations

from typing import Any

from rql.exceptions import (
    ExpectedTokenError,
    NotImplementedFeatureError,
    NumericLiteralError,
    ParserError,
)

from .results import ErrorInfo

EXIT_PARSE_ERROR = 1
EXIT_USAGE_ERROR = 2


class CLIError(Exception):
    def __init__(
        self,
        message: str,
        *,
        exit_code: int = EXIT_USAGE_ERROR,
        error_type: str = "usage_error",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.exit_code = exit_code
        self.error_type = error_type
        self.details = details

    def __str__(self) -> str:  # pragma: no cover
        return self.message


def exit_code_for_exception(exc: Exception) -> int:
    if isinstance(exc, CLIError):
        return exc.exit_code
    if isinstance(exc, ParserError):
        return EXIT_PARSE_ERROR
    return 1


def _parser_error_details(exc: ParserError) -> dict[str, Any]:
    details: dict[str, Any] = {"errorType": type(exc).__name__}
    if isinstance(exc, ExpectedTokenError):
        details["token"] = str(exc.token)
        details["tokenType"] = exc.token.type.name
        details["position"] = exc.token.pos
    elif isinstance(exc, NumericLiteralError):
        details["text"] = exc.text
    elif isinstance(exc, NotImplementedFeatureError):
        details["feature"] = exc.feature
    return details


def error_info_for_exception(exc: Exception) -> ErrorInfo:
    if isinstance(exc, CLIError):
        return ErrorInfo(type=exc.error_type, message=exc.message, details=exc.details)
    if isinstance(exc, NotImplementedFeatureError):
        return ErrorInfo(
            type="not_implemented",
            message=str(exc),
            hint="Supported queries: and(...), or(...), eq/ne/le/ge/lt/gt(field,value)",
            details=_parser_error_details(exc),
        )
    if isinstance(exc, ParserError):
        return ErrorInfo(type="parse_error", message=str(exc), details=_parser_error_details(exc))
    return ErrorInfo(type="internal_error", message=str(exc) or type(exc).__name__, details=None)
