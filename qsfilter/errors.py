"""
Errors raised while parsing a query string into filters.

Every error is a deterministic function of malformed input: the first one hit
in left-to-right scan order aborts the whole parse.
"""


class FilterParseError(ValueError):
    """Base class for every query-string parse failure."""

    default_message = "invalid filter"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.default_message)


class FilterStructureError(FilterParseError):
    """A pair lacks '=' or its key does not match the key grammar."""

    default_message = "invalid filter structure"


class FilterValueError(FilterParseError):
    """A value could not be converted to the target scalar type."""

    default_message = "invalid filter value"


class UnknownFilterError(FilterParseError):
    """An operator code is not recognized by the target filter family."""

    default_message = "unknown filter"


__all__ = [
    "FilterParseError",
    "FilterStructureError",
    "FilterValueError",
    "UnknownFilterError",
]
