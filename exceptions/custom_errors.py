class InvalidRuleError(Exception):
    """Raised when a business rule fails its structural precondition (e.g. a co-run with fewer than two tasks)."""

    pass


class RuleIndexError(Exception):
    """Raised when a rule is removed by a position that does not exist in the rule list."""

    pass


class InvalidPrioritySettingError(Exception):
    """Raised when a priority weight is unknown or outside the range [0, 1]."""


class InvalidActionError(Exception):
    """Raised when a data-modification action object is missing fields or is malformed."""

    pass


class UnknownEntityError(Exception):
    """Raised when an entity name does not resolve to clients, workers or tasks."""

    pass


class InvalidFilterError(Exception):
    """Raised when a search filter is not a {field, operator, value} object with a known operator."""


class FileReadingError(Exception):
    """Raised when there is an error reading a file."""

    pass


class FileContentError(Exception):
    """Raised when the content of a file is not as expected."""

    pass


class UnsupportedFormatError(Exception):
    """Raised when an export or upload format is not supported."""


class AINotConfiguredError(Exception):
    """Raised when the AI collaborator has no API key configured."""


class AIResponseError(Exception):
    """Raised when the AI collaborator fails or returns content that cannot be parsed."""


# Mapping of custom exceptions to HTTP status codes
CUSTOM_ERRORS = {
    InvalidRuleError: 400,
    RuleIndexError: 404,
    InvalidPrioritySettingError: 400,
    InvalidActionError: 400,
    UnknownEntityError: 400,
    InvalidFilterError: 400,
    FileReadingError: 500,
    FileContentError: 400,
    UnsupportedFormatError: 400,
    AINotConfiguredError: 503,
    AIResponseError: 502,
}
