"""Exception hierarchy for scriptlib.

Primitives raise these; only the command-line entry point turns them into a
fatal exit. Every error carries an ErrorCode and, where one is involved, the
path of the file it concerns.
"""

from enum import StrEnum


class ErrorCode(StrEnum):
    """Error codes for scriptlib operations."""

    MISSING_ARGUMENT = "MISSING_ARGUMENT"
    FILE_NOT_FOUND = "FILE_NOT_FOUND"
    IDENTICAL_CONTENT = "IDENTICAL_CONTENT"
    INVALID_PATTERN = "INVALID_PATTERN"
    READ_ERROR = "READ_ERROR"
    ENCODING_ERROR = "ENCODING_ERROR"
    WRITE_ERROR = "WRITE_ERROR"
    COMMIT_ERROR = "COMMIT_ERROR"
    INVALID_CONFIG = "INVALID_CONFIG"


class ScriptLibError(Exception):
    """Base class for all scriptlib errors."""

    default_code = ErrorCode.WRITE_ERROR

    def __init__(self, message: str, *, error_code: ErrorCode | None = None, path: str | None = None):
        super().__init__(message)
        self.error_code = error_code or self.default_code
        self.path = path


class ConfigurationError(ScriptLibError):
    """Raised when a primitive is called with invalid input."""

    default_code = ErrorCode.MISSING_ARGUMENT


class MissingArgumentError(ConfigurationError):
    """Raised when a required argument is empty or unset."""

    default_code = ErrorCode.MISSING_ARGUMENT


class MissingFileError(ConfigurationError):
    """Raised when a named file does not exist as a regular file."""

    default_code = ErrorCode.FILE_NOT_FOUND


class IdenticalContentError(ConfigurationError):
    """Raised by move() when source and destination hold the same bytes."""

    default_code = ErrorCode.IDENTICAL_CONTENT


class InvalidConfigError(ConfigurationError):
    """Raised when the JSON config file cannot be read or is not an object."""

    default_code = ErrorCode.INVALID_CONFIG


class TransformError(ScriptLibError):
    """Raised when a transformation cannot be produced or committed."""

    default_code = ErrorCode.WRITE_ERROR


class InvalidPatternError(TransformError):
    """Raised when a regular expression or replacement template is invalid."""

    default_code = ErrorCode.INVALID_PATTERN


class CommitError(TransformError):
    """Raised when the staged candidate cannot replace its target."""

    default_code = ErrorCode.COMMIT_ERROR
