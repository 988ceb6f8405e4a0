"""Error types for mk.

Primitives return result objects with a success field instead of raising
exceptions for expected failures (a discovery tool exiting non-zero, a tool
that is not installed). These errors are for fatal conditions only:
- Primitives: cache I/O failures, unusable configuration
- Runtime services: precondition failures, terminal resolution failures,
  interpreter spawn failures

Every error is collapsed into a one-line diagnostic at the CLI entry point.
"""

from typing import Optional


class MkError(Exception):
    """Base exception for fatal launcher failures.

    Attributes:
        message: Error description.
        cause: Optional underlying exception being wrapped.
    """

    def __init__(self, message: str, cause: Optional[Exception] = None):
        """Initialize MkError.

        Args:
            message: Description of the error.
            cause: Optional exception that triggered this error.
        """
        super().__init__(message)
        self.message = message
        self.cause = cause


class PreconditionError(MkError):
    """A launch precondition is not met.

    Raised before any resolution work when the target script is missing,
    the working or home directory cannot be read, or PATH is unset.
    """


class CacheError(MkError):
    """Cache file I/O error.

    Attributes:
        message: Description of the error.
        path: Optional path to the cache file.
    """

    def __init__(
        self,
        message: str,
        path: Optional[str] = None,
        cause: Optional[Exception] = None,
    ):
        super().__init__(message, cause=cause)
        self.path = path


class ResolutionError(MkError):
    """The authoritative discovery tool could not provide an environment.

    Attributes:
        message: Description of the error.
        tool: Name of the tool that failed.
        return_code: Exit status reported by the tool, if it ran.
    """

    def __init__(
        self,
        message: str,
        tool: Optional[str] = None,
        return_code: Optional[int] = None,
    ):
        super().__init__(message)
        self.tool = tool
        self.return_code = return_code


class LaunchError(MkError):
    """The resolved interpreter could not be spawned.

    Attributes:
        message: Description of the error.
        executable: Interpreter path that failed to start.
    """

    def __init__(
        self,
        message: str,
        executable: Optional[str] = None,
        cause: Optional[Exception] = None,
    ):
        super().__init__(message, cause=cause)
        self.executable = executable


class ConfigurationError(MkError):
    """Configuration error (unparseable file, invalid value, etc).

    Attributes:
        message: Description of the error.
        field: Optional field name that failed.
    """

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.field = field
