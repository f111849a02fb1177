"""
Error Taxonomy

Every failure the matcher can surface to its caller. Nothing here is
retried: pattern/text mismatches are semantic, and read failures are
the caller's to retry.

I/O failures raised by the underlying reader are not wrapped. They
propagate exactly as the reader raised them; ReadError is simply the
name the rest of the package uses for them.
"""

from __future__ import annotations


class LinePatternsError(Exception):
    """Base class for matcher errors."""


class InputTypeError(LinePatternsError, TypeError):
    """The pattern list, or one of its elements, is not a string."""

    def __init__(self, message: str, value: object = None):
        super().__init__(message)
        self.value = value


class PatternCompileError(LinePatternsError, ValueError):
    """A /regex/ pattern failed to compile."""

    def __init__(self, pattern: str, reason: str):
        super().__init__(f"error parsing regexp {pattern!r}: {reason}")
        self.pattern = pattern
        self.reason = reason


class SourceUnavailableError(LinePatternsError, TypeError):
    """The object handed in as the text source cannot be read line by line."""


class LineTooLongError(LinePatternsError):
    """A single line exceeded the maximum buffered line size."""

    def __init__(self, limit: int):
        super().__init__(f"line exceeds maximum size of {limit} bytes")
        self.limit = limit


# Reader failures propagate unchanged.
ReadError = OSError
