class PreflightError(Exception):
    """Base exception for all preflight analysis errors."""


class DecodeError(PreflightError):
    """Raised when bytes cannot be decoded for the chosen family (e.g. a broken image)."""


class ParseError(PreflightError):
    """Raised when tabular or structured content is malformed."""


class UnsupportedFormatError(PreflightError):
    """Raised when no family predicate matches and the file is not document-like."""


class ToolUnavailableError(PreflightError):
    """Raised when an external decoding collaborator is not available."""
