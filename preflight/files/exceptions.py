class FileLoadError(Exception):
    """Base exception for errors while loading a file for analysis."""


class FileTooLargeError(FileLoadError):
    """Raised when a file exceeds the configured size limit."""
