import mimetypes
from pathlib import Path

from preflight.files.exceptions import FileTooLargeError
from preflight.files.models import FileDescriptor


def guess_content_type(path: Path) -> str:
    """Guess a MIME type from the file extension, or '' when unknown."""
    content_type, _encoding = mimetypes.guess_type(path.name)
    return content_type or ""


class FileLoader:
    """Builds FileDescriptors for files on the local filesystem."""

    def __init__(self, max_size_bytes: int | None = None) -> None:
        self._max_size_bytes = max_size_bytes

    def load(self, path: Path) -> FileDescriptor:
        """Describe a file on disk without reading it yet.

        Raises:
            FileNotFoundError: if the path does not exist or is not a file.
            FileTooLargeError: if the file exceeds the configured size limit.
        """
        if not path.is_file():
            raise FileNotFoundError(f"File not found: {path}")
        size = path.stat().st_size
        if self._max_size_bytes is not None and size > self._max_size_bytes:
            raise FileTooLargeError(
                f"{path.name} is {size} bytes (limit {self._max_size_bytes})"
            )
        return FileDescriptor(
            name=path.name,
            content_type=guess_content_type(path),
            size=size,
            reader=path.read_bytes,
        )
