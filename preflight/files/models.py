from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import PurePath


@dataclass(frozen=True)
class FileDescriptor:
    """A submitted file: name, declared content type, size and a byte accessor.

    The descriptor is owned by the caller and lives for one analysis call.
    """

    name: str
    content_type: str
    size: int
    reader: Callable[[], bytes] = field(repr=False, compare=False)

    @classmethod
    def from_bytes(cls, name: str, data: bytes, content_type: str = "") -> "FileDescriptor":
        return cls(name=name, content_type=content_type, size=len(data), reader=lambda: data)

    def read(self) -> bytes:
        """Return the full byte content of the file."""
        return self.reader()

    @property
    def extension(self) -> str:
        """Lower-cased extension without the dot, or an empty string."""
        return PurePath(self.name.lower()).suffix.lstrip(".")
