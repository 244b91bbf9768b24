import mimetypes
from pathlib import Path

from smartconvert.processor.exceptions import InputError
from smartconvert.processor.models import SourceFile

_FALLBACK_MIME = "application/octet-stream"

# Not every platform's mime table knows these.
_EXTRA_TYPES = {
    ".webp": "image/webp",
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
}


def guess_mime_type(name: str) -> str:
    """Resolve a mime type from a file name."""
    suffix = Path(name).suffix.lower()
    if suffix in _EXTRA_TYPES:
        return _EXTRA_TYPES[suffix]
    mime, _ = mimetypes.guess_type(name)
    return mime or _FALLBACK_MIME


class FileLoader:
    """Reads files from disk into immutable SourceFile objects."""

    def load(self, path: Path) -> SourceFile:
        """Read a file and capture its name, size and mime type.

        Raises:
            InputError: if the path does not exist, is not a file, cannot be
                read, or is empty.
        """
        if not path.is_file():
            raise InputError(f"File not found: {path}")
        try:
            data = path.read_bytes()
        except OSError as exc:
            raise InputError(f"Cannot read {path}: {exc}") from exc
        if not data:
            raise InputError(f"File is empty: {path}")
        return SourceFile(
            name=path.name,
            size=len(data),
            mime_type=guess_mime_type(path.name),
            data=data,
        )

    def load_many(self, paths: list[Path]) -> list[SourceFile]:
        return [self.load(path) for path in paths]
