import io
import zipfile
import zlib

from smartconvert.logging.logger import Log
from smartconvert.processor.exceptions import CodecError, InputError
from smartconvert.processor.models import Artifact, SourceFile


def leaf_name(path: str) -> str:
    """Last segment of an archive path; nested folders collapse."""
    return path.rsplit("/", 1)[-1] or path


class ArchiveExtractor:
    """Unpacks every file entry of a ZIP archive."""

    def extract(self, source: SourceFile) -> list[Artifact]:
        """Read all non-directory entries.

        Entry names are reduced to their leaf segment, so two entries with the
        same leaf both appear with the same name. Result order carries no
        meaning.

        Raises:
            InputError: if the source is empty.
            CodecError: if the archive or one of its entries cannot be read.
        """
        if not source.data:
            raise InputError(f"{source.name} is empty")
        try:
            with zipfile.ZipFile(io.BytesIO(source.data)) as archive:
                files = [
                    Artifact(leaf_name(info.filename), archive.read(info))
                    for info in archive.infolist()
                    if not info.is_dir()
                ]
        except (zipfile.BadZipFile, zipfile.LargeZipFile, zlib.error, OSError, RuntimeError) as exc:
            raise CodecError(f"Cannot extract {source.name}: {exc}") from exc

        Log.info(f"Extracted {len(files)} files", archive=source.name)
        return files
