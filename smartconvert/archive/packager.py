import io
import zipfile
from dataclasses import dataclass, field

from smartconvert.logging.logger import Log
from smartconvert.processor.exceptions import AggregationError
from smartconvert.processor.models import Artifact, FileEntity, FileStatus


@dataclass(frozen=True)
class Delivery:
    """What the caller should save: one artifact or one archive."""

    name: str
    data: bytes = field(repr=False)
    bundled: bool


class Packager:
    """Decides between direct delivery and a ZIP bundle of completed outputs."""

    def __init__(
        self,
        archive_name: str = "SmartConvert_Files.zip",
        folder_name: str = "Converted_Files",
    ) -> None:
        self._archive_name = archive_name
        self._folder_name = folder_name

    def deliver(self, entities: list[FileEntity]) -> Delivery | None:
        """Package the outputs of completed entities.

        Returns None when no completed entity has outputs. A single entity
        with a single output is delivered as-is under its own name.
        """
        ready = [e for e in entities if e.status == FileStatus.COMPLETED and e.outputs]
        if not ready:
            return None
        if len(ready) == 1 and len(ready[0].outputs) == 1:
            artifact = ready[0].outputs[0]
            Log.info(f"Delivering {artifact.name} directly")
            return Delivery(name=artifact.name, data=artifact.data, bundled=False)

        artifacts = [artifact for entity in ready for artifact in entity.outputs]
        return Delivery(name=self._archive_name, data=self.bundle(artifacts), bundled=True)

    def bundle(self, artifacts: list[Artifact]) -> bytes:
        """Write artifacts into one ZIP under the common folder.

        Artifacts with the same name share a path; the last one wins.

        Raises:
            AggregationError: if the archive cannot be written.
        """
        entries: dict[str, bytes] = {}
        for artifact in artifacts:
            entries[f"{self._folder_name}/{artifact.name}"] = artifact.data

        buf = io.BytesIO()
        try:
            with zipfile.ZipFile(buf, "w", compression=zipfile.ZIP_DEFLATED) as archive:
                for path, data in entries.items():
                    archive.writestr(path, data)
        except (OSError, ValueError, zipfile.LargeZipFile) as exc:
            raise AggregationError(f"Failed to write {self._archive_name}: {exc}") from exc

        if len(entries) < len(artifacts):
            Log.warning(
                f"{len(artifacts) - len(entries)} outputs overwritten by same-named files",
                archive=self._archive_name,
            )
        Log.info(f"Bundled {len(entries)} files into {self._archive_name}")
        return buf.getvalue()
