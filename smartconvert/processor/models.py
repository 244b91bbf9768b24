import uuid
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import StrEnum

from smartconvert.processor.exceptions import InvalidTransitionError

ProgressSink = Callable[[int], None]


class FileStatus(StrEnum):
    PENDING = "pending"
    PROCESSING = "processing"
    COMPLETED = "completed"
    ERROR = "error"


@dataclass(frozen=True)
class SourceFile:
    """Byte-bearing input captured at ingestion."""

    name: str
    size: int
    mime_type: str
    data: bytes = field(repr=False)


@dataclass(frozen=True)
class Artifact:
    """One named output payload produced by a tool."""

    name: str
    data: bytes = field(repr=False)


@dataclass(frozen=True)
class DocumentInsight:
    """Short summary and topic tags for a document."""

    summary: str
    keywords: list[str] = field(default_factory=list)


@dataclass
class FileEntity:
    """One queued file moving through the pipeline.

    Status only moves pending -> processing -> completed | error. Use
    start(), complete() and fail(); they raise InvalidTransitionError on
    anything else.
    """

    source: SourceFile
    id: str = field(default_factory=lambda: uuid.uuid4().hex)
    status: FileStatus = FileStatus.PENDING
    outputs: list[Artifact] = field(default_factory=list)
    text_result: str | None = None
    error_message: str = ""
    history: list[FileStatus] = field(default_factory=lambda: [FileStatus.PENDING])

    @property
    def name(self) -> str:
        return self.source.name

    @property
    def size(self) -> int:
        return self.source.size

    @property
    def mime_type(self) -> str:
        return self.source.mime_type

    def start(self) -> None:
        """Move to processing. A failed entity goes back through pending first."""
        if self.status == FileStatus.ERROR:
            self.error_message = ""
            self._move(FileStatus.PENDING)
        self._require(FileStatus.PENDING, FileStatus.PROCESSING)
        self._move(FileStatus.PROCESSING)

    def complete(self, outputs: list[Artifact], text_result: str | None = None) -> None:
        self._require(FileStatus.PROCESSING, FileStatus.COMPLETED)
        self.outputs = list(outputs)
        self.text_result = text_result
        self._move(FileStatus.COMPLETED)

    def fail(self, message: str) -> None:
        self._require(FileStatus.PROCESSING, FileStatus.ERROR)
        self.outputs = []
        self.text_result = None
        self.error_message = message
        self._move(FileStatus.ERROR)

    def _require(self, expected: FileStatus, target: FileStatus) -> None:
        if self.status != expected:
            raise InvalidTransitionError(
                f"File '{self.name}' cannot move from {self.status} to {target}"
            )

    def _move(self, status: FileStatus) -> None:
        self.status = status
        self.history.append(status)
