from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field

from smartconvert.logging.logger import Log
from smartconvert.pdf.merger import ImageMerger
from smartconvert.processor.exceptions import MergeError
from smartconvert.processor.handlers import ToolHandler
from smartconvert.processor.models import FileEntity, FileStatus
from smartconvert.tools.registry import ToolDescriptor, ToolId

MERGE_TOOL = ToolId.JPG_TO_PDF

EntityProgress = Callable[[FileEntity, int], None]


@dataclass
class BatchReport:
    """Outcome of one processing run."""

    tool_id: ToolId
    completed: int = 0
    skipped: int = 0
    failed: list[tuple[str, str]] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failed


class Dispatcher:
    """Routes queued entities to their tool and records the outcome on each.

    Entities are processed one at a time in queue order. A failing entity is
    marked as error and the batch moves on; only the merge tool fails as a
    whole.
    """

    def __init__(self, handlers: Mapping[ToolId, ToolHandler], merger: ImageMerger) -> None:
        missing = [t.value for t in ToolId if t != MERGE_TOOL and t not in handlers]
        if missing:
            raise ValueError(f"No handler registered for tools: {missing}")
        self._handlers = dict(handlers)
        self._merger = merger

    def process(
        self,
        tool: ToolDescriptor,
        entities: Sequence[FileEntity],
        on_progress: EntityProgress | None = None,
    ) -> BatchReport:
        """Process every entity that is not already completed.

        Raises:
            MergeError: if the merge tool fails; all entities it started are
                marked as error first.
        """
        if tool.id == MERGE_TOOL:
            return self._process_merge(tool, entities)
        return self._process_each(tool, entities, on_progress)

    def _process_each(
        self,
        tool: ToolDescriptor,
        entities: Sequence[FileEntity],
        on_progress: EntityProgress | None,
    ) -> BatchReport:
        handler = self._handlers[tool.id]
        report = BatchReport(tool_id=tool.id)
        Log.info(f"Processing {len(entities)} files with {tool.name}")

        for entity in entities:
            if entity.status == FileStatus.COMPLETED:
                report.skipped += 1
                continue
            entity.start()
            sink = self._entity_sink(entity, on_progress)
            try:
                result = handler.run(entity.source, sink)
            except Exception as exc:
                self._handle_failure(entity, exc, report)
                continue
            entity.complete(result.outputs, result.text_result)
            report.completed += 1
            Log.info(f"Completed with {len(result.outputs)} outputs", file=entity.name)

        Log.info(
            f"Batch finished: {report.completed} completed, "
            f"{len(report.failed)} failed, {report.skipped} skipped"
        )
        return report

    def _process_merge(self, tool: ToolDescriptor, entities: Sequence[FileEntity]) -> BatchReport:
        report = BatchReport(tool_id=tool.id)
        pending = [e for e in entities if e.status != FileStatus.COMPLETED]
        report.skipped = len(entities) - len(pending)
        if not pending:
            return report

        Log.info(f"Merging {len(entities)} images with {tool.name}")
        for entity in pending:
            entity.start()
        try:
            merged = self._merger.merge([e.source for e in entities])
        except Exception as exc:
            message = str(exc)
            for entity in pending:
                entity.fail(message)
            Log.error(f"Merge failed: {message}")
            if isinstance(exc, MergeError):
                raise
            raise MergeError(f"Failed to generate PDF: {message}") from exc

        # One artifact for the whole queue: it lives on the first entity.
        pending[0].complete([merged])
        for entity in pending[1:]:
            entity.complete([])
        report.completed = len(pending)
        return report

    @staticmethod
    def _handle_failure(entity: FileEntity, exc: Exception, report: BatchReport) -> None:
        message = str(exc) or type(exc).__name__
        entity.fail(message)
        report.failed.append((entity.name, message))
        Log.error(f"Error processing {entity.name}: {message}")

    @staticmethod
    def _entity_sink(
        entity: FileEntity,
        on_progress: EntityProgress | None,
    ) -> Callable[[int], None]:
        def sink(percent: int) -> None:
            Log.debug(f"Progress {percent}%", file=entity.name)
            if on_progress is not None:
                on_progress(entity, percent)

        return sink
