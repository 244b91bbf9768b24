from smartconvert.logging.logger import Log
from smartconvert.processor.models import DocumentInsight, FileEntity, FileStatus, SourceFile
from smartconvert.tools.registry import ToolDescriptor


class Session:
    """Selected tool, its file queue and any auxiliary insight.

    Owned by the Processor. Other components only receive the entities they
    work on.
    """

    def __init__(self) -> None:
        self._tool: ToolDescriptor | None = None
        self._entities: list[FileEntity] = []
        self.insight: DocumentInsight | None = None

    @property
    def tool(self) -> ToolDescriptor | None:
        return self._tool

    @property
    def entities(self) -> tuple[FileEntity, ...]:
        return tuple(self._entities)

    def __len__(self) -> int:
        return len(self._entities)

    def select_tool(self, tool: ToolDescriptor) -> None:
        """Switch tool. Always clears the queue and insight."""
        self._tool = tool
        self.clear()

    def add(self, sources: list[SourceFile]) -> list[FileEntity]:
        """Queue new files according to the tool's multiplicity.

        Single-file tools keep only the first source and replace the queue;
        multi-file tools append.
        """
        if self._tool is None:
            raise ValueError("Select a tool before adding files")
        if not sources:
            return []
        if not self._tool.multiple:
            if len(sources) > 1:
                Log.warning(
                    f"{self._tool.name} takes a single file, keeping the first of {len(sources)}",
                    kept=sources[0].name,
                )
            added = [FileEntity(source=sources[0])]
            self._entities = list(added)
            return added
        added = [FileEntity(source=source) for source in sources]
        self._entities.extend(added)
        return added

    def remove(self, entity_id: str) -> bool:
        before = len(self._entities)
        self._entities = [e for e in self._entities if e.id != entity_id]
        return len(self._entities) != before

    def clear(self) -> None:
        self._entities = []
        self.insight = None

    def completed(self) -> list[FileEntity]:
        return [e for e in self._entities if e.status == FileStatus.COMPLETED]
