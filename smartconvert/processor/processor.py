from pathlib import Path

from smartconvert.archive.extractor import ArchiveExtractor
from smartconvert.archive.packager import Delivery, Packager
from smartconvert.config.settings import Settings
from smartconvert.insight.factory import SummarizerFactory
from smartconvert.insight.summarizer import DocumentSummarizer
from smartconvert.logging.logger import Log
from smartconvert.ocr.recognizer import TextRecognizer
from smartconvert.pdf.base import BasePdfTextExtractor
from smartconvert.pdf.exceptions import PdfExtractionError
from smartconvert.pdf.factory import PdfToolsFactory
from smartconvert.processor.dispatcher import BatchReport, Dispatcher, EntityProgress
from smartconvert.processor.exceptions import ConfigError
from smartconvert.processor.file_loader import FileLoader
from smartconvert.processor.handlers import build_handlers
from smartconvert.processor.models import DocumentInsight, FileEntity, SourceFile
from smartconvert.processor.session import Session
from smartconvert.tools.registry import ToolDescriptor, ToolId, get_tool


class Processor:
    """Owns the session and drives processing, delivery and insight.

    Flow: select_tool -> add_files -> process -> deliver.
    """

    def __init__(
        self,
        dispatcher: Dispatcher,
        packager: Packager,
        file_loader: FileLoader,
        text_extractor: BasePdfTextExtractor,
        summarizer: DocumentSummarizer | None = None,
        insight_max_pages: int = 5,
    ) -> None:
        self._dispatcher = dispatcher
        self._packager = packager
        self._file_loader = file_loader
        self._text_extractor = text_extractor
        self._summarizer = summarizer
        self._insight_max_pages = insight_max_pages
        self._session = Session()

    @property
    def tool(self) -> ToolDescriptor | None:
        return self._session.tool

    @property
    def files(self) -> tuple[FileEntity, ...]:
        return self._session.entities

    @property
    def insight(self) -> DocumentInsight | None:
        return self._session.insight

    @property
    def insight_available(self) -> bool:
        return self._summarizer is not None

    def select_tool(self, tool_id: str) -> ToolDescriptor:
        tool = get_tool(tool_id)
        self._session.select_tool(tool)
        Log.info(f"Selected tool {tool.name}")
        return tool

    def add_files(self, sources: list[SourceFile]) -> list[FileEntity]:
        """Queue sources the selected tool accepts; others are dropped with a warning."""
        tool = self._require_tool()
        accepted = []
        for source in sources:
            if tool.accepts(source.name, source.mime_type):
                accepted.append(source)
            else:
                Log.warning(f"{tool.name} does not accept this file", file=source.name)
        return self._session.add(accepted)

    def add_paths(self, paths: list[Path]) -> list[FileEntity]:
        return self.add_files(self._file_loader.load_many(paths))

    def remove_file(self, entity_id: str) -> bool:
        return self._session.remove(entity_id)

    def clear(self) -> None:
        self._session.clear()

    def process(self, on_progress: EntityProgress | None = None) -> BatchReport:
        """Run the selected tool over the queue.

        Raises:
            MergeError: when the merge tool fails.
        """
        tool = self._require_tool()
        return self._dispatcher.process(tool, self._session.entities, on_progress)

    def deliver(self) -> Delivery | None:
        return self._packager.deliver(self._session.completed())

    def analyze(self) -> DocumentInsight | None:
        """Summarize the first queued PDF and keep the result on the session."""
        tool = self._session.tool
        if tool is None or tool.id != ToolId.PDF_TO_JPG or not self._session.entities:
            return None
        if self._summarizer is None:
            Log.info("Document insight is not configured")
            return None

        first = self._session.entities[0]
        try:
            text = self._text_extractor.extract(first.source.data, self._insight_max_pages)
        except PdfExtractionError as exc:
            Log.warning(f"Cannot read text for insight: {exc}", file=first.name)
            return None

        insight = self._summarizer.summarize(text)
        if insight is not None:
            self._session.insight = insight
        return insight

    def _require_tool(self) -> ToolDescriptor:
        tool = self._session.tool
        if tool is None:
            raise ValueError("No tool selected")
        return tool


def build_processor(settings: Settings) -> Processor:
    """Build a Processor with all required adapters."""
    handlers = build_handlers(
        settings,
        rasterizer=PdfToolsFactory.create_rasterizer(settings),
        extractor=ArchiveExtractor(),
        recognizer=TextRecognizer(settings.ocr_language, settings.tesseract_cmd),
    )
    dispatcher = Dispatcher(handlers, PdfToolsFactory.create_merger(settings))
    packager = Packager(settings.archive_file_name, settings.archive_folder_name)

    summarizer: DocumentSummarizer | None
    try:
        summarizer = SummarizerFactory.create(settings)
    except ConfigError as exc:
        Log.info(f"Document insight disabled: {exc}")
        summarizer = None

    return Processor(
        dispatcher=dispatcher,
        packager=packager,
        file_loader=FileLoader(),
        text_extractor=PdfToolsFactory.create_text_extractor(settings),
        summarizer=summarizer,
        insight_max_pages=settings.insight_max_pages,
    )
