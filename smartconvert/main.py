import argparse
import sys
from pathlib import Path

from smartconvert.config.settings import Settings
from smartconvert.logging.logger import Log
from smartconvert.processor.exceptions import MergeError, ProcessorError
from smartconvert.processor.models import FileStatus
from smartconvert.processor.processor import Processor, build_processor
from smartconvert.tools.registry import TOOLS, ToolId


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="smartconvert",
        description="Batch-convert documents and images with one of the built-in tools.",
    )
    parser.add_argument("tool", nargs="?", choices=[t.value for t in ToolId], help="tool id")
    parser.add_argument("files", nargs="*", type=Path, help="input files")
    parser.add_argument(
        "-o", "--output-dir", type=Path, default=Path("."), help="where results are written"
    )
    parser.add_argument(
        "--insight", action="store_true", help="summarize the first PDF (pdf-to-jpg only)"
    )
    parser.add_argument("--list", action="store_true", help="list available tools and exit")
    return parser


def list_tools() -> None:
    for tool in TOOLS:
        mode = "multiple" if tool.multiple else "single"
        print(f"{tool.id.value:<16} {tool.category:<8} {mode:<9} {tool.description}")


def run(processor: Processor, args: argparse.Namespace) -> int:
    """Process the given files and write the results. Returns the exit code."""
    processor.select_tool(args.tool)
    processor.add_paths(args.files)
    if not processor.files:
        Log.error("No acceptable input files")
        return 1

    if args.insight:
        insight = processor.analyze()
        if insight is not None:
            print(f"Summary: {insight.summary}")
            print("Keywords: " + " ".join(f"#{k}" for k in insight.keywords))

    try:
        processor.process()
    except MergeError as exc:
        print(f"Failed to generate PDF: {exc}", file=sys.stderr)
        return 1

    for entity in processor.files:
        line = f"{entity.status.value:<10} {entity.name}"
        if entity.status == FileStatus.ERROR:
            line += f": {entity.error_message}"
        print(line)
        if entity.text_result is not None:
            print(entity.text_result)

    delivery = processor.deliver()
    if delivery is not None:
        args.output_dir.mkdir(parents=True, exist_ok=True)
        target = args.output_dir / delivery.name
        target.write_bytes(delivery.data)
        print(f"Saved {target}")

    return 0 if any(e.status == FileStatus.COMPLETED for e in processor.files) else 1


def main(argv: list[str] | None = None) -> int:
    """Entry point: parse args -> configure logging -> build processor -> run."""
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.list:
        list_tools()
        return 0
    if args.tool is None or not args.files:
        parser.error("a tool id and at least one file are required")

    settings = Settings()
    Log.configure(settings.log_level)
    processor = build_processor(settings)
    try:
        return run(processor, args)
    except ProcessorError as exc:
        Log.error(str(exc))
        return 1


if __name__ == "__main__":
    sys.exit(main())
