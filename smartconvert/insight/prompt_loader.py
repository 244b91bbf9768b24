from pathlib import Path

from smartconvert.insight.exceptions import InsightError

_DEFAULT_PROMPT_DIR = Path(__file__).parent / "prompts"


def load_prompt_template(path: Path | None = None) -> str:
    """Load the insight prompt template.

    Args:
        path: Template file. Defaults to the bundled insight_prompt.txt.

    Raises:
        InsightError: if the file cannot be read.
    """
    if path is None:
        path = _DEFAULT_PROMPT_DIR / "insight_prompt.txt"
    try:
        return path.read_text(encoding="utf-8")
    except OSError as exc:
        raise InsightError(f"Failed to load prompt template: {exc}") from exc


def load_json_schema(path: Path | None = None) -> str:
    """Load the JSON schema the model answer must follow."""
    if path is None:
        path = _DEFAULT_PROMPT_DIR / "insight_schema.json"
    try:
        return path.read_text(encoding="utf-8")
    except OSError as exc:
        raise InsightError(f"Failed to load JSON schema: {exc}") from exc
