from typing import Any

from smartconvert.insight.exceptions import InsightValidationError
from smartconvert.processor.models import DocumentInsight

_MAX_KEYWORDS = 10


def validate_and_build(data: dict[str, Any]) -> DocumentInsight:
    """Check the parsed model answer and build a DocumentInsight.

    Raises:
        InsightValidationError: if a field is missing or has the wrong type.
    """
    summary = data.get("summary")
    if not isinstance(summary, str) or not summary.strip():
        raise InsightValidationError("'summary' must be a non-empty string")

    keywords = data.get("keywords", [])
    if not isinstance(keywords, list):
        raise InsightValidationError("'keywords' must be a list")
    tags: list[str] = []
    for i, keyword in enumerate(keywords):
        if not isinstance(keyword, str):
            raise InsightValidationError(f"Keyword at index {i} must be a string")
        tag = keyword.strip().lstrip("#")
        if tag and tag not in tags:
            tags.append(tag)

    return DocumentInsight(summary=summary.strip(), keywords=tags[:_MAX_KEYWORDS])
