"""AI-powered document summary and topic tags."""

import json
from pathlib import Path

from smartconvert.insight.client_base import BaseInsightClient
from smartconvert.insight.exceptions import InsightError
from smartconvert.insight.prompt_loader import load_json_schema, load_prompt_template
from smartconvert.insight.validator import validate_and_build
from smartconvert.logging.logger import Log
from smartconvert.processor.models import DocumentInsight


class DocumentSummarizer:
    """Summarizes document text through an AI provider.

    Never raises for provider or parsing problems: summarize() returns None
    instead, so the insight stays absent and the pipeline is unaffected.
    """

    def __init__(
        self,
        *,
        client: BaseInsightClient,
        model: str,
        temperature: float = 0.2,
        max_chars: int = 10_000,
        keyword_count: int = 5,
        prompt_template_path: Path | None = None,
        json_schema_path: Path | None = None,
    ) -> None:
        self._client = client
        self._model = model
        self._temperature = max(0.0, min(1.0, temperature))
        self._max_chars = max_chars
        self._keyword_count = keyword_count
        self._prompt_template = load_prompt_template(prompt_template_path)
        self._json_schema = json.loads(load_json_schema(json_schema_path))

    def summarize(self, text: str) -> DocumentInsight | None:
        if not text.strip():
            Log.info("No text to summarize")
            return None
        try:
            return self._summarize(text)
        except InsightError as exc:
            Log.warning(f"Document insight unavailable: {exc}")
            return None

    def _summarize(self, text: str) -> DocumentInsight:
        prompt = self._prompt_template.format(
            keyword_count=self._keyword_count,
            document_text=text[: self._max_chars],
        )
        Log.debug(f"Insight prompt:\n{prompt}")

        raw_response = self._client.create_chat_completion(
            model=self._model,
            temperature=self._temperature,
            prompt=prompt,
            json_schema=self._json_schema,
        )
        Log.debug(f"AI raw response:\n{raw_response}")

        insight = validate_and_build(self._parse_json(raw_response))
        Log.info(f"Document insight ready: {len(insight.keywords)} keywords")
        return insight

    @staticmethod
    def _parse_json(raw: str) -> dict[str, object]:
        cleaned = raw.strip()
        if cleaned.startswith("```"):
            lines = cleaned.splitlines()[1:]
            if lines and lines[-1].strip() == "```":
                lines = lines[:-1]
            cleaned = "\n".join(lines)

        try:
            parsed = json.loads(cleaned)
        except json.JSONDecodeError as exc:
            raise InsightError(f"Invalid JSON response: {exc}") from exc

        if not isinstance(parsed, dict):
            raise InsightError("JSON response must be an object")
        return parsed
