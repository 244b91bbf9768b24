"""Offline insight client.

Returns a canned answer built from the prompt so the insight flow can be
exercised without credentials or network access.
"""

import json

from smartconvert.insight.client_base import BaseInsightClient


class ExampleClientAdapter(BaseInsightClient):
    """Answers with the first sentence of the document text and no keywords."""

    def create_chat_completion(
        self,
        *,
        model: str,
        temperature: float,
        prompt: str,
        json_schema: dict[str, object],
    ) -> str:
        _ = model, temperature, json_schema
        _, _, text = prompt.partition("Text Content:")
        first_line = next((line.strip() for line in text.splitlines() if line.strip()), "")
        return json.dumps({"summary": first_line[:200], "keywords": []})
