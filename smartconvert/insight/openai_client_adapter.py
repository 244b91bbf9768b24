import httpx
import openai

from smartconvert.insight.client_base import BaseInsightClient
from smartconvert.insight.exceptions import InsightError, InsightNetworkError


class OpenAIClientAdapter(BaseInsightClient):
    """Insight client built on the OpenAI-compatible chat completions API."""

    def __init__(
        self,
        *,
        api_key: str,
        timeout_seconds: int,
        base_url: str | None = None,
    ) -> None:
        self._client = openai.OpenAI(
            api_key=api_key,
            timeout=timeout_seconds,
            base_url=base_url,
            max_retries=0,
        )

    def create_chat_completion(
        self,
        *,
        model: str,
        temperature: float,
        prompt: str,
        json_schema: dict[str, object],
    ) -> str:
        try:
            response = self._client.chat.completions.create(
                model=model,
                temperature=temperature,
                response_format={
                    "type": "json_schema",
                    "json_schema": {
                        "name": "document_insight",
                        "strict": True,
                        "schema": json_schema,
                    },
                },
                messages=[{"role": "user", "content": prompt}],
            )
        except (openai.APIConnectionError, httpx.ConnectError, httpx.TimeoutException) as exc:
            raise InsightNetworkError(f"AI provider network error: {exc}") from exc
        except openai.APIError as exc:
            raise InsightNetworkError(f"AI provider API error: {exc}") from exc

        if not response.choices:
            raise InsightError("AI returned no choices")
        content = response.choices[0].message.content
        if not content:
            raise InsightError("AI returned empty response")
        return content
