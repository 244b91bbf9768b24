from abc import ABC, abstractmethod


class BaseInsightClient(ABC):
    """Contract for provider-specific chat clients used by the summarizer."""

    @abstractmethod
    def create_chat_completion(
        self,
        *,
        model: str,
        temperature: float,
        prompt: str,
        json_schema: dict[str, object],
    ) -> str:
        """Return the provider's answer as plain text.

        Raises:
            InsightNetworkError: on transport or API failures.
            InsightError: when the provider returns no content.
        """
