from typing import ClassVar

from smartconvert.config.settings import Settings
from smartconvert.insight.example_client_adapter import ExampleClientAdapter
from smartconvert.insight.openai_client_adapter import OpenAIClientAdapter
from smartconvert.insight.summarizer import DocumentSummarizer
from smartconvert.processor.exceptions import ConfigError


class SummarizerFactory:
    """Creates the configured document summarizer."""

    OPENAI_COMPATIBLE_BASE_URLS: ClassVar[dict[str, str]] = {
        "openrouter": "https://openrouter.ai/api/v1",
        "groq": "https://api.groq.com/openai/v1",
        "together": "https://api.together.xyz/v1",
        "deepseek": "https://api.deepseek.com/v1",
        "ollama": "http://localhost:11434/v1",
    }

    # Local servers accept any key.
    KEYLESS_PROVIDERS: ClassVar[frozenset[str]] = frozenset({"ollama"})

    @classmethod
    def create(cls, settings: Settings) -> DocumentSummarizer:
        """Create a summarizer from settings.

        Raises:
            ConfigError: if the provider is unknown or needs a key that is
                not configured.
        """
        provider = settings.insight_provider.lower()
        if provider == "example":
            return DocumentSummarizer(client=ExampleClientAdapter(), model="example")

        base_url = cls._resolve_base_url(provider, settings)
        api_key = settings.insight_api_key.strip()
        if not api_key:
            if provider not in cls.KEYLESS_PROVIDERS:
                raise ConfigError(f"insight_api_key is not set for provider '{provider}'")
            api_key = provider

        client = OpenAIClientAdapter(
            api_key=api_key,
            timeout_seconds=settings.insight_timeout_seconds,
            base_url=base_url,
        )
        return DocumentSummarizer(
            client=client,
            model=settings.insight_model_name,
            temperature=settings.insight_temperature,
            max_chars=settings.insight_max_chars,
        )

    @classmethod
    def _resolve_base_url(cls, provider: str, settings: Settings) -> str | None:
        if provider == "openai":
            return settings.insight_base_url.strip() or None
        if provider == "openai_compatible":
            url = settings.insight_base_url.strip()
            if not url:
                raise ConfigError(
                    "insight_base_url is required for insight_provider=openai_compatible"
                )
            return url
        default_base_url = cls.OPENAI_COMPATIBLE_BASE_URLS.get(provider)
        if default_base_url is not None:
            return default_base_url
        supported = [
            "example",
            "openai",
            "openai_compatible",
            *sorted(cls.OPENAI_COMPATIBLE_BASE_URLS),
        ]
        raise ConfigError(f"Unknown insight provider '{provider}'. Choose from: {supported}")
