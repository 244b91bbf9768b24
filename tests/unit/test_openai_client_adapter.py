from unittest.mock import MagicMock, patch

import httpx
import openai
import pytest

from smartconvert.insight.exceptions import InsightError, InsightNetworkError
from smartconvert.insight.openai_client_adapter import OpenAIClientAdapter


def _make_mock_response(content: str | None) -> MagicMock:
    choice = MagicMock()
    choice.message.content = content
    response = MagicMock()
    response.choices = [choice]
    return response


def _complete(mock_client: MagicMock) -> str:
    with patch(
        "smartconvert.insight.openai_client_adapter.openai.OpenAI",
        return_value=mock_client,
    ):
        adapter = OpenAIClientAdapter(api_key="k", timeout_seconds=30)
        return adapter.create_chat_completion(
            model="m",
            temperature=0.2,
            prompt="Summarize this",
            json_schema={"type": "object"},
        )


class TestOpenAIClientAdapter:
    def test_returns_content(self) -> None:
        mock_client = MagicMock()
        mock_client.chat.completions.create.return_value = _make_mock_response('{"ok": true}')
        assert _complete(mock_client) == '{"ok": true}'

    def test_sends_single_user_message_with_schema(self) -> None:
        mock_client = MagicMock()
        mock_client.chat.completions.create.return_value = _make_mock_response("{}")
        _complete(mock_client)
        kwargs = mock_client.chat.completions.create.call_args.kwargs
        assert kwargs["messages"] == [{"role": "user", "content": "Summarize this"}]
        assert kwargs["response_format"]["json_schema"]["schema"] == {"type": "object"}
        assert kwargs["model"] == "m"

    def test_client_is_built_without_retries(self) -> None:
        with patch("smartconvert.insight.openai_client_adapter.openai.OpenAI") as mock_openai:
            OpenAIClientAdapter(api_key="k", timeout_seconds=12, base_url="http://x/v1")
        mock_openai.assert_called_once_with(
            api_key="k", timeout=12, base_url="http://x/v1", max_retries=0
        )

    def test_raises_error_for_empty_content(self) -> None:
        mock_client = MagicMock()
        mock_client.chat.completions.create.return_value = _make_mock_response(None)
        with pytest.raises(InsightError, match="empty response"):
            _complete(mock_client)

    def test_raises_error_for_no_choices(self) -> None:
        mock_client = MagicMock()
        mock_client.chat.completions.create.return_value = MagicMock(choices=[])
        with pytest.raises(InsightError, match="no choices"):
            _complete(mock_client)

    def test_raises_network_error_on_connection_failure(self) -> None:
        mock_client = MagicMock()
        mock_client.chat.completions.create.side_effect = openai.APIConnectionError(
            request=MagicMock()
        )
        with pytest.raises(InsightNetworkError, match="network error"):
            _complete(mock_client)

    def test_raises_network_error_on_timeout(self) -> None:
        mock_client = MagicMock()
        mock_client.chat.completions.create.side_effect = httpx.TimeoutException("timeout")
        with pytest.raises(InsightNetworkError, match="network error"):
            _complete(mock_client)

    def test_raises_network_error_on_api_error(self) -> None:
        mock_client = MagicMock()
        mock_client.chat.completions.create.side_effect = openai.APIError(
            message="server error",
            request=MagicMock(),
            body=None,
        )
        with pytest.raises(InsightNetworkError, match="API error"):
            _complete(mock_client)
