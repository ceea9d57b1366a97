"""
Unit Tests for chat clients
"""

from types import SimpleNamespace
from unittest.mock import Mock

import anthropic
import httpx
import openai
import pytest

from mtengines.clients import AnthropicChatClient, MistralChatClient, OpenAIChatClient
from mtengines.errors import InvalidStateError, MalformedResponseError, NotSupportedError, TransportError

MESSAGES = [
    {"role": "system", "content": "You are a translator."},
    {"role": "user", "content": "Translate: Hello"},
]


class TestOpenAIChatClient:

    @pytest.mark.asyncio
    async def test_complete(self):
        client = OpenAIChatClient("sk-test")
        response = SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content="Hola"))])
        client._client = Mock()
        client._client.chat.completions.create.return_value = response

        assert await client.complete("gpt-4o-mini", MESSAGES) == "Hola"
        client._client.chat.completions.create.assert_called_once_with(
            model="gpt-4o-mini",
            messages=MESSAGES,
        )

    @pytest.mark.asyncio
    async def test_empty_choices(self):
        client = OpenAIChatClient("sk-test")
        client._client = Mock()
        client._client.chat.completions.create.return_value = SimpleNamespace(choices=[])

        with pytest.raises(MalformedResponseError):
            await client.complete("gpt-4o-mini", MESSAGES)

    @pytest.mark.asyncio
    async def test_api_error(self):
        client = OpenAIChatClient("sk-test")
        client._client = Mock()
        request = httpx.Request("POST", "https://api.openai.com/v1/chat/completions")
        client._client.chat.completions.create.side_effect = openai.APIConnectionError(request=request)

        with pytest.raises(TransportError):
            await client.complete("gpt-4o-mini", MESSAGES)

    def test_base_url(self):
        client = OpenAIChatClient("sk-test", base_url="https://dashscope-intl.aliyuncs.com/compatible-mode/v1")

        assert str(client._client.base_url).startswith("https://dashscope-intl.aliyuncs.com")

    @pytest.mark.asyncio
    async def test_list_models_not_supported(self):
        client = OpenAIChatClient("sk-test")
        client._client = Mock()

        with pytest.raises(NotSupportedError):
            await client.list_models()
        client._client.models.list.assert_not_called()


class TestAnthropicChatClient:

    @pytest.mark.asyncio
    async def test_complete_sends_system_separately(self):
        client = AnthropicChatClient("sk-ant", max_tokens=512)
        client._client = Mock()
        client._client.messages.create.return_value = SimpleNamespace(content=[SimpleNamespace(text="Hola")])

        assert await client.complete("claude-3-5-sonnet-20241022", MESSAGES) == "Hola"
        client._client.messages.create.assert_called_once_with(
            model="claude-3-5-sonnet-20241022",
            max_tokens=512,
            messages=[{"role": "user", "content": "Translate: Hello"}],
            system="You are a translator.",
        )

    @pytest.mark.asyncio
    async def test_complete_without_system(self):
        client = AnthropicChatClient("sk-ant")
        client._client = Mock()
        client._client.messages.create.return_value = SimpleNamespace(content=[SimpleNamespace(text="Hola")])

        await client.complete("claude-3-5-sonnet-20241022", MESSAGES[1:])

        assert "system" not in client._client.messages.create.call_args.kwargs

    @pytest.mark.asyncio
    async def test_api_error(self):
        client = AnthropicChatClient("sk-ant")
        client._client = Mock()
        request = httpx.Request("POST", "https://api.anthropic.com/v1/messages")
        client._client.messages.create.side_effect = anthropic.APIConnectionError(request=request)

        with pytest.raises(TransportError):
            await client.complete("claude-3-5-sonnet-20241022", MESSAGES)

    @pytest.mark.asyncio
    async def test_list_models(self):
        client = AnthropicChatClient("sk-ant")
        client._client = Mock()
        client._client.models.list.return_value = SimpleNamespace(data=[
            SimpleNamespace(id="claude-sonnet-4-20250514", display_name="Claude Sonnet 4"),
            SimpleNamespace(id="claude-3-haiku-20240307", display_name=""),
        ])

        models = await client.list_models()

        assert models == [
            ("claude-sonnet-4-20250514", "Claude Sonnet 4"),
            ("claude-3-haiku-20240307", "claude-3-haiku-20240307"),
        ]
        client._client.models.list.assert_called_once_with()

    @pytest.mark.asyncio
    async def test_list_models_api_error(self):
        client = AnthropicChatClient("sk-ant")
        client._client = Mock()
        request = httpx.Request("GET", "https://api.anthropic.com/v1/models")
        client._client.models.list.side_effect = anthropic.APIConnectionError(request=request)

        with pytest.raises(TransportError):
            await client.list_models()


class TestMistralChatClient:

    @pytest.mark.asyncio
    async def test_complete(self, json_transport):
        transport = json_transport({"choices": [{"message": {"role": "assistant", "content": "Hola"}}]})
        client = MistralChatClient("key", transport=transport)

        assert await client.complete("mistral-small-latest", MESSAGES) == "Hola"

        request = transport.requests[0]
        assert str(request.url) == "https://api.mistral.ai/v1/chat/completions"
        assert request.headers["Authorization"] == "Bearer key"
        assert transport.last_json() == {"model": "mistral-small-latest", "messages": MESSAGES}

    @pytest.mark.asyncio
    async def test_complete_malformed(self, json_transport):
        client = MistralChatClient("key", transport=json_transport({"choices": []}))

        with pytest.raises(MalformedResponseError):
            await client.complete("mistral-small-latest", MESSAGES)

    @pytest.mark.asyncio
    async def test_rate_limited(self, json_transport):
        client = MistralChatClient("key", transport=json_transport({"message": "slow down"}, status_code=429))

        with pytest.raises(TransportError) as exc_info:
            await client.complete("mistral-small-latest", MESSAGES)
        assert exc_info.value.status_code == 429

    @pytest.mark.asyncio
    async def test_list_models(self, json_transport):
        transport = json_transport({"data": [
            {"id": "mistral-large-latest", "name": "Mistral Large"},
            {"id": "open-mistral-nemo", "name": None},
        ]})
        client = MistralChatClient("key", transport=transport)

        assert await client.list_models() == [
            ("mistral-large-latest", "Mistral Large"),
            ("open-mistral-nemo", "open-mistral-nemo"),
        ]
        assert transport.requests[0].url.path == "/v1/models"

    @pytest.mark.asyncio
    async def test_list_models_requires_key(self, json_transport):
        transport = json_transport({"data": []})
        client = MistralChatClient("", transport=transport)

        with pytest.raises(InvalidStateError):
            await client.list_models()
        assert transport.requests == []
