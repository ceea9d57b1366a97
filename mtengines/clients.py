"""
Chat clients used by LLM engines.

Each client exposes the same narrow interface: send a list of chat messages to
a model and get the answer text back. Engines never touch vendor SDK objects
directly, so tests can substitute a fake client.
"""
import asyncio
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Tuple

import anthropic
import httpx
import openai
from loguru import logger

from .config import settings
from .errors import InvalidStateError, MalformedResponseError, NotSupportedError, TransportError
from .transport import request_json

Message = Dict[str, str]


class ChatClient(ABC):
    """Abstract chat completion client"""

    @abstractmethod
    async def complete(self, model: str, messages: List[Message]) -> str:
        """Send messages to a model and return the answer text"""
        pass

    async def list_models(self) -> List[Tuple[str, str]]:
        """List (model id, display name) pairs offered by the vendor"""
        raise NotSupportedError(f"{type(self).__name__} cannot list models")


class OpenAIChatClient(ChatClient):
    """OpenAI SDK client; also serves OpenAI-compatible endpoints via base_url"""

    def __init__(self, api_key: str, base_url: Optional[str] = None):
        self.api_key = api_key
        self.base_url = base_url
        self._client = openai.OpenAI(
            api_key=api_key,
            base_url=base_url,
            timeout=settings.HTTP_TIMEOUT,
        )

    async def complete(self, model: str, messages: List[Message]) -> str:
        try:
            response = await asyncio.get_event_loop().run_in_executor(
                None,
                lambda: self._client.chat.completions.create(
                    model=model,
                    messages=messages,
                )
            )
        except openai.APIError as e:
            logger.error(f"OpenAI request failed: {e}")
            raise TransportError(getattr(e, "status_code", None), str(e)) from e

        if not response.choices:
            raise MalformedResponseError("OpenAI response has no choices")
        return response.choices[0].message.content or ""


class AnthropicChatClient(ChatClient):
    """Anthropic SDK client. System messages are sent as the system prompt."""

    def __init__(self, api_key: str, max_tokens: Optional[int] = None):
        self.api_key = api_key
        self.max_tokens = max_tokens or settings.ANTHROPIC_MAX_TOKENS
        self._client = anthropic.Anthropic(api_key=api_key, timeout=settings.HTTP_TIMEOUT)

    async def complete(self, model: str, messages: List[Message]) -> str:
        system = "\n".join(m["content"] for m in messages if m["role"] == "system")
        kwargs: Dict[str, Any] = {
            "model": model,
            "max_tokens": self.max_tokens,
            "messages": [m for m in messages if m["role"] != "system"],
        }
        if system:
            kwargs["system"] = system

        try:
            response = await asyncio.get_event_loop().run_in_executor(
                None,
                lambda: self._client.messages.create(**kwargs)
            )
        except anthropic.APIError as e:
            logger.error(f"Anthropic request failed: {e}")
            raise TransportError(getattr(e, "status_code", None), str(e)) from e

        if not response.content:
            raise MalformedResponseError("Anthropic response has no content")
        return response.content[0].text

    async def list_models(self) -> List[Tuple[str, str]]:
        try:
            page = await asyncio.get_event_loop().run_in_executor(
                None,
                lambda: self._client.models.list()
            )
        except anthropic.APIError as e:
            logger.error(f"Anthropic model listing failed: {e}")
            raise TransportError(getattr(e, "status_code", None), str(e)) from e
        return [(model.id, model.display_name or model.id) for model in page.data]


class MistralChatClient(ChatClient):
    """Mistral chat completions over plain HTTP"""

    BASE_URL = "https://api.mistral.ai/v1"

    def __init__(self, api_key: str, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.api_key = api_key
        self._transport = transport

    def _headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }

    async def complete(self, model: str, messages: List[Message]) -> str:
        data = await request_json(
            "POST",
            f"{self.BASE_URL}/chat/completions",
            headers=self._headers(),
            json={"model": model, "messages": messages},
            transport=self._transport,
        )
        try:
            return data["choices"][0]["message"]["content"] or ""
        except (KeyError, IndexError, TypeError) as e:
            raise MalformedResponseError(f"Unexpected Mistral response: {e}") from e

    async def list_models(self) -> List[Tuple[str, str]]:
        if not self.api_key:
            raise InvalidStateError("API key is not set")
        data = await request_json(
            "GET",
            f"{self.BASE_URL}/models",
            headers=self._headers(),
            transport=self._transport,
        )
        try:
            return [(m["id"], m.get("name") or m["id"]) for m in data["data"]]
        except (KeyError, TypeError) as e:
            raise MalformedResponseError(f"Unexpected Mistral models response: {e}") from e
