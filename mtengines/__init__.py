"""
mtengines

Uniform async adapters over machine translation providers:
- REST engines: Azure, Google, Yandex, DeepL, ModernMT
- LLM engines: ChatGPT, Anthropic Claude, Alibaba Qwen, Mistral
"""
from .engine import MTEngine
from .engines import ChatEngine, RestEngine
from .errors import (
    InvalidStateError,
    MalformedResponseError,
    MTError,
    NotSupportedError,
    TransportError,
)
from .match import MTMatch
from .registry import create_engine, get_available_engines

__all__ = [
    # Engines
    "MTEngine",
    "RestEngine",
    "ChatEngine",
    "create_engine",
    "get_available_engines",
    # Results
    "MTMatch",
    # Errors
    "MTError",
    "InvalidStateError",
    "TransportError",
    "MalformedResponseError",
    "NotSupportedError",
]
