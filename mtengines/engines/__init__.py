"""Translation engine implementations"""
from .chat import (
    ALIBABA,
    ANTHROPIC,
    CHATGPT,
    MISTRAL,
    ChatEngine,
    ChatProvider,
)
from .rest import (
    AZURE,
    DEEPL,
    GOOGLE,
    MODERNMT,
    YANDEX,
    RestEngine,
    RestProvider,
)

__all__ = [
    "ChatEngine",
    "ChatProvider",
    "RestEngine",
    "RestProvider",
    "AZURE",
    "GOOGLE",
    "YANDEX",
    "DEEPL",
    "MODERNMT",
    "CHATGPT",
    "ANTHROPIC",
    "ALIBABA",
    "MISTRAL",
]
