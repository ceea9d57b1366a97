"""
Engine registry

Builds any supported engine from an id, an API key and optional model/region.
"""
from typing import Dict, List, Optional

from loguru import logger

from .clients import AnthropicChatClient, MistralChatClient, OpenAIChatClient
from .config import settings
from .engine import MTEngine
from .engines.chat import (
    ALIBABA,
    ANTHROPIC,
    CHATGPT,
    MISTRAL,
    ChatEngine,
    get_alibaba_base_url,
    get_alibaba_models,
)
from .engines.rest import REST_PROVIDERS, RestEngine

SUPPORTED_ENGINES = {
    "azure": {
        "name": "Azure Translator Text",
        "description": "Microsoft Translator REST API v3",
        "kind": "rest",
        "handles_tags": False,
    },
    "google": {
        "name": "Google Cloud Translation",
        "description": "Google Cloud Translation API v2",
        "kind": "rest",
        "handles_tags": False,
    },
    "yandex": {
        "name": "Yandex Translate API",
        "description": "Yandex Cloud Translate API v2",
        "kind": "rest",
        "handles_tags": False,
    },
    "deepl": {
        "name": "DeepL API",
        "description": "DeepL API with XML tag handling",
        "kind": "rest",
        "handles_tags": True,
    },
    "modernmt": {
        "name": "ModernMT",
        "description": "ModernMT adaptive translation API",
        "kind": "rest",
        "handles_tags": True,
    },
    "chatgpt": {
        "name": "ChatGPT API",
        "description": "OpenAI chat models",
        "kind": "chat",
        "handles_tags": True,
    },
    "anthropic": {
        "name": "Anthropic Claude",
        "description": "Anthropic Claude models",
        "kind": "chat",
        "handles_tags": True,
    },
    "alibaba": {
        "name": "Alibaba Translator",
        "description": "Qwen MT models through DashScope",
        "kind": "chat",
        "handles_tags": True,
    },
    "mistral": {
        "name": "Mistral AI",
        "description": "Mistral chat models",
        "kind": "chat",
        "handles_tags": True,
    },
}

# Settings field holding the fallback key for each engine
_KEY_SETTINGS = {
    "azure": "AZURE_API_KEY",
    "google": "GOOGLE_API_KEY",
    "yandex": "YANDEX_API_KEY",
    "deepl": "DEEPL_API_KEY",
    "modernmt": "MODERNMT_API_KEY",
    "chatgpt": "OPENAI_API_KEY",
    "anthropic": "ANTHROPIC_API_KEY",
    "alibaba": "ALIBABA_API_KEY",
    "mistral": "MISTRAL_API_KEY",
}


def create_engine(
    engine: str,
    api_key: Optional[str] = None,
    model: Optional[str] = None,
    region: Optional[str] = None,
    neural: bool = True,
    languages: Optional[Dict[str, str]] = None
) -> MTEngine:
    """
    Create a translation engine

    Args:
        engine: Engine id (azure, google, yandex, deepl, modernmt, chatgpt, anthropic, alibaba, mistral)
        api_key: API key, defaults to the matching MT_*_API_KEY setting
        model: Model id for LLM engines
        region: Azure resource region or Alibaba region (Singapore, Virginia, Beijing)
        neural: Google only, use the NMT model instead of the base one
        languages: Language display-name table for LLM prompts

    Returns:
        Configured engine without source/target languages
    """
    if engine not in SUPPORTED_ENGINES:
        raise ValueError(f"Unknown engine: {engine}")

    api_key = api_key or getattr(settings, _KEY_SETTINGS[engine]) or ""
    if not api_key:
        logger.warning(f"{engine} API key not configured")

    if engine in REST_PROVIDERS:
        if engine == "azure":
            region = region or settings.AZURE_REGION
        result: MTEngine = RestEngine(REST_PROVIDERS[engine], api_key, region=region, neural=neural)
    elif engine == "chatgpt":
        result = ChatEngine(CHATGPT, OpenAIChatClient(api_key), model or settings.OPENAI_MODEL, languages=languages)
    elif engine == "anthropic":
        result = ChatEngine(ANTHROPIC, AnthropicChatClient(api_key), model or settings.ANTHROPIC_MODEL, languages=languages)
    elif engine == "alibaba":
        if not region:
            raise ValueError("Alibaba engine requires a region")
        client = OpenAIChatClient(api_key, base_url=get_alibaba_base_url(region))
        result = ChatEngine(ALIBABA, client, model, models=get_alibaba_models(region), languages=languages)
    else:
        result = ChatEngine(MISTRAL, MistralChatClient(api_key), model, languages=languages)

    logger.info(f"Initialized engine: {result.get_name()}")
    return result


def get_available_engines() -> List[dict]:
    """Get list of available translation engines"""
    return [
        {"id": key, **value}
        for key, value in SUPPORTED_ENGINES.items()
    ]
