"""
LLM chat translation engines (ChatGPT, Anthropic Claude, Alibaba Qwen, Mistral)

Every operation builds one prompt, sends one chat request through a
ChatClient and normalizes the answer. Vendor differences are described by a
ChatProvider.
"""
import xml.etree.ElementTree as ET
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple

from loguru import logger

from .. import normalizer, prompts
from ..clients import ChatClient, Message
from ..engine import MTEngine
from ..errors import InvalidStateError
from ..languages import get_common_languages
from ..match import MTMatch
from ..xml_utils import copy_space, new_target, plain_text

# Where the role sentence goes in the conversation
ROLE_SYSTEM = "system"
ROLE_ASSISTANT = "assistant"
ROLE_INLINE = "inline"  # prefixed to the user prompt

ModelInfo = Tuple[str, str]


@dataclass(frozen=True)
class ChatProvider:
    """Vendor descriptor for ChatEngine"""
    name: str
    short_name: str
    role_placement: str = ROLE_SYSTEM
    default_model: Optional[str] = None
    models: Tuple[ModelInfo, ...] = ()
    remote_models: bool = False  # ask the client for the model list
    handles_tags: bool = True
    fixes_matches: bool = True
    fixes_tags: bool = True


class ChatEngine(MTEngine):
    """Translation engine backed by a chat completion model"""

    def __init__(
        self,
        provider: ChatProvider,
        client: ChatClient,
        model: Optional[str] = None,
        models: Optional[Sequence[ModelInfo]] = None,
        languages: Optional[Dict[str, str]] = None
    ):
        """
        Initialize chat engine

        Args:
            provider: Vendor descriptor
            client: Chat client that talks to the vendor
            model: Model id, defaults to the provider default
            models: Model table overriding the provider's (used for per-region lists)
            languages: Language code -> display name table used in prompts
        """
        super().__init__()
        self.provider = provider
        self.client = client
        self.name = provider.name
        self.short_name = provider.short_name
        self.model = model or provider.default_model
        self.models = tuple(models) if models is not None else provider.models
        self.languages = languages

    def set_model(self, model: str) -> None:
        self.model = model

    def get_model(self) -> Optional[str]:
        return self.model

    def get_models(self) -> List[str]:
        """Known model ids, sorted"""
        return sorted(model_id for model_id, _ in self.models)

    async def get_available_models(self) -> List[ModelInfo]:
        """(model id, display name) pairs, from the vendor when it can list them"""
        if self.provider.remote_models:
            return await self.client.list_models()
        if not self.models:
            raise InvalidStateError(f"No models available for {self.short_name}")
        return list(self.models)

    async def get_source_languages(self) -> List[str]:
        return get_common_languages(self.languages)

    async def get_target_languages(self) -> List[str]:
        return get_common_languages(self.languages)

    def handles_tags(self) -> bool:
        return self.provider.handles_tags

    def fixes_matches(self) -> bool:
        return self.provider.fixes_matches

    def fixes_tags(self) -> bool:
        return self.provider.fixes_tags

    async def translate(self, text: str) -> str:
        self._require_ready()
        prompt = prompts.translate_prompt(text, self.src_lang, self.tgt_lang, self.languages)
        response = await self._complete(prompt)
        translation = normalizer.clean_text(response)
        return normalizer.restore_quotes(text, translation)

    async def get_mt_match(
        self,
        source: ET.Element,
        terms: Optional[Sequence[Dict[str, str]]] = None
    ) -> MTMatch:
        self._require_ready()
        if not self.handles_tags():
            translation = await self.translate(plain_text(source))
            return MTMatch(source=source, target=copy_space(source, new_target(translation)), origin=self.short_name)

        prompt = prompts.generate_prompt(source, self.src_lang, self.tgt_lang, terms, self.languages)
        response = await self._complete(prompt)
        target = copy_space(source, normalizer.to_target_element(response))
        return MTMatch(source=source, target=target, origin=self.short_name)

    async def fix_match(
        self,
        original_source: ET.Element,
        match_source: ET.Element,
        match_target: ET.Element
    ) -> MTMatch:
        if not self.fixes_matches():
            return await super().fix_match(original_source, match_source, match_target)
        self._require_ready()
        prompt = prompts.fix_match_prompt(
            original_source, match_source, match_target,
            self.src_lang, self.tgt_lang, self.languages,
        )
        response = await self._complete(prompt)
        target = copy_space(original_source, normalizer.to_target_element(response))
        return MTMatch(source=original_source, target=target, origin=self.short_name)

    async def fix_tags(self, source: ET.Element, target: ET.Element) -> ET.Element:
        if not self.fixes_tags():
            return await super().fix_tags(source, target)
        self._require_ready()
        prompt = prompts.fix_tags_prompt(source, target, self.src_lang, self.tgt_lang, self.languages)
        response = await self._complete(prompt)
        return copy_space(source, normalizer.to_target_element(response))

    def _require_ready(self) -> None:
        if not self.model:
            raise InvalidStateError("Model is not set")
        self._require_languages()

    def _messages(self, prompt: str) -> List[Message]:
        role = prompts.get_role(self.src_lang, self.tgt_lang, self.languages)
        if self.provider.role_placement == ROLE_INLINE:
            return [{"role": "user", "content": f"{role} {prompt}"}]
        return [
            {"role": self.provider.role_placement, "content": role},
            {"role": "user", "content": prompt},
        ]

    async def _complete(self, prompt: str) -> str:
        logger.debug(f"{self.short_name} request: model={self.model}, {self.src_lang}->{self.tgt_lang}, prompt_len={len(prompt)}")
        return await self.client.complete(self.model, self._messages(prompt))


CHATGPT = ChatProvider(
    name="ChatGPT API",
    short_name="ChatGPT",
    role_placement=ROLE_SYSTEM,
    default_model="gpt-4o-mini",
    models=(
        ("gpt-4o", "GPT-4o"),
        ("gpt-4o-mini", "GPT-4o mini"),
        ("gpt-4.1", "GPT-4.1"),
        ("gpt-4.1-mini", "GPT-4.1 mini"),
        ("gpt-4-turbo", "GPT-4 Turbo"),
        ("gpt-3.5-turbo", "GPT-3.5 Turbo"),
    ),
)

ANTHROPIC = ChatProvider(
    name="Anthropic Claude",
    short_name="Anthropic",
    role_placement=ROLE_INLINE,
    default_model="claude-3-5-sonnet-20241022",
    models=(
        ("claude-haiku-4-5-20251001", "Claude Haiku 4.5"),
        ("claude-sonnet-4-5-20250929", "Claude Sonnet 4.5"),
        ("claude-opus-4-1-20250805", "Claude Opus 4.1"),
        ("claude-opus-4-20250514", "Claude Opus 4"),
        ("claude-sonnet-4-20250514", "Claude Sonnet 4"),
        ("claude-3-7-sonnet-20250219", "Claude Sonnet 3.7"),
        ("claude-3-5-haiku-20241022", "Claude Haiku 3.5"),
        ("claude-3-5-sonnet-20241022", "Claude Sonnet 3.5"),
        ("claude-3-haiku-20240307", "Claude Haiku 3"),
        ("claude-3-opus-20240229", "Claude Opus 3"),
    ),
    remote_models=True,
)

ALIBABA = ChatProvider(
    name="Alibaba Translator",
    short_name="Alibaba",
    role_placement=ROLE_ASSISTANT,
)

MISTRAL = ChatProvider(
    name="Mistral AI",
    short_name="Mistral",
    role_placement=ROLE_SYSTEM,
    remote_models=True,
)

# OpenAI-compatible DashScope endpoints per region
ALIBABA_REGIONS: Dict[str, str] = {
    "Singapore": "https://dashscope-intl.aliyuncs.com/compatible-mode/v1",
    "Virginia": "https://dashscope-us.aliyuncs.com/compatible-mode/v1",
    "Beijing": "https://dashscope.aliyuncs.com/compatible-mode/v1",
}

ALIBABA_MODELS: Dict[str, Tuple[str, ...]] = {
    "Singapore": ("qwen-mt-plus", "qwen-mt-flash", "qwen-mt-lite", "qwen-mt-turbo"),
    "Virginia": ("qwen-mt-plus", "qwen-mt-flash", "qwen-mt-lite"),
    "Beijing": ("qwen-mt-plus", "qwen-mt-flash", "qwen-mt-lite", "qwen-mt-turbo"),
}


def get_alibaba_base_url(region: str) -> str:
    """Resolve the DashScope endpoint for a region"""
    if region not in ALIBABA_REGIONS:
        raise InvalidStateError(f"Unknown Alibaba region: {region}")
    return ALIBABA_REGIONS[region]


def get_alibaba_models(region: str) -> List[ModelInfo]:
    """Qwen MT models offered in a region, as (id, display name) pairs"""
    if region not in ALIBABA_MODELS:
        raise InvalidStateError(f"No models available for region: {region}")
    return [(model, model) for model in ALIBABA_MODELS[region]]
