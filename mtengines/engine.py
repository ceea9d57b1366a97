"""
Base MT Engine Interface
"""
import xml.etree.ElementTree as ET
from abc import ABC, abstractmethod
from typing import Dict, List, Optional, Sequence

from .errors import InvalidStateError, NotSupportedError
from .match import MTMatch


class MTEngine(ABC):
    """
    Abstract base class for machine translation engines.

    Source and target languages are plain per-instance configuration set after
    construction. Running calls with different languages concurrently on the
    same instance is not supported.
    """

    name: str = ""
    short_name: str = ""

    def __init__(self):
        self.src_lang = ""
        self.tgt_lang = ""

    def get_name(self) -> str:
        return self.name

    def get_short_name(self) -> str:
        return self.short_name

    @abstractmethod
    async def get_source_languages(self) -> List[str]:
        """Get supported source language codes"""
        pass

    @abstractmethod
    async def get_target_languages(self) -> List[str]:
        """Get supported target language codes"""
        pass

    def set_source_language(self, lang: str) -> None:
        self.src_lang = lang

    def get_source_language(self) -> str:
        return self.src_lang

    def set_target_language(self, lang: str) -> None:
        self.tgt_lang = lang

    def get_target_language(self) -> str:
        return self.tgt_lang

    @abstractmethod
    async def translate(self, text: str) -> str:
        """Translate plain text"""
        pass

    @abstractmethod
    async def get_mt_match(
        self,
        source: ET.Element,
        terms: Optional[Sequence[Dict[str, str]]] = None
    ) -> MTMatch:
        """Translate an XLIFF <source> element, optionally guided by terminology"""
        pass

    @abstractmethod
    def handles_tags(self) -> bool:
        """True if inline elements survive translation"""
        pass

    def fixes_matches(self) -> bool:
        return False

    async def fix_match(
        self,
        original_source: ET.Element,
        match_source: ET.Element,
        match_target: ET.Element
    ) -> MTMatch:
        """Translate original_source following the style of a known fuzzy match"""
        raise NotSupportedError(f"{self.short_name} does not fix matches")

    def fixes_tags(self) -> bool:
        return False

    async def fix_tags(self, source: ET.Element, target: ET.Element) -> ET.Element:
        """Restore inline elements that are present in source but missing in target"""
        raise NotSupportedError(f"{self.short_name} does not fix tags")

    def _require_languages(self) -> None:
        if not self.src_lang or not self.tgt_lang:
            raise InvalidStateError("Source and target languages must be set before translation")
