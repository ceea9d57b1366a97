"""
Prompt templates for LLM-based engines.

Four prompt shapes are supported: plain translation, match generation for an
XLIFF <source> element, fixing a fuzzy match and repairing missing inline tags.
"""
import xml.etree.ElementTree as ET
from typing import Dict, List, Optional, Sequence

from .languages import get_language_name
from .xml_utils import to_string

Term = Dict[str, str]

ROLE_TEMPLATE = (
    "You are an expert translator from {source_lang} to {target_lang}, "
    "familiar with the XLIFF 2.1 format and its inline elements."
)

TRANSLATE_TEMPLATE = (
    'Translate the text enclosed in triple quotes from "{source_lang}" to "{target_lang}". '
    "Return only the translation, without quotes, notes or explanations: "
    '"""{text}"""'
)

GENERATE_TEMPLATE = """Translate the following XLIFF <source> element from {source_lang} to {target_lang}.

RULES:
1. Return a single <target> element containing the translation and nothing else.
2. Keep every inline element (<ph>, <pc>, <sc>, <ec>, <mrk>, <sm>, <em>, <cp>) with its attributes unchanged.
3. Place inline elements where they belong in the translated sentence.
4. Do not wrap the answer in code blocks.
{terminology_section}
Source element:
{source}"""

TERMINOLOGY_TEMPLATE = """
TERMINOLOGY:
Use these translations for the listed terms, adapting gender and number to the sentence:
{terms}
"""

FIX_MATCH_TEMPLATE = """A previous translation exists for a similar {source_lang} text.

Similar source:
{match_source}

Its {target_lang} translation:
{match_target}

Translate the following <source> element into {target_lang} reusing the wording and style of the previous translation where the texts agree.
Keep every inline element with its attributes unchanged.
Return a single <target> element and nothing else. Do not wrap the answer in code blocks.

Source element:
{original_source}"""

FIX_TAGS_TEMPLATE = """The following {target_lang} <target> element is a translation of the {source_lang} <source> element below, but some inline elements are missing or misplaced.

Source element:
{source}

Target element:
{target}

Return the <target> element with all inline elements from the source restored at the right positions.
Do not translate the text again and do not change the attributes of inline elements.
Return a single <target> element and nothing else. Do not wrap the answer in code blocks."""


def get_role(source_lang: str, target_lang: str, languages: Optional[Dict[str, str]] = None) -> str:
    """Role sentence describing the translator persona"""
    return ROLE_TEMPLATE.format(
        source_lang=get_language_name(source_lang, languages),
        target_lang=get_language_name(target_lang, languages),
    )


def translate_prompt(
    text: str,
    source_lang: str,
    target_lang: str,
    languages: Optional[Dict[str, str]] = None
) -> str:
    """Prompt for plain text translation"""
    return TRANSLATE_TEMPLATE.format(
        source_lang=get_language_name(source_lang, languages),
        target_lang=get_language_name(target_lang, languages),
        text=text,
    )


def build_terminology_section(terms: Optional[Sequence[Term]]) -> str:
    """Render terminology pairs, empty string when there are none"""
    if not terms:
        return ""
    lines: List[str] = [f"- {term['source']} → {term['target']}" for term in terms]
    return TERMINOLOGY_TEMPLATE.format(terms="\n".join(lines))


def generate_prompt(
    source: ET.Element,
    source_lang: str,
    target_lang: str,
    terms: Optional[Sequence[Term]] = None,
    languages: Optional[Dict[str, str]] = None
) -> str:
    """Prompt asking for a <target> element for an XLIFF <source> element"""
    return GENERATE_TEMPLATE.format(
        source_lang=get_language_name(source_lang, languages),
        target_lang=get_language_name(target_lang, languages),
        terminology_section=build_terminology_section(terms),
        source=to_string(source),
    )


def fix_match_prompt(
    original_source: ET.Element,
    match_source: ET.Element,
    match_target: ET.Element,
    source_lang: str,
    target_lang: str,
    languages: Optional[Dict[str, str]] = None
) -> str:
    """Prompt asking to translate a source in the style of a known fuzzy match"""
    return FIX_MATCH_TEMPLATE.format(
        source_lang=get_language_name(source_lang, languages),
        target_lang=get_language_name(target_lang, languages),
        match_source=to_string(match_source),
        match_target=to_string(match_target),
        original_source=to_string(original_source),
    )


def fix_tags_prompt(
    source: ET.Element,
    target: ET.Element,
    source_lang: str,
    target_lang: str,
    languages: Optional[Dict[str, str]] = None
) -> str:
    """Prompt asking to restore inline elements missing from a target"""
    return FIX_TAGS_TEMPLATE.format(
        source_lang=get_language_name(source_lang, languages),
        target_lang=get_language_name(target_lang, languages),
        source=to_string(source),
        target=to_string(target),
    )
