"""
Response normalization for LLM engines.

Chat models wrap answers in quotes or Markdown code fences and sometimes
omit the <target> wrapper. These helpers undo that before parsing.
"""
import xml.etree.ElementTree as ET

from loguru import logger

from .xml_utils import to_xml_element

CODE_FENCE = "```"


def strip_leading_blank_line(text: str) -> str:
    """Remove a single leading blank line"""
    if text.startswith("\n\n"):
        return text[2:]
    return text


def strip_quotes(text: str) -> str:
    """Remove matching wrapping double quotes, repeatedly"""
    while len(text) >= 2 and text.startswith('"') and text.endswith('"'):
        text = text[1:-1]
    return text


def strip_code_fence(text: str) -> str:
    """Remove a wrapping ``` or ```xml fence"""
    stripped = text.strip()
    if (
        len(stripped) >= 2 * len(CODE_FENCE)
        and stripped.startswith(CODE_FENCE)
        and stripped.endswith(CODE_FENCE)
    ):
        inner = stripped[len(CODE_FENCE):-len(CODE_FENCE)]
        if inner.startswith("xml"):
            inner = inner[3:]
        return inner.strip()
    return text


def ensure_target(text: str) -> str:
    """Wrap text in <target> unless it already starts or ends like a <target> element"""
    stripped = text.strip()
    if stripped.startswith("<target") or stripped.endswith("</target>"):
        return stripped
    logger.warning("Model response has no <target> wrapper, wrapping it")
    return f"<target>{stripped}</target>"


def clean_text(response: str) -> str:
    """Normalize a raw response that should contain plain text"""
    text = strip_leading_blank_line(response)
    text = strip_quotes(text)
    return strip_code_fence(text)


def clean_xml(response: str) -> str:
    """Normalize a raw response that should contain a <target> element"""
    return ensure_target(clean_text(response.strip()))


def to_target_element(response: str) -> ET.Element:
    """
    Turn a raw model response into a <target> element.

    Raises:
        MalformedResponseError: when the cleaned text is not well-formed XML
    """
    return to_xml_element(clean_xml(response))


def restore_quotes(source: str, translation: str) -> str:
    """Re-wrap the translation in double quotes when the source was quoted"""
    if len(source) >= 2 and source.startswith('"') and source.endswith('"'):
        return f'"{translation}"'
    return translation
