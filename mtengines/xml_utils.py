"""
XML helpers for XLIFF <source>/<target> elements.

Elements are plain xml.etree.ElementTree elements; inline markup is kept as
child elements with their tails. Elements taken from a parsed XLIFF document
carry the XLIFF namespace in their tags; serialization drops it so prompts and
vendor requests see bare <source>, <pc>, <ph> markup.
"""
import copy
import xml.etree.ElementTree as ET
from xml.sax.saxutils import escape

from .errors import MalformedResponseError

XML_SPACE = "{http://www.w3.org/XML/1998/namespace}space"

# XLIFF 1.2 and 2.x document namespaces share this prefix
XLIFF_NAMESPACE_PREFIX = "{urn:oasis:names:tc:xliff:document:"


def without_namespace(element: ET.Element) -> ET.Element:
    """Deep copy of an element with XLIFF namespaces removed from every tag"""
    detached = copy.deepcopy(element)
    for node in detached.iter():
        if isinstance(node.tag, str) and node.tag.startswith(XLIFF_NAMESPACE_PREFIX):
            node.tag = node.tag.split("}", 1)[1]
    return detached


def element_content(element: ET.Element) -> str:
    """Serialized inner content of an element: text plus inline elements"""
    parts = [escape(element.text or "")]
    for child in without_namespace(element):
        # tostring() includes the child's tail
        parts.append(ET.tostring(child, encoding="unicode"))
    return "".join(parts)


def plain_text(element: ET.Element) -> str:
    """Text of an element with all inline markup flattened"""
    return "".join(element.itertext())


def to_string(element: ET.Element) -> str:
    """Serialize an element without its tail, its XLIFF namespace or an XML declaration"""
    detached = without_namespace(element)
    detached.tail = None
    return ET.tostring(detached, encoding="unicode")


def to_xml_element(text: str) -> ET.Element:
    """Parse a string into an element, raising MalformedResponseError on failure"""
    try:
        root = ET.fromstring(text)
    except ET.ParseError as e:
        raise MalformedResponseError(f"Invalid XML: {e}") from e
    if root is None:
        raise MalformedResponseError("No root element found")
    return root


def new_target(text: str) -> ET.Element:
    """Build a <target> element holding plain text"""
    target = ET.Element("target")
    target.text = text
    return target


def copy_space(source: ET.Element, target: ET.Element) -> ET.Element:
    """Propagate xml:space from source to target, if present"""
    space = source.get(XML_SPACE)
    if space is not None:
        target.set(XML_SPACE, space)
    return target
