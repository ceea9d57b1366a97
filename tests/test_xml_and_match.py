"""
Unit Tests for XML helpers and MTMatch
"""

import pytest

from mtengines.errors import MalformedResponseError
from mtengines.match import MTMatch
from mtengines.xml_utils import (
    XML_SPACE,
    copy_space,
    element_content,
    new_target,
    plain_text,
    to_string,
    to_xml_element,
)


class TestXmlUtils:
    """Tests for element helpers"""

    def test_element_content_keeps_inline_elements(self):
        source = to_xml_element('<source>Click <pc id="1">here</pc> &amp; wait</source>')

        assert element_content(source) == 'Click <pc id="1">here</pc> &amp; wait'

    def test_plain_text_flattens_inline_elements(self):
        source = to_xml_element('<source>Click <pc id="1">here</pc> now<ph id="2"/></source>')

        assert plain_text(source) == "Click here now"

    def test_to_string_drops_tail(self):
        parent = to_xml_element("<unit><source>Hello</source> trailing</unit>")
        source = parent.find("source")

        assert to_string(source) == "<source>Hello</source>"
        assert source.tail == " trailing"

    def test_invalid_xml_raises(self):
        with pytest.raises(MalformedResponseError):
            to_xml_element("<target>unclosed")

    def test_new_target_escapes_text(self):
        target = new_target("a < b")

        assert to_string(target) == "<target>a &lt; b</target>"

    def test_copy_space(self):
        source = to_xml_element('<source xml:space="preserve">  x  </source>')
        target = copy_space(source, new_target("y"))

        assert target.get(XML_SPACE) == "preserve"
        assert to_string(target) == '<target xml:space="preserve">y</target>'

    def test_copy_space_without_attribute(self):
        source = to_xml_element("<source>x</source>")
        target = copy_space(source, new_target("y"))

        assert XML_SPACE not in target.attrib


class TestMTMatch:
    """Tests for the match value object"""

    def test_to_dict_reproduces_markup(self):
        source_xml = '<source>Hello <pc id="1">world</pc></source>'
        target_xml = '<target>Hola <pc id="1">mundo</pc></target>'
        match = MTMatch(to_xml_element(source_xml), to_xml_element(target_xml), "DeepL")

        assert match.to_dict() == {
            "source": source_xml,
            "target": target_xml,
            "origin": "DeepL",
        }

    def test_from_dict(self):
        data = {"source": "<source>a</source>", "target": "<target>b</target>", "origin": "Google"}

        match = MTMatch.from_dict(data)

        assert match.origin == "Google"
        assert match.to_dict() == data

    def test_is_immutable(self):
        match = MTMatch(new_target("a"), new_target("b"), "Azure")

        with pytest.raises(AttributeError):
            match.origin = "Other"


XLIFF_DOC = (
    '<xliff xmlns="urn:oasis:names:tc:xliff:document:2.0" version="2.0" srcLang="en" trgLang="es">'
    '<file id="f1"><unit id="u1"><segment>'
    '<source xml:space="preserve">Click <pc id="1">here</pc> now</source>'
    '</segment></unit></file></xliff>'
)
XLIFF_SOURCE = "{urn:oasis:names:tc:xliff:document:2.0}source"


class TestNamespacedXliff:
    """Tests for elements taken from a parsed XLIFF 2.0 document"""

    def test_to_string_drops_xliff_namespace(self):
        source = to_xml_element(XLIFF_DOC).find(f".//{XLIFF_SOURCE}")

        assert to_string(source) == '<source xml:space="preserve">Click <pc id="1">here</pc> now</source>'

    def test_element_content_drops_xliff_namespace(self):
        source = to_xml_element(XLIFF_DOC).find(f".//{XLIFF_SOURCE}")

        assert element_content(source) == 'Click <pc id="1">here</pc> now'

    def test_document_is_left_untouched(self):
        document = to_xml_element(XLIFF_DOC)
        source = document.find(f".//{XLIFF_SOURCE}")

        to_string(source)

        assert source.tag == XLIFF_SOURCE
        assert source[0].tag == "{urn:oasis:names:tc:xliff:document:2.0}pc"
        assert source[0].tail == " now"
