"""
XML request/response codec for the translate endpoint.

Request:
    <TranslateRequest>
      <Items>
        <Item><Text>Hello</Text><To>es</To></Item>
      </Items>
    </TranslateRequest>

Response:
    <TranslationResponse>
      <Results>
        <Result><Text>Hello</Text><TranslatedText>Hola</TranslatedText><To>es</To></Result>
      </Results>
    </TranslationResponse>
"""

from __future__ import annotations

import re

from lxml import etree

from translator.core.models import TranslationItem, TranslationRequest, TranslationResponse


JSON = "application/json"
XML = "application/xml"

XML_TYPES = ("application/xml", "text/xml")

# Characters XML 1.0 does not allow in text nodes.
_XML_ILLEGAL = re.compile("[\x00-\x08\x0b\x0c\x0e-\x1f\ud800-\udfff\ufffe\uffff]")

_parser = etree.XMLParser(resolve_entities=False, no_network=True, huge_tree=False)


class XmlFormatError(ValueError):
    """The request body is not a well-formed TranslateRequest document."""


def is_xml(content_type: str | None) -> bool:
    return any(t in (content_type or "").lower() for t in XML_TYPES)


def negotiate(accept: str | None, content_type: str | None) -> str:
    """Pick the response media type from ``Accept``, else mirror the request."""
    accept = (accept or "").lower()
    if is_xml(accept) and JSON not in accept:
        return XML
    if JSON in accept:
        return JSON
    return XML if is_xml(content_type) else JSON


def _child_text(element: etree._Element, tag: str) -> str:
    child = element.find(tag)
    if child is None or child.text is None:
        return ""
    return child.text


def parse_xml_request(body: bytes) -> TranslationRequest:
    try:
        root = etree.fromstring(body, parser=_parser)
    except etree.XMLSyntaxError as e:
        raise XmlFormatError(f"Invalid XML: {e}") from e

    if root.tag != "TranslateRequest":
        raise XmlFormatError(f"Unexpected root element <{root.tag}>")

    items = [
        TranslationItem(text=_child_text(node, "Text"), to=_child_text(node, "To"))
        for node in root.iterfind("Items/Item")
    ]
    return TranslationRequest(items=items)


def xml_safe(value: str) -> str:
    """Drop characters that cannot appear in an XML document."""
    return _XML_ILLEGAL.sub("", value)


def render_xml_response(response: TranslationResponse) -> bytes:
    root = etree.Element("TranslationResponse")
    results = etree.SubElement(root, "Results")
    for result in response.results:
        node = etree.SubElement(results, "Result")
        etree.SubElement(node, "Text").text = xml_safe(result.original_text)
        etree.SubElement(node, "TranslatedText").text = xml_safe(result.translated_text)
        etree.SubElement(node, "To").text = xml_safe(result.target_language)
    return etree.tostring(root, xml_declaration=True, encoding="utf-8")
