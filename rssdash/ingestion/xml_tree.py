"""Generic XML tree conversion for feed documents.

Feeds are converted into plain Python containers before normalization:

* an element with neither attributes nor children becomes its trimmed text;
* any other element becomes a dict where attributes are keys prefixed with
  ``@_`` and non-empty text is stored under ``#text``;
* repeated child elements become a list in document order;
* namespaced names keep the prefix declared in the document
  (``rdf:RDF``, ``dc:date``); default-namespace names are bare.
"""

import re
from html.entities import name2codepoint
from typing import Any, Dict
from xml.etree import ElementTree

from .errors import FeedParseError

ATTR_PREFIX = "@_"
TEXT_KEY = "#text"

XML_NS = "http://www.w3.org/XML/1998/namespace"
XML_ENTITIES = frozenset({"amp", "lt", "gt", "quot", "apos"})

# CDATA sections and comments are matched first so their content is left alone.
_ENTITY_RE = re.compile(r"<!\[CDATA\[.*?\]\]>|<!--.*?-->|&([A-Za-z][A-Za-z0-9]*);", re.DOTALL)


def _replace_entity(match: "re.Match[str]") -> str:
    name = match.group(1)
    if name is None or name in XML_ENTITIES or name not in name2codepoint:
        return match.group(0)
    return chr(name2codepoint[name])


def expand_html_entities(text: str) -> str:
    """Replace HTML named entities, which expat rejects without a DTD, by their characters."""
    return _ENTITY_RE.sub(_replace_entity, text)


class _PrefixTracker:
    """Parser target that builds a tree and remembers namespace prefixes."""

    def __init__(self) -> None:
        self._builder = ElementTree.TreeBuilder()
        self.prefixes: Dict[str, str] = {XML_NS: "xml"}

    def start_ns(self, prefix: str, uri: str) -> None:
        # A default binding wins over any prefix bound to the same URI.
        if prefix == "" or uri not in self.prefixes:
            self.prefixes[uri] = prefix

    def start(self, tag: str, attrs: Dict[str, str]) -> ElementTree.Element:
        return self._builder.start(tag, attrs)

    def end(self, tag: str) -> ElementTree.Element:
        return self._builder.end(tag)

    def data(self, data: str) -> None:
        self._builder.data(data)

    def close(self) -> ElementTree.Element:
        return self._builder.close()


def _qualify(name: str, prefixes: Dict[str, str]) -> str:
    if not name.startswith("{"):
        return name
    uri, _, local = name[1:].partition("}")
    prefix = prefixes.get(uri, "")
    return f"{prefix}:{local}" if prefix else local


def _convert(element: ElementTree.Element, prefixes: Dict[str, str]) -> Any:
    text = "".join([element.text or ""] + [child.tail or "" for child in element]).strip()

    if not element.attrib and len(element) == 0:
        return text

    node: Dict[str, Any] = {}
    for name, value in element.attrib.items():
        node[ATTR_PREFIX + _qualify(name, prefixes)] = value

    for child in element:
        key = _qualify(child.tag, prefixes)
        value = _convert(child, prefixes)
        if key not in node:
            node[key] = value
        elif isinstance(node[key], list):
            node[key].append(value)
        else:
            node[key] = [node[key], value]

    if text:
        node[TEXT_KEY] = text

    return node


def parse_xml(text: str) -> Dict[str, Any]:
    """Parse an XML document into a ``{root_name: tree}`` mapping.

    HTML named entities such as ``&nbsp;`` are accepted.

    Raises:
        FeedParseError: If the text is not well-formed XML.
    """
    tracker = _PrefixTracker()
    parser = ElementTree.XMLParser(target=tracker)

    try:
        parser.feed(expand_html_entities(text.lstrip("\ufeff \t\r\n")))
        root = parser.close()
    except ElementTree.ParseError as e:
        raise FeedParseError(f"Invalid XML: {e}") from e

    return {_qualify(root.tag, tracker.prefixes): _convert(root, tracker.prefixes)}
