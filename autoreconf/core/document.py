"""
In-memory model of a web.xml deployment descriptor.

The tree is an ``xml.etree.ElementTree`` built by the hardened ``defusedxml``
parser. Comments inside the root element are kept in the tree; the prolog
(XML declaration, DOCTYPE, leading comments) and the epilog are kept verbatim
so that serialization only changes what the modifier touched.
"""

import re
import codecs
import logging
import xml.etree.ElementTree as ET
from typing import List, Optional, Union

from defusedxml.ElementTree import DefusedXMLParser
from defusedxml.ElementTree import ParseError as DefusedParseError
from defusedxml.common import DefusedXmlException

from .errors import ParseError

logger = logging.getLogger(__name__)

_PROLOG_ITEM = re.compile(
    r"\s*(?:<\?.*?\?>|<!--.*?-->|<!DOCTYPE[^\[>]*(?:\[.*?\])?\s*>)",
    re.DOTALL
)
_EPILOG = re.compile(r"(?:<!--(?:(?!-->).)*-->|<\?(?:(?!\?>).)*\?>|\s)*\Z", re.DOTALL)
_LEADING_SPACE = re.compile(r"\s*")
_DECLARED_ENCODING = re.compile(r"""\s*<\?xml\s[^>]*?\bencoding\s*=\s*["']([A-Za-z][\w.\-]*)["']""")

TEXT_STEP = 'text()'


class TextNode:
    """
    Handle on the text content of one element.

    The value is the element's own character data: its text plus the tails
    of its children, so comments inside a value do not hide the text after
    them. Writing a value replaces all of it and leaves the children in place.
    """

    def __init__(self, element: ET.Element):
        self.element = element

    @property
    def value(self) -> str:
        return text_of(self.element) or ''

    @value.setter
    def value(self, value: str):
        self.element.text = value
        for child in self.element:
            child.tail = None

    def __repr__(self):
        return f"TextNode({self.value!r})"


class Document:
    """
    A parsed descriptor: the root element plus the text around it.

    Element names passed to ``query`` and ``create_element`` are local names;
    the document's default namespace is applied to them.
    """

    def __init__(self, root: ET.Element, prolog: str = '', epilog: str = ''):
        self.root = root
        self.prolog = prolog
        self.epilog = epilog
        self.namespace = _namespace_of(root.tag)
        self.indent = _detect_indent(root)
        self.encoding = declared_encoding(prolog)

    def query(self, element: ET.Element, path: str) -> List[Union[ET.Element, TextNode]]:
        """
        Evaluate a path against a subtree.

        Args:
            element: Element the path is relative to
            path: ``/``-separated element names; a leading ``/`` anchors the
                path at the document root and a final ``text()`` step returns
                text nodes instead of elements

        Returns:
            Matches in document order (empty if nothing matches)
        """
        want_text = False
        if path == TEXT_STEP or path.endswith('/' + TEXT_STEP):
            want_text = True
            path = path[:-len(TEXT_STEP)].rstrip('/') or '.'

        if path.startswith('/') and not path.startswith('//'):
            head, _, rest = path[1:].partition('/')
            if self.local_name(self.root) != head:
                return []
            element = self.root
            path = rest or '.'

        matches = element.findall(self._qualify_path(path))
        if want_text:
            return [TextNode(match) for match in matches if text_of(match) is not None]
        return matches

    def find(self, element: ET.Element, path: str) -> Optional[ET.Element]:
        """First element matching ``path`` under ``element``, or None."""
        matches = self.query(element, path)
        return matches[0] if matches else None

    def create_element(self, parent: ET.Element, name: str) -> ET.Element:
        """Append a new, empty child element to ``parent`` and return it."""
        child = ET.Element(self._qualify(name))
        self._append(parent, child)
        return child

    def create_text(self, element: ET.Element, value: str) -> TextNode:
        """Set the text value of ``element``."""
        node = TextNode(element)
        node.value = value
        return node

    def text(self, element: ET.Element) -> str:
        return TextNode(element).value

    def local_name(self, element: ET.Element) -> Optional[str]:
        if not isinstance(element.tag, str):
            return None
        return element.tag.rpartition('}')[2]

    def _qualify(self, name: str) -> str:
        if not self.namespace or name in ('', '.', '..', '*'):
            return name
        return f"{{{self.namespace}}}{name}"

    def _qualify_path(self, path: str) -> str:
        return '/'.join(self._qualify(step) for step in path.split('/'))

    def _append(self, parent: ET.Element, child: ET.Element):
        # Follow the surrounding indentation when the document has any
        if self.indent is None or (parent.text and parent.text.strip()):
            parent.append(child)
            return

        if len(parent):
            last = parent[-1]
            child.tail = last.tail
            if parent.text is not None:
                last.tail = parent.text
            else:
                last.tail = self._line(self._depth(parent) + 1)
        else:
            depth = self._depth(parent)
            parent.text = self._line(depth + 1)
            child.tail = self._line(depth)

        parent.append(child)

    def _depth(self, element: ET.Element) -> int:
        parents = {child: node for node in self.root.iter() for child in node}
        depth = 0
        while element in parents:
            element = parents[element]
            depth += 1
        return depth

    def _line(self, depth: int) -> str:
        return '\n' + self.indent * depth


def text_of(element: ET.Element) -> Optional[str]:
    """Character data directly inside ``element``, or None if it has none."""
    pieces = [element.text] + [child.tail for child in element]
    if all(piece is None for piece in pieces):
        return None
    return ''.join(piece for piece in pieces if piece)


def declared_encoding(text: str) -> Optional[str]:
    """Encoding named by the XML declaration, if Python knows it."""
    match = _DECLARED_ENCODING.match(text)
    if not match:
        return None
    try:
        codecs.lookup(match.group(1))
    except LookupError:
        logger.warning(f"Unknown encoding '{match.group(1)}' in XML declaration")
        return None
    return match.group(1)


def parse(text: Union[str, bytes], encoding: Optional[str] = None) -> Document:
    """
    Parse descriptor text into a Document.

    Args:
        text: Raw web.xml content
        encoding: Encoding of ``text`` when it is bytes without an encoding
            declaration (default: UTF-8)

    Returns:
        Parsed document

    Raises:
        ParseError: If the text is not well-formed XML, declares entities or
            cannot be decoded
    """
    if isinstance(text, bytes):
        text = _decode(text, encoding)
    text = text.lstrip('\ufeff')

    parser = DefusedXMLParser(target=ET.TreeBuilder(insert_comments=True))
    try:
        parser.feed(text)
        root = parser.close()
    except (ET.ParseError, DefusedParseError) as e:
        raise ParseError(f"Invalid web.xml: {e}") from e
    except DefusedXmlException as e:
        raise ParseError(f"Forbidden construct in web.xml: {e}") from e

    prolog, epilog = _split_surroundings(text)
    logger.debug(f"Parsed descriptor with root element {root.tag}")
    return Document(root, prolog=prolog, epilog=epilog)


def _decode(data: bytes, fallback: Optional[str]) -> str:
    if data[:2] in (codecs.BOM_UTF16_LE, codecs.BOM_UTF16_BE):
        encoding = 'utf-16'
    else:
        # The declaration itself is ASCII in every encoding expat reads
        head = data[:256].decode('latin-1')
        encoding = declared_encoding(head[3:] if data.startswith(codecs.BOM_UTF8) else head)
        encoding = encoding or fallback or 'utf-8'
    if data.startswith(codecs.BOM_UTF8) and codecs.lookup(encoding).name == 'utf-8':
        encoding = 'utf-8-sig'

    try:
        return data.decode(encoding)
    except (LookupError, UnicodeDecodeError) as e:
        raise ParseError(f"Cannot decode web.xml as {encoding}: {e}") from e


def _split_surroundings(text: str):
    position = 0
    while True:
        match = _PROLOG_ITEM.match(text, position)
        if not match:
            break
        position = match.end()
    position = _LEADING_SPACE.match(text, position).end()

    epilog = _EPILOG.search(text, position)
    return text[:position], epilog.group(0) if epilog else ''


def _namespace_of(tag: str) -> Optional[str]:
    if tag.startswith('{'):
        return tag[1:].partition('}')[0]
    return None


def _detect_indent(root: ET.Element) -> Optional[str]:
    if not len(root) or not root.text or root.text.strip() or '\n' not in root.text:
        return None
    return root.text.rpartition('\n')[2] or None
