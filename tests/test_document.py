"""
Tests for the descriptor document model and serializer.
"""

import codecs
import xml.etree.ElementTree as ET

import pytest
from autoreconf.core.document import Document, TextNode, parse
from autoreconf.core.errors import ParseError
from autoreconf.core.serializer import serialize


NAMESPACED_WEB_XML = """<?xml version="1.0" encoding="UTF-8"?>
<!-- Application descriptor -->
<web-app xmlns="http://java.sun.com/xml/ns/javaee" version="3.0">
  <!-- Root context -->
  <context-param>
    <param-name>contextConfigLocation</param-name>
    <param-value>/WEB-INF/root.xml</param-value>
  </context-param>
  <servlet>
    <servlet-name>first</servlet-name>
    <servlet-class>com.example.FirstServlet</servlet-class>
  </servlet>
  <servlet>
    <servlet-name>second</servlet-name>
    <servlet-class>com.example.SecondServlet</servlet-class>
  </servlet>
</web-app>
"""

DOCTYPE_WEB_XML = """<?xml version="1.0" encoding="ISO-8859-1"?>
<!DOCTYPE web-app PUBLIC "-//Sun Microsystems, Inc.//DTD Web Application 2.3//EN" "http://java.sun.com/dtd/web-app_2_3.dtd">
<web-app>
  <display-name>legacy</display-name>
</web-app>
"""

SCHEMA_WEB_XML = """<?xml version="1.0" encoding="UTF-8"?>
<web-app xmlns="http://xmlns.jcp.org/xml/ns/javaee" xmlns:xsi="http://www.w3.org/2001/XMLSchema-instance" xsi:schemaLocation="http://xmlns.jcp.org/xml/ns/javaee http://xmlns.jcp.org/xml/ns/javaee/web-app_3_1.xsd" id="WebApp_ID" version="3.1">
  <display-name>shop</display-name>
</web-app>
"""

LATIN1_WEB_XML = (
    '<?xml version="1.0" encoding="ISO-8859-1"?>\n'
    '<web-app><display-name>caf\u00e9</display-name></web-app>\n'
).encode("latin-1")


class TestParse:
    """Test cases for parsing descriptor text."""

    def test_namespace_detected(self):
        """Test that the default namespace is recorded."""
        document = parse(NAMESPACED_WEB_XML)

        assert document.namespace == "http://java.sun.com/xml/ns/javaee"
        assert document.local_name(document.root) == "web-app"

    def test_no_namespace(self):
        """Test a descriptor without namespace."""
        document = parse("<web-app><display-name>x</display-name></web-app>")

        assert document.namespace is None
        assert document.local_name(document.root) == "web-app"

    def test_bytes_input(self):
        """Test parsing from bytes."""
        document = parse(b"<web-app><display-name>x</display-name></web-app>")
        assert document.local_name(document.root) == "web-app"

    def test_declared_encoding_bytes(self):
        """Test that bytes are decoded with the encoding the declaration names."""
        document = parse(LATIN1_WEB_XML)

        assert document.encoding == "ISO-8859-1"
        assert document.find(document.root, 'display-name').text == "café"
        assert serialize(document).encode("latin-1") == LATIN1_WEB_XML

    def test_fallback_encoding_bytes(self):
        """Test that undeclared bytes use the given encoding."""
        data = "<web-app><display-name>café</display-name></web-app>".encode("latin-1")

        document = parse(data, encoding="latin-1")

        assert document.encoding is None
        assert document.find(document.root, 'display-name').text == "café"

    def test_undecodable_bytes_raise(self):
        """Test that bytes invalid in their encoding raise ParseError."""
        data = "<web-app><display-name>café</display-name></web-app>".encode("latin-1")

        with pytest.raises(ParseError, match="Cannot decode"):
            parse(data)

    def test_utf8_bom_bytes(self):
        """Test that a UTF-8 byte order mark is dropped."""
        data = codecs.BOM_UTF8 + b'<?xml version="1.0" encoding="UTF-8"?>\n<web-app/>'

        document = parse(data)

        assert document.encoding == "UTF-8"
        assert serialize(document) == '<?xml version="1.0" encoding="UTF-8"?>\n<web-app />'

    def test_malformed_input_raises(self):
        """Test that unclosed markup raises ParseError."""
        with pytest.raises(ParseError):
            parse("<web-app><servlet></web-app>")

    def test_empty_input_raises(self):
        """Test that empty text raises ParseError."""
        with pytest.raises(ParseError):
            parse("")

    def test_entity_declaration_rejected(self):
        """Test that entity declarations are refused."""
        text = '<!DOCTYPE web-app [<!ENTITY name "value">]><web-app>&name;</web-app>'

        with pytest.raises(ParseError):
            parse(text)

    def test_doctype_accepted(self):
        """Test that a public DOCTYPE does not prevent parsing."""
        document = parse(DOCTYPE_WEB_XML)

        assert document.prolog.startswith('<?xml version="1.0" encoding="ISO-8859-1"?>')
        assert "<!DOCTYPE web-app" in document.prolog
        assert document.indent == "  "

    def test_indent_detection(self):
        """Test indentation unit detection."""
        assert parse(NAMESPACED_WEB_XML).indent == "  "
        assert parse("<a>\n\t<b/>\n</a>").indent == "\t"
        assert parse("<a><b/></a>").indent is None


class TestQuery:
    """Test cases for path queries."""

    def setup_method(self):
        """Setup test fixtures."""
        self.document = parse(NAMESPACED_WEB_XML)

    def test_relative_query_document_order(self):
        """Test that matches come back in document order."""
        servlets = self.document.query(self.document.root, 'servlet')
        names = [
            self.document.query(servlet, 'servlet-name/text()')[0].value
            for servlet in servlets
        ]

        assert names == ["first", "second"]

    def test_absolute_query(self):
        """Test a path anchored at the document root."""
        classes = self.document.query(self.document.root, '/web-app/servlet/servlet-class/text()')

        assert [node.value for node in classes] == [
            "com.example.FirstServlet",
            "com.example.SecondServlet",
        ]

    def test_absolute_query_wrong_root(self):
        """Test that an absolute path with another root name matches nothing."""
        assert self.document.query(self.document.root, '/beans/servlet') == []

    def test_descendant_query(self):
        """Test descendant queries."""
        names = self.document.query(self.document.root, './/servlet-name')
        assert len(names) == 2

    def test_no_match(self):
        """Test that a missing path yields an empty list."""
        assert self.document.query(self.document.root, 'listener/listener-class') == []
        assert self.document.find(self.document.root, 'listener') is None

    def test_text_nodes_skip_empty_elements(self):
        """Test that text() only yields elements holding text."""
        document = parse("<web-app><a>x</a><a/></web-app>")

        nodes = document.query(document.root, 'a/text()')

        assert len(nodes) == 1
        assert isinstance(nodes[0], TextNode)
        assert nodes[0].value == "x"

    def test_text_after_comment(self):
        """Test that text following a comment belongs to the element's value."""
        document = parse("<web-app><a><!-- old -->x.xml</a></web-app>")

        nodes = document.query(document.root, 'a/text()')

        assert [node.value for node in nodes] == ["x.xml"]

    def test_text_write_replaces_text_around_comment(self):
        """Test that writing a value keeps the comment and a single copy of the text."""
        document = parse("<web-app><a>one<!-- old -->two</a></web-app>")
        node = document.query(document.root, 'a/text()')[0]

        assert node.value == "onetwo"
        node.value = "three"

        assert serialize(document) == "<web-app><a>three<!-- old --></a></web-app>"

    def test_text_node_write(self):
        """Test that writing a text node changes the element."""
        node = self.document.query(self.document.root, 'context-param/param-value/text()')[0]
        node.value = "/WEB-INF/other.xml"

        value = self.document.find(self.document.root, 'context-param/param-value')
        assert value.text == "/WEB-INF/other.xml"


class TestMutation:
    """Test cases for element and text creation."""

    def test_created_element_is_namespaced(self):
        """Test that new elements inherit the default namespace."""
        document = parse(NAMESPACED_WEB_XML)

        element = document.create_element(document.root, 'listener')

        assert element.tag == "{http://java.sun.com/xml/ns/javaee}listener"
        assert document.query(document.root, 'listener') == [element]

    def test_create_text(self):
        """Test setting the text of a new element."""
        document = parse("<web-app></web-app>")

        element = document.create_element(document.root, 'display-name')
        node = document.create_text(element, "app")

        assert node.value == "app"
        assert serialize(document) == "<web-app><display-name>app</display-name></web-app>"

    def test_created_elements_follow_indentation(self):
        """Test that new elements are indented like their siblings."""
        document = parse("<web-app>\n  <display-name>app</display-name>\n</web-app>\n")

        listener = document.create_element(document.root, 'listener')
        document.create_text(document.create_element(listener, 'listener-class'), "L")

        assert serialize(document) == (
            "<web-app>\n"
            "  <display-name>app</display-name>\n"
            "  <listener>\n"
            "    <listener-class>L</listener-class>\n"
            "  </listener>\n"
            "</web-app>\n"
        )


class TestSerialize:
    """Test cases for rendering documents."""

    def test_round_trip(self):
        """Test that an untouched document renders as it was read."""
        assert serialize(parse(NAMESPACED_WEB_XML)) == NAMESPACED_WEB_XML

    def test_round_trip_doctype(self):
        """Test that the DOCTYPE survives a round trip."""
        assert serialize(parse(DOCTYPE_WEB_XML)) == DOCTYPE_WEB_XML

    def test_no_generated_prefixes(self):
        """Test that the default namespace is not rewritten to a prefix."""
        document = parse(NAMESPACED_WEB_XML)
        document.create_element(document.root, 'listener')

        text = serialize(document)

        assert "ns0:" not in text
        assert '<web-app xmlns="http://java.sun.com/xml/ns/javaee" version="3.0">' in text

    def test_round_trip_schema_attributes(self):
        """Test a descriptor with schema location, id and version attributes."""
        assert serialize(parse(SCHEMA_WEB_XML)) == SCHEMA_WEB_XML

    def test_schema_attributes_after_mutation(self):
        """Test that new elements do not disturb the root attributes."""
        document = parse(SCHEMA_WEB_XML)
        document.create_text(document.create_element(document.root, 'listener'), "x")

        text = serialize(document)

        assert text.splitlines()[1] == SCHEMA_WEB_XML.splitlines()[1]
        assert "  <listener>x</listener>\n</web-app>" in text
        assert "ns0:" not in text

    def test_namespace_registry_untouched(self):
        """Test that rendering leaves ElementTree's global prefixes as they were."""
        serialize(parse(SCHEMA_WEB_XML))

        element = ET.Element("{http://xmlns.jcp.org/xml/ns/javaee}web-app", version="3.1")
        assert ET.tostring(element, encoding="unicode").startswith("<ns0:web-app")

    def test_trailing_comment_kept(self):
        """Test that comments after the root element are kept."""
        text = "<web-app><display-name>x</display-name></web-app>\n<!-- end -->\n"

        assert serialize(parse(text)) == text

    def test_document_constructor(self):
        """Test building a Document around an existing element."""
        document = parse("<web-app/>")
        rebuilt = Document(document.root)

        assert rebuilt.prolog == ""
        assert rebuilt.indent is None
