"""
Spring auto-reconfiguration for Java web applications.

Injects the platform's auto-reconfiguration context and context initializer
into a web.xml deployment descriptor, for the root application context and
for every DispatcherServlet context.
"""

__version__ = "0.1.0"

# Core descriptor components
from .core import Document, parse, serialize
from .core.errors import WebXmlError, ParseError, StructuralError

# Configuration system
from .config import ConfigParser, ConfigValidator, ModifierConfiguration

# Modification entry points
from .modifier import WebXmlModifier, modify_web_xml, modify_web_xml_file

__all__ = [
    # Core
    "Document",
    "parse",
    "serialize",
    "WebXmlError",
    "ParseError",
    "StructuralError",
    
    # Configuration
    "ConfigParser",
    "ConfigValidator",
    "ModifierConfiguration",
    
    # Modification
    "WebXmlModifier",
    "modify_web_xml",
    "modify_web_xml_file",
]
